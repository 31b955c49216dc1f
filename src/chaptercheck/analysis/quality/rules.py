"""Chapter rule engine.

Scores StructuralFacts against a RuleSet. Every rule runs on every
call and contributes at most one Violation; evaluation never raises.
Structural-integrity rules are Fail severity, content-richness rules
are Warn severity (promoted to Fail in strict mode).
"""

from __future__ import annotations

from chaptercheck.analysis.quality.rule_config import RuleSet
from chaptercheck.analysis.quality.schemas import (
    ConformanceResult,
    Violation,
)
from chaptercheck.analysis.schemas import StructuralFacts
from chaptercheck.constants import RuleName, Severity, Status
from chaptercheck.errors import ReadError


def evaluate(
    path: str,
    facts: StructuralFacts,
    rules: RuleSet,
) -> ConformanceResult:
    """Evaluate all rules for one chapter.

    Violations are ordered as the rules are declared in
    :class:`RuleName`.
    """
    violations: list[Violation] = []

    # 1. Paired <details> tags
    if not facts.details_balanced:
        violations.append(
            Violation(
                rule=RuleName.DETAILS_BALANCED,
                expected=facts.details_open_count,
                actual=facts.details_close_count,
                severity=Severity.FAIL,
                message=(
                    f"{facts.details_open_count} <details> opened, "
                    f"{facts.details_close_count} closed"
                ),
            )
        )

    # 2. Even number of code fences
    if not facts.code_fences_balanced:
        violations.append(
            Violation(
                rule=RuleName.CODE_FENCES_BALANCED,
                expected=facts.code_fence_count + 1,
                actual=facts.code_fence_count,
                severity=Severity.FAIL,
                message=(
                    f"{facts.code_fence_count} code fences, "
                    "one block is never closed"
                ),
            )
        )

    # 3-6. Content richness thresholds
    for rule, expected, actual, noun in (
        (
            RuleName.MIN_COLLAPSIBLE,
            rules.min_collapsible_sections,
            facts.details_open_count,
            "collapsible sections",
        ),
        (
            RuleName.MIN_RETRIEVAL,
            rules.min_retrieval_practice,
            facts.retrieval_practice_count,
            "retrieval-practice prompts",
        ),
        (
            RuleName.MIN_DIAGRAMS,
            rules.min_diagrams,
            facts.diagram_count,
            "diagrams",
        ),
        (
            RuleName.MIN_MISTAKES,
            rules.min_mistake_patterns,
            facts.mistake_pattern_count,
            "mistake patterns",
        ),
    ):
        if actual < expected:
            violations.append(
                Violation(
                    rule=rule,
                    expected=expected,
                    actual=actual,
                    severity=Severity.WARN,
                    message=f"{actual} {noun}, target {expected}",
                )
            )

    # 7. War story with a quantified impact
    if rules.require_war_story and not facts.war_story_present:
        message = (
            "War Story has no quantified impact figure"
            if facts.war_story_heading_count
            else "no War Story section"
        )
        violations.append(
            Violation(
                rule=RuleName.WAR_STORY,
                expected=1,
                actual=0,
                severity=Severity.WARN,
                message=message,
            )
        )

    if rules.strict:
        violations = [v.promoted() for v in violations]

    return ConformanceResult(
        path=path,
        status=overall_status(violations),
        violations=tuple(violations),
        title=facts.title,
        facts=facts,
    )


def overall_status(violations: list[Violation] | tuple[Violation, ...]) -> Status:
    """Fail beats Warn beats Pass."""
    severities = {v.severity for v in violations}
    if Severity.FAIL in severities:
        return Status.FAIL
    if Severity.WARN in severities:
        return Status.WARN
    return Status.PASS


def unreadable_result(error: ReadError) -> ConformanceResult:
    """Fail result for a chapter that could not be loaded."""
    return ConformanceResult(
        path=error.path,
        status=Status.FAIL,
        violations=(
            Violation(
                rule=RuleName.FILE_READABLE,
                expected=1,
                actual=0,
                severity=Severity.FAIL,
                message=str(error),
            ),
        ),
    )
