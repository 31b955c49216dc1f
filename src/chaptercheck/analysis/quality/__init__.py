"""Rule engine — thresholds, violations, and per-chapter verdicts."""

from chaptercheck.analysis.quality.rule_config import (
    RuleSet,
    build_rule_set,
    load_rule_file,
)
from chaptercheck.analysis.quality.rules import (
    evaluate,
    overall_status,
    unreadable_result,
)
from chaptercheck.analysis.quality.schemas import (
    ConformanceResult,
    Violation,
)

__all__ = [
    "ConformanceResult",
    "RuleSet",
    "Violation",
    "build_rule_set",
    "evaluate",
    "load_rule_file",
    "overall_status",
    "unreadable_result",
]
