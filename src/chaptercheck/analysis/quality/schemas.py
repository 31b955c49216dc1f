"""Rule engine output types."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chaptercheck.analysis.schemas import StructuralFacts
from chaptercheck.constants import Severity, Status


@dataclass(frozen=True)
class Violation:
    """A single rule below its target."""

    rule: str
    expected: int
    actual: int
    severity: Severity
    message: str = ""

    def promoted(self) -> Violation:
        """Same violation at Fail severity."""
        return replace(self, severity=Severity.FAIL)


@dataclass(frozen=True)
class ConformanceResult:
    """Verdict and violations for one chapter file."""

    path: str
    status: Status
    violations: tuple[Violation, ...] = ()
    title: str | None = None
    facts: StructuralFacts | None = None

    @property
    def fail_count(self) -> int:
        return sum(
            1 for v in self.violations if v.severity == Severity.FAIL
        )

    @property
    def warn_count(self) -> int:
        return sum(
            1 for v in self.violations if v.severity == Severity.WARN
        )
