"""Aggregate per-chapter results into one report."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from chaptercheck.analysis.quality.schemas import ConformanceResult
from chaptercheck.constants import Status
from chaptercheck.scanning.scanner import chapter_number


@dataclass(frozen=True)
class Summary:
    """Pass/Warn/Fail counts across all chapters."""

    passed: int = 0
    warned: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.warned + self.failed


@dataclass(frozen=True)
class BookCompleteness:
    """Which numbered chapters exist versus the planned count."""

    expected: int
    found: tuple[int, ...] = ()
    missing: tuple[int, ...] = ()
    duplicates: tuple[int, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.missing


@dataclass(frozen=True)
class Report:
    """Sorted results plus summary. Built only by :func:`aggregate`."""

    results: tuple[ConformanceResult, ...] = ()
    summary: Summary = field(default_factory=Summary)
    completeness: BookCompleteness | None = None

    @property
    def has_failures(self) -> bool:
        return self.summary.failed > 0


def aggregate(
    results: Iterable[ConformanceResult],
    completeness: BookCompleteness | None = None,
) -> Report:
    """Sort results by path and count verdicts.

    Arrival order does not matter, so the output is stable across
    parallel runs. Violations inside each result are left untouched.
    """
    ordered = tuple(sorted(results, key=lambda r: r.path))
    counts = Counter(r.status for r in ordered)
    return Report(
        results=ordered,
        summary=Summary(
            passed=counts[Status.PASS],
            warned=counts[Status.WARN],
            failed=counts[Status.FAIL],
        ),
        completeness=completeness,
    )


def check_completeness(
    paths: Sequence[str | Path],
    expected: int,
) -> BookCompleteness:
    """Compare discovered chapter numbers with ``1..expected``."""
    numbers = Counter(
        n for n in (chapter_number(p) for p in paths) if n is not None
    )
    return BookCompleteness(
        expected=expected,
        found=tuple(sorted(numbers)),
        missing=tuple(
            n for n in range(1, expected + 1) if n not in numbers
        ),
        duplicates=tuple(
            sorted(n for n, count in numbers.items() if count > 1)
        ),
    )
