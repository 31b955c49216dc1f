"""Human-readable text report."""

from __future__ import annotations

from chaptercheck.export.report import BookCompleteness, Report


def export_text(report: Report) -> str:
    """Render the summary first, then one block per chapter."""
    parts: list[str] = []

    summary = report.summary
    parts.append(
        f"Checked {summary.total} chapter(s): "
        f"{summary.passed} pass, {summary.warned} warn, "
        f"{summary.failed} fail"
    )
    if report.completeness is not None:
        parts.extend(_completeness_lines(report.completeness))
    parts.append("")

    for result in report.results:
        header = f"[{result.status.upper()}] {result.path}"
        if result.title:
            header = f"{header}: {result.title}"
        parts.append(header)
        for v in result.violations:
            line = (
                f"  {v.severity.upper():<4} {v.rule}: "
                f"expected {v.expected}, actual {v.actual}"
            )
            if v.message:
                line = f"{line} ({v.message})"
            parts.append(line)

    return "\n".join(parts).rstrip() + "\n"


def _completeness_lines(completeness: BookCompleteness) -> list[str]:
    found = len(completeness.found)
    lines = [
        f"Chapters present: {found}/{completeness.expected}"
    ]
    if completeness.missing:
        lines.append(
            "Missing chapters: "
            + ", ".join(f"{n:02d}" for n in completeness.missing)
        )
    if completeness.duplicates:
        lines.append(
            "Duplicate chapter numbers: "
            + ", ".join(f"{n:02d}" for n in completeness.duplicates)
        )
    return lines
