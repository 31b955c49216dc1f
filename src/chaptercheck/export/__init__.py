"""Export module — report aggregation and rendering."""

from collections.abc import Callable

from chaptercheck.constants import OutputFormat
from chaptercheck.export.json_export import export_json
from chaptercheck.export.report import (
    BookCompleteness,
    Report,
    Summary,
    aggregate,
    check_completeness,
)
from chaptercheck.export.text import export_text

__all__ = [
    "BookCompleteness",
    "Report",
    "Summary",
    "aggregate",
    "check_completeness",
    "export_json",
    "export_text",
    "render_report",
]

_RENDERERS: dict[str, Callable[[Report], str]] = {
    OutputFormat.TEXT: export_text,
    OutputFormat.JSON: export_json,
}


def render_report(report: Report, fmt: str = "text") -> str:
    """Dispatch rendering by format string."""
    renderer = _RENDERERS.get(fmt)
    if renderer is None:
        valid = ", ".join(_RENDERERS)
        msg = f"Unsupported format: {fmt}. Use: {valid}"
        raise ValueError(msg)
    return renderer(report)
