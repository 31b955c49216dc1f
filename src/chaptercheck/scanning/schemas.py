"""Data carried out of the scanner."""

from __future__ import annotations

from dataclasses import dataclass, field


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` per line.

    ``str.splitlines`` also breaks on form feeds and Unicode line
    separators, which would shift reported line numbers.
    """
    if not text:
        return []
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True)
class ChapterDocument:
    """One loaded chapter file. Opaque text, no Markdown semantics."""

    path: str
    raw_text: str
    line_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "line_count", len(split_lines(self.raw_text))
        )

    @property
    def lines(self) -> list[str]:
        return split_lines(self.raw_text)
