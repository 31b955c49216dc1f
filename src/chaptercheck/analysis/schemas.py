"""Structural facts derived from a chapter document."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Heading:
    """One ATX heading outside any fenced code block."""

    text: str
    line: int  # 1-based
    level: int  # number of leading '#'


@dataclass(frozen=True)
class FencedBlock:
    """A triple-backtick block. ``end_line`` is None when unclosed."""

    info: str
    start_line: int
    end_line: int | None
    body: str = ""

    @property
    def closed(self) -> bool:
        return self.end_line is not None


@dataclass(frozen=True)
class StructuralFacts:
    """Read-only view of one ChapterDocument's structure.

    Always produced by ``extract_facts``; an empty document yields
    the all-zero default.
    """

    details_open_count: int = 0
    details_close_count: int = 0
    code_fence_count: int = 0
    headings: tuple[Heading, ...] = ()
    retrieval_practice_count: int = 0
    diagram_count: int = 0
    mistake_pattern_count: int = 0
    war_story_heading_count: int = 0
    war_story_present: bool = False
    title: str | None = None

    @property
    def details_balanced(self) -> bool:
        return self.details_open_count == self.details_close_count

    @property
    def code_fences_balanced(self) -> bool:
        return self.code_fence_count % 2 == 0
