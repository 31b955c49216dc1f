"""Chapter scanning — discover files and load them as text."""

from chaptercheck.scanning.scanner import (
    chapter_number,
    discover_chapters,
    load_chapter,
)
from chaptercheck.scanning.schemas import ChapterDocument

__all__ = [
    "ChapterDocument",
    "chapter_number",
    "discover_chapters",
    "load_chapter",
]
