"""Discover chapter files and load them as UTF-8 text."""

from __future__ import annotations

import logging
from pathlib import Path

from chaptercheck.constants import (
    CHAPTER_FILE_PATTERN,
    CHAPTER_NUMBER_PATTERN,
    UTF8_BOM,
)
from chaptercheck.errors import (
    ConfigurationError,
    ReadError,
    classify_read_error,
)
from chaptercheck.scanning.schemas import ChapterDocument

logger = logging.getLogger(__name__)


def discover_chapters(directory: str | Path) -> list[Path]:
    """Return chapter files directly inside ``directory``, sorted by name.

    A chapter file has a two-digit numeric prefix and an ``.md``
    suffix (``01-foundations.md``). Subdirectories are not searched.

    Raises ``ConfigurationError`` if the directory does not exist.
    An empty result is returned as-is; deciding that zero chapters is
    fatal belongs to the caller.
    """
    root = Path(directory)
    if not root.exists():
        msg = f"Directory not found: {root}"
        raise ConfigurationError(msg)
    if not root.is_dir():
        msg = f"Not a directory: {root}"
        raise ConfigurationError(msg)

    try:
        chapters = sorted(
            p
            for p in root.iterdir()
            if CHAPTER_FILE_PATTERN.match(p.name) and not p.is_dir()
        )
    except OSError as exc:
        msg = f"Cannot list directory {root}: {exc}"
        raise ConfigurationError(msg) from exc
    logger.debug(
        "event=discover_chapters dir=%s found=%d",
        root,
        len(chapters),
    )
    return chapters


def chapter_number(path: str | Path) -> int | None:
    """Return the two-digit chapter prefix, or None for other names."""
    match = CHAPTER_NUMBER_PATTERN.match(Path(path).name)
    if match is None:
        return None
    return int(match.group(1))


def load_chapter(path: str | Path) -> ChapterDocument:
    """Read one chapter file strictly as UTF-8.

    Raises ``ReadError`` for missing files, permission problems,
    directories, and invalid UTF-8. Never writes.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        reason = classify_read_error(exc)
        logger.warning(
            "event=read_failed path=%s reason=%s",
            file_path,
            reason,
        )
        raise ReadError(file_path, reason, str(exc)) from exc

    if text.startswith(UTF8_BOM):
        text = text[len(UTF8_BOM):]
    return ChapterDocument(path=str(file_path), raw_text=text)
