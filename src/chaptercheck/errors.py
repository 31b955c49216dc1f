"""Error taxonomy for the checker.

Two kinds of failure exist outside the rule engine:
- ConfigurationError: fatal for the whole run, raised before any
  chapter is processed (exit code 2).
- ReadError: fatal for one chapter only; the pipeline turns it into
  a ``file-readable`` Fail result and moves on.

Rule violations are data, never exceptions.
"""

from __future__ import annotations

from pathlib import Path

from chaptercheck.constants import ReadFailure


class CheckerError(Exception):
    """Base class for all checker errors."""


class ConfigurationError(CheckerError):
    """Invalid directory, zero chapter files, or invalid rule values."""


class ReadError(CheckerError):
    """A single chapter file could not be read as UTF-8 text."""

    def __init__(
        self,
        path: str | Path,
        reason: ReadFailure,
        detail: str = "",
    ) -> None:
        self.path = str(path)
        self.reason = reason
        self.detail = detail
        msg = f"Cannot read {self.path} ({reason})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


def classify_read_error(error: Exception) -> ReadFailure:
    """Classify an OS or decoding error raised while loading a file.

    Checks concrete exception types first, falls back to errno
    for generic ``OSError`` instances.
    """
    if isinstance(error, UnicodeDecodeError):
        return ReadFailure.ENCODING
    if isinstance(error, FileNotFoundError):
        return ReadFailure.MISSING
    if isinstance(error, PermissionError):
        return ReadFailure.PERMISSION
    if isinstance(error, (IsADirectoryError, NotADirectoryError)):
        return ReadFailure.NOT_A_FILE
    return ReadFailure.OTHER
