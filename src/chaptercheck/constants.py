"""Shared constants — single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON output,
log lines) works unchanged.
"""

from __future__ import annotations

import re
from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Status(StrEnum):
    """Overall verdict for one chapter file."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class Severity(StrEnum):
    """Severity of a single rule violation.

    FAIL marks broken markdown (blocking), WARN marks
    under-developed content (advisory).
    """

    FAIL = "fail"
    WARN = "warn"


class OutputFormat(StrEnum):
    """Supported report formats."""

    TEXT = "text"
    JSON = "json"


class RuleName(StrEnum):
    """Rule identifiers as they appear in reports.

    Declaration order is evaluation order.
    """

    FILE_READABLE = "file-readable"
    DETAILS_BALANCED = "details-balanced"
    CODE_FENCES_BALANCED = "code-fences-balanced"
    MIN_COLLAPSIBLE = "min-collapsible-sections"
    MIN_RETRIEVAL = "min-retrieval-practice"
    MIN_DIAGRAMS = "min-diagrams"
    MIN_MISTAKES = "min-mistake-patterns"
    WAR_STORY = "war-story-impact"


class ReadFailure(StrEnum):
    """Why a chapter file could not be loaded."""

    MISSING = "missing"
    PERMISSION = "permission"
    ENCODING = "encoding"
    NOT_A_FILE = "not_a_file"
    OTHER = "other"


# ── Exit codes ───────────────────────────────────────────

EXIT_OK = 0
EXIT_FAIL = 1
EXIT_CONFIG_ERROR = 2

# ── Rule defaults (authoring guide targets) ──────────────

DEFAULT_MIN_RETRIEVAL = 15
DEFAULT_MIN_DIAGRAMS = 5
DEFAULT_MIN_MISTAKES = 6
DEFAULT_MIN_COLLAPSIBLE = 35
DEFAULT_MAX_JOBS = 4

# ── File discovery ───────────────────────────────────────

CHAPTER_FILE_PATTERN = re.compile(r"^[0-9]{2}.*\.md$")
CHAPTER_NUMBER_PATTERN = re.compile(r"^([0-9]{2})(?![0-9]).*\.md$")
UTF8_BOM = "\ufeff"

# ── Structural patterns ──────────────────────────────────

DETAILS_OPEN_PATTERN = re.compile(r"<details(?:\s[^>]*)?>", re.IGNORECASE)
DETAILS_CLOSE_PATTERN = re.compile(r"</details\s*>", re.IGNORECASE)
CODE_FENCE_PATTERN = re.compile(r"^\s*```(?P<info>.*)$")
HEADING_PATTERN = re.compile(r"^(?P<hashes>#{1,6})\s+(?P<text>.+?)\s*$")

RETRIEVAL_EMOJI = ("🧠", "🔄", "🔁", "💭", "✅", "📝")
RETRIEVAL_PHRASES = ("Quick Recall", "Knowledge Check", "Cumulative Review")
RETRIEVAL_PATTERN = re.compile(
    "(?:"
    + "|".join(re.escape(e) for e in RETRIEVAL_EMOJI)
    + r")\ufe0f?[\s*_]*(?:"
    + "|".join(re.escape(p) for p in RETRIEVAL_PHRASES)
    + ")",
    re.IGNORECASE,
)

DIAGRAM_INFO_STRINGS = frozenset({"mermaid", "diagram", "ascii"})
PLAIN_INFO_STRINGS = frozenset({"", "text", "txt", "plaintext"})
DIAGRAM_ARROWS = ("→", "-->", "──>", "▶")
BOX_DRAWING_PATTERN = re.compile("[\u2500-\u257f]")

MISTAKES_HEADING = "common mistakes"
WAR_STORY_HEADING = "war story"
IMPACT_PATTERN = re.compile(
    r"[$€£]\s?\d"
    r"|\b\d[\d,.]*\s?"
    r"(?:[KMB]|[Mm]illion|[Bb]illion|[Tt]housand|[Uu]sers)\b"
)
