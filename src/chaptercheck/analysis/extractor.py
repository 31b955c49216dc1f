"""Derive structural facts from a chapter's raw text.

Every check is a literal substring or regex match. No Markdown
parser is involved, so the same text always yields the same facts.
"""

from __future__ import annotations

import re

from chaptercheck.analysis.schemas import (
    FencedBlock,
    Heading,
    StructuralFacts,
)
from chaptercheck.constants import (
    BOX_DRAWING_PATTERN,
    CODE_FENCE_PATTERN,
    DETAILS_CLOSE_PATTERN,
    DETAILS_OPEN_PATTERN,
    DIAGRAM_ARROWS,
    DIAGRAM_INFO_STRINGS,
    HEADING_PATTERN,
    IMPACT_PATTERN,
    MISTAKES_HEADING,
    PLAIN_INFO_STRINGS,
    RETRIEVAL_PATTERN,
    WAR_STORY_HEADING,
)
from chaptercheck.scanning.schemas import ChapterDocument

_CLOSING_HASHES = re.compile(r"\s+#+$")


def extract_facts(document: ChapterDocument) -> StructuralFacts:
    """Return the StructuralFacts of ``document``.

    Pure function: no I/O, no hidden state. Empty text gives the
    all-zero facts rather than an error.
    """
    text = document.raw_text
    if not text.strip():
        return StructuralFacts()

    lines = document.lines
    headings, blocks, fence_count = _scan_lines(lines)

    war_story_headings = [
        h for h in headings if WAR_STORY_HEADING in h.text.lower()
    ]

    return StructuralFacts(
        details_open_count=len(DETAILS_OPEN_PATTERN.findall(text)),
        details_close_count=len(DETAILS_CLOSE_PATTERN.findall(text)),
        code_fence_count=fence_count,
        headings=tuple(headings),
        retrieval_practice_count=len(RETRIEVAL_PATTERN.findall(text)),
        diagram_count=sum(1 for b in blocks if is_diagram(b)),
        mistake_pattern_count=count_mistake_patterns(headings),
        war_story_heading_count=len(war_story_headings),
        war_story_present=any(
            IMPACT_PATTERN.search(_section_text(lines, headings, h))
            for h in war_story_headings
        ),
        title=next((h.text for h in headings if h.level == 1), None),
    )


def _scan_lines(
    lines: list[str],
) -> tuple[list[Heading], list[FencedBlock], int]:
    """Walk lines once, tracking fence state.

    Lines inside a fenced block are never headings (a ``# comment``
    in a shell snippet is code, not structure).
    """
    headings: list[Heading] = []
    blocks: list[FencedBlock] = []
    fence_count = 0

    open_info: str | None = None
    open_line = 0
    body: list[str] = []

    for number, line in enumerate(lines, 1):
        fence = CODE_FENCE_PATTERN.match(line)
        if fence:
            fence_count += 1
            if open_info is None:
                info = fence.group("info").strip().lower()
                open_info = info.split()[0] if info else ""
                open_line = number
                body = []
            else:
                blocks.append(
                    FencedBlock(
                        info=open_info,
                        start_line=open_line,
                        end_line=number,
                        body="\n".join(body),
                    )
                )
                open_info = None
            continue

        if open_info is not None:
            body.append(line)
            continue

        match = HEADING_PATTERN.match(line)
        if match:
            headings.append(
                Heading(
                    text=_CLOSING_HASHES.sub("", match.group("text")).strip(),
                    line=number,
                    level=len(match.group("hashes")),
                )
            )

    if open_info is not None:
        blocks.append(
            FencedBlock(
                info=open_info,
                start_line=open_line,
                end_line=None,
                body="\n".join(body),
            )
        )

    return headings, blocks, fence_count


def is_diagram(block: FencedBlock) -> bool:
    """True for closed mermaid/ascii blocks or plain blocks drawing boxes."""
    if not block.closed:
        return False
    if block.info in DIAGRAM_INFO_STRINGS:
        return True
    if block.info not in PLAIN_INFO_STRINGS:
        return False
    return bool(BOX_DRAWING_PATTERN.search(block.body)) or any(
        arrow in block.body for arrow in DIAGRAM_ARROWS
    )


def _children(
    headings: list[Heading], parent: Heading
) -> list[Heading]:
    """Headings nested below ``parent`` up to its next sibling."""
    index = headings.index(parent)
    nested: list[Heading] = []
    for heading in headings[index + 1:]:
        if heading.level <= parent.level:
            break
        nested.append(heading)
    return nested


def count_mistake_patterns(headings: list[Heading]) -> int:
    """Count the direct sub-headings of every "Common Mistakes" section.

    Only the shallowest nested level counts, so a mistake heading
    with its own "Fix" sub-heading is one pattern, not two. A
    "Common Mistakes" heading nested inside another one is part of
    the outer section and is not counted again.
    """
    total = 0
    covered_until = -1
    for index, heading in enumerate(headings):
        if index <= covered_until:
            continue
        if MISTAKES_HEADING not in heading.text.lower():
            continue
        nested = _children(headings, heading)
        covered_until = index + len(nested)
        if not nested:
            continue
        child_level = min(h.level for h in nested)
        total += sum(1 for h in nested if h.level == child_level)
    return total


def _section_text(
    lines: list[str],
    headings: list[Heading],
    heading: Heading,
) -> str:
    """Heading line plus its body, up to the next same-or-higher heading."""
    end = len(lines)
    index = headings.index(heading)
    for following in headings[index + 1:]:
        if following.level <= heading.level:
            end = following.line - 1
            break
    return "\n".join(lines[heading.line - 1:end])
