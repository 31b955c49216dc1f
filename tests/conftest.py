"""Shared test fixtures — synthetic chapter builder."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from chaptercheck.analysis.quality.rule_config import RuleSet


def build_chapter(
    *,
    title: str = "Chapter 1: React Foundations",
    details_open: int = 40,
    details_close: int | None = None,
    code_blocks: int = 34,
    diagrams: int = 6,
    retrieval: int = 16,
    mistakes: int = 6,
    war_story: str | None = "The outage cost the company $2.3 million.",
    unclosed_fence: bool = False,
) -> str:
    """Return chapter Markdown with exactly the requested counts.

    Defaults describe a clean chapter: 40 paired ``<details>``,
    80 code fences (34 tsx blocks + 6 mermaid diagrams),
    16 retrieval markers, 6 mistake patterns and a quantified war story.
    """
    if details_close is None:
        details_close = details_open

    parts: list[str] = [f"# {title}", "", "## Concepts", ""]

    for i in range(code_blocks):
        parts += [
            f"Example {i}:",
            "```tsx",
            f"const value{i} = useState(0);",
            "```",
            "",
        ]

    for i in range(diagrams):
        parts += [
            "```mermaid",
            "graph TD",
            f"  A{i} --> B{i}",
            "```",
            "",
        ]

    for _ in range(details_open):
        parts += ["<details>", "<summary>Show answer</summary>", ""]
        parts += ["The answer.", ""]
    parts += ["</details>"] * details_close
    parts.append("")

    parts += ["## Practice", ""]
    for i in range(retrieval):
        parts += [f"### 🧠 Quick Recall {i}", "", "What did we learn?", ""]

    if mistakes:
        parts += ["## Common Mistakes Gallery", ""]
        for i in range(mistakes):
            parts += [
                f"### Mistake {i}: Mutating state",
                "",
                "#### Fix",
                "",
                "Copy before you change.",
                "",
            ]

    if war_story is not None:
        parts += ["## 🔥 War Story: The Checkout Outage", "", war_story, ""]

    parts += ["## Summary", "", "That's all.", ""]

    if unclosed_fence:
        parts += ["```tsx", "const broken = true;"]

    return "\n".join(parts)


@pytest.fixture
def default_rules() -> RuleSet:
    return RuleSet()


@pytest.fixture
def write_chapter(tmp_path: Path) -> Callable[..., Path]:
    """Write a built chapter into ``tmp_path`` and return its path."""

    def _write(name: str = "01-foundations.md", **kwargs: Any) -> Path:
        path = tmp_path / name
        path.write_text(build_chapter(**kwargs), encoding="utf-8")
        return path

    return _write
