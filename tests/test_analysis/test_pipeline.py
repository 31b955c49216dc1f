"""Tests for the per-chapter pipeline and parallel runner."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from chaptercheck.analysis.pipeline import check_chapter, run_checks
from chaptercheck.analysis.quality.rule_config import RuleSet
from chaptercheck.constants import RuleName, Status
from chaptercheck.export import aggregate, export_json


def test_check_chapter_clean(
    write_chapter: Callable[..., Path], default_rules: RuleSet
) -> None:
    path = write_chapter()
    result = check_chapter(path, default_rules)
    assert result.status == Status.PASS
    assert result.title == "Chapter 1: React Foundations"
    assert result.facts is not None
    assert result.facts.code_fence_count == 80


def test_unreadable_file_becomes_fail_result(
    tmp_path: Path, default_rules: RuleSet
) -> None:
    path = tmp_path / "02-latin1.md"
    path.write_bytes(b"# Caf\xe9\n")
    result = check_chapter(path, default_rules)
    assert result.status == Status.FAIL
    assert [v.rule for v in result.violations] == [
        RuleName.FILE_READABLE
    ]


def test_pipeline_is_deterministic(
    write_chapter: Callable[..., Path], default_rules: RuleSet
) -> None:
    path = write_chapter(retrieval=3, unclosed_fence=True)
    first = export_json(aggregate([check_chapter(path, default_rules)]))
    second = export_json(aggregate([check_chapter(path, default_rules)]))
    assert first == second


@pytest.mark.asyncio
async def test_run_checks_isolates_read_errors(
    tmp_path: Path,
    write_chapter: Callable[..., Path],
    default_rules: RuleSet,
) -> None:
    good = write_chapter("01-good.md")
    bad = tmp_path / "02-bad.md"
    bad.write_bytes(b"\xff\xfe\x00")
    thin = write_chapter("03-thin.md", retrieval=3, war_story=None)

    results = await run_checks([thin, bad, good], default_rules, 2)
    report = aggregate(results)

    assert [Path(r.path).name for r in report.results] == [
        "01-good.md",
        "02-bad.md",
        "03-thin.md",
    ]
    assert [r.status for r in report.results] == [
        Status.PASS,
        Status.FAIL,
        Status.WARN,
    ]


@pytest.mark.asyncio
async def test_run_checks_concurrency_one(
    write_chapter: Callable[..., Path], default_rules: RuleSet
) -> None:
    paths = [write_chapter(f"{n:02d}-c.md") for n in range(1, 6)]
    results = await run_checks(paths, default_rules, max_concurrency=1)
    assert len(results) == 5
    assert {r.status for r in results} == {Status.PASS}


@pytest.mark.asyncio
async def test_run_checks_empty() -> None:
    assert await run_checks([], RuleSet()) == []
