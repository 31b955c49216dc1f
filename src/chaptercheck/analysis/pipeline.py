"""Per-chapter pipeline — scan, extract, evaluate.

Each chapter is independent: the only shared object is the frozen
RuleSet. Chapters run in worker threads via asyncio.to_thread(),
bounded by a semaphore; results come back in arrival order and the
report layer sorts them.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from pathlib import Path

from chaptercheck.analysis.extractor import extract_facts
from chaptercheck.analysis.quality.rule_config import RuleSet
from chaptercheck.analysis.quality.rules import (
    evaluate,
    unreadable_result,
)
from chaptercheck.analysis.quality.schemas import ConformanceResult
from chaptercheck.constants import DEFAULT_MAX_JOBS
from chaptercheck.errors import ReadError
from chaptercheck.scanning.scanner import load_chapter

logger = logging.getLogger(__name__)


def check_chapter(
    path: str | Path,
    rules: RuleSet,
) -> ConformanceResult:
    """Run Scanner → Extractor → Rule Engine for one file.

    A ReadError is contained here and becomes a Fail result.
    """
    start = time.monotonic()
    try:
        document = load_chapter(path)
    except ReadError as exc:
        return unreadable_result(exc)

    facts = extract_facts(document)
    result = evaluate(document.path, facts, rules)
    logger.debug(
        "event=chapter_checked path=%s status=%s violations=%d "
        "duration_ms=%.1f",
        document.path,
        result.status,
        len(result.violations),
        (time.monotonic() - start) * 1000,
    )
    return result


async def run_checks(
    paths: Sequence[str | Path],
    rules: RuleSet,
    max_concurrency: int = DEFAULT_MAX_JOBS,
) -> list[ConformanceResult]:
    """Check every chapter, at most ``max_concurrency`` at a time.

    Returns once all chapters are done. Order is completion order,
    not input order.
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrency))
    results: list[ConformanceResult] = []

    async def process(path: str | Path) -> None:
        async with semaphore:
            result = await asyncio.to_thread(check_chapter, path, rules)
            results.append(result)

    await asyncio.gather(*(process(p) for p in paths))
    logger.info(
        "event=checks_complete chapters=%d concurrency=%d",
        len(results),
        max_concurrency,
    )
    return results
