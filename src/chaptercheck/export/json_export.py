"""JSON export — array of per-chapter results.

The shape of each element is the contract CI tooling relies on:
``{path, status, violations: [{rule, expected, actual, severity}]}``.
"""

from __future__ import annotations

import json
from typing import Any

from chaptercheck.analysis.quality.schemas import ConformanceResult
from chaptercheck.export.report import Report


def export_json(report: Report) -> str:
    """Export all results as a JSON array, sorted by path."""
    payload = [_result_to_dict(r) for r in report.results]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _result_to_dict(
    result: ConformanceResult,
) -> dict[str, Any]:
    """Convert a ConformanceResult to a JSON-serializable dict."""
    return {
        "path": result.path,
        "status": str(result.status),
        "violations": [
            {
                "rule": str(v.rule),
                "expected": v.expected,
                "actual": v.actual,
                "severity": str(v.severity),
            }
            for v in result.violations
        ],
    }
