"""Tests for report aggregation and rendering."""

from __future__ import annotations

import json

import pytest

from chaptercheck.analysis.quality.schemas import (
    ConformanceResult,
    Violation,
)
from chaptercheck.constants import RuleName, Severity, Status
from chaptercheck.export import (
    aggregate,
    check_completeness,
    export_json,
    export_text,
    render_report,
)


def _result(
    path: str,
    status: Status = Status.PASS,
    *violations: Violation,
    title: str | None = None,
) -> ConformanceResult:
    return ConformanceResult(
        path=path, status=status, violations=violations, title=title
    )


_RETRIEVAL = Violation(
    rule=RuleName.MIN_RETRIEVAL,
    expected=15,
    actual=3,
    severity=Severity.WARN,
    message="3 retrieval-practice prompts, target 15",
)
_WAR_STORY = Violation(
    rule=RuleName.WAR_STORY,
    expected=1,
    actual=0,
    severity=Severity.WARN,
)
_DETAILS = Violation(
    rule=RuleName.DETAILS_BALANCED,
    expected=39,
    actual=40,
    severity=Severity.FAIL,
)


class TestAggregate:
    def test_sorted_by_path_not_arrival(self) -> None:
        report = aggregate([_result("b.md"), _result("a.md")])
        assert [r.path for r in report.results] == ["a.md", "b.md"]

    def test_summary_counts(self) -> None:
        report = aggregate(
            [
                _result("a.md"),
                _result("b.md", Status.WARN, _RETRIEVAL),
                _result("c.md", Status.FAIL, _DETAILS),
                _result("d.md", Status.WARN, _WAR_STORY),
            ]
        )
        assert report.summary.passed == 1
        assert report.summary.warned == 2
        assert report.summary.failed == 1
        assert report.summary.total == 4
        assert report.has_failures is True

    def test_warn_only_has_no_failures(self) -> None:
        report = aggregate([_result("a.md", Status.WARN, _RETRIEVAL)])
        assert report.has_failures is False

    def test_violation_order_preserved(self) -> None:
        result = _result("a.md", Status.WARN, _WAR_STORY, _RETRIEVAL)
        report = aggregate([result])
        assert report.results[0].violations == (_WAR_STORY, _RETRIEVAL)

    def test_identical_violations_across_files_kept(self) -> None:
        report = aggregate(
            [
                _result("a.md", Status.WARN, _RETRIEVAL),
                _result("b.md", Status.WARN, _RETRIEVAL),
            ]
        )
        assert all(len(r.violations) == 1 for r in report.results)


class TestCompleteness:
    def test_missing_and_duplicates(self) -> None:
        completeness = check_completeness(
            [
                "book/01-a.md",
                "book/02-b.md",
                "book/02-b-draft.md",
                "book/05-e.md",
            ],
            expected=5,
        )
        assert completeness.found == (1, 2, 5)
        assert completeness.missing == (3, 4)
        assert completeness.duplicates == (2,)
        assert completeness.complete is False

    def test_complete_book(self) -> None:
        completeness = check_completeness(
            ["01-a.md", "02-b.md"], expected=2
        )
        assert completeness.complete is True


class TestJsonExport:
    def test_schema(self) -> None:
        report = aggregate(
            [
                _result("b.md", Status.FAIL, _DETAILS),
                _result("a.md"),
            ]
        )
        payload = json.loads(export_json(report))
        assert payload == [
            {"path": "a.md", "status": "pass", "violations": []},
            {
                "path": "b.md",
                "status": "fail",
                "violations": [
                    {
                        "rule": "details-balanced",
                        "expected": 39,
                        "actual": 40,
                        "severity": "fail",
                    }
                ],
            },
        ]

    def test_json_is_deterministic(self) -> None:
        results = [_result("a.md", Status.WARN, _RETRIEVAL)]
        assert export_json(aggregate(results)) == export_json(
            aggregate(list(reversed(results)))
        )


class TestTextExport:
    def test_lists_status_and_violations(self) -> None:
        report = aggregate(
            [
                _result(
                    "01-a.md",
                    Status.WARN,
                    _RETRIEVAL,
                    title="React Foundations",
                ),
            ]
        )
        text = export_text(report)
        assert "Checked 1 chapter(s): 0 pass, 1 warn, 0 fail" in text
        assert "[WARN] 01-a.md: React Foundations" in text
        assert "min-retrieval-practice: expected 15, actual 3" in text
        assert "target 15" in text

    def test_completeness_lines(self) -> None:
        report = aggregate(
            [_result("01-a.md")],
            check_completeness(["01-a.md"], expected=3),
        )
        text = export_text(report)
        assert "Chapters present: 1/3" in text
        assert "Missing chapters: 02, 03" in text


class TestRenderReport:
    def test_dispatch(self) -> None:
        report = aggregate([_result("a.md")])
        assert render_report(report, "json") == export_json(report)
        assert render_report(report, "text") == export_text(report)

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError, match="Unsupported format"):
            render_report(aggregate([]), "xml")
