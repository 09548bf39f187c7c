from __future__ import annotations

import json

from conftest import make_dataset
from report_scanner.models import Severity
from report_scanner.output import (
    ReportWriter,
    export_payload,
    filter_issues,
    format_issue,
    format_value,
    issues_at,
    preview_rows,
)
from report_scanner.validation import validate_dataset


def _result():
    dataset = make_dataset(
        ["Name", "Amount"],
        [["Ann", "ten"], ["Bob", None], ["Bob", None]],
    )
    return dataset, validate_dataset(dataset)


def test_export_payload_uses_stable_field_names():
    dataset, result = _result()
    payload = export_payload(dataset.file_name, result)

    assert set(payload) == {"fileName", "summary", "issues", "processedAt"}
    assert payload["fileName"] == "report.csv"
    assert set(payload["summary"]) == {
        "totalRows",
        "totalColumns",
        "totalIssues",
        "errorCount",
        "warningCount",
        "infoCount",
        "validRows",
        "invalidRows",
        "completionPercentage",
        "dataQualityScore",
    }
    first = payload["issues"][0]
    assert {"id", "ruleId", "severity", "message", "row", "column", "columnIndex", "currentValue"} <= set(first)


def test_writer_exports_json_file(tmp_path):
    dataset, result = _result()
    writer = ReportWriter(str(tmp_path / "reports"))

    path = writer.export(dataset.file_name, result, timestamp_ms=1700000000000)

    assert path.name == "validation-report-report.csv-1700000000000.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["summary"]["totalRows"] == 3
    assert len(payload["issues"]) == result.summary.total_issues
    assert payload["processedAt"] == result.processed_at.isoformat()


def test_filter_issues_by_severity_and_limit():
    _, result = _result()

    errors = filter_issues(result.issues, "error")
    assert errors and all(issue.severity == Severity.ERROR for issue in errors)
    assert filter_issues(result.issues, limit=1) == result.issues[:1]
    assert filter_issues(result.issues) == result.issues


def test_issues_at_cell():
    _, result = _result()

    at_cell = issues_at(result, 1, 1)
    assert [issue.rule_id for issue in at_cell] == ["numeric-format"]
    assert issues_at(result, 1, 0) == []


def test_format_helpers():
    _, result = _result()

    assert format_value(None) == "(empty)"
    assert format_value("  ") == "(empty)"
    assert format_value(3.0) == "3"
    assert format_issue(result.issues[0]).startswith("[error] row 1 / Amount:")


def test_preview_rows_limits():
    dataset = make_dataset(["a"], [[float(idx)] for idx in range(30)])

    rows = preview_rows(dataset)
    assert len(rows) == 20
    assert rows[0] == [0.0]
