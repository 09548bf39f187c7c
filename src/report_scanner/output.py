"""Result export and display helpers."""
from __future__ import annotations

import json
import re
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .models import Cell, Dataset, Severity, ValidationIssue, ValidationResult
from .utils import display_value, is_blank


UNSAFE_NAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


def export_payload(file_name: str, result: ValidationResult) -> Dict[str, Any]:
    return {
        "fileName": file_name,
        "summary": result.summary.to_dict(),
        "issues": [issue.to_dict() for issue in result.issues],
        "processedAt": result.processed_at.isoformat(),
    }


class ReportWriter:
    def __init__(self, report_dir: str, indent: int = 2) -> None:
        self.report_path = Path(report_dir)
        self.indent = indent

    def report_file(self, file_name: str, timestamp_ms: Optional[int] = None) -> Path:
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        safe_name = UNSAFE_NAME_RE.sub("_", file_name)
        return self.report_path / f"validation-report-{safe_name}-{timestamp_ms}.json"

    def export(
        self,
        file_name: str,
        result: ValidationResult,
        timestamp_ms: Optional[int] = None,
    ) -> Path:
        self.report_path.mkdir(parents=True, exist_ok=True)
        report_file = self.report_file(file_name, timestamp_ms)
        with open(report_file, "w", encoding="utf-8") as handle:
            json.dump(export_payload(file_name, result), handle, indent=self.indent)
        return report_file


def filter_issues(
    issues: Iterable[ValidationIssue],
    severity: Optional[Union[Severity, str]] = None,
    limit: Optional[int] = None,
) -> List[ValidationIssue]:
    wanted = Severity(severity) if severity else None
    filtered = [issue for issue in issues if wanted is None or issue.severity == wanted]
    if limit is not None:
        return filtered[:limit]
    return filtered


def issues_at(result: ValidationResult, row: int, column_index: int) -> List[ValidationIssue]:
    return [
        issue
        for issue in result.issues
        if issue.row == row and issue.column_index == column_index
    ]


def format_value(value: Any) -> str:
    if is_blank(value):
        return "(empty)"
    return display_value(value)


def preview_rows(dataset: Dataset, limit: int = 20) -> List[List[Cell]]:
    return [list(row) for row in dataset.rows[:limit]]


def format_issue(issue: ValidationIssue) -> str:
    location = f"row {issue.row}" if issue.row else "column"
    line = (
        f"[{issue.severity.value}] {location} / {issue.column}: {issue.message}"
        f" (value: {format_value(issue.current_value)})"
    )
    if issue.suggested_value is not None:
        line += f" -> {issue.suggested_value}"
    return line
