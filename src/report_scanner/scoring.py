"""Summary statistics, quality score and issue ordering."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from .models import Dataset, Severity, ValidationIssue, ValidationSummary


EMPTY_CELLS_RULE_ID = "empty-cells"
ERROR_PENALTY = 5.0
WARNING_PENALTY = 2.0
INFO_PENALTY = 0.5


def round2(value: float) -> float:
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def completion_percentage(total_cells: int, empty_cell_issues: int) -> float:
    if total_cells == 0:
        return 100.0
    return round2((total_cells - empty_cell_issues) / total_cells * 100)


def quality_score(error_count: int, warning_count: int, info_count: int) -> float:
    score = (
        100.0
        - ERROR_PENALTY * error_count
        - WARNING_PENALTY * warning_count
        - INFO_PENALTY * info_count
    )
    return round2(max(0.0, min(100.0, score)))


def summarize(dataset: Dataset, issues: List[ValidationIssue]) -> ValidationSummary:
    error_count = sum(1 for issue in issues if issue.severity == Severity.ERROR)
    warning_count = sum(1 for issue in issues if issue.severity == Severity.WARNING)
    info_count = sum(1 for issue in issues if issue.severity == Severity.INFO)

    # row 0 (column-level issues) counts as a distinct row here too
    rows_with_issues = len({issue.row for issue in issues})
    empty_cell_issues = sum(1 for issue in issues if issue.rule_id == EMPTY_CELLS_RULE_ID)
    total_cells = dataset.row_count * dataset.column_count

    return ValidationSummary(
        total_rows=dataset.row_count,
        total_columns=dataset.column_count,
        total_issues=len(issues),
        error_count=error_count,
        warning_count=warning_count,
        info_count=info_count,
        valid_rows=dataset.row_count - rows_with_issues,
        invalid_rows=rows_with_issues,
        completion_percentage=completion_percentage(total_cells, empty_cell_issues),
        data_quality_score=quality_score(error_count, warning_count, info_count),
    )


def sort_issues(issues: Iterable[ValidationIssue]) -> List[ValidationIssue]:
    """Errors first, then warnings, then info; by row within a severity."""
    return sorted(issues, key=lambda issue: (issue.severity.rank, issue.row))
