"""Data models for datasets, rules, issues and results."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

Cell = Union[None, float, bool, str]


class SourceFormat(str, Enum):
    CSV = "CSV"
    JSON = "JSON"
    TXT = "TXT"
    TSV = "TSV"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


class RuleKind(str, Enum):
    REQUIRED = "required"
    DATATYPE = "datatype"
    FORMAT = "format"
    RANGE = "range"
    CUSTOM = "custom"


class CustomCheck(str, Enum):
    DUPLICATE_ROWS = "duplicate-rows"
    DATA_CONSISTENCY = "data-consistency"


class MessageKind(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Dataset:
    headers: List[str]
    rows: List[List[Cell]]
    file_name: str
    source_format: SourceFormat

    def __post_init__(self) -> None:
        width = len(self.headers)
        for idx, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {idx + 1} has {len(row)} cells, expected {width}"
                )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)


@dataclass(frozen=True)
class ValidationRule:
    """Configuration for one check.

    ``custom_check`` is resolved from ``id`` when the rule is built, so the
    engine never matches rule ids while it runs. A custom rule whose id is
    not a known check keeps ``custom_check=None`` and yields no issues.
    """

    id: str
    name: str
    description: str
    kind: RuleKind
    severity: Severity
    enabled: bool = True
    target_column: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)
    custom_check: Optional[CustomCheck] = field(default=None, init=False, compare=False)

    def __post_init__(self) -> None:
        check = None
        if self.kind == RuleKind.CUSTOM:
            try:
                check = CustomCheck(self.id)
            except ValueError:
                check = None
        object.__setattr__(self, "custom_check", check)


@dataclass(frozen=True)
class ValidationIssue:
    id: str
    rule_id: str
    severity: Severity
    message: str
    row: int  # 1-based, 0 for column-level issues
    column: str
    column_index: int  # 0-based, -1 when not tied to one column
    current_value: Any
    suggested_value: Any = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "row": self.row,
            "column": self.column,
            "columnIndex": self.column_index,
            "currentValue": self.current_value,
        }
        if self.suggested_value is not None:
            payload["suggestedValue"] = self.suggested_value
        if self.description is not None:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class ValidationSummary:
    total_rows: int
    total_columns: int
    total_issues: int
    error_count: int
    warning_count: int
    info_count: int
    valid_rows: int
    invalid_rows: int
    completion_percentage: float
    data_quality_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "totalColumns": self.total_columns,
            "totalIssues": self.total_issues,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
            "validRows": self.valid_rows,
            "invalidRows": self.invalid_rows,
            "completionPercentage": self.completion_percentage,
            "dataQualityScore": self.data_quality_score,
        }


@dataclass(frozen=True)
class ValidationResult:
    summary: ValidationSummary
    issues: List[ValidationIssue]
    is_valid: bool
    processed_at: datetime


@dataclass(frozen=True)
class ImportMessage:
    kind: MessageKind
    message: str
    row: Optional[int] = None
    column: Optional[str] = None


@dataclass
class ImportResult:
    success: bool
    dataset: Optional[Dataset] = None
    errors: List[ImportMessage] = field(default_factory=list)

    @property
    def warnings(self) -> List[ImportMessage]:
        return [entry for entry in self.errors if entry.kind == MessageKind.WARNING]
