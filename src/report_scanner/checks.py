"""Check implementations for each rule kind."""
from __future__ import annotations

import re
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .columns import (
    is_boolean_column,
    is_date_column,
    is_email_column,
    is_numeric_column,
    is_phone_column,
    target_indices,
)
from .models import Cell, CustomCheck, Dataset, RuleKind, ValidationIssue, ValidationRule
from .utils import display_value, is_blank, is_date, is_number, row_signature


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
PHONE_STRIP_RE = re.compile(r"[\s\-()]")
UPPER_RE = re.compile(r"[A-Z]")
LOWER_RE = re.compile(r"[a-z]")

BOOLEAN_TOKENS = ("true", "false", "1", "0", "yes", "no")
FORMAT_CHECKS = ("email", "date", "phone")
DATE_FORMAT_TAGS = (("/", "MM/DD/YYYY"), ("-", "YYYY-MM-DD"), (".", "DD.MM.YYYY"))
ALL_COLUMNS = "All Columns"
CASE_ROW_LIMIT = 10

Check = Callable[[ValidationRule, Dataset], List[ValidationIssue]]


def _cells(rule: ValidationRule, dataset: Dataset) -> Iterator[Tuple[int, int, Cell]]:
    columns = target_indices(dataset.headers, rule.target_column)
    for row_idx, row in enumerate(dataset.rows):
        for col_idx in columns:
            yield row_idx, col_idx, row[col_idx]


def _cell_issue(
    rule: ValidationRule,
    dataset: Dataset,
    tag: Optional[str],
    row_idx: int,
    col_idx: int,
    value: Cell,
    message: str,
    description: str,
    suggested_value: Optional[str] = None,
) -> ValidationIssue:
    parts = [rule.id] + ([tag] if tag else []) + [str(row_idx), str(col_idx)]
    return ValidationIssue(
        id="-".join(parts),
        rule_id=rule.id,
        severity=rule.severity,
        message=message,
        row=row_idx + 1,
        column=dataset.headers[col_idx],
        column_index=col_idx,
        current_value=value,
        suggested_value=suggested_value,
        description=description,
    )


def check_required(rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
    issues = []
    for row_idx, col_idx, value in _cells(rule, dataset):
        if not is_blank(value):
            continue
        issues.append(
            _cell_issue(
                rule,
                dataset,
                None,
                row_idx,
                col_idx,
                value,
                f'Empty cell found in column "{dataset.headers[col_idx]}"',
                "This cell appears to be empty but may require data",
            )
        )
    return issues


def _is_numeric_cell(value: Cell) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return True
    return isinstance(value, str) and is_number(value)


def _is_boolean_cell(value: Cell) -> bool:
    if isinstance(value, bool):
        return True
    return display_value(value).strip().lower() in BOOLEAN_TOKENS


def check_datatypes(rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
    issues = []
    for row_idx, col_idx, value in _cells(rule, dataset):
        if is_blank(value):
            continue
        header = dataset.headers[col_idx]
        if is_numeric_column(header) and not _is_numeric_cell(value):
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "numeric",
                    row_idx,
                    col_idx,
                    value,
                    f'Invalid numeric value in column "{header}"',
                    "Expected a numeric value but found text or invalid format",
                )
            )
        if is_boolean_column(header) and not _is_boolean_cell(value):
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "boolean",
                    row_idx,
                    col_idx,
                    value,
                    f'Invalid boolean value in column "{header}"',
                    "Expected a boolean value",
                    suggested_value="true/false, yes/no, or 1/0",
                )
            )
    return issues


def _enabled_formats(rule: ValidationRule) -> Tuple[str, ...]:
    formats = rule.parameters.get("formats")
    if not formats:
        return FORMAT_CHECKS
    return tuple(str(name).lower() for name in formats)


def check_formats(rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
    formats = _enabled_formats(rule)
    issues = []
    for row_idx, col_idx, value in _cells(rule, dataset):
        if is_blank(value):
            continue
        header = dataset.headers[col_idx]
        text = display_value(value)

        if "email" in formats and is_email_column(header) and not EMAIL_RE.match(text):
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "email",
                    row_idx,
                    col_idx,
                    value,
                    f'Invalid email format in column "{header}"',
                    "Email format should be: user@domain.com",
                )
            )

        if "date" in formats and is_date_column(header) and not is_date(text):
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "date",
                    row_idx,
                    col_idx,
                    value,
                    f'Invalid date format in column "{header}"',
                    "Date should be in a valid format (YYYY-MM-DD, MM/DD/YYYY, etc.)",
                )
            )

        if "phone" in formats and is_phone_column(header):
            if not PHONE_RE.match(PHONE_STRIP_RE.sub("", text)):
                issues.append(
                    _cell_issue(
                        rule,
                        dataset,
                        "phone",
                        row_idx,
                        col_idx,
                        value,
                        f'Invalid phone format in column "{header}"',
                        "Phone number should contain only digits and common separators",
                    )
                )
    return issues


def _bound(parameters: Dict[str, object], name: str) -> Optional[float]:
    value = parameters.get(name)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def check_ranges(rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
    params = rule.parameters
    min_length = _bound(params, "minLength")
    max_length = _bound(params, "maxLength")
    min_value = _bound(params, "minValue")
    max_value = _bound(params, "maxValue")

    issues = []
    for row_idx, col_idx, value in _cells(rule, dataset):
        if is_blank(value):
            continue
        header = dataset.headers[col_idx]
        length = len(display_value(value))

        if min_length is not None and length < min_length:
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "minlength",
                    row_idx,
                    col_idx,
                    value,
                    f'Text too short in column "{header}" '
                    f"({length} characters, minimum {display_value(min_length)})",
                    f"Current length: {length}, required minimum: {display_value(min_length)}",
                )
            )
        if max_length is not None and length > max_length:
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "maxlength",
                    row_idx,
                    col_idx,
                    value,
                    f'Text too long in column "{header}" '
                    f"({length} characters, maximum {display_value(max_length)})",
                    f"Current length: {length}, maximum allowed: {display_value(max_length)}",
                )
            )

        if not isinstance(value, float):
            continue
        if min_value is not None and value < min_value:
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "minvalue",
                    row_idx,
                    col_idx,
                    value,
                    f'Value too small in column "{header}" (minimum {display_value(min_value)})',
                    f"Current value: {display_value(value)}, "
                    f"required minimum: {display_value(min_value)}",
                )
            )
        if max_value is not None and value > max_value:
            issues.append(
                _cell_issue(
                    rule,
                    dataset,
                    "maxvalue",
                    row_idx,
                    col_idx,
                    value,
                    f'Value too large in column "{header}" (maximum {display_value(max_value)})',
                    f"Current value: {display_value(value)}, "
                    f"maximum allowed: {display_value(max_value)}",
                )
            )
    return issues


def find_duplicate_rows(rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
    groups: Dict[str, List[int]] = {}
    for row_idx, row in enumerate(dataset.rows):
        groups.setdefault(row_signature(row), []).append(row_idx)

    issues = []
    for indices in groups.values():
        first = indices[0] + 1
        for row_idx in indices[1:]:
            issues.append(
                ValidationIssue(
                    id=f"{rule.id}-{row_idx}",
                    rule_id=rule.id,
                    severity=rule.severity,
                    message=f"Duplicate row found (first occurrence at row {first})",
                    row=row_idx + 1,
                    column=ALL_COLUMNS,
                    column_index=-1,
                    current_value=list(dataset.rows[row_idx]),
                    description=f"This row is identical to row {first}",
                )
            )
    return issues


def _date_format_tag(text: str) -> Optional[str]:
    for separator, tag in DATE_FORMAT_TAGS:
        if separator in text:
            return tag
    return None


def _column_issue(
    rule: ValidationRule,
    dataset: Dataset,
    tag: str,
    col_idx: int,
    message: str,
    current_value: str,
    description: str,
) -> ValidationIssue:
    return ValidationIssue(
        id=f"{rule.id}-{tag}-{col_idx}",
        rule_id=rule.id,
        severity=rule.severity,
        message=message,
        row=0,
        column=dataset.headers[col_idx],
        column_index=col_idx,
        current_value=current_value,
        description=description,
    )


def check_consistency(rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
    issues = []
    for col_idx in target_indices(dataset.headers, rule.target_column):
        header = dataset.headers[col_idx]
        values = [row[col_idx] for row in dataset.rows if not is_blank(row[col_idx])]
        if not values:
            continue

        if is_date_column(header):
            formats: List[str] = []
            for value in values:
                tag = _date_format_tag(display_value(value))
                if tag and tag not in formats:
                    formats.append(tag)
            if len(formats) > 1:
                seen = ", ".join(formats)
                issues.append(
                    _column_issue(
                        rule,
                        dataset,
                        "dateformat",
                        col_idx,
                        f'Inconsistent date formats in column "{header}"',
                        seen,
                        f"Multiple date formats detected: {seen}",
                    )
                )

        if not isinstance(values[0], str):
            continue
        texts = [display_value(value) for value in values]
        has_upper = any(UPPER_RE.search(text) for text in texts)
        has_lower = any(LOWER_RE.search(text) for text in texts)
        if not (has_upper and has_lower):
            continue

        mixed_rows = []
        for row_idx, row in enumerate(dataset.rows):
            text = display_value(row[col_idx])
            if text and text != text.lower() and text != text.upper():
                mixed_rows.append(row_idx + 1)
        if mixed_rows:
            listed = ", ".join(str(row) for row in mixed_rows[:CASE_ROW_LIMIT])
            more = "..." if len(mixed_rows) > CASE_ROW_LIMIT else ""
            issues.append(
                _column_issue(
                    rule,
                    dataset,
                    "case",
                    col_idx,
                    f'Inconsistent text casing in column "{header}"',
                    "Mixed case formats",
                    f"Rows with mixed casing: {listed}{more}",
                )
            )
    return issues


CUSTOM_CHECKS: Dict[CustomCheck, Check] = {
    CustomCheck.DUPLICATE_ROWS: find_duplicate_rows,
    CustomCheck.DATA_CONSISTENCY: check_consistency,
}


def check_custom(rule: ValidationRule, dataset: Dataset) -> List[ValidationIssue]:
    if rule.custom_check is None:
        return []
    return CUSTOM_CHECKS[rule.custom_check](rule, dataset)


CHECKS: Dict[RuleKind, Check] = {
    RuleKind.REQUIRED: check_required,
    RuleKind.DATATYPE: check_datatypes,
    RuleKind.FORMAT: check_formats,
    RuleKind.RANGE: check_ranges,
    RuleKind.CUSTOM: check_custom,
}
