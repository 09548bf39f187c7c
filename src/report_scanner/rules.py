"""Built-in validation rules and rule construction."""
from __future__ import annotations

import copy
import time
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .models import RuleKind, Severity, ValidationRule


DEFAULT_RULES: tuple[ValidationRule, ...] = (
    ValidationRule(
        id="empty-cells",
        name="Empty Cells Check",
        description="Identifies empty or null cells that should contain data",
        kind=RuleKind.REQUIRED,
        severity=Severity.WARNING,
    ),
    ValidationRule(
        id="numeric-format",
        name="Numeric Format Validation",
        description="Ensures numeric columns contain valid numbers",
        kind=RuleKind.DATATYPE,
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="email-format",
        name="Email Format Validation",
        description="Validates email address format",
        kind=RuleKind.FORMAT,
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="date-format",
        name="Date Format Validation",
        description="Validates date format and values",
        kind=RuleKind.FORMAT,
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="duplicate-rows",
        name="Duplicate Rows Check",
        description="Identifies duplicate rows in the dataset",
        kind=RuleKind.CUSTOM,
        severity=Severity.WARNING,
    ),
    ValidationRule(
        id="data-consistency",
        name="Data Consistency Check",
        description="Checks for inconsistent data patterns",
        kind=RuleKind.CUSTOM,
        severity=Severity.INFO,
    ),
    ValidationRule(
        id="length-validation",
        name="Text Length Validation",
        description="Validates text field lengths",
        kind=RuleKind.RANGE,
        severity=Severity.WARNING,
        parameters={"minLength": 1, "maxLength": 255},
    ),
)


def get_default_rules() -> List[ValidationRule]:
    """Return an independent copy of the built-in rules."""
    return [copy.deepcopy(rule) for rule in DEFAULT_RULES]


def _kind(value: Any) -> RuleKind:
    if isinstance(value, RuleKind):
        return value
    try:
        return RuleKind(str(value).lower())
    except ValueError as exc:
        raise ValueError(f"Unknown rule type: {value}") from exc


def _severity(value: Any) -> Severity:
    if isinstance(value, Severity):
        return value
    try:
        return Severity(str(value).lower())
    except ValueError as exc:
        raise ValueError(f"Unknown severity: {value}") from exc


def create_rule(partial: Optional[Mapping[str, Any]] = None, **fields: Any) -> ValidationRule:
    """Build a rule from a partial definition, filling the unset fields.

    Keys may be given as a mapping or keywords; both the attribute names
    (``kind``, ``target_column``) and the exported names (``type``,
    ``column``) are accepted.
    """
    values: Dict[str, Any] = dict(partial or {})
    values.update(fields)
    kind = values.get("kind", values.get("type"))
    enabled = values.get("enabled")
    return ValidationRule(
        id=values.get("id") or f"custom-{int(time.time() * 1000)}",
        name=values.get("name") or "Custom Rule",
        description=values.get("description") or "",
        kind=_kind(kind) if kind else RuleKind.CUSTOM,
        severity=_severity(values["severity"]) if values.get("severity") else Severity.WARNING,
        enabled=True if enabled is None else bool(enabled),
        target_column=values.get("target_column", values.get("column")),
        parameters=dict(values.get("parameters") or {}),
    )


def apply_override(rule: ValidationRule, override: Mapping[str, Any]) -> ValidationRule:
    changes: Dict[str, Any] = {}
    for key in ("name", "description"):
        if override.get(key) is not None:
            changes[key] = override[key]
    kind = override.get("kind", override.get("type"))
    if kind:
        changes["kind"] = _kind(kind)
    if override.get("enabled") is not None:
        changes["enabled"] = bool(override["enabled"])
    if override.get("severity"):
        changes["severity"] = _severity(override["severity"])
    target_column = override.get("target_column", override.get("column"))
    if target_column is not None:
        changes["target_column"] = target_column
    if override.get("parameters"):
        parameters = dict(rule.parameters)
        parameters.update(override["parameters"])
        changes["parameters"] = parameters
    return replace(rule, **changes)


def resolve_rules(overrides: Iterable[Mapping[str, Any]]) -> List[ValidationRule]:
    """Defaults with overrides applied, then any extra rules in given order."""
    rules = get_default_rules()
    positions = {rule.id: idx for idx, rule in enumerate(rules)}
    extra: List[ValidationRule] = []
    for override in overrides:
        rule_id = override.get("id")
        if rule_id in positions:
            idx = positions[rule_id]
            rules[idx] = apply_override(rules[idx], override)
        else:
            extra.append(create_rule(override))
    return rules + extra
