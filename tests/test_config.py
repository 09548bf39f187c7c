from __future__ import annotations

import json

import pytest

from report_scanner.config import MAX_FILE_SIZE_BYTES, build_rules, load_config
from report_scanner.models import RuleKind, Severity


def _write(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_load_config_defaults_without_path():
    config = load_config(None)

    assert config.importer.max_file_size_bytes == MAX_FILE_SIZE_BYTES
    assert config.output.report_dir == "reports"
    assert config.output.issue_limit == 10
    assert config.progress.enabled is True
    assert [rule.id for rule in build_rules(config)][0] == "empty-cells"


def test_load_config_merges_partial_sections(tmp_path):
    config = load_config(
        _write(
            tmp_path,
            {
                "importer": {"max_file_size_bytes": 1024},
                "output": {"report_dir": "out"},
                "progress": {"enabled": False},
            },
        )
    )

    assert config.importer.max_file_size_bytes == 1024
    assert config.importer.encoding == "utf-8-sig"
    assert config.output.report_dir == "out"
    assert config.output.indent == 2
    assert config.progress.enabled is False


def test_load_config_rejects_larger_size_cap(tmp_path):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, {"importer": {"max_file_size_bytes": MAX_FILE_SIZE_BYTES + 1}}))


def test_rule_overrides(tmp_path):
    config = load_config(
        _write(
            tmp_path,
            {
                "rules": [
                    {"id": "length-validation", "parameters": {"maxLength": 20}},
                    {"id": "duplicate-rows", "enabled": False},
                    {"id": "numeric-format", "severity": "warning"},
                    {
                        "id": "price-bounds",
                        "kind": "range",
                        "severity": "error",
                        "target_column": "Price",
                        "parameters": {"minValue": 0},
                    },
                ]
            },
        )
    )
    rules = {rule.id: rule for rule in build_rules(config)}

    assert rules["length-validation"].parameters == {"minLength": 1, "maxLength": 20}
    assert rules["duplicate-rows"].enabled is False
    assert rules["numeric-format"].severity == Severity.WARNING
    assert rules["price-bounds"].kind == RuleKind.RANGE
    assert rules["price-bounds"].target_column == "Price"
    assert rules["price-bounds"].severity == Severity.ERROR


def test_rule_override_requires_id(tmp_path):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, {"rules": [{"enabled": False}]}))


def test_rule_overrides_accept_exported_names(tmp_path):
    config = load_config(
        _write(
            tmp_path,
            {
                "rules": [
                    {"id": "price-bounds", "type": "range", "column": "Price"},
                    {
                        "id": "email-format",
                        "name": "Contact Format",
                        "description": "Contacts only",
                        "column": "Email",
                    },
                ]
            },
        )
    )
    rules = {rule.id: rule for rule in build_rules(config)}

    assert rules["price-bounds"].kind == RuleKind.RANGE
    assert rules["price-bounds"].target_column == "Price"
    assert rules["email-format"].name == "Contact Format"
    assert rules["email-format"].description == "Contacts only"
    assert rules["email-format"].target_column == "Email"


def test_rule_override_kind_change_on_default_rule(tmp_path):
    config = load_config(_write(tmp_path, {"rules": [{"id": "duplicate-rows", "kind": "required"}]}))
    rule = next(rule for rule in build_rules(config) if rule.id == "duplicate-rows")

    assert rule.kind == RuleKind.REQUIRED
    assert rule.custom_check is None


def test_rule_override_rejects_unknown_keys(tmp_path):
    with pytest.raises(ValueError, match="colour"):
        load_config(_write(tmp_path, {"rules": [{"id": "empty-cells", "colour": "red"}]}))
