"""Configuration for importing, validation rules, output and progress."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional
import json

from .models import ValidationRule
from .rules import resolve_rules


MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
SUPPORTED_EXTENSIONS = ("csv", "json", "txt", "tsv")


@dataclass
class ImportSettings:
    max_file_size_bytes: int = MAX_FILE_SIZE_BYTES
    encoding: str = "utf-8-sig"
    progress_reset: bool = True


@dataclass
class RuleOverride:
    id: str
    enabled: Optional[bool] = None
    severity: Optional[str] = None
    target_column: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)
    name: Optional[str] = None
    description: Optional[str] = None
    kind: Optional[str] = None


@dataclass
class OutputSettings:
    report_dir: str = "reports"
    indent: int = 2
    issue_limit: int = 10


@dataclass
class ProgressSettings:
    enabled: bool = True


@dataclass
class ScannerConfig:
    importer: ImportSettings = field(default_factory=ImportSettings)
    rules: List[RuleOverride] = field(default_factory=list)
    output: OutputSettings = field(default_factory=OutputSettings)
    progress: ProgressSettings = field(default_factory=ProgressSettings)

    @staticmethod
    def default() -> "ScannerConfig":
        return ScannerConfig()


def _merge_dict(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


RULE_KEY_ALIASES = {"type": "kind", "column": "target_column"}


def _rule_override(entry: Dict[str, Any]) -> RuleOverride:
    if "id" not in entry:
        raise ValueError("Every rule override needs an 'id'")
    values = {RULE_KEY_ALIASES.get(key, key): value for key, value in entry.items()}
    unknown = sorted(set(values) - {item.name for item in fields(RuleOverride)})
    if unknown:
        raise ValueError(f"Unknown keys in rule override {entry['id']!r}: {', '.join(unknown)}")
    return RuleOverride(**values)


def load_config(path: Optional[str]) -> ScannerConfig:
    if not path:
        return ScannerConfig.default()
    with open(path, "r", encoding="utf-8") as handle:
        raw = json.load(handle)
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration must be a JSON object: {path}")

    defaults = ScannerConfig.default()
    merged = _merge_dict(
        {
            "importer": asdict(defaults.importer),
            "rules": [],
            "output": asdict(defaults.output),
            "progress": asdict(defaults.progress),
        },
        raw,
    )

    importer = ImportSettings(**merged.get("importer", {}))
    if importer.max_file_size_bytes > MAX_FILE_SIZE_BYTES:
        raise ValueError(
            f"max_file_size_bytes may not exceed {MAX_FILE_SIZE_BYTES} bytes"
        )

    rules = [_rule_override(entry) for entry in merged.get("rules", [])]

    return ScannerConfig(
        importer=importer,
        rules=rules,
        output=OutputSettings(**merged.get("output", {})),
        progress=ProgressSettings(**merged.get("progress", {})),
    )


def build_rules(config: ScannerConfig) -> List[ValidationRule]:
    overrides = []
    for override in config.rules:
        entry = {key: value for key, value in asdict(override).items() if value is not None}
        overrides.append(entry)
    return resolve_rules(overrides)
