"""Utility helpers for cell coercion, detection and display."""
from __future__ import annotations

import json
import math
import re
from typing import Any, Optional

from dateutil import parser as date_parser

from .models import Cell


NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def normalize_text(value: str) -> str:
    return " ".join(value.strip().lower().split())


def parse_number(value: str) -> Optional[float]:
    if not value:
        return None
    cleaned = value.strip()
    if not NUMBER_RE.match(cleaned):
        return None
    try:
        number = float(cleaned)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def is_number(value: str) -> bool:
    return parse_number(value) is not None


def is_date(value: str) -> bool:
    if not value:
        return False
    text = value.strip()
    if not text:
        return False
    try:
        date_parser.parse(text, fuzzy=False)
        return True
    except (ValueError, TypeError, OverflowError):
        return False


def coerce_cell(raw: Any) -> Cell:
    """Classify a raw token or JSON primitive into a cell value.

    Typed JSON numbers and booleans are kept as they are (numbers widened to
    float). Strings are trimmed and promoted to a number or boolean when
    they spell one exactly. Objects and arrays become their JSON text.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError:
            return str(raw)
        if math.isfinite(number):
            return number
        return str(raw)
    if isinstance(raw, (dict, list)):
        return json.dumps(raw, ensure_ascii=False)
    if raw == "":
        return None

    text = str(raw).strip()
    number = parse_number(text)
    if number is not None:
        return number
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return text


def is_blank(value: Cell) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def display_value(value: Any) -> str:
    """Render a cell the way it reads in the source file."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _canonical(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def row_signature(row: Any) -> str:
    return json.dumps(
        [_canonical(value) for value in row], ensure_ascii=False, separators=(",", ":")
    )
