"""Column-role heuristics based on header keywords."""
from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional

from .utils import normalize_text


NUMERIC = "numeric"
BOOLEAN = "boolean"
EMAIL = "email"
DATE = "date"
PHONE = "phone"

ROLE_KEYWORDS: Dict[str, FrozenSet[str]] = {
    NUMERIC: frozenset(
        {
            "amount",
            "price",
            "cost",
            "value",
            "number",
            "count",
            "quantity",
            "total",
            "sum",
            "avg",
            "average",
        }
    ),
    BOOLEAN: frozenset(
        {"active", "enabled", "valid", "confirmed", "approved", "published", "visible"}
    ),
    EMAIL: frozenset({"email", "mail"}),
    DATE: frozenset(
        {"date", "time", "created", "updated", "modified", "birth", "start", "end", "expire"}
    ),
    PHONE: frozenset({"phone", "mobile", "tel"}),
}


def _has_keyword(header: str, role: str) -> bool:
    name = header.lower()
    return any(keyword in name for keyword in ROLE_KEYWORDS[role])


def is_numeric_column(header: str) -> bool:
    return _has_keyword(header, NUMERIC)


def is_boolean_column(header: str) -> bool:
    return _has_keyword(header, BOOLEAN)


def is_email_column(header: str) -> bool:
    return _has_keyword(header, EMAIL)


def is_date_column(header: str) -> bool:
    return _has_keyword(header, DATE)


def is_phone_column(header: str) -> bool:
    return _has_keyword(header, PHONE)


def target_indices(headers: List[str], target_column: Optional[str]) -> List[int]:
    if target_column is None:
        return list(range(len(headers)))
    wanted = normalize_text(target_column)
    return [idx for idx, header in enumerate(headers) if normalize_text(header) == wanted]
