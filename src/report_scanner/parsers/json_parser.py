"""JSON parser for arrays of records, arrays of values and single records."""
from __future__ import annotations

import json
from typing import Any, Dict, List

from ..errors import EmptyFileError, InvalidStructureError
from ..models import Cell, Dataset, SourceFormat
from ..utils import coerce_cell


VALUE_HEADER = "Value"


def _record_keys(record: Any) -> List[str]:
    if isinstance(record, list):
        return [str(idx) for idx in range(len(record))]
    return list(record.keys())


def _lookup(item: Any, key: str) -> Any:
    if isinstance(item, dict):
        return item.get(key)
    # arrays are addressed by their index keys
    if not key.isdigit() or int(key) >= len(item):
        return None
    return item[int(key)]


def _record_row(item: Any, headers: List[str]) -> List[Cell]:
    if isinstance(item, (dict, list)):
        return [coerce_cell(_lookup(item, header)) for header in headers]
    # a non-object element among records lands in the first column
    row: List[Cell] = [None] * len(headers)
    if headers:
        row[0] = coerce_cell(item)
    return row


def _from_array(items: List[Any]) -> tuple[List[str], List[List[Cell]]]:
    if not items:
        raise EmptyFileError("JSON array is empty")
    first = items[0]
    if isinstance(first, (dict, list)):
        headers = _record_keys(first)
        return headers, [_record_row(item, headers) for item in items]
    return [VALUE_HEADER], [[coerce_cell(item)] for item in items]


def _from_object(record: Dict[str, Any]) -> tuple[List[str], List[List[Cell]]]:
    headers = list(record.keys())
    return headers, [[coerce_cell(value) for value in record.values()]]


def parse_json(text: str, file_name: str) -> Dataset:
    data = json.loads(text)
    if isinstance(data, list):
        headers, rows = _from_array(data)
    elif isinstance(data, dict):
        headers, rows = _from_object(data)
    else:
        raise InvalidStructureError("Invalid JSON structure for report data")
    return Dataset(
        headers=headers,
        rows=rows,
        file_name=file_name,
        source_format=SourceFormat.JSON,
    )
