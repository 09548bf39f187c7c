"""Parsers for CSV, tab-separated and free-form delimited text."""
from __future__ import annotations

from typing import Callable, List, Sequence

from ..errors import EmptyFileError
from ..models import Cell, Dataset, SourceFormat
from ..utils import coerce_cell


TXT_DELIMITERS = ("|", ",", ";")
TAB = "\t"

Splitter = Callable[[str], List[str]]


def _non_blank_lines(text: str) -> List[str]:
    return [line for line in text.split("\n") if line.strip()]


def split_csv_line(line: str, delimiter: str = ",") -> List[str]:
    """Split one line on ``delimiter``, honouring double-quoted fields.

    A doubled quote inside a quoted field is a literal quote. Fields are
    trimmed after unquoting.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    idx = 0
    while idx < len(line):
        char = line[idx]
        if char == '"':
            if in_quotes and idx + 1 < len(line) and line[idx + 1] == '"':
                current.append('"')
                idx += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        idx += 1
    fields.append("".join(current).strip())
    return fields


def split_plain(line: str, delimiter: str) -> List[str]:
    return [cell.strip() for cell in line.split(delimiter)]


def detect_delimiter(header_line: str) -> str:
    for delimiter in TXT_DELIMITERS:
        if delimiter in header_line:
            return delimiter
    return TAB


def normalize_row(row: Sequence[str], width: int) -> List[Cell]:
    cells = list(row[:width])
    if len(cells) < width:
        cells.extend([""] * (width - len(cells)))
    return [coerce_cell(cell) for cell in cells]


def _parse_lines(
    text: str,
    file_name: str,
    source_format: SourceFormat,
    splitter_for: Callable[[str], Splitter],
) -> Dataset:
    lines = _non_blank_lines(text)
    if not lines:
        raise EmptyFileError("File is empty")

    split = splitter_for(lines[0])
    headers = split(lines[0])
    rows = [normalize_row(split(line), len(headers)) for line in lines[1:]]
    return Dataset(
        headers=headers,
        rows=rows,
        file_name=file_name,
        source_format=source_format,
    )


def _csv_splitter(_header_line: str) -> Splitter:
    return split_csv_line


def _tsv_splitter(_header_line: str) -> Splitter:
    return lambda line: split_plain(line, TAB)


def _txt_splitter(header_line: str) -> Splitter:
    delimiter = detect_delimiter(header_line)
    return lambda line: split_plain(line, delimiter)


def parse_csv(text: str, file_name: str) -> Dataset:
    return _parse_lines(text, file_name, SourceFormat.CSV, _csv_splitter)


def parse_tsv(text: str, file_name: str) -> Dataset:
    return _parse_lines(text, file_name, SourceFormat.TSV, _tsv_splitter)


def parse_txt(text: str, file_name: str) -> Dataset:
    return _parse_lines(text, file_name, SourceFormat.TXT, _txt_splitter)
