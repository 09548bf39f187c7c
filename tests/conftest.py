from __future__ import annotations

from typing import List

import pytest

from report_scanner.models import Cell, Dataset, SourceFormat


def make_dataset(headers: List[str], rows: List[List[Cell]], file_name: str = "report.csv") -> Dataset:
    return Dataset(
        headers=headers,
        rows=rows,
        file_name=file_name,
        source_format=SourceFormat.CSV,
    )


@pytest.fixture
def customers() -> Dataset:
    return make_dataset(
        ["Name", "Email", "Phone", "Created Date", "Amount", "Active"],
        [
            ["alice", "alice@example.com", 5551234.0, "2024-01-05", 10.0, True],
            ["bob", "bob-at-example", "(555) 123-4567", "not a date", "ten", "maybe"],
            ["carol", None, "+44 20 7946 0958", "2024-02-10", 12.5, False],
        ],
    )
