"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from openpyxl import Workbook

from sheetdb.backends import MemoryBackend
from sheetdb.table import TableStore, coerce_row


PEOPLE_COLUMNS = ["name", "age", "city"]

PEOPLE_ROWS = [
    {"name": "John Doe", "age": "40", "city": "Paris"},
    {"name": "Jane Doe", "age": "30", "city": "New York"},
    {"name": "Bob", "age": "30", "city": "Paris"},
]


@pytest.fixture
def memory_backend() -> MemoryBackend:
    """A document with a 'Sheet1' of three people and an empty 'Archive' sheet."""
    return MemoryBackend(
        {
            "Sheet1": (PEOPLE_COLUMNS, [coerce_row(row) for row in PEOPLE_ROWS]),
            "Archive": ([], []),
        }
    )


@pytest.fixture
def store(memory_backend: MemoryBackend) -> TableStore:
    """A table store on the people sheet of the memory backend."""
    return TableStore(memory_backend)


@pytest.fixture
def xlsx_path(tmp_path: Path) -> Path:
    """Create a workbook with a people sheet and a second 'Notes' sheet."""
    path = tmp_path / "people.xlsx"
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Sheet1"
    worksheet.append(["name", "age", "city"])
    worksheet.append(["John Doe", 40, "Paris"])
    worksheet.append(["Jane Doe", 30, None])
    worksheet.append(["Bob", 30, "Paris"])

    notes = workbook.create_sheet("Notes")
    notes.append(["text"])
    notes.append(["remember the milk"])

    workbook.save(path)
    return path


@pytest.fixture
def mock_sheets_service() -> Mock:
    """Create a mocked Google Sheets API service."""
    service = Mock()
    spreadsheets = service.spreadsheets.return_value

    spreadsheets.get.return_value.execute.return_value = {
        "sheets": [
            {"properties": {"title": "Sheet1"}},
            {"properties": {"title": "Notes"}},
        ]
    }

    spreadsheets.values.return_value.get.return_value.execute.return_value = {
        "range": "'Sheet1'!A1:C3",
        "values": [
            ["name", "age", "city"],
            ["John Doe", 40, "Paris"],
            ["Jane Doe", 30],
        ],
    }

    return service
