"""Matching of partial rows against stored rows."""

from typing import Iterable, Iterator, Optional

from .models import CellValue, Row


def row_matches(row: Row, query: Optional[Row]) -> bool:
    """True if ``row`` holds every column/value pair of ``query``.

    Columns absent from the query are wildcards, so an empty or missing query
    matches every row.
    """
    if not query:
        return True
    for column, wanted in query.items():
        if column not in row or row[column] != wanted:
            return False
    return True


def iter_matches(rows: Iterable[Row], query: Optional[Row]) -> Iterator[Row]:
    """Yield the stored rows matching ``query`` in storage order."""
    return (row for row in rows if row_matches(row, query))


def select_rows(rows: Iterable[Row], query: Optional[Row] = None) -> list[Row]:
    """Return copies of the rows matching ``query``, preserving order."""
    return [dict(row) for row in iter_matches(rows, query)]


def find_column_value(
    rows: Iterable[Row],
    search_column: str,
    search_value: CellValue,
    target_column: str,
) -> Optional[CellValue]:
    """Value of ``target_column`` in the first row where ``search_column`` equals ``search_value``."""
    for row in iter_matches(rows, {search_column: search_value}):
        return row.get(target_column)
    return None


def count_populated(rows: Iterable[Row], column: str) -> int:
    """Number of rows holding a non-empty value in ``column``."""
    return sum(1 for row in rows if column in row and not row[column].is_empty())
