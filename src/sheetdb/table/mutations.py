"""In-place mutations of a table's schema and rows.

These functions only touch the lists they are given. Persisting the result is
the caller's job (see :class:`sheetdb.table.store.TableStore`).
"""

from typing import Iterable, Optional

from ..errors import ColumnAlreadyExistsError, ColumnNotFoundError
from .models import CellValue, Row
from .query import row_matches


def extend_schema(schema: list[str], columns: Iterable[str]) -> list[str]:
    """Append columns unknown to ``schema`` in the given order. Returns the added names."""
    added = []
    for column in columns:
        if column not in schema:
            schema.append(column)
            added.append(column)
    return added


def insert_row(schema: list[str], rows: list[Row], new_row: Row) -> list[str]:
    """Append ``new_row`` to the end of ``rows``. Duplicates are allowed."""
    rows.append(dict(new_row))
    return extend_schema(schema, new_row.keys())


def update_rows(schema: list[str], rows: list[Row], query: Optional[Row], update_data: Row) -> int:
    """Overwrite (or add) the ``update_data`` pairs on every matching row."""
    updated = 0
    for row in rows:
        if row_matches(row, query):
            row.update(update_data)
            updated += 1
    if updated:
        extend_schema(schema, update_data.keys())
    return updated


def delete_rows(rows: list[Row], query: Optional[Row]) -> int:
    """Drop every matching row, keeping the others in their original order."""
    kept = [row for row in rows if not row_matches(row, query)]
    removed = len(rows) - len(kept)
    rows[:] = kept
    return removed


def add_column(
    schema: list[str],
    rows: list[Row],
    column_name: str,
    default_value: Optional[CellValue] = None,
) -> None:
    if column_name in schema:
        raise ColumnAlreadyExistsError(column_name)
    value = default_value if default_value is not None else CellValue.empty()
    schema.append(column_name)
    for row in rows:
        row[column_name] = value


def remove_column(schema: list[str], rows: list[Row], column_name: str) -> None:
    if column_name not in schema:
        raise ColumnNotFoundError(column_name)
    schema.remove(column_name)
    for row in rows:
        row.pop(column_name, None)
