"""In-memory row model, query and mutation engines."""

from .models import CellKind, CellValue, Row, coerce_row, row_to_raw
from .query import count_populated, find_column_value, row_matches, select_rows
from .store import TableStore

__all__ = [
    "CellKind",
    "CellValue",
    "Row",
    "coerce_row",
    "row_to_raw",
    "count_populated",
    "find_column_value",
    "row_matches",
    "select_rows",
    "TableStore",
]
