"""SheetDB - CRUD access to spreadsheet sheets as simple tables."""

from .errors import (
    SheetDBError,
    DocumentError,
    SheetNotFoundError,
    SheetAlreadyExistsError,
    ColumnAlreadyExistsError,
    ColumnNotFoundError,
)
from .table import CellKind, CellValue, Row, TableStore
from .backends import PersistenceBackend, MemoryBackend, XlsxBackend, GoogleSheetsBackend

__version__ = "0.1.0"

__all__ = [
    "SheetDBError",
    "DocumentError",
    "SheetNotFoundError",
    "SheetAlreadyExistsError",
    "ColumnAlreadyExistsError",
    "ColumnNotFoundError",
    "CellKind",
    "CellValue",
    "Row",
    "TableStore",
    "PersistenceBackend",
    "MemoryBackend",
    "XlsxBackend",
    "GoogleSheetsBackend",
]
