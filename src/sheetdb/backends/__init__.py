"""Persistence backends for spreadsheet documents."""

from .base import PersistenceBackend, build_grid, parse_grid
from .memory import MemoryBackend
from .xlsx import XlsxBackend
from .gsheets import GoogleSheetsBackend

__all__ = [
    "PersistenceBackend",
    "build_grid",
    "parse_grid",
    "MemoryBackend",
    "XlsxBackend",
    "GoogleSheetsBackend",
]
