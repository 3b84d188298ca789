"""Excel workbook (.xlsx) backend."""

import logging
from pathlib import Path
from typing import Union
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException

from ..errors import DocumentError, SheetAlreadyExistsError, SheetNotFoundError
from ..table.models import Row
from .base import PersistenceBackend, build_grid, parse_grid

logger = logging.getLogger(__name__)


class XlsxBackend(PersistenceBackend):
    """Reads and writes sheets of an .xlsx workbook with openpyxl.

    The workbook is reopened for every call, so changes made by other
    programs between calls are picked up (and overwritten on save).
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def create_document(cls, path: Union[str, Path], sheet_name: str = "Sheet1") -> "XlsxBackend":
        """Create a new workbook holding one empty sheet."""
        path = Path(path)
        if path.exists():
            raise DocumentError(f"Workbook already exists: {path}")
        workbook = Workbook()
        workbook.active.title = sheet_name
        backend = cls(path)
        backend._write(workbook)
        logger.info(f"Created workbook {path} with sheet '{sheet_name}'")
        return backend

    def _open(self) -> Workbook:
        if not self.path.exists():
            raise DocumentError(f"Workbook not found: {self.path}")
        try:
            return load_workbook(self.path)
        except (InvalidFileException, BadZipFile, KeyError, ValueError, OSError) as e:
            raise DocumentError(f"Failed to open workbook {self.path}: {e}") from e

    def _write(self, workbook: Workbook):
        try:
            workbook.save(self.path)
        except OSError as e:
            raise DocumentError(f"Failed to write workbook {self.path}: {e}") from e

    def load(self, sheet_name: str) -> tuple[list[str], list[Row]]:
        workbook = self._open()
        if sheet_name not in workbook.sheetnames:
            raise SheetNotFoundError(sheet_name)
        worksheet = workbook[sheet_name]
        schema, rows = parse_grid(worksheet.iter_rows(values_only=True))
        logger.debug(f"Loaded {len(rows)} rows from {self.path}!{sheet_name}")
        return schema, rows

    def save(self, sheet_name: str, schema: list[str], rows: list[Row]) -> None:
        workbook = self._open()
        if sheet_name not in workbook.sheetnames:
            raise SheetNotFoundError(sheet_name)

        # Rebuild the sheet at its original position
        index = workbook.sheetnames.index(sheet_name)
        workbook.remove(workbook[sheet_name])
        worksheet = workbook.create_sheet(sheet_name, index)
        try:
            for line in build_grid(schema, rows):
                worksheet.append(line)
        except (IllegalCharacterError, ValueError) as e:
            raise DocumentError(f"Cannot write sheet '{sheet_name}' to {self.path}: {e}") from e

        self._write(workbook)
        logger.debug(f"Saved {len(rows)} rows to {self.path}!{sheet_name}")

    def list_sheets(self) -> list[str]:
        return list(self._open().sheetnames)

    def create_sheet(self, sheet_name: str) -> None:
        workbook = self._open()
        if sheet_name in workbook.sheetnames:
            raise SheetAlreadyExistsError(sheet_name)
        workbook.create_sheet(sheet_name)
        self._write(workbook)
        logger.info(f"Created sheet '{sheet_name}' in {self.path}")
