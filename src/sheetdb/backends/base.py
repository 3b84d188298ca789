"""Base persistence backend interface."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence

from ..errors import DocumentError
from ..table.models import CellValue, Row


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _is_absent(line: Sequence[Any]) -> bool:
    return all(raw is None for raw in line)


def parse_grid(grid: Iterable[Sequence[Any]]) -> tuple[list[str], list[Row]]:
    """Split a sheet's raw values into a schema and rows.

    The first line is the header; columns with a blank header are ignored.
    Every following line is a row, including blank ones, except for the
    trailing lines holding no cells at all that some readers report past
    the data. Each row holds every schema column; cells past the end of a
    short line load as the empty marker.
    """
    lines = list(grid)
    if not lines:
        return [], []
    header, body = lines[0], lines[1:]

    columns: list[tuple[int, str]] = []
    schema: list[str] = []
    for index, raw in enumerate(header):
        if _is_blank(raw):
            continue
        name = str(CellValue.from_raw(raw))
        if name in schema:
            raise DocumentError(f'Duplicate column "{name}" in header row')
        schema.append(name)
        columns.append((index, name))
    if not columns:
        return [], []

    while body and _is_absent(body[-1]):
        body.pop()

    rows: list[Row] = []
    for line in body:
        rows.append(
            {
                name: CellValue.from_raw(line[index]) if index < len(line) else CellValue.empty()
                for index, name in columns
            }
        )
    return schema, rows


def build_grid(schema: Sequence[str], rows: Iterable[Row]) -> list[list[Any]]:
    """Raw values to write for a sheet: header line, then rows in schema order.

    Empty cells are written as ``None``. A row with no content at all is
    written as empty strings instead, so that it still exists in the sheet.
    """
    if not schema:
        return []
    empty = CellValue.empty()
    grid: list[list[Any]] = [list(schema)]
    for row in rows:
        line = [row.get(column, empty).to_raw() for column in schema]
        if _is_absent(line):
            line = ["" for _ in line]
        grid.append(line)
    return grid


class PersistenceBackend(ABC):
    """Abstract base class for the document a table store reads and writes.

    A backend instance is bound to a single document.
    """

    @abstractmethod
    def load(self, sheet_name: str) -> tuple[list[str], list[Row]]:
        """Read a sheet's schema and rows."""

    @abstractmethod
    def save(self, sheet_name: str, schema: list[str], rows: list[Row]) -> None:
        """Overwrite a sheet with the given schema and rows."""

    @abstractmethod
    def list_sheets(self) -> list[str]:
        """Sheet names in document order."""

    @abstractmethod
    def create_sheet(self, sheet_name: str) -> None:
        """Add an empty sheet."""

    def has_sheet(self, sheet_name: str) -> bool:
        return sheet_name in self.list_sheets()
