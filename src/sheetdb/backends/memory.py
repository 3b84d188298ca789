"""In-memory backend, used for tests and dry runs."""

from typing import Optional

from ..errors import SheetAlreadyExistsError, SheetNotFoundError
from ..table.models import Row
from .base import PersistenceBackend


def _copy_rows(rows: list[Row]) -> list[Row]:
    # Cell values are immutable, copying each mapping is enough
    return [dict(row) for row in rows]


class MemoryBackend(PersistenceBackend):
    """A document kept in a dict of sheet name to (schema, rows)."""

    def __init__(self, sheets: Optional[dict[str, tuple[list[str], list[Row]]]] = None):
        self._sheets: dict[str, tuple[list[str], list[Row]]] = {}
        self.save_count = 0
        for name, (schema, rows) in (sheets or {}).items():
            self._sheets[name] = (list(schema), _copy_rows(rows))

    def load(self, sheet_name: str) -> tuple[list[str], list[Row]]:
        if sheet_name not in self._sheets:
            raise SheetNotFoundError(sheet_name)
        schema, rows = self._sheets[sheet_name]
        return list(schema), _copy_rows(rows)

    def save(self, sheet_name: str, schema: list[str], rows: list[Row]) -> None:
        if sheet_name not in self._sheets:
            raise SheetNotFoundError(sheet_name)
        self._sheets[sheet_name] = (list(schema), _copy_rows(rows))
        self.save_count += 1

    def list_sheets(self) -> list[str]:
        return list(self._sheets)

    def create_sheet(self, sheet_name: str) -> None:
        if sheet_name in self._sheets:
            raise SheetAlreadyExistsError(sheet_name)
        self._sheets[sheet_name] = ([], [])
