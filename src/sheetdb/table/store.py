"""Table store: one sheet's schema and rows, kept in sync with a backend."""

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from ..config import settings
from ..errors import SheetAlreadyExistsError
from . import mutations
from .models import CellValue, Row, coerce_row
from .query import count_populated, find_column_value, select_rows

if TYPE_CHECKING:
    from ..backends.base import PersistenceBackend

logger = logging.getLogger(__name__)


class TableStore:
    """CRUD access to one sheet of a spreadsheet document.

    The sheet is loaded once on construction. Reads work on the in-memory
    rows; every mutating call writes the whole sheet back through the
    backend before returning. If that write fails the error propagates, the
    in-memory change is kept, and the next :meth:`flush` (or leaving a
    ``with`` block) retries it.

    Rows and queries may be given as mappings of column name to
    :class:`CellValue` or to plain values (``{"name": "Jane", "age": 30}``).
    """

    def __init__(self, backend: "PersistenceBackend", sheet_name: Optional[str] = None):
        self.backend = backend
        self.sheet_name = sheet_name or settings.default_sheet_name
        self._schema: list[str] = []
        self._rows: list[Row] = []
        self._dirty = False
        self.refresh()

    def __enter__(self) -> "TableStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"TableStore(sheet={self.sheet_name!r}, columns={len(self._schema)}, rows={len(self._rows)})"

    @property
    def columns(self) -> list[str]:
        """Copy of the schema, in column order."""
        return list(self._schema)

    @property
    def dirty(self) -> bool:
        """True when the last write to the backend failed."""
        return self._dirty

    # Persistence

    def refresh(self):
        """Reload schema and rows from the backend, dropping in-memory state."""
        self._schema, self._rows = self.backend.load(self.sheet_name)
        self._dirty = False
        logger.debug(f"Loaded sheet '{self.sheet_name}': {len(self._schema)} columns, {len(self._rows)} rows")

    def flush(self):
        """Write the current schema and rows through the backend."""
        self._dirty = True
        try:
            self.backend.save(self.sheet_name, self._schema, self._rows)
        except Exception:
            logger.warning(f"Failed to flush sheet '{self.sheet_name}', in-memory changes kept")
            raise
        self._dirty = False
        logger.info(f"Flushed sheet '{self.sheet_name}' ({len(self._rows)} rows)")

    def close(self):
        """Retry a failed flush, if any."""
        if self._dirty:
            self.flush()

    # Queries

    def select(self, query: Optional[Mapping[str, Any]] = None) -> list[Row]:
        """Return copies of all rows matching every pair in ``query``.

        ``None`` or an empty query returns every row. An empty list is
        returned when nothing matches, including when the sheet has no rows.
        """
        result = select_rows(self._rows, coerce_row(query))
        logger.debug(f"select on '{self.sheet_name}' matched {len(result)} rows")
        return result

    def get_column_value(
        self, search_column: str, search_value: Any, target_column: str
    ) -> Optional[CellValue]:
        """Value of ``target_column`` in the first row where ``search_column`` equals ``search_value``."""
        return find_column_value(
            self._rows, search_column, CellValue.from_raw(search_value), target_column
        )

    def get_column_datas_number(self, column_name: str) -> int:
        """Count the rows holding a non-empty value in ``column_name``."""
        if column_name not in self._schema:
            return 0
        return count_populated(self._rows, column_name)

    # Mutations

    def _extended(self, added: list[str]):
        if added:
            logger.info(f"Added columns {added} to sheet '{self.sheet_name}'")

    def insert(self, new_row: Mapping[str, Any]):
        """Append a row. Columns unknown to the schema are appended to it."""
        self._extended(mutations.insert_row(self._schema, self._rows, coerce_row(new_row)))
        self.flush()

    def insert_many(self, rows: Iterable[Mapping[str, Any]]):
        """Append several rows, writing the sheet once at the end."""
        added = []
        for row in rows:
            added.extend(mutations.insert_row(self._schema, self._rows, coerce_row(row)))
        self._extended(added)
        self.flush()

    def update(self, query: Optional[Mapping[str, Any]], update_data: Mapping[str, Any]) -> int:
        """Set the ``update_data`` pairs on every row matching ``query``.

        Returns the number of updated rows; no match is not an error.
        """
        data = coerce_row(update_data)
        known = set(self._schema)
        updated = mutations.update_rows(self._schema, self._rows, coerce_row(query), data)
        self._extended([column for column in data if column not in known and column in self._schema])
        logger.debug(f"update on '{self.sheet_name}' changed {updated} rows")
        self.flush()
        return updated

    def delete(self, query: Optional[Mapping[str, Any]]) -> int:
        """Remove every row matching ``query``. Returns the number removed."""
        removed = mutations.delete_rows(self._rows, coerce_row(query))
        logger.debug(f"delete on '{self.sheet_name}' removed {removed} rows")
        self.flush()
        return removed

    # Columns

    def add_column(self, column_name: str, default_value: Any = None):
        """Append a column, setting it on every row to ``default_value`` (or empty).

        Raises:
            ColumnAlreadyExistsError: the column is already in the schema.
        """
        default = None if default_value is None else CellValue.from_raw(default_value)
        mutations.add_column(self._schema, self._rows, column_name, default)
        logger.info(f"Added column '{column_name}' to sheet '{self.sheet_name}'")
        self.flush()

    def remove_column(self, column_name: str):
        """Drop a column from the schema and from every row.

        Raises:
            ColumnNotFoundError: the column is not in the schema.
        """
        mutations.remove_column(self._schema, self._rows, column_name)
        logger.info(f"Removed column '{column_name}' from sheet '{self.sheet_name}'")
        self.flush()

    # Sheets

    def is_sheet_exists(self, sheet_name: str) -> bool:
        return self.backend.has_sheet(sheet_name)

    def get_all_sheet_names(self) -> list[str]:
        return self.backend.list_sheets()

    def add_sheet(
        self, sheet_name: str, initial_data: Optional[Iterable[Mapping[str, Any]]] = None
    ) -> "TableStore":
        """Create a sheet in the same document and return a store for it.

        ``initial_data`` rows are inserted in order; the new sheet's schema is
        the union of their columns in first-seen order.

        Raises:
            SheetAlreadyExistsError: a sheet with that name exists.
        """
        if self.backend.has_sheet(sheet_name):
            raise SheetAlreadyExistsError(sheet_name)
        self.backend.create_sheet(sheet_name)
        store = TableStore(self.backend, sheet_name)
        if initial_data:
            store.insert_many(initial_data)
        return store
