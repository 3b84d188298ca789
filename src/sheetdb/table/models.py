"""Data models for rows and cell values."""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class CellKind(str, Enum):
    """Variant tag of a cell value."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"


class CellValue(BaseModel):
    """Content of a single cell.

    Equality is structural: two values are equal only when both the kind and
    the payload match, so ``CellValue.text("1") != CellValue.number(1)``.
    """

    model_config = ConfigDict(frozen=True)

    kind: CellKind = CellKind.TEXT
    value: Any = ""

    @field_validator("value")
    @classmethod
    def _normalize_payload(cls, value: Any, info: ValidationInfo) -> Any:
        kind = info.data.get("kind", CellKind.TEXT)
        if kind == CellKind.NUMBER:
            if isinstance(value, bool):
                raise ValueError("booleans are not numbers")
            # int payloads are kept as int
            if isinstance(value, (int, float)):
                return value
            try:
                return int(value)
            except (TypeError, ValueError):
                return float(value)
        if kind == CellKind.BOOLEAN:
            if not isinstance(value, bool):
                raise ValueError(f"expected a boolean, got {type(value).__name__}")
            return value
        return "" if value is None else str(value)

    @classmethod
    def text(cls, value: str) -> "CellValue":
        return cls(kind=CellKind.TEXT, value=value)

    @classmethod
    def number(cls, value: Union[int, float]) -> "CellValue":
        return cls(kind=CellKind.NUMBER, value=value)

    @classmethod
    def boolean(cls, value: bool) -> "CellValue":
        return cls(kind=CellKind.BOOLEAN, value=value)

    @classmethod
    def empty(cls) -> "CellValue":
        """The marker stored for a cell with no content."""
        return cls.text("")

    @classmethod
    def from_raw(cls, raw: Any) -> "CellValue":
        """Build a cell value from a value read out of a document."""
        if isinstance(raw, CellValue):
            return raw
        if raw is None:
            return cls.empty()
        # bool is a subclass of int, check it first
        if isinstance(raw, bool):
            return cls.boolean(raw)
        if isinstance(raw, (int, float)):
            return cls.number(raw)
        if isinstance(raw, (datetime, date, time)):
            return cls.text(raw.isoformat())
        return cls.text(str(raw))

    def to_raw(self) -> Any:
        """Plain Python value to write into a document cell."""
        if self.kind == CellKind.NUMBER:
            if isinstance(self.value, float) and self.value.is_integer():
                return int(self.value)
            return self.value
        if self.kind == CellKind.TEXT and self.value == "":
            return None
        return self.value

    def is_empty(self) -> bool:
        return self.kind == CellKind.TEXT and not self.value.strip()

    def __str__(self) -> str:
        if self.kind == CellKind.NUMBER:
            return str(self.to_raw())
        if self.kind == CellKind.BOOLEAN:
            return "TRUE" if self.value else "FALSE"
        return self.value


# A row maps column name to cell value. Rows are sparse: a row may lack
# columns that are in the schema.
Row = dict[str, CellValue]


def coerce_row(data: Optional[Mapping[str, Any]]) -> Row:
    """Turn a mapping of column name to cell value or raw value into a Row."""
    if not data:
        return {}
    return {str(column): CellValue.from_raw(value) for column, value in data.items()}


def row_to_raw(row: Row) -> dict[str, Any]:
    """Plain dict view of a row, e.g. for JSON output. Empty cells become ""."""
    return {
        column: value.value if value.kind == CellKind.TEXT else value.to_raw()
        for column, value in row.items()
    }
