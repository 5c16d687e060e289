"""Types shared by the reducers and the display resolver.

The result type, column types, null policies and the in-memory table.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    import pandas as pd

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Outcome of an operation whose failure the caller is expected to handle.

    ``try_reduce_field`` returns one instead of raising for bad field indexes
    and unknown reducers.
    """

    success: bool
    value: T | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, value: T, warnings: list[str] | None = None) -> Result[T]:
        return cls(success=True, value=value, warnings=warnings or [])

    @classmethod
    def fail(cls, error: str) -> Result[T]:
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the value; raise ValueError carrying the error otherwise."""
        if not self.success:
            raise ValueError(f"Result failed: {self.error}")
        return cast("T", self.value)

    def map(self, fn: Callable[[T], Any]) -> Result[Any]:
        """Apply fn to the value of a successful result."""
        if not self.success:
            return self
        return Result.ok(fn(cast("T", self.value)), self.warnings)


# === Enums ===


class FieldType(str, Enum):
    """Declared type of a column."""

    STRING = "string"
    NUMBER = "number"
    TIME = "time"
    BOOLEAN = "boolean"
    OTHER = "other"


class NullValueMode(str, Enum):
    """How null cells take part in a reduction."""

    NULL = "null"  # Nulls stay null and are left out of numeric stats
    IGNORE = "connected"  # Null cells are skipped entirely
    AS_ZERO = "null as zero"  # Null cells count as 0


# === Tables ===


class Column(BaseModel):
    """A column in a table.

    ``config`` holds field properties in wire format (a plain mapping). It is
    layered between the display defaults and the matching overrides.
    """

    name: str | None = None
    type: FieldType = FieldType.OTHER
    config: dict[str, Any] | None = None


class Table(BaseModel):
    """A named collection of columns and positionally aligned rows."""

    name: str | None = None
    ref_id: str | None = None
    columns: list[Column] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_row_widths(self) -> Table:
        width = len(self.columns)
        for i, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {width}")
        return self

    @property
    def field_count(self) -> int:
        return len(self.columns)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, name: str | None = None) -> Table:
        """Build a table from a pandas DataFrame.

        Missing values (NaN, NaT, None) become ``None`` and numpy scalars
        become plain Python values.

        Args:
            df: Source DataFrame
            name: Table name

        Returns:
            Table with one column per DataFrame column
        """
        import pandas as pd

        columns = [
            Column(name=str(col), type=_field_type_for_dtype(df[col].dtype)) for col in df.columns
        ]
        cleaned = df.astype(object).where(pd.notna(df), None)
        rows = [
            [_to_python(value) for value in row]
            for row in cleaned.itertuples(index=False, name=None)
        ]
        return cls(name=name, columns=columns, rows=rows)


def _field_type_for_dtype(dtype: Any) -> FieldType:
    from pandas.api import types as ptypes

    # bool must be checked first: pandas treats it as numeric
    if ptypes.is_bool_dtype(dtype):
        return FieldType.BOOLEAN
    if ptypes.is_numeric_dtype(dtype):
        return FieldType.NUMBER
    if ptypes.is_datetime64_any_dtype(dtype):
        return FieldType.TIME
    if ptypes.is_string_dtype(dtype) or ptypes.is_object_dtype(dtype):
        return FieldType.STRING
    return FieldType.OTHER


def _to_python(value: Any) -> Any:
    if value is None:
        return None
    to_pydatetime = getattr(value, "to_pydatetime", None)
    if to_pydatetime is not None:
        return to_pydatetime()
    item = getattr(value, "item", None)
    if item is not None and not isinstance(value, (str, bytes)):
        return item()
    return value
