"""Errors raised for caller-contract violations.

Data anomalies (nulls, strings in a numeric column, empty tables) never raise;
they produce fallback values instead.
"""

from pathlib import Path


class FieldCalcError(Exception):
    """Base class for fieldcalc errors."""

    pass


class UnknownReducerError(FieldCalcError, KeyError):
    """A reducer id or alias is not in the registry."""

    def __init__(self, reducer_id: str):
        self.reducer_id = reducer_id
        super().__init__(f"Unknown reducer: {reducer_id!r}")

    def __str__(self) -> str:
        return f"Unknown reducer: {self.reducer_id!r}"


class FieldIndexError(FieldCalcError, IndexError):
    """A field index is outside the table's columns."""

    def __init__(self, field_index: int, field_count: int):
        self.field_index = field_index
        self.field_count = field_count
        super().__init__(f"Field index {field_index} out of range for table with {field_count} fields")


class FieldOptionsLoadError(FieldCalcError):
    """Error loading field display options."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")
