"""Shared models."""

from fieldcalc.core.models.base import (
    Column,
    FieldType,
    NullValueMode,
    Result,
    Table,
)

__all__ = [
    "Column",
    "FieldType",
    "NullValueMode",
    "Result",
    "Table",
]
