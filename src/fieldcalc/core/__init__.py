"""Core module - configuration, logging, errors and shared models."""

from fieldcalc.core.config import Settings, get_settings
from fieldcalc.core.exceptions import (
    FieldCalcError,
    FieldIndexError,
    FieldOptionsLoadError,
    UnknownReducerError,
)
from fieldcalc.core.models.base import (
    Column,
    FieldType,
    NullValueMode,
    Result,
    Table,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "FieldCalcError",
    "FieldIndexError",
    "FieldOptionsLoadError",
    "UnknownReducerError",
    # Models - enums
    "FieldType",
    "NullValueMode",
    # Models - data structures
    "Column",
    "Result",
    "Table",
]
