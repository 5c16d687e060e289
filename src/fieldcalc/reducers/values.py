"""Cell value helpers shared by every reducer."""

from enum import Enum
from numbers import Real
from typing import Any, Final

from fieldcalc.core.models.base import NullValueMode


class _Skip(Enum):
    SKIP = "skip"


# Returned by adjust_value when the cell must not take part in the reduction
SKIP: Final = _Skip.SKIP


def adjust_value(value: Any, mode: NullValueMode) -> Any:
    """Apply the null policy to a single cell.

    Args:
        value: Raw cell value
        mode: Null policy for this reduction

    Returns:
        SKIP when the cell should be ignored, 0 for a null under
        AS_ZERO, otherwise the value unchanged (including None)
    """
    if value is None:
        if mode is NullValueMode.IGNORE:
            return SKIP
        if mode is NullValueMode.AS_ZERO:
            return 0
    return value


def is_number(value: Any) -> bool:
    """True for ints and floats (NaN included), False for bools and everything else."""
    return isinstance(value, Real) and not isinstance(value, bool)
