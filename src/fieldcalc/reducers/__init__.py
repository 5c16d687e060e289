"""Column reducers.

Usage:
    from fieldcalc.reducers import ReducerID, reduce_field

    calcs = reduce_field(table, 1, [ReducerID.MEAN, ReducerID.MAX])
    calcs["mean"]
"""

from fieldcalc.reducers.base import (
    FieldReducer,
    ReducerID,
    ReducerInfo,
    ReducerRegistry,
    get_default_registry,
)
from fieldcalc.reducers.engine import reduce_field, try_reduce_field
from fieldcalc.reducers.standard import StandardCalcs, calculate_standard_stats
from fieldcalc.reducers.values import SKIP, adjust_value, is_number

__all__ = [
    # Registry
    "FieldReducer",
    "ReducerID",
    "ReducerInfo",
    "ReducerRegistry",
    "get_default_registry",
    # Dispatch
    "reduce_field",
    "try_reduce_field",
    # Combined pass
    "StandardCalcs",
    "calculate_standard_stats",
    # Helpers
    "SKIP",
    "adjust_value",
    "is_number",
]
