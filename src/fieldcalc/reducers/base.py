"""Reducer catalog.

This module provides:
- ReducerID: the stable string ids external code uses to request a statistic
- ReducerInfo: immutable catalog entry for one reducer
- ReducerRegistry: lookup by id or alias
- get_default_registry: the process-wide, read-only catalog

Reducers flagged ``standard`` are all produced by the combined single pass.
Entries with a ``reduce`` function can also run on their own, which is
cheaper when they are the only statistic requested.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from fieldcalc.core.exceptions import UnknownReducerError
from fieldcalc.core.models.base import NullValueMode, Table

FieldReducer = Callable[[Table, int, NullValueMode], dict[str, Any]]


class ReducerID(str, Enum):
    """Ids of the built-in reducers."""

    SUM = "sum"
    MAX = "max"
    MIN = "min"
    LOGMIN = "logmin"
    MEAN = "mean"
    LAST = "last"
    FIRST = "first"
    COUNT = "count"
    RANGE = "range"
    DIFF = "diff"
    DELTA = "delta"
    STEP = "step"

    FIRST_NOT_NULL = "firstNotNull"
    LAST_NOT_NULL = "lastNotNull"

    CHANGE_COUNT = "changeCount"
    DISTINCT_COUNT = "distinctCount"

    ALL_IS_ZERO = "allIsZero"
    ALL_IS_NULL = "allIsNull"


@dataclass(frozen=True)
class ReducerInfo:
    """A registered reducer."""

    id: str
    name: str
    description: str = ""
    standard: bool = True
    aliases: tuple[str, ...] = ()
    reduce: FieldReducer | None = None
    # Returned for a table without rows; typically None, zero for sum and count
    empty_input_result: Any = None


@dataclass
class ReducerRegistry:
    """Registry of reducers, looked up by id or alias.

    ``freeze()`` makes the registry read-only; the default registry is
    frozen once the built-in reducers are registered.
    """

    _reducers: dict[str, ReducerInfo] = field(default_factory=dict, repr=False)
    _aliases: dict[str, str] = field(default_factory=dict, repr=False)
    _frozen: bool = field(default=False, repr=False)

    @property
    def reducers(self) -> Mapping[str, ReducerInfo]:
        """Read-only view of the registered reducers by canonical id."""
        return MappingProxyType(self._reducers)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    def register(self, reducer: ReducerInfo) -> None:
        """Register a reducer.

        Args:
            reducer: Catalog entry to register

        Raises:
            RuntimeError: If the registry is frozen
            ValueError: If the id or one of the aliases is already taken
        """
        if self._frozen:
            raise RuntimeError(f"Reducer registry is read-only, cannot register {reducer.id!r}")
        for key in (reducer.id, *reducer.aliases):
            if key in self._reducers or key in self._aliases:
                raise ValueError(f"Duplicate reducer id or alias: {key!r}")
        self._reducers[reducer.id] = reducer
        for alias in reducer.aliases:
            self._aliases[alias] = reducer.id

    def get(self, reducer_id: str) -> ReducerInfo:
        """Get a reducer by id or alias.

        Raises:
            UnknownReducerError: If nothing is registered under that name
        """
        key = reducer_id.value if isinstance(reducer_id, ReducerID) else reducer_id
        info = self._reducers.get(key)
        if info is None:
            canonical = self._aliases.get(key)
            if canonical is None:
                raise UnknownReducerError(key)
            info = self._reducers[canonical]
        return info

    def list(self, reducer_ids: Iterable[str]) -> list[ReducerInfo]:
        """Resolve ids and aliases, dropping duplicates but keeping first-seen order."""
        seen: set[str] = set()
        resolved: list[ReducerInfo] = []
        for reducer_id in reducer_ids:
            info = self.get(reducer_id)
            if info.id not in seen:
                seen.add(info.id)
                resolved.append(info)
        return resolved

    def ids(self) -> list[str]:
        """Get all canonical reducer ids in registration order."""
        return list(self._reducers)

    def select_options(self) -> list[dict[str, str]]:
        """Get value/label/description entries for reducer pickers."""
        return [
            {"value": info.id, "label": info.name, "description": info.description}
            for info in self._reducers.values()
        ]

    def __contains__(self, reducer_id: object) -> bool:
        return reducer_id in self._reducers or reducer_id in self._aliases


@lru_cache(maxsize=1)
def get_default_registry() -> ReducerRegistry:
    """Get the default reducer registry.

    Built on first call and frozen, so it can be shared between threads.
    Build a new ReducerRegistry to add custom reducers.
    """
    registry = ReducerRegistry()
    _register_builtin_reducers(registry)
    registry.freeze()
    return registry


def _register_builtin_reducers(registry: ReducerRegistry) -> None:
    # Imported here to avoid a cycle with the reducer implementations
    from fieldcalc.reducers.dedicated import (
        calculate_change_count,
        calculate_distinct_count,
        calculate_first,
        calculate_first_not_null,
        calculate_last,
        calculate_last_not_null,
    )

    builtins = [
        ReducerInfo(
            id=ReducerID.LAST_NOT_NULL.value,
            name="Last (not null)",
            description="Last non-null value",
            aliases=("current",),
            reduce=calculate_last_not_null,
        ),
        ReducerInfo(
            id=ReducerID.LAST.value,
            name="Last",
            description="Last value",
            reduce=calculate_last,
        ),
        ReducerInfo(
            id=ReducerID.FIRST.value,
            name="First",
            description="First value",
            reduce=calculate_first,
        ),
        ReducerInfo(
            id=ReducerID.FIRST_NOT_NULL.value,
            name="First (not null)",
            description="First non-null value",
            reduce=calculate_first_not_null,
        ),
        ReducerInfo(id=ReducerID.MIN.value, name="Min", description="Minimum value"),
        ReducerInfo(id=ReducerID.MAX.value, name="Max", description="Maximum value"),
        ReducerInfo(
            id=ReducerID.MEAN.value,
            name="Mean",
            description="Average value",
            aliases=("avg",),
        ),
        ReducerInfo(
            id=ReducerID.SUM.value,
            name="Total",
            description="The sum of all values",
            aliases=("total",),
            empty_input_result=0,
        ),
        ReducerInfo(
            id=ReducerID.COUNT.value,
            name="Count",
            description="Number of numeric values",
            empty_input_result=0,
        ),
        ReducerInfo(
            id=ReducerID.RANGE.value,
            name="Range",
            description="Difference between minimum and maximum values",
        ),
        ReducerInfo(
            id=ReducerID.DELTA.value,
            name="Delta",
            description="Cumulative change in value",
        ),
        ReducerInfo(
            id=ReducerID.STEP.value,
            name="Step",
            description="Minimum interval between values",
        ),
        ReducerInfo(
            id=ReducerID.DIFF.value,
            name="Difference",
            description="Difference between first and last values",
        ),
        ReducerInfo(
            id=ReducerID.LOGMIN.value,
            name="Min (above zero)",
            description="Used for log min scale",
        ),
        ReducerInfo(
            id=ReducerID.ALL_IS_ZERO.value,
            name="All Zeros",
            description="All values are zero",
            empty_input_result=False,
        ),
        ReducerInfo(
            id=ReducerID.ALL_IS_NULL.value,
            name="All Nulls",
            description="All values are null",
            empty_input_result=True,
        ),
        ReducerInfo(
            id=ReducerID.CHANGE_COUNT.value,
            name="Change Count",
            description="Number of times the value changes",
            standard=False,
            reduce=calculate_change_count,
        ),
        ReducerInfo(
            id=ReducerID.DISTINCT_COUNT.value,
            name="Distinct Count",
            description="Number of distinct values",
            standard=False,
            reduce=calculate_distinct_count,
        ),
    ]
    for info in builtins:
        registry.register(info)
