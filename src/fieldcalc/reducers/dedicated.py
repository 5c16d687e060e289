"""Reducers that can run without the combined pass.

Each function receives a table with at least one row and returns a mapping
holding only its own statistic.
"""

from typing import Any

from fieldcalc.core.models.base import NullValueMode, Table
from fieldcalc.reducers.base import ReducerID
from fieldcalc.reducers.values import SKIP, adjust_value


def calculate_first(table: Table, field_index: int, null_value_mode: NullValueMode) -> dict[str, Any]:
    return {ReducerID.FIRST.value: table.rows[0][field_index]}


def calculate_last(table: Table, field_index: int, null_value_mode: NullValueMode) -> dict[str, Any]:
    return {ReducerID.LAST.value: table.rows[-1][field_index]}


def calculate_first_not_null(
    table: Table, field_index: int, null_value_mode: NullValueMode
) -> dict[str, Any]:
    """First value that is not null once the null policy is applied."""
    for row in table.rows:
        value = adjust_value(row[field_index], null_value_mode)
        if value is not SKIP and value is not None:
            return {ReducerID.FIRST_NOT_NULL.value: value}
    return {ReducerID.FIRST_NOT_NULL.value: None}


def calculate_last_not_null(
    table: Table, field_index: int, null_value_mode: NullValueMode
) -> dict[str, Any]:
    """Last value that is not null once the null policy is applied."""
    for row in reversed(table.rows):
        value = adjust_value(row[field_index], null_value_mode)
        if value is not SKIP and value is not None:
            return {ReducerID.LAST_NOT_NULL.value: value}
    return {ReducerID.LAST_NOT_NULL.value: None}


def calculate_change_count(
    table: Table, field_index: int, null_value_mode: NullValueMode
) -> dict[str, Any]:
    """Count adjacent cells that differ. The first cell is never a change."""
    count = 0
    first = True
    previous: Any = None
    for row in table.rows:
        value = adjust_value(row[field_index], null_value_mode)
        if value is SKIP:
            continue
        if not first and value != previous:
            count += 1
        first = False
        previous = value
    return {ReducerID.CHANGE_COUNT.value: count}


def calculate_distinct_count(
    table: Table, field_index: int, null_value_mode: NullValueMode
) -> dict[str, Any]:
    """Count distinct cells. Unhashable cells (lists, dicts) compare by equality."""
    distinct: set[Any] = set()
    unhashable: list[Any] = []
    for row in table.rows:
        value = adjust_value(row[field_index], null_value_mode)
        if value is SKIP:
            continue
        try:
            distinct.add(value)
        except TypeError:
            if value not in unhashable:
                unhashable.append(value)
    return {ReducerID.DISTINCT_COUNT.value: len(distinct) + len(unhashable)}
