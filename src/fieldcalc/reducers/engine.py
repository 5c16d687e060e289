"""Reducer dispatch for a single column."""

from collections.abc import Sequence
from typing import Any

from fieldcalc.core.exceptions import FieldCalcError, FieldIndexError
from fieldcalc.core.logging import get_logger
from fieldcalc.core.models.base import NullValueMode, Result, Table
from fieldcalc.reducers.base import ReducerRegistry, get_default_registry
from fieldcalc.reducers.standard import calculate_standard_stats

logger = get_logger(__name__)


def reduce_field(
    table: Table,
    field_index: int,
    reducers: Sequence[str],
    null_value_mode: NullValueMode | str = NullValueMode.NULL,
    registry: ReducerRegistry | None = None,
) -> dict[str, Any]:
    """Compute the requested statistics for one column.

    A single reducer with its own implementation runs alone. Anything else
    goes through the combined pass, topped up with the non-standard
    reducers it does not cover.

    Args:
        table: Table holding the column
        field_index: Zero-based column position
        reducers: Reducer ids or aliases; duplicates are fine
        null_value_mode: Null policy
        registry: Reducer catalog (defaults to the built-in one)

    Returns:
        Mapping from canonical reducer id to value. For a table without
        rows, each requested reducer maps to its empty-input result.

    Raises:
        FieldIndexError: If field_index is not a column of the table
        UnknownReducerError: If a reducer id is not registered
        ValueError: If null_value_mode is not a NullValueMode value
    """
    if not 0 <= field_index < table.field_count:
        raise FieldIndexError(field_index, table.field_count)

    mode = NullValueMode(null_value_mode)

    if not reducers:
        return {}

    registry = registry or get_default_registry()
    queue = registry.list(reducers)

    # Return early for empty tables so the reducers can assume one row
    if not table.rows:
        return {info.id: info.empty_input_result for info in queue}

    if len(queue) == 1 and queue[0].reduce is not None:
        logger.debug("reducer_dispatch", path="single", reducer=queue[0].id, field_index=field_index)
        return queue[0].reduce(table, field_index, mode)

    logger.debug(
        "reducer_dispatch",
        path="standard",
        reducers=[info.id for info in queue],
        field_index=field_index,
        rows=table.row_count,
    )
    calcs = calculate_standard_stats(table, field_index, mode).to_calcs()
    for info in queue:
        if info.id not in calcs and info.reduce is not None:
            calcs.update(info.reduce(table, field_index, mode))
    return calcs


def try_reduce_field(
    table: Table,
    field_index: int,
    reducers: Sequence[str],
    null_value_mode: NullValueMode | str = NullValueMode.NULL,
    registry: ReducerRegistry | None = None,
) -> Result[dict[str, Any]]:
    """Like reduce_field, but reports caller errors as a failed Result."""
    try:
        return Result.ok(reduce_field(table, field_index, reducers, null_value_mode, registry))
    except FieldCalcError as e:
        return Result.fail(str(e))
