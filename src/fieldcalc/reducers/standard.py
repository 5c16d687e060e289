"""Combined single pass over a column.

Every reducer flagged ``standard`` is produced here in one left-to-right
iteration. The pass keeps its bookkeeping in a private accumulator and
converts it into the public ``StandardCalcs`` once the rows are consumed.
"""

from dataclasses import dataclass
from typing import Any

from fieldcalc.core.models.base import NullValueMode, Table
from fieldcalc.reducers.base import ReducerID
from fieldcalc.reducers.values import SKIP, adjust_value, is_number


@dataclass(frozen=True)
class StandardCalcs:
    """Statistics produced by the combined pass."""

    first: Any = None
    last: Any = None
    first_not_null: Any = None
    last_not_null: Any = None
    sum: float = 0
    count: int = 0
    min: float | None = None
    max: float | None = None
    logmin: float | None = None
    mean: float | None = None
    range: float | None = None
    diff: float | None = None
    delta: float = 0
    step: float | None = None
    all_is_null: bool = True
    all_is_zero: bool = False

    def to_calcs(self) -> dict[str, Any]:
        """Get the statistics keyed by reducer id."""
        return {
            ReducerID.FIRST.value: self.first,
            ReducerID.LAST.value: self.last,
            ReducerID.FIRST_NOT_NULL.value: self.first_not_null,
            ReducerID.LAST_NOT_NULL.value: self.last_not_null,
            ReducerID.SUM.value: self.sum,
            ReducerID.COUNT.value: self.count,
            ReducerID.MIN.value: self.min,
            ReducerID.MAX.value: self.max,
            ReducerID.LOGMIN.value: self.logmin,
            ReducerID.MEAN.value: self.mean,
            ReducerID.RANGE.value: self.range,
            ReducerID.DIFF.value: self.diff,
            ReducerID.DELTA.value: self.delta,
            ReducerID.STEP.value: self.step,
            ReducerID.ALL_IS_NULL.value: self.all_is_null,
            ReducerID.ALL_IS_ZERO.value: self.all_is_zero,
        }


@dataclass(slots=True)
class _Accumulator:
    first: Any = None
    last: Any = None
    first_not_null: Any = None
    last_not_null: Any = None
    seen_not_null: bool = False
    sum: float = 0
    count: int = 0
    min: float | None = None
    max: float | None = None
    logmin: float | None = None
    step: float | None = None
    delta: float = 0
    all_is_null: bool = True
    all_is_zero: bool = True
    # False right after a counter reset
    previous_delta_up: bool = True

    def add_number(self, value: float, is_last_row: bool) -> None:
        previous = self.last_not_null
        if self.count and is_number(previous):
            step = value - previous
            if self.step is None or step < self.step:
                self.step = step

            if previous > value:
                # counter reset
                self.previous_delta_up = False
                if is_last_row:
                    self.delta += value
            else:
                if self.previous_delta_up:
                    self.delta += step
                else:
                    self.delta += value
                self.previous_delta_up = True

        self.sum += value
        self.count += 1
        self.all_is_null = False

        if self.max is None or value > self.max:
            self.max = value
        if self.min is None or value < self.min:
            self.min = value
        if value > 0 and (self.logmin is None or value < self.logmin):
            self.logmin = value

    def finish(self) -> StandardCalcs:
        mean = self.sum / self.count if self.count > 0 else None
        value_range = self.max - self.min if self.max is not None and self.min is not None else None
        diff = None
        if is_number(self.first_not_null) and is_number(self.last_not_null):
            diff = self.last_not_null - self.first_not_null

        return StandardCalcs(
            first=self.first,
            last=self.last,
            first_not_null=self.first_not_null,
            last_not_null=self.last_not_null,
            sum=self.sum,
            count=self.count,
            min=self.min,
            max=self.max,
            logmin=self.logmin,
            mean=mean,
            range=value_range,
            diff=diff,
            delta=self.delta,
            step=self.step,
            all_is_null=self.all_is_null,
            # Nothing numeric seen is not "all zero"
            all_is_zero=False if self.all_is_null else self.all_is_zero,
        )


def calculate_standard_stats(
    table: Table,
    field_index: int,
    null_value_mode: NullValueMode = NullValueMode.NULL,
) -> StandardCalcs:
    """Compute every standard statistic for one column in a single pass.

    ``first``/``last`` are the raw cells of the first and final rows. All
    other statistics see cells after the null policy is applied. Non-numeric
    cells are left out of the numeric statistics but still count as
    not-null values and can clear ``allIsZero``.

    Args:
        table: Table holding the column (at least one row)
        field_index: Column position
        null_value_mode: Null policy

    Returns:
        StandardCalcs for the column
    """
    acc = _Accumulator()
    last_index = len(table.rows) - 1

    for i, row in enumerate(table.rows):
        raw = row[field_index]
        if i == 0:
            acc.first = raw
        acc.last = raw

        value = adjust_value(raw, null_value_mode)
        if value is SKIP or value is None:
            continue

        if not acc.seen_not_null:
            acc.first_not_null = value
            acc.seen_not_null = True

        if is_number(value):
            acc.add_number(value, is_last_row=i == last_index)

        if value != 0:
            acc.all_is_zero = False

        acc.last_not_null = value

    return acc.finish()
