"""Tests for shared models."""

from datetime import datetime

import pandas as pd
import pytest
from pydantic import ValidationError

from fieldcalc.core.models.base import Column, FieldType, NullValueMode, Result, Table
from fieldcalc.reducers.engine import reduce_field


class TestTable:
    """Tests for the in-memory table."""

    def test_rows_must_match_columns(self):
        with pytest.raises(ValidationError, match="Row 1 has 1 cells, expected 2"):
            Table(
                columns=[Column(name="a"), Column(name="b")],
                rows=[[1, 2], [3]],
            )

    def test_empty_table(self):
        table = Table()
        assert table.field_count == 0
        assert table.row_count == 0

    def test_counts(self, series_table: Table):
        assert series_table.field_count == 3
        assert series_table.row_count == 3

    def test_tuple_rows_accepted(self):
        table = Table(columns=[Column(name="a")], rows=[(1,), (2,)])
        assert table.rows == [[1], [2]]


class TestFromDataFrame:
    """Tests for building tables from pandas."""

    def test_types_and_values(self):
        df = pd.DataFrame(
            {
                "host": ["a", "b", None],
                "cpu": [1.5, float("nan"), 3.0],
                "count": [1, 2, 3],
                "up": [True, False, True],
                "at": pd.to_datetime(["2024-01-01", None, "2024-01-03"]),
            }
        )

        table = Table.from_dataframe(df, name="hosts")

        assert table.name == "hosts"
        assert [c.name for c in table.columns] == ["host", "cpu", "count", "up", "at"]
        assert [c.type for c in table.columns] == [
            FieldType.STRING,
            FieldType.NUMBER,
            FieldType.NUMBER,
            FieldType.BOOLEAN,
            FieldType.TIME,
        ]
        assert table.rows[0][:4] == ["a", 1.5, 1, True]
        assert table.rows[1][1] is None
        assert table.rows[1][4] is None
        assert table.rows[2][0] is None
        assert isinstance(table.rows[0][4], datetime)

    def test_numpy_scalars_become_python(self):
        table = Table.from_dataframe(pd.DataFrame({"n": [1, 2]}))
        assert type(table.rows[0][0]) is int

    def test_reduce_dataframe_column(self):
        df = pd.DataFrame({"v": [1.0, None, 5.0]})
        table = Table.from_dataframe(df)

        calcs = reduce_field(table, 0, ["mean", "count", "lastNotNull"])

        assert calcs["mean"] == 3
        assert calcs["count"] == 2
        assert reduce_field(table, 0, ["sum"], NullValueMode.AS_ZERO)["sum"] == 6


class TestResult:
    """Tests for the Result type."""

    def test_ok(self):
        result = Result.ok({"sum": 1})
        assert result.success
        assert result.unwrap() == {"sum": 1}

    def test_fail(self):
        result = Result.fail("boom")
        assert not result.success
        with pytest.raises(ValueError, match="boom"):
            result.unwrap()

    def test_map(self):
        assert Result.ok(2).map(lambda v: v * 3).value == 6
