"""Shared pytest fixtures for all tests."""

import pytest

from fieldcalc.core.config import get_settings
from fieldcalc.core.models.base import Column, FieldType, Table
from fieldcalc.reducers.base import ReducerRegistry, get_default_registry


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make FIELDCALC_* environment changes visible to each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry() -> ReducerRegistry:
    """The built-in reducer registry."""
    return get_default_registry()


@pytest.fixture
def series_table() -> Table:
    """One text column and two numeric columns, three rows."""
    return Table(
        name="Series Name",
        columns=[
            Column(name="Field 1", type=FieldType.STRING),
            Column(name="Field 2", type=FieldType.NUMBER),
            Column(name="Field 3", type=FieldType.NUMBER),
        ],
        rows=[
            ["a", 1, 2],
            ["b", 3, 4],
            ["c", 5, 6],
        ],
    )


def _make_table(values: list, name: str = "values", field_type: FieldType = FieldType.NUMBER) -> Table:
    return Table(
        name=name,
        columns=[Column(name=name, type=field_type)],
        rows=[[value] for value in values],
    )


@pytest.fixture
def make_table():
    """Factory for single-column tables built from a list of cells."""
    return _make_table


@pytest.fixture
def empty_table() -> Table:
    """A numeric column without rows."""
    return _make_table([])
