"""Tests for the display processor, value mappings and titles."""

import math

import pytest

from fieldcalc.core.models.base import Column, FieldType, Table
from fieldcalc.display.mappings import get_mapped_value
from fieldcalc.display.models import MappingType, ValueMapping
from fieldcalc.display.processor import format_value, get_display_processor, to_numeric
from fieldcalc.display.properties import get_field_properties
from fieldcalc.display.titles import get_title_template, replace_variables


class TestFormatValue:
    """Tests for the default formatter."""

    @pytest.mark.parametrize(
        ("value", "unit", "decimals", "expected"),
        [
            (1.0, None, None, "1"),
            (2.5, None, None, "2.5"),
            (1 / 3, None, None, "0.333333"),
            (3.14159, None, 2, "3.14"),
            (7, None, 0, "7"),
            (12, "ms", None, "12 ms"),
            (12, "none", None, "12"),
            (math.inf, None, None, "inf"),
        ],
    )
    def test_format(self, value, unit, decimals, expected):
        assert format_value(value, unit, decimals) == expected


class TestToNumeric:
    """Tests for numeric payload extraction."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, None), (3, 3.0), (2.5, 2.5), (True, 1.0), ("4.5", 4.5), ("abc", None), ([1], None)],
    )
    def test_to_numeric(self, value, expected):
        assert to_numeric(value) == expected


class TestValueMappings:
    """Tests for get_mapped_value."""

    def test_value_mapping(self):
        mappings = [ValueMapping(type=MappingType.VALUE, value="1", text="Up")]
        assert get_mapped_value(mappings, 1).text == "Up"
        assert get_mapped_value(mappings, 1.0).text == "Up"
        assert get_mapped_value(mappings, 2) is None

    def test_null_value_mapping(self):
        mappings = [ValueMapping(value="null", text="N/A")]
        assert get_mapped_value(mappings, None).text == "N/A"
        assert get_mapped_value(mappings, 0) is None

    def test_text_value_mapping(self):
        mappings = [ValueMapping(value="ok", text="All good")]
        assert get_mapped_value(mappings, "ok").text == "All good"

    def test_range_mapping(self):
        mappings = [ValueMapping.model_validate({"type": "range", "from": 0, "to": 10, "text": "Low"})]
        assert get_mapped_value(mappings, 0).text == "Low"
        assert get_mapped_value(mappings, 10).text == "Low"
        assert get_mapped_value(mappings, 10.5) is None
        assert get_mapped_value(mappings, None) is None

    def test_first_match_wins(self):
        mappings = [
            ValueMapping(type=MappingType.RANGE, from_=0, to=100, text="Range"),
            ValueMapping(value="5", text="Five"),
        ]
        assert get_mapped_value(mappings, 5).text == "Range"


class TestDisplayProcessor:
    """Tests for get_display_processor."""

    def test_numeric_value(self):
        field = get_field_properties({"unit": "ms", "decimals": 1, "prefix": "~"})
        display = get_display_processor(field)(12)

        assert display.numeric == 12
        assert display.text == "12.0 ms"
        assert display.prefix == "~"
        assert display.color is None

    def test_threshold_color(self):
        field = get_field_properties(
            {"thresholds": [{"color": "green"}, {"color": "red", "value": 50}]}
        )
        process = get_display_processor(field)
        assert process(10).color == "green"
        assert process(50).color == "red"

    def test_theme_and_resolver(self):
        field = get_field_properties({"thresholds": [{"color": "green"}]})
        process = get_display_processor(field, theme={"green": "#73BF69"})
        assert process(1).color == "#73BF69"

    def test_null_value(self):
        field = get_field_properties({"thresholds": [{"color": "green"}]})
        display = get_display_processor(field)(None)
        assert display.numeric is None
        assert display.text == ""
        assert display.color is None

    def test_text_value(self):
        display = get_display_processor(get_field_properties())("warming up")
        assert display.numeric is None
        assert display.text == "warming up"

    def test_mapping_replaces_text_only(self):
        field = get_field_properties(
            {
                "mappings": [{"type": "value", "value": "0", "text": "Down"}],
                "thresholds": [{"color": "red"}, {"color": "green", "value": 1}],
            }
        )
        display = get_display_processor(field)(0)
        assert display.text == "Down"
        assert display.numeric == 0
        assert display.color == "red"

    def test_custom_formatter(self):
        process = get_display_processor(
            get_field_properties({"unit": "bytes"}),
            formatter=lambda value, unit, decimals: f"{value:.0f}{unit}",
        )
        assert process(2048).text == "2048bytes"


class TestTitles:
    """Tests for title templates and variable substitution."""

    def test_replace_variables(self):
        scoped = {"__field_name": "cpu", "__series_name": "host-1"}
        assert replace_variables("$__field_name on ${__series_name}", scoped) == "cpu on host-1"

    def test_unknown_variables_are_kept(self):
        assert replace_variables("$__calc of $x", {"x": 1}) == "$__calc of 1"

    def test_none_becomes_empty(self):
        assert replace_variables("[$__cell_0]", {"__cell_0": None}) == "[]"

    def test_explicit_title_wins(self, series_table):
        assert get_title_template("My title", ["mean", "max"], [series_table]) == "My title"

    def test_default_title_for_several_numeric_fields(self, series_table):
        assert get_title_template(None, ["last"], [series_table]) == "$__field_name"

    def test_default_title_for_several_calcs_and_tables(self):
        table = Table(columns=[Column(name="v", type=FieldType.NUMBER)], rows=[[1]])
        title = get_title_template(None, ["mean", "max"], [table, table])
        assert title == "$__calc $__series_name"

    def test_default_title_single_field(self):
        table = Table(columns=[Column(name="v", type=FieldType.NUMBER)], rows=[[1]])
        assert get_title_template(None, ["mean"], [table]) == "$__field_name"

    def test_default_title_without_data(self):
        assert get_title_template(None, ["mean"], []) == "No Data"
