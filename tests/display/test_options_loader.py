"""Tests for the field display options YAML loader."""

import math
from pathlib import Path

import pytest

from fieldcalc.core.exceptions import FieldOptionsLoadError
from fieldcalc.core.models.base import NullValueMode, Table
from fieldcalc.display.config import load_field_display_options
from fieldcalc.display.resolver import get_field_display_values


def test_load_field_display_options(tmp_path: Path):
    """Test loading a full options document."""
    config_file = tmp_path / "options.yaml"
    config_file.write_text("""
calcs: [mean, max]
nullValueMode: connected
defaults:
  unit: ms
  decimals: 1
  dateFormat: YYYY-MM-DD
  thresholds:
    - {color: green, value: null}
    - {color: red, value: 80}
overrides:
  - matcher:
      pattern: "^Field 3$"
    properties:
      unit: none
      max: .nan
""")

    options = load_field_display_options(config_file)

    assert options.calcs == ["mean", "max"]
    assert options.null_value_mode == NullValueMode.IGNORE
    assert options.defaults.unit == "ms"
    assert options.defaults.date_format == "YYYY-MM-DD"
    assert len(options.defaults.thresholds) == 2
    assert len(options.overrides) == 1
    assert options.overrides[0].matcher.pattern == "^Field 3$"
    assert options.overrides[0].properties["unit"] == "none"
    assert math.isnan(options.overrides[0].properties["max"])


def test_loaded_sentinels_are_ignored_when_resolving(tmp_path: Path, series_table: Table):
    """Unset sentinels from YAML survive loading and are skipped when merging."""
    config_file = tmp_path / "options.yaml"
    config_file.write_text("""
calcs: [last]
defaults:
  unit: ms
  max: 10
overrides:
  - matcher: {names: [Field 3]}
    properties: {unit: none, max: .nan, min: 1}
""")

    display = get_field_display_values([series_table], load_field_display_options(config_file))

    assert [v.field.unit for v in display] == ["ms", "ms"]
    assert [v.field.max for v in display] == [10, 10]
    assert [v.field.min for v in display] == [None, 1]


def test_snake_case_keys(tmp_path: Path):
    config_file = tmp_path / "options.yaml"
    config_file.write_text("""
values: true
limit: 5
null_value_mode: null as zero
defaults:
  date_format: HH:mm
""")

    options = load_field_display_options(config_file)

    assert options.values is True
    assert options.limit == 5
    assert options.null_value_mode == NullValueMode.AS_ZERO
    assert options.defaults.date_format == "HH:mm"


def test_empty_file_gives_defaults(tmp_path: Path):
    config_file = tmp_path / "options.yaml"
    config_file.write_text("")

    options = load_field_display_options(config_file)

    assert options.calcs == []
    assert options.values is False


def test_missing_file(tmp_path: Path):
    with pytest.raises(FieldOptionsLoadError, match="not found"):
        load_field_display_options(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path: Path):
    config_file = tmp_path / "options.yaml"
    config_file.write_text("calcs: [mean\n")

    with pytest.raises(FieldOptionsLoadError, match="invalid YAML") as exc_info:
        load_field_display_options(config_file)
    assert exc_info.value.path == config_file


def test_validation_error(tmp_path: Path):
    config_file = tmp_path / "options.yaml"
    config_file.write_text("limit: -1\n")

    with pytest.raises(FieldOptionsLoadError, match="validation error"):
        load_field_display_options(config_file)


def test_unknown_key_rejected(tmp_path: Path):
    config_file = tmp_path / "options.yaml"
    config_file.write_text("calculations: [mean]\n")

    with pytest.raises(FieldOptionsLoadError):
        load_field_display_options(config_file)


def test_top_level_must_be_mapping(tmp_path: Path):
    config_file = tmp_path / "options.yaml"
    config_file.write_text("- mean\n- max\n")

    with pytest.raises(FieldOptionsLoadError, match="mapping"):
        load_field_display_options(config_file)
