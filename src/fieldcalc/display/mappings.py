"""Value mappings: replace the display text of matching values."""

import math
from collections.abc import Sequence
from typing import Any

from fieldcalc.display.models import MappingType, ValueMapping

_NULL_TOKEN = "null"


def _as_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _value_mapping_matches(mapping: ValueMapping, value: Any) -> bool:
    if mapping.value is None:
        return False
    if value is None:
        return mapping.value == _NULL_TOKEN
    expected = _as_float(mapping.value)
    actual = _as_float(value)
    if math.isnan(expected) or math.isnan(actual):
        return str(mapping.value) == str(value)
    return expected == actual


def _range_mapping_matches(mapping: ValueMapping, value: Any) -> bool:
    if value is None:
        return mapping.from_ == _NULL_TOKEN and mapping.to == _NULL_TOKEN
    actual = _as_float(value)
    low = _as_float(mapping.from_)
    high = _as_float(mapping.to)
    if math.isnan(actual) or math.isnan(low) or math.isnan(high):
        return False
    return low <= actual <= high


def get_mapped_value(mappings: Sequence[ValueMapping], value: Any) -> ValueMapping | None:
    """Get the first mapping that matches a raw cell value.

    Args:
        mappings: Mappings in priority order
        value: Raw cell value (may be None)

    Returns:
        The matching mapping, or None
    """
    for mapping in mappings:
        if mapping.type is MappingType.VALUE:
            if _value_mapping_matches(mapping, value):
                return mapping
        elif _range_mapping_matches(mapping, value):
            return mapping
    return None
