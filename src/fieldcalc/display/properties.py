"""Layering of field properties.

Properties are folded left to right; a later layer wins per attribute.
A layer's attribute is skipped when it carries that attribute's unset
sentinel:

- None, for every attribute
- a value that does not parse as a finite number, for min/max/decimals
- the empty string, for text attributes
- ``"none"``, for unit
- an empty list, for thresholds and mappings (lists are replaced whole)
"""

import math
from collections.abc import Mapping
from typing import Any

from fieldcalc.display.models import FieldProperties
from fieldcalc.display.thresholds import normalize_thresholds

PropertyLayer = FieldProperties | Mapping[str, Any]

_NUMERIC_PROPS = frozenset({"min", "max", "decimals"})
_LIST_PROPS = frozenset({"thresholds", "mappings"})

# camelCase wire name -> attribute name
_ATTRIBUTE_NAMES: dict[str, str] = {
    info.alias: name for name, info in FieldProperties.model_fields.items() if info.alias
}


def _parse_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _set_attributes(props: PropertyLayer) -> dict[str, Any]:
    """Get the attributes of a layer that are not unset sentinels."""
    if isinstance(props, FieldProperties):
        raw = props.model_dump(exclude_none=True)
    else:
        raw = dict(props)

    attributes: dict[str, Any] = {}
    for key, value in raw.items():
        name = _ATTRIBUTE_NAMES.get(key, key)
        if value is None:
            continue
        if name in _NUMERIC_PROPS:
            number = _parse_number(value)
            if number is None:
                continue
            attributes[name] = int(number) if name == "decimals" else number
        elif name in _LIST_PROPS:
            if value:
                attributes[name] = value
        elif value == "":
            continue
        elif name == "unit" and value == "none":
            continue
        else:
            attributes[name] = value
    return attributes


def apply_field_properties(field: FieldProperties, props: PropertyLayer | None) -> FieldProperties:
    """Apply one layer of properties on top of a field.

    Args:
        field: Current field properties
        props: Layer to apply (model or wire-format mapping)

    Returns:
        New FieldProperties; ``field`` itself is not modified
    """
    if not props:
        return field
    attributes = _set_attributes(props)
    if not attributes:
        return field
    merged = {**field.model_dump(exclude_none=True), **attributes}
    return FieldProperties.model_validate(merged)


def get_field_properties(*props: PropertyLayer | None) -> FieldProperties:
    """Fold property layers into the final field properties.

    After folding, min and max are swapped if max < min, and the thresholds
    are sorted with the base step pinned to negative infinity.

    Args:
        *props: Layers, lowest precedence first; None layers are skipped

    Returns:
        Resolved FieldProperties
    """
    field = FieldProperties()
    for layer in props:
        field = apply_field_properties(field, layer)

    updates: dict[str, Any] = {}
    if field.thresholds:
        updates["thresholds"] = normalize_thresholds(field.thresholds)
    if field.min is not None and field.max is not None and field.min > field.max:
        updates["min"] = field.max
        updates["max"] = field.min
    return field.model_copy(update=updates) if updates else field
