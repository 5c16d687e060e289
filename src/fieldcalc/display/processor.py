"""Turn raw values into display values for one field."""

import math
from collections.abc import Callable
from numbers import Real
from typing import Any, Protocol

from fieldcalc.display.mappings import get_mapped_value
from fieldcalc.display.models import DisplayValue, FieldProperties
from fieldcalc.display.thresholds import get_color_from_threshold, resolve_color


class ValueFormatter(Protocol):
    """Renders a number as display text."""

    def __call__(self, value: float, unit: str | None, decimals: int | None) -> str: ...


class ColorResolver(Protocol):
    """Maps a threshold color token to a renderable color."""

    def __call__(self, color: str, theme: Any) -> str: ...


DisplayProcessor = Callable[[Any], DisplayValue]


def format_value(value: float, unit: str | None = None, decimals: int | None = None) -> str:
    """Default formatter: fixed decimals when set, whole numbers without a fraction."""
    if not math.isfinite(value):
        text = str(value)
    elif decimals is not None:
        text = f"{value:.{max(decimals, 0)}f}"
    elif value == int(value):
        text = str(int(value))
    else:
        text = str(round(value, 6))

    if unit and unit != "none":
        return f"{text} {unit}"
    return text


def to_numeric(value: Any) -> float | None:
    """Get the numeric payload of a cell; None when it has none."""
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def get_display_processor(
    field: FieldProperties,
    theme: Any = None,
    formatter: ValueFormatter = format_value,
    color_resolver: ColorResolver = resolve_color,
) -> DisplayProcessor:
    """Build the value -> DisplayValue function for a resolved field.

    Args:
        field: Resolved field properties
        theme: Opaque theme handed to the color resolver
        formatter: Number formatter
        color_resolver: Threshold color resolver

    Returns:
        Display processor for the field
    """

    def process(value: Any) -> DisplayValue:
        numeric = to_numeric(value)
        has_number = numeric is not None and not math.isnan(numeric)

        mapping = get_mapped_value(field.mappings, value) if field.mappings else None
        if mapping is not None:
            text = mapping.text
        elif has_number:
            text = formatter(numeric, field.unit, field.decimals)
        elif value is None:
            text = ""
        else:
            text = str(value)

        color = None
        if has_number and field.thresholds:
            color = get_color_from_threshold(numeric, field.thresholds, theme, color_resolver)

        return DisplayValue(
            numeric=numeric,
            text=text,
            color=color,
            prefix=field.prefix,
            suffix=field.suffix,
        )

    return process
