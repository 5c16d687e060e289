"""Threshold normalization and lookup.

Thresholds are color steps: each applies from its boundary upwards until
the next boundary. After normalization the list is sorted ascending and the
first (base) step starts at negative infinity, so every number falls into
exactly one step.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any

from fieldcalc.display.models import Threshold


def _sort_key(threshold: Threshold) -> float:
    return -math.inf if threshold.value is None else threshold.value


def normalize_thresholds(thresholds: Sequence[Threshold]) -> list[Threshold]:
    """Sort thresholds ascending and pin the base step to -inf.

    A threshold without a boundary sorts first. The length of the list is
    unchanged.

    Args:
        thresholds: Thresholds in any order

    Returns:
        Normalized copy of the thresholds
    """
    if not thresholds:
        return []
    ordered = sorted(thresholds, key=_sort_key)
    base = ordered[0].model_copy(update={"value": -math.inf})
    return [base, *ordered[1:]]


def get_active_threshold(value: float, thresholds: Sequence[Threshold]) -> Threshold | None:
    """Get the step with the highest boundary at or below value.

    Args:
        value: Numeric value to classify
        thresholds: Normalized thresholds

    Returns:
        The active threshold; the base step when nothing else matches
        (NaN included), None only for an empty list
    """
    if not thresholds:
        return None
    active = thresholds[0]
    for threshold in thresholds[1:]:
        if threshold.value is not None and value >= threshold.value:
            active = threshold
        else:
            break
    return active


def resolve_color(color: str, theme: Any = None) -> str:
    """Default color resolver.

    A mapping theme translates color tokens; tokens it does not know, and
    any other theme, pass through unchanged.
    """
    if isinstance(theme, Mapping):
        return str(theme.get(color, color))
    return color


def get_color_from_threshold(
    value: float,
    thresholds: Sequence[Threshold],
    theme: Any = None,
    color_resolver: Any = resolve_color,
) -> str | None:
    """Resolve the display color for a value.

    Args:
        value: Numeric value
        thresholds: Normalized thresholds
        theme: Opaque theme passed to the resolver
        color_resolver: Callable (color_token, theme) -> color

    Returns:
        Resolved color, or None without thresholds
    """
    threshold = get_active_threshold(value, thresholds)
    if threshold is None:
        return None
    return color_resolver(threshold.color, theme)
