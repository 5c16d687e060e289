"""Title templates and template variables."""

import re
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from fieldcalc.core.models.base import FieldType, Table

VAR_SERIES_NAME = "__series_name"
VAR_FIELD_NAME = "__field_name"
VAR_CALC = "__calc"
VAR_CELL_PREFIX = "__cell_"

# $name or ${name}
_VARIABLE_PATTERN = re.compile(r"\$(?:\{(\w+)\}|(\w+))")


class VariableReplacer(Protocol):
    """Substitutes template variables in a title."""

    def __call__(self, template: str, scoped_vars: Mapping[str, Any]) -> str: ...


def replace_variables(template: str, scoped_vars: Mapping[str, Any]) -> str:
    """Substitute ``$name`` and ``${name}`` with scoped values.

    Unknown variables are left as written; a None value becomes "".
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        if name not in scoped_vars:
            return match.group(0)
        value = scoped_vars[name]
        return "" if value is None else str(value)

    return _VARIABLE_PATTERN.sub(_substitute, template)


def get_title_template(title: str | None, calcs: Sequence[str], data: Sequence[Table]) -> str:
    """Get the title template for display values.

    An explicit title is used as is. Otherwise the template names whatever
    tells the values apart: the calculation when several are shown, the
    series when there are several tables, and the field when the first
    table has several numeric fields (or nothing else was picked).

    Args:
        title: Configured title, if any
        calcs: Requested reducer ids
        data: Tables being displayed

    Returns:
        Title template
    """
    if title:
        return title
    if not data:
        return "No Data"

    field_count = sum(1 for column in data[0].columns if column.type == FieldType.NUMBER)

    parts: list[str] = []
    if len(calcs) > 1:
        parts.append("$" + VAR_CALC)
    if len(data) > 1:
        parts.append("$" + VAR_SERIES_NAME)
    if field_count > 1 or not parts:
        parts.append("$" + VAR_FIELD_NAME)
    return " ".join(parts)
