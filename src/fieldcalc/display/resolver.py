"""Resolve the display values for every numeric field of a set of tables.

For each numeric column, in table-then-column order, the field properties
are layered (defaults, the column's own config, then the matching
overrides). Then either one value per requested reducer is emitted, or, in
values mode, one value per row until the global limit is reached.
"""

from collections.abc import Sequence
from typing import Any

from fieldcalc.core.config import get_settings
from fieldcalc.core.logging import get_logger
from fieldcalc.core.models.base import Column, FieldType, Table
from fieldcalc.display.models import (
    DisplayValue,
    FieldDisplay,
    FieldDisplayOptions,
    FieldOverride,
    FieldProperties,
)
from fieldcalc.display.processor import (
    ColorResolver,
    ValueFormatter,
    format_value,
    get_display_processor,
)
from fieldcalc.display.properties import get_field_properties
from fieldcalc.display.thresholds import resolve_color
from fieldcalc.display.titles import (
    VAR_CALC,
    VAR_CELL_PREFIX,
    VAR_FIELD_NAME,
    VAR_SERIES_NAME,
    VariableReplacer,
    get_title_template,
    replace_variables,
)
from fieldcalc.reducers.base import ReducerID, ReducerRegistry, get_default_registry
from fieldcalc.reducers.engine import reduce_field

logger = get_logger(__name__)

NO_DATA = "No data"


def resolve_field_properties(
    defaults: FieldProperties,
    column: Column,
    field_name: str,
    table_name: str,
    overrides: Sequence[FieldOverride],
) -> FieldProperties:
    """Layer defaults, column config and matching overrides for one column."""
    layers: list[Any] = [defaults, column.config]
    layers.extend(
        override.properties
        for override in overrides
        if override.matcher.matches(field_name, column.type, table_name)
    )
    return get_field_properties(*layers)


def get_field_display_values(
    data: Sequence[Table],
    field_options: FieldDisplayOptions,
    replace_variables: VariableReplacer = replace_variables,
    theme: Any = None,
    formatter: ValueFormatter = format_value,
    color_resolver: ColorResolver = resolve_color,
    registry: ReducerRegistry | None = None,
) -> list[FieldDisplay]:
    """Get the display values for all numeric fields.

    Args:
        data: Tables to display
        field_options: Calculations, values mode, limit, defaults and overrides
        replace_variables: Title template substitution
        theme: Opaque theme for color resolution
        formatter: Number formatter
        color_resolver: Threshold color resolver
        registry: Reducer catalog (defaults to the built-in one)

    Returns:
        Display values in table, column, then row/reducer order. Never
        empty: without any numeric value a single "No data" entry carries
        the resolved default field properties.

    Raises:
        UnknownReducerError: If a requested calculation is not registered
    """
    settings = get_settings()
    registry = registry or get_default_registry()

    calcs = list(dict.fromkeys(field_options.calcs)) or [ReducerID.LAST.value]
    # Fail on unknown reducers before producing anything
    canonical = {calc: registry.get(calc).id for calc in calcs}

    limit = field_options.limit or settings.display_values_limit
    default_mode = field_options.null_value_mode or settings.null_value_mode
    defaults = field_options.defaults
    default_title = get_title_template(defaults.title, calcs, data)

    values: list[FieldDisplay] = []
    hit_limit = False

    for s, table in enumerate(data):
        if hit_limit:
            break
        table_name = table.name or table.ref_id or f"Series[{s}]"
        scoped_vars: dict[str, Any] = {VAR_SERIES_NAME: table_name}

        for i, column in enumerate(table.columns):
            if hit_limit:
                break
            if column.type != FieldType.NUMBER:
                continue

            field_name = column.name or f"Field[{i}]"
            field = resolve_field_properties(
                defaults, column, field_name, table_name, field_options.overrides
            )
            scoped_vars[VAR_FIELD_NAME] = field_name
            display = get_display_processor(field, theme, formatter, color_resolver)
            title = field.title or default_title

            if field_options.values:
                uses_cell_values = VAR_CELL_PREFIX in title
                for r, row in enumerate(table.rows):
                    if uses_cell_values:
                        for j, cell in enumerate(row):
                            scoped_vars[f"{VAR_CELL_PREFIX}{j}"] = cell
                    display_value = display(row[i]).model_copy(
                        update={"title": replace_variables(title, scoped_vars)}
                    )
                    values.append(
                        FieldDisplay(
                            name="",
                            field=field,
                            display=display_value,
                            field_name=field_name,
                            table_name=table_name,
                            table_index=s,
                            column_index=i,
                            row_index=r,
                        )
                    )
                    if len(values) >= limit:
                        hit_limit = True
                        logger.debug("field_display_limit_reached", limit=limit)
                        break
            else:
                mode = field.null_value_mode or default_mode
                results = reduce_field(table, i, calcs, mode, registry)
                for calc in calcs:
                    scoped_vars[VAR_CALC] = calc
                    display_value = display(results.get(canonical[calc])).model_copy(
                        update={"title": replace_variables(title, scoped_vars)}
                    )
                    values.append(
                        FieldDisplay(
                            name=calc,
                            field=field,
                            display=display_value,
                            field_name=field_name,
                            table_name=table_name,
                            table_index=s,
                            column_index=i,
                        )
                    )

    if not values:
        field = get_field_properties(
            defaults,
            *(o.properties for o in field_options.overrides if o.matcher.is_unconstrained),
        )
        values.append(FieldDisplay(name=NO_DATA, field=field, display=DisplayValue(text=NO_DATA)))
    elif len(values) == 1 and not defaults.title:
        # A lone value needs no title
        only = values[0]
        values[0] = only.model_copy(update={"display": only.display.model_copy(update={"title": None})})

    logger.debug(
        "field_display_resolved",
        tables=len(data),
        values=len(values),
        mode="values" if field_options.values else "calcs",
    )
    return values
