"""Field display resolution.

Usage:
    from fieldcalc.display import FieldDisplayOptions, get_field_display_values

    options = FieldDisplayOptions(calcs=["mean"], defaults={"unit": "ms"})
    for item in get_field_display_values(tables, options):
        print(item.display.title, item.display.text, item.display.color)
"""

from fieldcalc.display.config import load_field_display_options
from fieldcalc.display.mappings import get_mapped_value
from fieldcalc.display.models import (
    DisplayValue,
    FieldDisplay,
    FieldDisplayOptions,
    FieldMatcher,
    FieldOverride,
    FieldProperties,
    MappingType,
    Threshold,
    ValueMapping,
)
from fieldcalc.display.processor import (
    ColorResolver,
    DisplayProcessor,
    ValueFormatter,
    format_value,
    get_display_processor,
    to_numeric,
)
from fieldcalc.display.properties import apply_field_properties, get_field_properties
from fieldcalc.display.resolver import get_field_display_values, resolve_field_properties
from fieldcalc.display.thresholds import (
    get_active_threshold,
    get_color_from_threshold,
    normalize_thresholds,
    resolve_color,
)
from fieldcalc.display.titles import (
    VAR_CALC,
    VAR_CELL_PREFIX,
    VAR_FIELD_NAME,
    VAR_SERIES_NAME,
    VariableReplacer,
    get_title_template,
    replace_variables,
)

__all__ = [
    # Models
    "DisplayValue",
    "FieldDisplay",
    "FieldDisplayOptions",
    "FieldMatcher",
    "FieldOverride",
    "FieldProperties",
    "MappingType",
    "Threshold",
    "ValueMapping",
    # Properties
    "apply_field_properties",
    "get_field_properties",
    # Thresholds
    "get_active_threshold",
    "get_color_from_threshold",
    "normalize_thresholds",
    "resolve_color",
    # Mappings
    "get_mapped_value",
    # Titles
    "VAR_CALC",
    "VAR_CELL_PREFIX",
    "VAR_FIELD_NAME",
    "VAR_SERIES_NAME",
    "VariableReplacer",
    "get_title_template",
    "replace_variables",
    # Processor
    "ColorResolver",
    "DisplayProcessor",
    "ValueFormatter",
    "format_value",
    "get_display_processor",
    "to_numeric",
    # Resolver
    "get_field_display_values",
    "resolve_field_properties",
    # Config
    "load_field_display_options",
]
