"""Pydantic models for field display resolution.

Field properties, thresholds, value mappings and overrides accept both the
snake_case attribute names and the camelCase wire names (``dateFormat``,
``nullValueMode``).
"""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fieldcalc.core.models.base import FieldType, NullValueMode


class Threshold(BaseModel):
    """A color step that applies from ``value`` upwards."""

    model_config = ConfigDict(frozen=True)

    value: float | None = Field(None, description="Lower boundary; None for the base step")
    color: str = Field(..., description="Color token, resolved against the theme")


class MappingType(str, Enum):
    """Kind of value mapping."""

    VALUE = "value"  # One value -> text
    RANGE = "range"  # from <= value <= to -> text


class ValueMapping(BaseModel):
    """Replace the display text of matching values."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: int = 0
    type: MappingType = MappingType.VALUE
    text: str
    value: str | float | None = Field(None, description="Matched value; 'null' matches null cells")
    from_: str | float | None = Field(None, alias="from")
    to: str | float | None = None


class FieldProperties(BaseModel):
    """Display configuration of a field.

    Every attribute is optional. Layering is done by
    ``fieldcalc.display.properties.get_field_properties``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: str | None = None
    unit: str | None = None
    decimals: int | None = None
    min: float | None = None
    max: float | None = None
    date_format: str | None = None
    prefix: str | None = None
    suffix: str | None = None
    null_value_mode: NullValueMode | None = None
    mappings: list[ValueMapping] = Field(default_factory=list)
    thresholds: list[Threshold] = Field(default_factory=list)


class FieldMatcher(BaseModel):
    """Criteria selecting the fields an override applies to.

    Unset criteria do not constrain. A matcher without criteria matches
    every field.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    names: list[str] | None = Field(None, description="Exact field names")
    pattern: str | None = Field(None, description="Field name regex pattern")
    type: FieldType | None = Field(None, description="Field type")
    table_pattern: str | None = Field(None, description="Table name regex pattern")

    @property
    def is_unconstrained(self) -> bool:
        return (
            self.names is None
            and self.pattern is None
            and self.type is None
            and self.table_pattern is None
        )

    def matches(
        self,
        field_name: str,
        field_type: FieldType | None = None,
        table_name: str | None = None,
    ) -> bool:
        """Check if all set criteria hold for a field.

        Args:
            field_name: Display name of the field
            field_type: Declared type of the field
            table_name: Name of the table holding the field

        Returns:
            True if the field is selected
        """
        if self.names is not None and field_name not in self.names:
            return False
        if self.pattern is not None and not re.match(self.pattern, field_name):
            return False
        if self.type is not None and field_type != self.type:
            return False
        if self.table_pattern is not None and not re.match(self.table_pattern, table_name or ""):
            return False
        return True


class FieldOverride(BaseModel):
    """Field properties applied to the fields a matcher selects.

    ``properties`` is kept in wire format so the unset sentinels (unit
    ``"none"``, NaN numbers, empty strings) survive until merging.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    matcher: FieldMatcher = Field(default_factory=FieldMatcher)
    properties: dict[str, Any] = Field(default_factory=dict)


class FieldDisplayOptions(BaseModel):
    """What to show for the fields of a set of tables."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    calcs: list[str] = Field(default_factory=list, description="Reducer ids; empty means last")
    values: bool = Field(False, description="Show raw row values instead of reductions")
    limit: int | None = Field(None, gt=0, description="Maximum number of raw values")
    defaults: FieldProperties = Field(default_factory=FieldProperties)
    overrides: list[FieldOverride] = Field(default_factory=list)
    null_value_mode: NullValueMode | None = None


class DisplayValue(BaseModel):
    """A resolved value ready for rendering."""

    model_config = ConfigDict(frozen=True)

    numeric: float | None = None
    text: str = ""
    title: str | None = None
    color: str | None = None
    prefix: str | None = None
    suffix: str | None = None


class FieldDisplay(BaseModel):
    """One display value together with the field it came from."""

    model_config = ConfigDict(frozen=True)

    name: str
    field: FieldProperties
    display: DisplayValue
    field_name: str | None = None
    table_name: str | None = None
    table_index: int | None = None
    column_index: int | None = None
    row_index: int | None = None
