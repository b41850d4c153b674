"""Query vocabulary shared by batch queries and subscriptions.

This module defines entity matchers, query expressions and the builders of
Simple Query Language statements.
"""

from enum import StrEnum
from typing import NewType

from pydantic import Field

from .base_model import NgsiBaseModel
from .errors import InvalidValueError
from .validation import is_valid_attribute_name


class SimplifiedEntityRepresentation(StrEnum):
    """Representation modes producing simplified entity documents."""

    KEY_VALUES = "keyValues"
    VALUES = "values"
    UNIQUE = "unique"
    COUNT = "count"


class SimpleLocationFormatGeometry(StrEnum):
    POINT = "point"
    LINE = "line"
    POLYGON = "polygon"
    BOX = "box"


class GeospatialRelationship(StrEnum):
    NEAR = "near"
    COVERED_BY = "coveredBy"
    INTERSECTS = "intersects"
    EQUALS = "equals"
    DISJOINT = "disjoint"


GeorelModifier = NewType("GeorelModifier", str)


def _format_distance(distance: float) -> str:
    return str(int(distance)) if float(distance).is_integer() else str(distance)


def georel_modifier_max_distance(max_distance: float) -> GeorelModifier:
    return GeorelModifier(f"maxDistance:{_format_distance(max_distance)}")


def georel_modifier_min_distance(min_distance: float) -> GeorelModifier:
    return GeorelModifier(f"minDistance:{_format_distance(min_distance)}")


def build_georel(
    relationship: GeospatialRelationship, *modifiers: GeorelModifier
) -> str:
    """Join a relationship and its modifiers, e.g. ``near;maxDistance:1000``."""
    return ";".join([str(relationship), *modifiers])


class SimpleQueryOperator(StrEnum):
    EQUAL = "=="
    UNEQUAL = "!="
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_OR_EQUAL_THAN = ">="
    LESS_OR_EQUAL_THAN = "<="
    MATCH_PATTERN = "~="


SimpleQueryStatement = NewType("SimpleQueryStatement", str)

_LIST_OPERATORS = (SimpleQueryOperator.EQUAL, SimpleQueryOperator.UNEQUAL)


def _quote_if_comma(value: str) -> str:
    return f"'{value}'" if "," in value else value


def _check_attribute(attribute: str) -> None:
    if not is_valid_attribute_name(attribute):
        raise InvalidValueError(f"'{attribute}' is not a valid attribute name")


def binary_statement(
    attribute: str, operator: SimpleQueryOperator, value: str
) -> SimpleQueryStatement:
    """Build ``<attribute><operator><value>``.

    Values holding a comma are single quoted for equal and unequal, where a
    bare comma would separate a list of values.
    """
    _check_attribute(attribute)
    if operator in _LIST_OPERATORS:
        value = _quote_if_comma(value)
    return SimpleQueryStatement(f"{attribute}{operator}{value}")


def binary_statement_multiple_values(
    attribute: str, operator: SimpleQueryOperator, *values: str
) -> SimpleQueryStatement:
    """Build ``<attribute><operator><v1>,<v2>,...`` for equal and unequal."""
    _check_attribute(attribute)
    if not values:
        raise InvalidValueError("Cannot create simple query statement without values")
    if operator not in _LIST_OPERATORS:
        raise InvalidValueError(
            "Multiple values are only permitted for equal or unequal operators"
        )
    joined = ",".join(_quote_if_comma(value) for value in values)
    return SimpleQueryStatement(f"{attribute}{operator}{joined}")


def binary_statement_range(
    attribute: str, operator: SimpleQueryOperator, minimum: str, maximum: str
) -> SimpleQueryStatement:
    """Build ``<attribute><operator><minimum>..<maximum>`` for equal and unequal."""
    _check_attribute(attribute)
    if operator not in _LIST_OPERATORS:
        raise InvalidValueError("Range is only permitted for equal or unequal operators")
    return SimpleQueryStatement(
        f"{attribute}{operator}{_quote_if_comma(minimum)}..{_quote_if_comma(maximum)}"
    )


class EntityMatcher(NgsiBaseModel):
    """Selects entities by id or id pattern, optionally by type or type pattern."""

    id: str | None = Field(default=None, description="Exact entity id")
    id_pattern: str | None = Field(
        default=None, alias="idPattern", description="Regular expression on ids"
    )
    type: str | None = Field(default=None, description="Exact entity type")
    type_pattern: str | None = Field(
        default=None, alias="typePattern", description="Regular expression on types"
    )

    def by_id(self, entity_id: str) -> "EntityMatcher":
        self.id = entity_id
        return self

    def by_id_pattern(self, id_pattern: str) -> "EntityMatcher":
        self.id_pattern = id_pattern
        return self

    def by_type(self, entity_type: str) -> "EntityMatcher":
        self.type = entity_type
        return self

    def by_type_pattern(self, type_pattern: str) -> "EntityMatcher":
        self.type_pattern = type_pattern
        return self

    def check(self) -> None:
        """Raise InvalidValueError unless the matcher is usable in a query."""
        if not self.id and not self.id_pattern:
            raise InvalidValueError("id or idPattern must be present")
        if self.id and self.id_pattern:
            raise InvalidValueError("id and idPattern cannot be used at the same time")
        if self.type and self.type_pattern:
            raise InvalidValueError(
                "type and typePattern cannot be used at the same time"
            )


class QueryExpression(NgsiBaseModel):
    """Filter expression of a batch query or subscription condition."""

    q: str | None = Field(default=None, description="Simple query on attributes")
    mq: str | None = Field(default=None, description="Simple query on metadata")
    georel: str | None = Field(default=None, description="Geospatial relationship")
    geometry: SimpleLocationFormatGeometry | None = Field(
        default=None, description="Reference geometry shape"
    )
    coords: str | None = Field(default=None, description="Reference geometry coordinates")


class APIResources(NgsiBaseModel):
    """Resource URLs advertised by the broker API entry point."""

    entities_url: str = Field(..., description="Entities resource URL")
    types_url: str = Field(..., description="Types resource URL")
    subscriptions_url: str = Field(..., description="Subscriptions resource URL")
    registrations_url: str = Field(..., description="Registrations resource URL")
