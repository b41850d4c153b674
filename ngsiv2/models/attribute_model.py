"""Attribute and metadata models.

An attribute pairs a type tag with a value whose Python representation is
decided once, when the attribute is built or decoded, by the attribute type
registry. Typed getters only check that representation.
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeVar

from pydantic import (
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic_core import to_json

from .attribute_type import (
    INT64_MAX,
    INT64_MIN,
    AttributeType,
    decode_metadata_value,
    decode_value,
    encode_value,
    normalize_attribute_type,
)
from .base_model import NgsiBaseModel
from .errors import CastError, DecodeError, InvalidValueError, TypeMismatchError
from .geo_model import GeoPoint, is_geometry

T = TypeVar("T")


class TypedValue(NgsiBaseModel):
    """A type tag and a value, the shape shared by attributes and metadata."""

    type: str = Field(default="", description="Type tag, e.g. 'Number'")
    value: Any = Field(default=None, description="Decoded value")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> Any:
        """Treat a null type tag as missing."""
        return "" if v is None else v

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        """Use the AttributeType member for well-known tags."""
        return normalize_attribute_type(v)

    def _document(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        if self.type:
            document["type"] = str(self.type)
        document["value"] = encode_value(self.type, self.value)
        return document

    def _expect(self, *tags: AttributeType) -> None:
        if self.type not in tags:
            raise TypeMismatchError(" or ".join(tags), str(self.type))

    def get_as_string(self) -> str:
        """Return the value of a String or Text attribute."""
        self._expect(AttributeType.STRING, AttributeType.TEXT)
        if not isinstance(self.value, str):
            raise CastError()
        return self.value

    def get_as_float(self) -> float:
        """Return the value of a Float, Number or Percentage attribute."""
        self._expect(AttributeType.FLOAT, AttributeType.NUMBER, AttributeType.PERCENTAGE)
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise CastError()
        try:
            return float(self.value)
        except OverflowError:
            raise CastError("number out of float range") from None

    def get_as_integer(self) -> int:
        """Return the value of an Integer attribute.

        JSON numbers may come back as floats; those are accepted only when
        they hold an exact integer within the signed 64-bit range.
        """
        self._expect(AttributeType.INTEGER)
        value = self.value
        if isinstance(value, bool):
            raise CastError()
        if isinstance(value, int):
            if not INT64_MIN <= value <= INT64_MAX:
                raise CastError("integer out of range")
            return value
        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                raise CastError(f"'{value}' is not an integer")
            if not float(INT64_MIN) <= value < float(2**63):
                raise CastError("integer out of range")
            return int(value)
        raise CastError()

    def get_as_boolean(self) -> bool:
        """Return the value of a Boolean attribute, without any coercion."""
        self._expect(AttributeType.BOOLEAN)
        if not isinstance(self.value, bool):
            raise CastError()
        return self.value

    def get_as_geo_point(self) -> GeoPoint:
        """Return the value of a geo:point attribute."""
        self._expect(AttributeType.GEO_POINT)
        if not isinstance(self.value, GeoPoint):
            raise CastError("geo:point attribute does not contain a geo point")
        return self.value


class Metadata(TypedValue):
    """Optional annotation of an attribute. Metadata has no nested metadata."""

    @model_validator(mode="after")
    def decode_typed_value(self) -> "Metadata":
        """Decode the value with the metadata encodings."""
        self.value = decode_metadata_value(self.type, self.value)
        return self

    @model_serializer(mode="plain")
    def serialize_document(self) -> dict[str, Any]:
        return self._document()


class Attribute(TypedValue):
    """A named property of a context entity.

    The name is not part of the attribute: it is the key of the attribute in
    the owning entity.
    """

    metadata: dict[str, Metadata] = Field(
        default_factory=dict, description="Metadata keyed by name"
    )

    @field_validator("metadata", mode="before")
    @classmethod
    def validate_metadata(cls, v: Any) -> Any:
        """Treat a null metadata object as empty."""
        return {} if v is None else v

    @model_validator(mode="after")
    def decode_typed_value(self) -> "Attribute":
        """Decode the value with the full attribute type registry."""
        self.value = decode_value(self.type, self.value)
        return self

    @model_serializer(mode="plain")
    def serialize_document(self) -> dict[str, Any]:
        document = self._document()
        if self.metadata:
            document["metadata"] = {
                name: metadata.model_dump() for name, metadata in self.metadata.items()
            }
        return document

    @classmethod
    def new(
        cls,
        attribute_type: str,
        value: Any,
        metadata: Mapping[str, Metadata] | None = None,
    ) -> "Attribute":
        """Build an attribute from an already typed value.

        Raises:
            InvalidValueError: If the value does not fit the type
        """
        try:
            return cls(type=attribute_type, value=value, metadata=dict(metadata or {}))
        except ValidationError as e:
            raise InvalidValueError(
                f"Invalid value for {attribute_type} attribute: {e}"
            ) from e

    def get_as_date_time(self) -> datetime:
        """Return the value of a DateTime attribute."""
        self._expect(AttributeType.DATE_TIME)
        if not isinstance(self.value, datetime):
            raise CastError("DateTime attribute does not contain a time value")
        return self.value

    def get_as_geo_json(self) -> Any:
        """Return the geometry of a geo:json attribute."""
        self._expect(AttributeType.GEO_JSON)
        if not is_geometry(self.value):
            raise CastError("geo:json attribute does not contain a geometry")
        return self.value

    def decode_structured_value(self, target: type[T]) -> T:
        """Copy a StructuredValue into a caller supplied shape.

        Values are never coerced between JSON types, so ``"1"`` does not
        fit an ``int`` field.

        Args:
            target: Any type pydantic can validate, such as a model, a
                dataclass, a TypedDict or ``list[str]``

        Raises:
            TypeMismatchError: If the attribute is not a StructuredValue
            DecodeError: If the value does not fit the target shape
        """
        self._expect(AttributeType.STRUCTURED_VALUE)
        try:
            return TypeAdapter(target).validate_json(to_json(self.value), strict=True)
        except ValidationError as e:
            raise DecodeError(
                f"StructuredValue does not fit {getattr(target, '__name__', target)}: {e}"
            ) from e
