"""Context entity model.

An entity has a fixed identity (``id`` and ``type``) and an open set of
attributes. Both live side by side as top-level keys of one flat document:

    {"id": "Room1", "type": "Room",
     "temperature": {"type": "Float", "value": 23.5}}

Decoding runs in two passes. The first validates the fixed fields declared
on the model; the second takes every remaining key of the document as an
attribute. Encoding lays the attributes down first and the fixed fields over
them, so a fixed field wins a name collision.
"""

import builtins
import logging
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import (
    Field,
    ModelWrapValidatorHandler,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    ValidationError,
    model_serializer,
    model_validator,
)
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .attribute_model import Attribute, Metadata
from .attribute_type import (
    DATE_CREATED_ATTRIBUTE_NAME,
    DATE_EXPIRES_ATTRIBUTE_NAME,
    DATE_MODIFIED_ATTRIBUTE_NAME,
    INT64_MAX,
    INT64_MIN,
    AttributeType,
    ensure_aware,
)
from .base_model import NgsiBaseModel
from .errors import DecodeError, InvalidValueError, NotFoundError
from .geo_model import GeoPoint, parse_geometry
from .validation import (
    is_valid_field_syntax,
    is_valid_string,
    validate_attribute_name,
    validate_field_syntax,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Entity(NgsiBaseModel):
    """Represents a context entity, i.e. a thing in the NGSIv2 model.

    Use ``Entity.create`` to build a new entity with validated id and type;
    entities decoded from documents keep whatever the document carried.
    """

    id: str = Field(default="", description="Entity identifier")
    type: str = Field(default="", description="Entity type")

    _attributes: dict[str, Attribute] = PrivateAttr(default_factory=dict)

    @classmethod
    def fixed_field_names(cls) -> frozenset[str]:
        """Document keys owned by the fixed part of the entity."""
        return frozenset(
            field.alias or name for name, field in cls.model_fields.items()
        )

    @model_validator(mode="wrap")
    @classmethod
    def split_document(
        cls, data: Any, handler: ModelWrapValidatorHandler["Entity"]
    ) -> "Entity":
        """Decode fixed fields, then every remaining key as an attribute."""
        entity = handler(data)
        if not isinstance(data, Mapping):
            return entity

        fixed = cls.fixed_field_names()
        attributes: dict[str, Attribute] = {}
        for name, document in data.items():
            if name in fixed:
                continue
            if not is_valid_field_syntax(name):
                logger.warning("Attribute %r has wrong field syntax", name)
            if isinstance(document, Attribute):
                attributes[name] = document
                continue
            try:
                attributes[name] = Attribute.model_validate(document)
            except ValidationError as e:
                raise DecodeError(f"Invalid attribute '{name}': {e}") from e
        entity._attributes = attributes
        return entity

    @model_serializer(mode="wrap")
    def merge_document(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """Lay down the attributes, then the fixed fields over them."""
        document: dict[str, Any] = {
            name: attribute.model_dump() for name, attribute in self._attributes.items()
        }
        fixed: dict[str, Any] = handler(self)
        if not fixed.get("type"):
            fixed.pop("type", None)
        document.update(fixed)
        return document

    def __str__(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def create(cls, entity_id: str, entity_type: str) -> "Entity":
        """Create an entity with no attributes.

        Raises:
            FieldSyntaxError: If id or type violates field syntax
        """
        validate_field_syntax(entity_id)
        validate_field_syntax(entity_type)
        return cls(id=entity_id, type=entity_type)

    @property
    def attributes(self) -> Mapping[str, Attribute]:
        """Read-only view of the attributes keyed by name."""
        return MappingProxyType(self._attributes)

    def attribute_names(self) -> list[str]:
        return list(self._attributes)

    def get_attribute(self, name: str) -> Attribute:
        """Return the attribute called name.

        Raises:
            NotFoundError: If the entity has no such attribute
        """
        try:
            return self._attributes[name]
        except KeyError:
            raise NotFoundError(name) from None

    def delete_attribute(self, name: str) -> None:
        if name not in self._attributes:
            raise NotFoundError(name)
        del self._attributes[name]

    # Setters

    def set_attribute(
        self,
        name: str,
        attribute_type: str,
        value: Any,
        metadata: Mapping[str, Metadata] | None = None,
    ) -> None:
        """Set an attribute of any type, decoding the value like a document would.

        Raises:
            FieldSyntaxError: If the name violates field syntax
            AttributeNameError: If the name is reserved
            InvalidValueError: If the value does not fit the type
        """
        validate_attribute_name(name)
        self._attributes[name] = Attribute.new(attribute_type, value, metadata)

    def _set_checked(
        self,
        name: str,
        attribute_type: AttributeType,
        value: Any,
        metadata: Mapping[str, Metadata] | None,
    ) -> None:
        self._attributes[name] = Attribute.new(attribute_type, value, metadata)

    def _set_text(
        self,
        name: str,
        attribute_type: AttributeType,
        value: str,
        metadata: Mapping[str, Metadata] | None,
    ) -> None:
        validate_attribute_name(name)
        if not isinstance(value, str):
            raise InvalidValueError(f"Value for attribute {name} is not a string")
        if not is_valid_string(value):
            raise InvalidValueError(
                f"Invalid string value for attribute {name}, contains invalid chars"
            )
        self._set_checked(name, attribute_type, value, metadata)

    def set_attribute_as_string(
        self, name: str, value: str, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        self._set_text(name, AttributeType.STRING, value, metadata)

    def set_attribute_as_text(
        self, name: str, value: str, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        self._set_text(name, AttributeType.TEXT, value, metadata)

    def _set_number(
        self,
        name: str,
        attribute_type: AttributeType,
        value: float,
        metadata: Mapping[str, Metadata] | None,
    ) -> None:
        validate_attribute_name(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidValueError(f"Value for attribute {name} is not a number")
        self._set_checked(name, attribute_type, float(value), metadata)

    def set_attribute_as_number(
        self, name: str, value: float, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        self._set_number(name, AttributeType.NUMBER, value, metadata)

    def set_attribute_as_float(
        self, name: str, value: float, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        self._set_number(name, AttributeType.FLOAT, value, metadata)

    def set_attribute_as_integer(
        self, name: str, value: int, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        validate_attribute_name(name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidValueError(f"Value for attribute {name} is not an integer")
        if not INT64_MIN <= value <= INT64_MAX:
            raise InvalidValueError(f"Value for attribute {name} is out of range")
        self._set_checked(name, AttributeType.INTEGER, value, metadata)

    def set_attribute_as_boolean(
        self, name: str, value: bool, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        validate_attribute_name(name)
        if not isinstance(value, bool):
            raise InvalidValueError(f"Value for attribute {name} is not a boolean")
        self._set_checked(name, AttributeType.BOOLEAN, value, metadata)

    def set_attribute_as_date_time(
        self, name: str, value: datetime, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        validate_attribute_name(name)
        if not isinstance(value, datetime):
            raise InvalidValueError(f"Value for attribute {name} is not a datetime")
        self._set_checked(name, AttributeType.DATE_TIME, ensure_aware(value), metadata)

    def set_date_expires(self, value: datetime) -> None:
        """Set the builtin dateExpires attribute."""
        if not isinstance(value, datetime):
            raise InvalidValueError("dateExpires must be a datetime")
        self._set_checked(
            DATE_EXPIRES_ATTRIBUTE_NAME, AttributeType.DATE_TIME, ensure_aware(value), None
        )

    def set_attribute_as_geo_point(
        self, name: str, value: GeoPoint, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        validate_attribute_name(name)
        if not isinstance(value, GeoPoint):
            raise InvalidValueError(f"Value for attribute {name} is not a GeoPoint")
        self._set_checked(name, AttributeType.GEO_POINT, value, metadata)

    def set_attribute_as_geo_json(
        self, name: str, value: Any, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        """Set a geo:json attribute from a geometry model or a GeoJSON object."""
        validate_attribute_name(name)
        try:
            geometry = parse_geometry(value)
        except DecodeError as e:
            raise InvalidValueError(str(e)) from e
        self._set_checked(name, AttributeType.GEO_JSON, geometry, metadata)

    def set_attribute_as_structured_value(
        self, name: str, value: Any, metadata: Mapping[str, Metadata] | None = None
    ) -> None:
        """Set a StructuredValue attribute.

        Models, dataclasses, mappings and sequences are stored as their JSON
        document, the same shape a decoded entity holds.
        """
        validate_attribute_name(name)
        try:
            document = to_jsonable_python(value)
        except PydanticSerializationError as e:
            raise InvalidValueError(
                f"Value for attribute {name} is not serializable: {e}"
            ) from e
        self._set_checked(name, AttributeType.STRUCTURED_VALUE, document, metadata)

    # Typed getters

    def get_attribute_as_string(self, name: str) -> str:
        return self.get_attribute(name).get_as_string()

    def get_attribute_as_float(self, name: str) -> float:
        return self.get_attribute(name).get_as_float()

    def get_attribute_as_integer(self, name: str) -> int:
        return self.get_attribute(name).get_as_integer()

    def get_attribute_as_boolean(self, name: str) -> bool:
        return self.get_attribute(name).get_as_boolean()

    def get_attribute_as_date_time(self, name: str) -> datetime:
        return self.get_attribute(name).get_as_date_time()

    def get_attribute_as_geo_point(self, name: str) -> GeoPoint:
        return self.get_attribute(name).get_as_geo_point()

    def get_attribute_as_geo_json(self, name: str) -> Any:
        return self.get_attribute(name).get_as_geo_json()

    def decode_structured_value_attribute(
        self, name: str, target: builtins.type[T]
    ) -> T:
        """Copy the StructuredValue attribute called name into target."""
        return self.get_attribute(name).decode_structured_value(target)

    def get_date_created(self) -> datetime:
        return self.get_attribute_as_date_time(DATE_CREATED_ATTRIBUTE_NAME)

    def get_date_modified(self) -> datetime:
        return self.get_attribute_as_date_time(DATE_MODIFIED_ATTRIBUTE_NAME)

    def get_date_expires(self) -> datetime:
        return self.get_attribute_as_date_time(DATE_EXPIRES_ATTRIBUTE_NAME)
