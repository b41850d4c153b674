"""Attribute types and their value encodings.

Every well-known attribute type has a decode step, turning the generic value
produced by a JSON parser into the Python representation held by an
attribute, and an encode step doing the inverse. Types without a registered
step, including types unknown to this module, keep their value verbatim.
"""

import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Any

from pydantic import AwareDatetime, TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from .errors import DecodeError
from .geo_model import GeoPoint, geometry_to_document, is_geometry, parse_geometry


class AttributeType(StrEnum):
    """Well-known attribute types."""

    STRING = "String"
    TEXT = "Text"
    NUMBER = "Number"
    FLOAT = "Float"
    INTEGER = "Integer"
    BOOLEAN = "Boolean"
    PERCENTAGE = "Percentage"
    DATE_TIME = "DateTime"
    GEO_POINT = "geo:point"
    GEO_LINE = "geo:line"
    GEO_POLYGON = "geo:polygon"
    GEO_BOX = "geo:box"
    GEO_JSON = "geo:json"
    STRUCTURED_VALUE = "StructuredValue"


# Builtin attributes maintained by the broker
DATE_CREATED_ATTRIBUTE_NAME = "dateCreated"
DATE_MODIFIED_ATTRIBUTE_NAME = "dateModified"
DATE_EXPIRES_ATTRIBUTE_NAME = "dateExpires"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,9})?(Z|[+-]\d{2}:\d{2})$"
)
_aware_datetime: TypeAdapter[datetime] = TypeAdapter(AwareDatetime)


def normalize_attribute_type(tag: str) -> str:
    """Return the AttributeType member for a known tag, the tag itself otherwise."""
    try:
        return AttributeType(tag)
    except ValueError:
        return tag


def ensure_aware(value: datetime) -> datetime:
    # naive datetimes are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_date_time(value: Any) -> datetime:
    """Parse an RFC 3339 timestamp.

    Raises:
        DecodeError: If the value is not an RFC 3339 string
    """
    if isinstance(value, datetime):
        return ensure_aware(value)
    if not isinstance(value, str) or not _RFC3339.match(value):
        raise DecodeError(f"Invalid DateTime value: '{value}'")
    try:
        return _aware_datetime.validate_python(value)
    except ValidationError as e:
        raise DecodeError(f"Invalid DateTime value: '{value}'") from e


def format_date_time(value: datetime) -> str:
    """Format a timestamp as RFC 3339 with at most millisecond precision.

    Trailing zeros of the fraction are dropped and UTC is written as ``Z``.
    The four-digit year bound holds by construction of ``datetime``.
    """
    value = ensure_aware(value)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    millis = value.microsecond // 1000
    if millis:
        text += f".{millis:03d}".rstrip("0")

    offset = value.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _decode_geo_point(value: Any) -> GeoPoint:
    if isinstance(value, GeoPoint):
        return value
    if not isinstance(value, str):
        raise DecodeError(f"Invalid geo:point value: '{value}'")
    return GeoPoint.parse(value)


def _encode_date_time(value: Any) -> Any:
    return format_date_time(value) if isinstance(value, datetime) else value


def _encode_geo_point(value: Any) -> Any:
    return value.to_document() if isinstance(value, GeoPoint) else value


def _encode_geometry(value: Any) -> Any:
    return geometry_to_document(value) if is_geometry(value) else value


_ATTRIBUTE_DECODERS: dict[str, Callable[[Any], Any]] = {
    AttributeType.DATE_TIME: parse_date_time,
    AttributeType.GEO_POINT: _decode_geo_point,
    AttributeType.GEO_JSON: parse_geometry,
    AttributeType.STRUCTURED_VALUE: to_jsonable_python,
}

# Metadata only understands plain values and geo:point
_METADATA_DECODERS: dict[str, Callable[[Any], Any]] = {
    AttributeType.GEO_POINT: _decode_geo_point,
}

_ENCODERS: dict[str, Callable[[Any], Any]] = {
    AttributeType.DATE_TIME: _encode_date_time,
    AttributeType.GEO_POINT: _encode_geo_point,
    AttributeType.GEO_JSON: _encode_geometry,
}


def decode_value(tag: str, value: Any) -> Any:
    """Decode an attribute value according to its type tag."""
    decoder = _ATTRIBUTE_DECODERS.get(tag)
    return value if decoder is None else decoder(value)


def decode_metadata_value(tag: str, value: Any) -> Any:
    """Decode a metadata value according to its type tag."""
    decoder = _METADATA_DECODERS.get(tag)
    return value if decoder is None else decoder(value)


def encode_value(tag: str, value: Any) -> Any:
    """Encode a value into its JSON-compatible document form."""
    encoder = _ENCODERS.get(tag)
    if encoder is not None:
        return encoder(value)
    return to_jsonable_python(value)
