"""Geographic values carried by attributes.

``geo:point`` attributes hold a ``GeoPoint`` encoded as the single string
``"<lat>, <lon>"``; ``geo:json`` attributes hold a GeoJSON geometry validated
by geojson-pydantic.
"""

from typing import Annotated, Any, Union

from geojson_pydantic import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from pydantic import ConfigDict, Field, TypeAdapter, ValidationError

from .base_model import NgsiBaseModel
from .errors import DecodeError

Geometry = Annotated[
    Union[
        Point,
        MultiPoint,
        LineString,
        MultiLineString,
        Polygon,
        MultiPolygon,
        GeometryCollection,
    ],
    Field(discriminator="type"),
]

GEOMETRY_TYPES: tuple[type, ...] = (
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
)

_geometry_adapter: TypeAdapter[Any] = TypeAdapter(Geometry)


def _format_coordinate(value: float) -> str:
    # whole degrees are written without a trailing ".0"
    return str(int(value)) if float(value).is_integer() else str(value)


class GeoPoint(NgsiBaseModel):
    """A WGS84 location given as latitude and longitude."""

    model_config = ConfigDict(frozen=True)  # pyright: ignore[reportUnannotatedClassAttribute]

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    @classmethod
    def parse(cls, value: str) -> "GeoPoint":
        """Parse the ``"<lat>, <lon>"`` representation.

        Raises:
            DecodeError: If the string is not two comma separated floats
        """
        tokens = value.split(",")
        if len(tokens) != 2:
            raise DecodeError(f"Invalid geo:point value: '{value}'")
        try:
            latitude = float(tokens[0].strip())
        except ValueError:
            raise DecodeError(f"Invalid latitude value: '{tokens[0]}'") from None
        try:
            longitude = float(tokens[1].strip())
        except ValueError:
            raise DecodeError(f"Invalid longitude value: '{tokens[1]}'") from None
        return cls(latitude=latitude, longitude=longitude)

    def to_document(self) -> str:
        """Format as ``"<lat>, <lon>"`` with a comma-space separator."""
        latitude = _format_coordinate(self.latitude)
        longitude = _format_coordinate(self.longitude)
        return f"{latitude}, {longitude}"


def is_geometry(value: Any) -> bool:
    return isinstance(value, GEOMETRY_TYPES)


def parse_geometry(document: Any) -> Any:
    """Validate a GeoJSON geometry object.

    Already built geometry models are returned unchanged.

    Raises:
        DecodeError: If the document is not a valid geometry
    """
    if is_geometry(document):
        return document
    if not isinstance(document, dict):
        raise DecodeError(f"Invalid geo:json value: '{document}'")
    try:
        return _geometry_adapter.validate_python(document)
    except ValidationError as e:
        raise DecodeError(f"Invalid geo:json value: {e}") from e


def geometry_to_document(geometry: Any) -> dict[str, Any]:
    """Dump a geometry model as a plain GeoJSON object."""
    return geometry.model_dump(mode="json", exclude_none=True)
