"""Tests for encoding and decoding entity documents.

These tests verify the merge of fixed fields and attributes into one flat
document, the split back into both parts, and the handling of malformed
documents.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import pytest
from geojson_pydantic import Point

from ngsiv2.models import (
    Attribute,
    DecodeError,
    Entity,
    GeoPoint,
    decode_entities_json,
    decode_entity,
    decode_entity_json,
    decode_notification_json,
    encode_entity,
    encode_entity_json,
)


@dataclass
class Dog:
    name: str
    breed: str
    age: int
    weight: float


class TestDecodeEntity:
    """Tests for decode_entity."""

    def test_fixed_fields(self, room_document: dict[str, Any]) -> None:
        entity = decode_entity(room_document)

        assert entity.id == "Room1"
        assert entity.type == "Room"
        assert "id" not in entity.attributes
        assert "type" not in entity.attributes

    def test_typed_getters(self, room_document: dict[str, Any]) -> None:
        entity = decode_entity(room_document)

        assert entity.get_attribute_as_string("description") == "A wonderful sensor"
        assert entity.get_attribute_as_float("version") == 12.345
        assert entity.get_attribute_as_integer("pressure") == 720
        assert entity.get_attribute_as_float("temperature") == 23.0
        assert entity.get_attribute_as_boolean("dirty") is False
        assert entity.get_attribute_as_boolean("hot") is True

        location = entity.get_attribute_as_geo_point("location")
        assert location.latitude == 43.8030095
        assert location.longitude == 11.2385831

        last_update = entity.get_attribute_as_date_time("lastUpdate")
        assert last_update.day == 24
        assert last_update.minute == 21

    def test_unknown_type_is_kept(self, room_document: dict[str, Any]) -> None:
        entity = decode_entity(room_document)

        dimensions = entity.get_attribute("roomDimensions")
        assert dimensions.type == "RoomDimensions"
        assert dimensions.value == {"width": 5, "height": 5, "depth": 5}

    def test_missing_id_and_type_default_to_empty(self) -> None:
        entity = decode_entity({"temperature": {"type": "Float", "value": 1.5}})

        assert entity.id == ""
        assert entity.type == ""
        assert entity.get_attribute_as_float("temperature") == 1.5

    def test_null_attribute_type_is_empty(self) -> None:
        entity = decode_entity(
            {"id": "Room1", "notes": {"type": None, "value": "quiet"}}
        )

        assert entity.get_attribute("notes").type == ""
        assert encode_entity(entity)["notes"] == {"value": "quiet"}

    def test_geo_point_array_is_rejected(self) -> None:
        document = {
            "id": "Room1",
            "type": "Room",
            "location": {"type": "geo:point", "value": [43.8030095, 11.2385831]},
        }

        with pytest.raises(DecodeError, match="location"):
            decode_entity(document)

    def test_geo_json(self) -> None:
        document = {
            "id": "Bcn-Welt",
            "type": "Room",
            "location": {
                "type": "geo:json",
                "value": {"type": "Point", "coordinates": [-4.754444, 41.640833]},
            },
        }

        geometry = decode_entity(document).get_attribute_as_geo_json("location")

        assert isinstance(geometry, Point)
        assert geometry.coordinates[1] == 41.640833

    def test_nasty_boolean_decodes_but_does_not_cast(self) -> None:
        """A Boolean tag holding a string fails only when read."""
        entity = decode_entity(
            {"id": "Room1", "hot": {"type": "Boolean", "value": "true"}}
        )

        assert entity.get_attribute("hot").value == "true"
        with pytest.raises(TypeError):
            entity.get_attribute_as_boolean("hot")

    def test_invalid_attribute_name_is_tolerated(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        document = {
            "id": "Room1",
            "type": "Room",
            "bad name": {"type": "Float", "value": 1.0},
        }

        with caplog.at_level(logging.WARNING, logger="ngsiv2.models.entity_model"):
            entity = decode_entity(document)

        assert entity.get_attribute_as_float("bad name") == 1.0
        assert "wrong field syntax" in caplog.text

    def test_builtin_attributes(self) -> None:
        entity = decode_entity(
            {
                "id": "Room1",
                "type": "Room",
                "dateCreated": {"type": "DateTime", "value": "2019-12-09T11:45:12Z"},
                "dateModified": {
                    "type": "DateTime",
                    "value": "2019-12-10T08:00:00.5Z",
                },
                "dateExpires": {"type": "DateTime", "value": "2040-01-01T14:00:00Z"},
            }
        )

        assert entity.get_date_created() == datetime(
            2019, 12, 9, 11, 45, 12, tzinfo=timezone.utc
        )
        assert entity.get_date_modified().microsecond == 500000
        assert entity.get_date_expires().year == 2040

    def test_non_object_document_is_rejected(self) -> None:
        with pytest.raises(DecodeError):
            decode_entity(["Room1"])  # type: ignore[arg-type]

    def test_non_object_attribute_is_rejected(self) -> None:
        with pytest.raises(DecodeError):
            decode_entity({"id": "Room1", "temperature": 23})

    def test_non_string_id_is_rejected(self) -> None:
        with pytest.raises(DecodeError):
            decode_entity({"id": 42})


class TestEncodeEntity:
    """Tests for encode_entity."""

    def test_flat_document(self, office: Entity) -> None:
        document = encode_entity(office)

        assert document["id"] == "openspace"
        assert document["type"] == "Office"
        assert document["name"] == {"type": "String", "value": "Phoops HQ"}
        assert document["people"] == {"type": "Integer", "value": 11}
        assert document["location"] == {"type": "geo:point", "value": "4.1, 2.3"}
        assert document["lastUpdate"] == {
            "type": "DateTime",
            "value": "2024-07-24T07:21:24.238Z",
        }

    def test_empty_type_is_omitted(self) -> None:
        document = encode_entity(Entity(id="Room1"))

        assert document == {"id": "Room1"}

    def test_fixed_field_wins_collision(self) -> None:
        """An attribute smuggled under a fixed name never reaches the output."""
        entity = Entity.create("Room1", "Room")
        entity._attributes["id"] = Attribute(type="Text", value="shadow")

        assert encode_entity(entity)["id"] == "Room1"

    def test_json_document(self, office: Entity) -> None:
        document = json.loads(encode_entity_json(office))

        assert document == encode_entity(office)
        assert str(office) == encode_entity_json(office)

    def test_geo_json_is_written_as_geojson(self) -> None:
        entity = Entity.create("Bcn-Welt", "Room")
        entity.set_attribute_as_geo_json(
            "location", {"type": "Point", "coordinates": [-4.75, 41.64]}
        )

        assert encode_entity(entity)["location"] == {
            "type": "geo:json",
            "value": {"type": "Point", "coordinates": [-4.75, 41.64]},
        }


class TestRoundTrip:
    """Tests for encoding then decoding entities."""

    def test_round_trip(self, office: Entity) -> None:
        office.set_attribute_as_geo_json(
            "area",
            {
                "type": "Polygon",
                "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 0.0]]],
            },
        )
        office.set_attribute_as_structured_value(
            "mascot", Dog(name="Rex", breed="Beagle", age=4, weight=11.5)
        )

        decoded = decode_entity_json(encode_entity_json(office))

        assert decoded == office
        assert decoded.attribute_names() == office.attribute_names()
        assert decoded.decode_structured_value_attribute("mascot", Dog) == Dog(
            name="Rex", breed="Beagle", age=4, weight=11.5
        )
        assert decoded.get_attribute_as_geo_point("location") == GeoPoint(
            latitude=4.1, longitude=2.3
        )

    def test_decoded_document_re_encodes_unchanged(
        self, room_document: dict[str, Any]
    ) -> None:
        encoded = encode_entity(decode_entity(room_document))

        assert encoded["roomDimensions"] == {
            "type": "RoomDimensions",
            "value": {"width": 5, "height": 5, "depth": 5},
        }
        assert encoded["location"]["value"] == "43.8030095, 11.2385831"
        assert encoded["lastUpdate"]["value"] == "2018-07-24T07:21:24.238Z"


class TestJsonDocuments:
    """Tests for the JSON text entry points."""

    def test_invalid_json(self) -> None:
        with pytest.raises(DecodeError):
            decode_entity_json('{"id": "Room1",')

    def test_entity_list(self, room_document: dict[str, Any]) -> None:
        entities = decode_entities_json(json.dumps([room_document, {"id": "Room2"}]))

        assert [entity.id for entity in entities] == ["Room1", "Room2"]

    def test_entity_list_must_be_array(self, room_document: dict[str, Any]) -> None:
        with pytest.raises(DecodeError):
            decode_entities_json(json.dumps(room_document))

    def test_notification(self, room_document: dict[str, Any]) -> None:
        raw = json.dumps({"subscriptionId": "5de5", "data": [room_document]})

        notification = decode_notification_json(raw)

        assert notification.subscription_id == "5de5"
        assert notification.data[0].get_attribute_as_integer("pressure") == 720

    def test_notification_with_bad_entity(self) -> None:
        raw = json.dumps(
            {
                "subscriptionId": "5de5",
                "data": [{"id": "Room1", "location": {"type": "geo:point", "value": 1}}],
            }
        )

        with pytest.raises(DecodeError):
            decode_notification_json(raw)
