"""Pytest configuration and shared fixtures for all tests.

This module provides function-scoped fixtures for:
- Broker documents as received from the wire
- Entities built through the typed setters
"""

from datetime import datetime, timezone
from typing import Any

import pytest

from ngsiv2.models import Entity, GeoPoint


@pytest.fixture
def room_document() -> dict[str, Any]:
    """Provide a Room entity document with one attribute of each common type."""
    return {
        "id": "Room1",
        "description": {"metadata": {}, "type": "Text", "value": "A wonderful sensor"},
        "version": {"metadata": {}, "type": "Number", "value": 12.345},
        "pressure": {"metadata": {}, "type": "Integer", "value": 720},
        "temperature": {"metadata": {}, "type": "Float", "value": 23},
        "dirty": {"metadata": {}, "type": "Boolean", "value": False},
        "hot": {"metadata": {}, "type": "Boolean", "value": True},
        "location": {
            "metadata": {},
            "type": "geo:point",
            "value": "43.8030095, 11.2385831",
        },
        "lastUpdate": {
            "metadata": {},
            "type": "DateTime",
            "value": "2018-07-24T07:21:24.238Z",
        },
        "roomDimensions": {
            "metadata": {},
            "type": "RoomDimensions",
            "value": {"width": 5, "height": 5, "depth": 5},
        },
        "type": "Room",
    }


@pytest.fixture
def last_update() -> datetime:
    """Provide a timestamp with millisecond precision."""
    return datetime(2024, 7, 24, 7, 21, 24, 238000, tzinfo=timezone.utc)


@pytest.fixture
def office(last_update: datetime) -> Entity:
    """Provide an Office entity built through the typed setters."""
    entity = Entity.create("openspace", "Office")
    entity.set_attribute_as_string("name", "Phoops HQ")
    entity.set_attribute_as_text("description", "very hot historical building")
    entity.set_attribute_as_number("sqmeters", 200.40)
    entity.set_attribute_as_float("temperature", 34.2)
    entity.set_attribute_as_integer("people", 11)
    entity.set_attribute_as_boolean("dirty", False)
    entity.set_attribute_as_boolean("hot", True)
    entity.set_attribute_as_date_time("lastUpdate", last_update)
    entity.set_attribute_as_geo_point("location", GeoPoint(latitude=4.1, longitude=2.3))
    return entity
