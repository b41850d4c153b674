"""Encode and decode broker documents.

These are the entry points used when building request bodies and parsing
response or notification bodies. Decoding failures of any kind surface as
``DecodeError``.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError
from pydantic_core import from_json

from .batch_model import BatchQuery, BatchUpdate
from .entity_model import Entity
from .errors import DecodeError
from .notification_model import Notification
from .subscription_model import Subscription


def _load_json(raw: str | bytes) -> Any:
    try:
        return from_json(raw)
    except ValueError as e:
        raise DecodeError(f"Invalid JSON document: {e}") from e


def encode_entity(entity: Entity) -> dict[str, Any]:
    """Encode an entity as a flat document."""
    return entity.model_dump(by_alias=True)


def encode_entity_json(entity: Entity) -> str:
    return entity.model_dump_json(by_alias=True)


def decode_entity(document: Mapping[str, Any]) -> Entity:
    """Decode a flat entity document.

    Raises:
        DecodeError: If the document or one of its attributes is malformed
    """
    if not isinstance(document, Mapping):
        raise DecodeError(f"Entity document must be an object, got {type(document).__name__}")
    try:
        return Entity.model_validate(document)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def decode_entity_json(raw: str | bytes) -> Entity:
    return decode_entity(_load_json(raw))


def decode_entities(documents: Iterable[Mapping[str, Any]]) -> list[Entity]:
    """Decode a list of entity documents, failing on the first bad one."""
    return [decode_entity(document) for document in documents]


def decode_entities_json(raw: str | bytes) -> list[Entity]:
    documents = _load_json(raw)
    if not isinstance(documents, list):
        raise DecodeError("Entity list document must be an array")
    return decode_entities(documents)


def encode_subscription(subscription: Subscription) -> dict[str, Any]:
    """Encode a subscription, leaving out every unset field."""
    return subscription.model_dump(mode="json", by_alias=True, exclude_none=True)


def decode_subscription(document: Mapping[str, Any]) -> Subscription:
    try:
        return Subscription.model_validate(document)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def decode_subscription_json(raw: str | bytes) -> Subscription:
    return decode_subscription(_load_json(raw))


def decode_notification(document: Mapping[str, Any]) -> Notification:
    """Decode a notification document.

    Raises:
        DecodeError: If the document or any entity in it is malformed
    """
    if not isinstance(document, Mapping):
        raise DecodeError("Notification document must be an object")
    try:
        return Notification.model_validate(document)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def decode_notification_json(raw: str | bytes) -> Notification:
    return decode_notification(_load_json(raw))


def encode_batch_update(batch: BatchUpdate) -> dict[str, Any]:
    return batch.model_dump(mode="json", by_alias=True)


def encode_batch_query(query: BatchQuery) -> dict[str, Any]:
    return query.model_dump(mode="json", by_alias=True, exclude_none=True)
