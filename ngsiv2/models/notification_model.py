"""Notification model.

A notification is the document the broker posts to a subscriber: the
subscription id and the entities that triggered it.
"""

from pydantic import Field

from .base_model import NgsiBaseModel
from .entity_model import Entity


class Notification(NgsiBaseModel):
    """Payload of a subscription notification."""

    subscription_id: str = Field(
        default="", alias="subscriptionId", description="Notifying subscription"
    )
    data: list[Entity] = Field(
        default_factory=list, description="Entities that triggered the notification"
    )
