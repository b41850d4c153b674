"""Protocol for notification receivers."""

from typing import Protocol

from ngsiv2.models.entity_model import Entity


class NotificationReceiver(Protocol):
    """Receives the entities notified for a subscription.

    Receivers are called in registration order, once per accepted
    notification.
    """

    def receive(self, subscription_id: str, entities: list[Entity]) -> None:
        """Handle one notification.

        Args:
            subscription_id: Id of the subscription that fired
            entities: Decoded entities carried by the notification
        """
        ...
