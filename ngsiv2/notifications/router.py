"""Notification webhook routes."""

import logging
from collections.abc import Sequence

from fastapi import APIRouter, HTTPException, Request, Response, status

from ngsiv2.core.settings import Settings, get_settings
from ngsiv2.models.codec import decode_notification_json
from ngsiv2.models.errors import DecodeError

from .receiver import NotificationReceiver

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


async def read_limited_body(request: Request, max_bytes: int) -> bytes:
    """Read the request body, refusing anything larger than max_bytes.

    Raises:
        HTTPException: 413 when the body is too large
    """
    too_large = HTTPException(
        status_code=status.HTTP_413_CONTENT_TOO_LARGE,
        detail="http: request body too large",
    )
    content_length = request.headers.get("content-length")
    if content_length is not None and content_length.isdigit():
        if int(content_length) > max_bytes:
            raise too_large

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise too_large
    return bytes(body)


def create_notification_router(
    receivers: Sequence[NotificationReceiver],
    settings: Settings | None = None,
) -> APIRouter:
    """Create the router accepting subscription notifications.

    Args:
        receivers: Receivers every decoded notification is dispatched to
        settings: Settings providing the path and the body size limit.
                  Defaults to the cached process settings.
    """
    settings = settings or get_settings()
    max_body_bytes = settings.notification_max_body_bytes
    router = APIRouter(tags=["notifications"])

    @router.post(settings.notification_path, status_code=status.HTTP_200_OK)
    async def receive_notification(request: Request) -> Response:
        """Decode a notification and hand it to every receiver."""
        content_type = request.headers.get("content-type")
        if content_type and not content_type.startswith(JSON_CONTENT_TYPE):
            logger.warning("Rejected notification with content type %s", content_type)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid notification payload",
            )

        body = await read_limited_body(request, max_body_bytes)
        try:
            notification = decode_notification_json(body)
        except DecodeError as e:
            logger.warning("Rejected malformed notification: %s", e)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        logger.debug(
            "Notification for subscription %s with %d entities",
            notification.subscription_id,
            len(notification.data),
        )
        for receiver in receivers:
            receiver.receive(notification.subscription_id, notification.data)
        return Response(status_code=status.HTTP_200_OK)

    return router
