"""Webhook receiving subscription notifications."""

from .app import create_app, run
from .receiver import NotificationReceiver
from .router import create_notification_router

__all__ = ["NotificationReceiver", "create_notification_router", "create_app", "run"]
