"""Logging set-up for applications embedding the library."""

import logging

from .settings import Settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings.

    The library modules only create loggers; this is called by application
    entry points such as the notification receiver factory.
    """
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
