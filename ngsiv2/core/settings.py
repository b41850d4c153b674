"""Library settings and configuration."""

from functools import lru_cache
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables prefixed with ``NGSI_``."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="NGSI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(
        default="NGSIv2 Notification Receiver", description="Application name"
    )
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=8080, description="Port to bind to")

    # Logging
    log_level: str = Field(default="INFO", description="Root logger level")

    # Notifications
    notification_path: str = Field(
        default="/notify", description="Path receiving subscription notifications"
    )
    notification_max_body_bytes: int = Field(
        default=8 * 1024 * 1024,
        gt=0,
        description="Largest accepted notification payload (broker limit is 8MB)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
