"""Tests for settings loading."""

from collections.abc import Generator

import pytest

from ngsiv2.core.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch):
    """Test default notification settings."""
    monkeypatch.delenv("NGSI_NOTIFICATION_PATH", raising=False)
    monkeypatch.delenv("NGSI_NOTIFICATION_MAX_BODY_BYTES", raising=False)

    settings = Settings(_env_file=None)

    assert settings.notification_path == "/notify"
    assert settings.notification_max_body_bytes == 8 * 1024 * 1024
    assert settings.port == 8080


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    """Test that NGSI_ prefixed variables override defaults."""
    monkeypatch.setenv("NGSI_NOTIFICATION_PATH", "/v2/notify")
    monkeypatch.setenv("NGSI_NOTIFICATION_MAX_BODY_BYTES", "1024")
    monkeypatch.setenv("NGSI_DEBUG", "true")

    settings = get_settings()

    assert settings.notification_path == "/v2/notify"
    assert settings.notification_max_body_bytes == 1024
    assert settings.debug is True


def test_get_settings_is_cached():
    """Test that get_settings returns the same instance."""
    assert get_settings() is get_settings()


def test_body_limit_must_be_positive():
    """Test that a zero body limit is rejected."""
    with pytest.raises(ValueError):
        Settings(notification_max_body_bytes=0)
