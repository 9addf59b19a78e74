"""Tests for settings loading and the process-wide client."""

import pytest

from immich_core import client as client_module
from immich_core.config import get_settings
from immich_core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("IMMICH_INSTANCE_URL", "IMMICH_API_KEY", "CACHE_TTL", "REQUEST_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    client_module.reset_client()
    yield
    get_settings.cache_clear()
    client_module.reset_client()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("IMMICH_INSTANCE_URL", "https://photos.example.com/")
    monkeypatch.setenv("IMMICH_API_KEY", "k")
    monkeypatch.setenv("CACHE_TTL", "60")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.immich_instance_url == "https://photos.example.com"
    assert settings.immich_api_key == "k"
    assert settings.cache_ttl == 60
    assert settings.request_timeout == 30.0
    assert settings.log_level == "DEBUG"


def test_settings_are_loaded_once(monkeypatch):
    monkeypatch.setenv("IMMICH_INSTANCE_URL", "https://a.example.com")
    monkeypatch.setenv("IMMICH_API_KEY", "k")
    first = get_settings()
    monkeypatch.setenv("IMMICH_INSTANCE_URL", "https://b.example.com")

    assert get_settings() is first


def test_missing_settings_raise_configuration_error(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigurationError) as exc_info:
        get_settings()

    assert "IMMICH_API_KEY" in str(exc_info.value)


def test_negative_ttl_is_rejected(monkeypatch):
    monkeypatch.setenv("IMMICH_INSTANCE_URL", "https://a.example.com")
    monkeypatch.setenv("IMMICH_API_KEY", "k")
    monkeypatch.setenv("CACHE_TTL", "-1")

    with pytest.raises(ConfigurationError):
        get_settings()


async def test_get_client_is_a_process_singleton(monkeypatch):
    monkeypatch.setenv("IMMICH_INSTANCE_URL", "https://a.example.com/")
    monkeypatch.setenv("IMMICH_API_KEY", "k")
    monkeypatch.setenv("CACHE_TTL", "42")

    first = client_module.get_client()

    assert client_module.get_client() is first
    assert first.base_url == "https://a.example.com"
    assert first.cache.ttl == 42
    await first.aclose()
