"""Tests for environment-driven settings in newsdesk.config."""

from __future__ import annotations

import pytest

from newsdesk.config import (
    CATEGORIES,
    LANGUAGES,
    SOURCES_BY_LANGUAGE,
    category_for_section,
    load_api_settings,
)

_ENV_NAMES = (
    "NEWS_API_KEY",
    "NEWS_API_PROXY_URL",
    "NEWS_API_BASE_URL",
    "NEWS_CACHE_TTL",
    "NEWS_REQUEST_TIMEOUT",
    "NEWS_RETRY_ATTEMPTS",
    "NEWS_RETRY_BACKOFF",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment() -> None:
    settings = load_api_settings()
    assert settings.api_key is None
    assert settings.proxy_url is None
    assert settings.base_url == "https://newsapi.org/v2"
    assert settings.cache_ttl_seconds == 300
    assert settings.retry_attempts == 3


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEWS_API_KEY", " abc ")
    monkeypatch.setenv("NEWS_API_BASE_URL", "https://mirror.example.com/v2/")
    monkeypatch.setenv("NEWS_CACHE_TTL", "0")
    monkeypatch.setenv("NEWS_RETRY_ATTEMPTS", "five")
    monkeypatch.setenv("NEWS_RETRY_BACKOFF", "1.5")
    settings = load_api_settings()
    assert settings.api_key == "abc"
    assert settings.base_url == "https://mirror.example.com/v2"
    assert settings.cache_ttl_seconds == 1
    assert settings.retry_attempts == 3
    assert settings.retry_backoff_seconds == 1.5


def test_describe_masks_credential(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEWS_API_KEY", "abc")
    settings = load_api_settings()
    assert settings.describe()["NEWS_API_KEY"] == "***"
    assert "abc" not in repr(settings)


def test_every_language_has_sources() -> None:
    assert set(LANGUAGES) == set(SOURCES_BY_LANGUAGE)
    for code, sources in SOURCES_BY_LANGUAGE.items():
        assert all(source.language == code for source in sources)


def test_category_sections_map_to_known_categories() -> None:
    assert category_for_section("shows") == "entertainment"
    assert category_for_section("Weather") == "science"
    assert category_for_section("unknown") is None
    assert category_for_section("all") in CATEGORIES
