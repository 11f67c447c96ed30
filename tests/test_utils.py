"""Unit tests for utility functions in newsdesk.utils.

Covers:
- read_optional_env
- sanitize_env_value
- detect_host_locale
- parse_iso8601_utc
"""

from __future__ import annotations

from datetime import timezone

import pytest

from newsdesk.utils import (
    detect_host_locale,
    parse_iso8601_utc,
    read_optional_env,
    sanitize_env_value,
)


def test_read_optional_env_returns_trimmed_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment value should be trimmed and returned when non-blank."""
    monkeypatch.setenv("TEST_ENV_VAR", "  value  ")
    assert read_optional_env("TEST_ENV_VAR") == "value"


def test_read_optional_env_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset environment variable should yield None."""
    monkeypatch.delenv("MISSING_ENV_VAR", raising=False)
    assert read_optional_env("MISSING_ENV_VAR") is None


def test_read_optional_env_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank environment variable should yield None."""
    monkeypatch.setenv("BLANK_ENV_VAR", "   ")
    assert read_optional_env("BLANK_ENV_VAR") is None


def test_sanitize_env_value_masks_credentials() -> None:
    assert sanitize_env_value("NEWS_API_KEY", "abc123") == "***"
    assert sanitize_env_value("NEWS_API_KEY", None) is None


def test_sanitize_env_value_truncates_long_values() -> None:
    value = "https://proxy.example.com/" + "x" * 100
    sanitized = sanitize_env_value("NEWS_API_PROXY_URL", value)
    assert sanitized is not None
    assert len(sanitized) == 80
    assert sanitized.endswith("...")


def test_detect_host_locale_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LC_ALL", "")
    monkeypatch.setenv("LC_MESSAGES", "")
    monkeypatch.setenv("LANG", "pt_BR.UTF-8")
    assert detect_host_locale() == "pt_BR.UTF-8"


def test_detect_host_locale_skips_posix_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LC_ALL", "C")
    monkeypatch.setenv("LC_MESSAGES", "")
    monkeypatch.setenv("LANG", "de_DE.UTF-8")
    assert detect_host_locale() == "de_DE.UTF-8"


def test_parse_iso8601_utc_z_suffixed() -> None:
    """Z-suffixed ISO-8601 strings should parse as UTC-aware datetimes."""
    dt = parse_iso8601_utc("2026-10-18T08:00:00Z")
    assert dt is not None
    assert dt.tzinfo == timezone.utc


def test_parse_iso8601_utc_none_returns_none() -> None:
    """None input should yield None."""
    assert parse_iso8601_utc(None) is None


def test_parse_iso8601_utc_invalid_returns_none() -> None:
    """Invalid ISO-8601 text should yield None."""
    assert parse_iso8601_utc("definitely-not-iso8601") is None


def test_parse_iso8601_utc_naive_becomes_aware_utc() -> None:
    """Naive timestamps should be normalized to UTC-aware datetimes."""
    dt = parse_iso8601_utc("2025-01-01T12:00:00")
    assert dt is not None
    assert dt.tzinfo == timezone.utc
