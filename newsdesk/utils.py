"""Utility helpers shared across NewsDesk modules.

Updates: v0.1 - 2026-10-18 - Seeded module with environment, locale and timestamp helpers.
"""

from __future__ import annotations

import locale
import os
import re
from datetime import datetime, timezone
from typing import Optional

_SENSITIVE_ENV_PATTERN = re.compile(
    r"(KEY|TOKEN|SECRET|PASSWORD|API_KEY)$", re.IGNORECASE
)
_LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")


def read_optional_env(name: str) -> Optional[str]:
    """Return trimmed environment variable or ``None`` when unset/blank."""

    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def sanitize_env_value(name: str, value: Optional[str]) -> Optional[str]:
    """Mask sensitive environment variable values for safe logging.

    Returns:
        - "***" for sensitive keys with a value
        - None for empty values
        - Truncated long values (> 80 chars)
        - Original value otherwise
    """
    if value is None:
        return None
    if _SENSITIVE_ENV_PATTERN.search(name) or any(
        token in name.upper() for token in ("KEY", "TOKEN", "SECRET", "PASSWORD")
    ):
        return "***" if value else None
    if len(value) > 80:
        return value[:77] + "..."
    return value


def detect_host_locale() -> Optional[str]:
    """Return the process locale tag (for example ``pt_BR``) when one is set."""

    for name in _LOCALE_ENV_VARS:
        value = read_optional_env(name)
        if value and value not in ("C", "POSIX"):
            return value.split(":", 1)[0]
    try:
        tag, _encoding = locale.getlocale()
    except ValueError:
        return None
    return tag or None


def parse_iso8601_utc(value: Optional[str]) -> Optional[datetime]:
    """Parse ISO-8601 strings into aware UTC datetimes."""

    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        timestamp = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


__all__ = [
    "detect_host_locale",
    "parse_iso8601_utc",
    "read_optional_env",
    "sanitize_env_value",
]
