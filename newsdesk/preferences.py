"""Language and per-language source preferences.

Updates: v0.1 - 2026-10-18 - Moved language/source preference lookups behind an injectable store.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .config import (
    DEFAULT_LANGUAGE,
    LANGUAGE_KEY,
    LANGUAGES,
    PREFERENCE_NAMESPACE,
    SOURCES_KEY_PREFIX,
    sources_for_language,
)
from .models import LanguageProfile, NewsSource
from .settings_store import KeyValueStore
from .utils import detect_host_locale

logger = logging.getLogger(__name__)


class PreferenceResolver:
    """Resolve the active language and the sources selected for each language.

    Reads never raise: missing or malformed persisted values degrade to the
    locale/default language and to an empty source selection.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        host_locale: Callable[[], Optional[str]] = detect_host_locale,
        languages: Optional[Dict[str, LanguageProfile]] = None,
    ) -> None:
        self.store = store
        self._host_locale = host_locale
        self.languages = languages if languages is not None else LANGUAGES

    def get_active_language(self) -> LanguageProfile:
        saved = self.store.get(LANGUAGE_KEY)
        if saved and saved in self.languages:
            return self.languages[saved]

        try:
            host_tag = self._host_locale()
        except Exception as exc:  # pragma: no cover - platform locale lookup
            logger.debug("Host locale lookup failed: %s", exc)
            host_tag = None
        if host_tag:
            prefix = host_tag[:2].lower()
            if prefix in self.languages:
                return self.languages[prefix]

        return self.languages.get(DEFAULT_LANGUAGE) or next(iter(self.languages.values()))

    def set_active_language(self, code: str) -> bool:
        if not isinstance(code, str) or code not in self.languages:
            logger.debug("Refusing to store unknown language %r.", code)
            return False
        self.store.set(LANGUAGE_KEY, code)
        return True

    def get_selected_sources(self, code: str) -> Tuple[str, ...]:
        raw = self.store.get(SOURCES_KEY_PREFIX + code)
        if not raw:
            return ()
        try:
            data = json.loads(raw)
        except ValueError:
            logger.debug("Stored sources for %r are not valid JSON; ignoring.", code)
            return ()
        if not isinstance(data, list):
            logger.debug("Stored sources for %r are not a list; ignoring.", code)
            return ()
        return _ordered_unique(data)

    def set_selected_sources(self, code: str, sources: Iterable[str]) -> None:
        cleaned = list(_ordered_unique(sources))
        self.store.set(SOURCES_KEY_PREFIX + code, json.dumps(cleaned))

    def clear_all(self) -> None:
        for key in self.store.keys():
            if key.startswith(PREFERENCE_NAMESPACE):
                self.store.delete(key)

    def available_sources(self, code: Optional[str] = None) -> Tuple[NewsSource, ...]:
        return sources_for_language(code or self.get_active_language().code)


def _ordered_unique(items: Iterable[object]) -> Tuple[str, ...]:
    seen: List[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        value = item.strip()
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


__all__ = ["PreferenceResolver"]
