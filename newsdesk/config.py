"""Configuration primitives and static data for NewsDesk.

This module centralises the language table, the per-language source catalog,
request limits and the environment-driven API settings so other layers can
import them without side effects beyond loading an optional ``.env`` file.

Updates: v0.1 - 2026-10-18 - Seeded language/source tables and API settings.
Updates: v0.2 - 2026-10-18 - Added retry, timeout and cache TTL environment overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv

from .models import LanguageProfile, NewsSource
from .utils import read_optional_env, sanitize_env_value

load_dotenv()

# --- Upstream API ------------------------------------------------------------------------------

NEWS_API_BASE_URL = "https://newsapi.org/v2"
HEADLINES_ENDPOINT = "top-headlines"
SEARCH_ENDPOINT = "everything"
API_KEY_HEADER = "X-Api-Key"
FORWARDING_ENDPOINT_PARAM = "endpoint"

# The upstream only lets free accounts page through the first hundred results.
MAX_REPORTABLE_RESULTS = 100
MAX_PAGE = 100
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_QUERY_LENGTH = 500

CATEGORIES: Tuple[str, ...] = (
    "general",
    "business",
    "entertainment",
    "health",
    "science",
    "sports",
    "technology",
)

# Section slugs shown by the front end and the upstream category they browse.
CATEGORY_SECTIONS: Dict[str, Dict[str, str]] = {
    "all": {"api": "general", "label": "All News"},
    "shows": {"api": "entertainment", "label": "Entertainment"},
    "sports": {"api": "sports", "label": "Sports"},
    "technology": {"api": "technology", "label": "Technology"},
    "weather": {"api": "science", "label": "Science & Weather"},
    "business": {"api": "business", "label": "Business"},
    "health": {"api": "health", "label": "Health"},
}

SORT_ORDERS: Tuple[str, ...] = ("relevancy", "popularity", "publishedAt")
DEFAULT_SORT_ORDER = "publishedAt"


# --- Languages and sources ---------------------------------------------------------------------

DEFAULT_LANGUAGE = "en"

LANGUAGES: Dict[str, LanguageProfile] = {
    "en": LanguageProfile("en", "English", "en", "us", ("us", "gb", "au", "ca")),
    "pt": LanguageProfile("pt", "Português", "pt", "pt", ("pt", "br")),
    "es": LanguageProfile("es", "Español", "es", "es", ("es", "mx", "ar")),
    "fr": LanguageProfile("fr", "Français", "fr", "fr", ("fr", "ca")),
    "de": LanguageProfile("de", "Deutsch", "de", "de", ("de", "at", "ch")),
    "it": LanguageProfile("it", "Italiano", "it", "it", ("it",)),
}

SOURCES_BY_LANGUAGE: Dict[str, Tuple[NewsSource, ...]] = {
    "en": (
        NewsSource("techcrunch", "TechCrunch", "Technology", "USA", "Breaking tech news and in-depth analysis", "en"),
        NewsSource("wired", "Wired", "Technology", "USA", "Technology, business, and culture", "en"),
        NewsSource("the-verge", "The Verge", "Technology", "USA", "Technology, science, and culture", "en"),
        NewsSource("hacker-news", "Hacker News", "Technology", "USA", "Community driven tech news", "en"),
        NewsSource("cnbc", "CNBC", "Business", "USA", "Business news and financial markets", "en"),
        NewsSource("bloomberg", "Bloomberg", "Business", "USA", "Global business and financial news", "en"),
        NewsSource("reuters", "Reuters", "Business", "UK", "Global news and information", "en"),
        NewsSource("espn", "ESPN", "Sports", "USA", "Sports news and analysis", "en"),
        NewsSource("bbc-sport", "BBC Sport", "Sports", "UK", "International sports coverage", "en"),
        NewsSource("entertainment-weekly", "Entertainment Weekly", "Entertainment", "USA", "Entertainment and celebrity news", "en"),
        NewsSource("bbc-entertainment", "BBC Entertainment", "Entertainment", "UK", "Entertainment and media", "en"),
        NewsSource("bbc-news", "BBC News", "General", "UK", "World news and current events", "en"),
        NewsSource("cnn", "CNN", "General", "USA", "Breaking news and world coverage", "en"),
        NewsSource("the-new-york-times", "The New York Times", "General", "USA", "News, politics, and analysis", "en"),
        NewsSource("the-guardian", "The Guardian", "General", "UK", "News, opinions, and investigations", "en"),
        NewsSource("associated-press", "Associated Press", "General", "USA", "Breaking news from around the world", "en"),
    ),
    "pt": (
        NewsSource("globo", "Globo", "General", "Brazil", "Notícias gerais, política e tecnologia", "pt"),
        NewsSource("folha-de-sao-paulo", "Folha de São Paulo", "General", "Brazil", "Notícias, análises e reportagens", "pt"),
        NewsSource("o-globo", "O Globo", "Business", "Brazil", "Notícias de negócios e mercado", "pt"),
        NewsSource("valor-economico", "Valor Econômico", "Business", "Brazil", "Análise econômica e financeira", "pt"),
        NewsSource("rtp", "RTP", "General", "Portugal", "Notícias de Portugal e do Mundo", "pt"),
        NewsSource("publico", "Público", "General", "Portugal", "Notícias, análise e investigação", "pt"),
        NewsSource("diario-noticias", "Diário de Notícias", "General", "Portugal", "Notícias diárias de Portugal", "pt"),
    ),
    "es": (
        NewsSource("el-mundo", "El Mundo", "General", "Spain", "Noticias de España y el mundo", "es"),
        NewsSource("el-pais", "El País", "General", "Spain", "Noticias, análisis y reportajes", "es"),
        NewsSource("expansion", "Expansión", "Business", "Spain", "Noticias económicas y empresariales", "es"),
        NewsSource("clarin", "Clarin", "General", "Argentina", "Noticias de Argentina y el mundo", "es"),
        NewsSource("la-nacion", "La Nación", "General", "Argentina", "Noticias políticas y generales", "es"),
    ),
    "fr": (
        NewsSource("le-monde", "Le Monde", "General", "France", "Actualités, analyses et enquêtes", "fr"),
        NewsSource("figaro", "Le Figaro", "General", "France", "Actualités françaises et internationales", "fr"),
        NewsSource("les-echos", "Les Échos", "Business", "France", "Actualités économiques et financières", "fr"),
        NewsSource("rts", "RTS", "General", "Switzerland", "Actualités suisses et internationales", "fr"),
    ),
    "de": (
        NewsSource("der-spiegel", "Der Spiegel", "General", "Germany", "Nachrichten, Politik und Kultur", "de"),
        NewsSource("die-zeit", "Die Zeit", "General", "Germany", "Nachrichten und Analysen", "de"),
        NewsSource("handelsblatt", "Handelsblatt", "Business", "Germany", "Nachrichten zu Wirtschaft und Finanzen", "de"),
    ),
    "it": (
        NewsSource("corriere-della-sera", "Corriere della Sera", "General", "Italy", "Notizie, cronaca e attualità", "it"),
        NewsSource("la-repubblica", "La Repubblica", "General", "Italy", "Notizie italiane e internazionali", "it"),
    ),
}


# --- Preference persistence --------------------------------------------------------------------

PREFERENCE_NAMESPACE = "newsdesk."
LANGUAGE_KEY = PREFERENCE_NAMESPACE + "language"
SOURCES_KEY_PREFIX = PREFERENCE_NAMESPACE + "sources."

_LOCAL_APPDATA = os.getenv("LOCALAPPDATA")
_XDG_CONFIG_HOME = os.getenv("XDG_CONFIG_HOME")

if os.name == "nt":
    base_dir = (
        Path(_LOCAL_APPDATA)
        if _LOCAL_APPDATA
        else Path.home() / "AppData" / "Local"
    )
else:
    base_dir = (
        Path(_XDG_CONFIG_HOME)
        if _XDG_CONFIG_HOME
        else Path.home() / ".config"
    )
_DEFAULT_SETTINGS_FILE = base_dir / "NewsDesk" / "newsdesk_settings.json"


def default_settings_path() -> Path:
    return Path(os.getenv("NEWS_APP_SETTINGS", str(_DEFAULT_SETTINGS_FILE)))


# --- Environment-driven API settings -----------------------------------------------------------

DEFAULT_CACHE_TTL_SECONDS = 300
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_BACKOFF_SECONDS = 0.5


def _read_int(name: str, default: int, minimum: int) -> int:
    raw = read_optional_env(name)
    if raw is None:
        return default
    try:
        return max(minimum, int(raw))
    except ValueError:
        return default


def _read_float(name: str, default: float, minimum: float) -> float:
    raw = read_optional_env(name)
    if raw is None:
        return default
    try:
        return max(minimum, float(raw))
    except ValueError:
        return default


@dataclass(frozen=True)
class ApiSettings:
    """Values resolved once at start-up from the environment."""

    api_key: Optional[str] = field(default=None, repr=False)
    proxy_url: Optional[str] = None
    base_url: str = NEWS_API_BASE_URL
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_backoff_seconds: float = DEFAULT_RETRY_BACKOFF_SECONDS

    def describe(self) -> Dict[str, Any]:
        """Return a log-safe view of the settings with the credential masked."""

        return {
            "NEWS_API_KEY": sanitize_env_value("NEWS_API_KEY", self.api_key),
            "NEWS_API_PROXY_URL": sanitize_env_value("NEWS_API_PROXY_URL", self.proxy_url),
            "NEWS_API_BASE_URL": self.base_url,
            "NEWS_CACHE_TTL": self.cache_ttl_seconds,
            "NEWS_REQUEST_TIMEOUT": self.request_timeout,
            "NEWS_RETRY_ATTEMPTS": self.retry_attempts,
            "NEWS_RETRY_BACKOFF": self.retry_backoff_seconds,
        }


def load_api_settings() -> ApiSettings:
    """Read API settings from the process environment."""

    return ApiSettings(
        api_key=read_optional_env("NEWS_API_KEY"),
        proxy_url=read_optional_env("NEWS_API_PROXY_URL"),
        base_url=(read_optional_env("NEWS_API_BASE_URL") or NEWS_API_BASE_URL).rstrip("/"),
        cache_ttl_seconds=_read_int("NEWS_CACHE_TTL", DEFAULT_CACHE_TTL_SECONDS, 1),
        request_timeout=_read_float("NEWS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT_SECONDS, 1.0),
        retry_attempts=_read_int("NEWS_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS, 1),
        retry_backoff_seconds=_read_float("NEWS_RETRY_BACKOFF", DEFAULT_RETRY_BACKOFF_SECONDS, 0.0),
    )


def sources_for_language(code: str) -> Tuple[NewsSource, ...]:
    return SOURCES_BY_LANGUAGE.get(code) or SOURCES_BY_LANGUAGE[DEFAULT_LANGUAGE]


def category_for_section(slug: str, sections: Mapping[str, Mapping[str, str]] = CATEGORY_SECTIONS) -> Optional[str]:
    """Map a front-end section slug to the upstream category it browses."""

    entry = sections.get(slug.strip().lower()) if isinstance(slug, str) else None
    return entry["api"] if entry else None


__all__ = [
    "API_KEY_HEADER",
    "ApiSettings",
    "CATEGORIES",
    "CATEGORY_SECTIONS",
    "DEFAULT_LANGUAGE",
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SORT_ORDER",
    "FORWARDING_ENDPOINT_PARAM",
    "HEADLINES_ENDPOINT",
    "LANGUAGES",
    "LANGUAGE_KEY",
    "MAX_PAGE",
    "MAX_PAGE_SIZE",
    "MAX_QUERY_LENGTH",
    "MAX_REPORTABLE_RESULTS",
    "MIN_PAGE_SIZE",
    "NEWS_API_BASE_URL",
    "PREFERENCE_NAMESPACE",
    "SEARCH_ENDPOINT",
    "SORT_ORDERS",
    "SOURCES_BY_LANGUAGE",
    "SOURCES_KEY_PREFIX",
    "category_for_section",
    "default_settings_path",
    "load_api_settings",
    "sources_for_language",
]
