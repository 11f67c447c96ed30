"""Domain models backing the NewsDesk API access layer.

Updates: v0.1 - 2026-10-18 - Introduced language, source, article and result models.
Updates: v0.2 - 2026-10-18 - Added tagged failure values and the transport mode enum.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from .utils import parse_iso8601_utc


class ErrorKind(str, Enum):
    INVALID_CATEGORY = "InvalidCategory"
    INVALID_PAGE = "InvalidPage"
    INVALID_QUERY = "InvalidQuery"
    UNSUPPORTED_LANGUAGE = "UnsupportedLanguage"
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    ACCESS_DENIED = "AccessDenied"
    RATE_LIMITED = "RateLimited"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"
    UPSTREAM_REJECTED = "UpstreamRejected"
    NETWORK_FAILURE = "NetworkFailure"
    MISSING_CREDENTIAL = "MissingCredential"


VALIDATION_ERRORS = frozenset(
    {
        ErrorKind.INVALID_CATEGORY,
        ErrorKind.INVALID_PAGE,
        ErrorKind.INVALID_QUERY,
        ErrorKind.UNSUPPORTED_LANGUAGE,
    }
)
RETRYABLE_ERRORS = frozenset(
    {ErrorKind.RATE_LIMITED, ErrorKind.NETWORK_FAILURE, ErrorKind.UPSTREAM_UNAVAILABLE}
)
CONFIGURATION_ERRORS = frozenset(
    {ErrorKind.MISSING_CREDENTIAL, ErrorKind.AUTHENTICATION_FAILED}
)


class TransportMode(str, Enum):
    DIRECT = "direct"
    FORWARDING = "forwarding"


class RequestKind(str, Enum):
    HEADLINES = "headlines"
    SEARCH = "search"


@dataclass(frozen=True)
class LanguageProfile:
    code: str
    name: str
    api_language: str
    default_country: str
    countries: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NewsSource:
    id: str
    name: str
    category: str
    country: str
    description: str
    language: str


@dataclass(frozen=True)
class RequestOptions:
    """Per-call request parameters as supplied by the caller.

    Values are raw: validation and defaulting happen in the request service.
    """

    kind: RequestKind = RequestKind.HEADLINES
    category: Optional[str] = None
    query: Optional[str] = None
    language: Optional[str] = None
    sort_by: Optional[str] = None
    page: Any = None
    page_size: Any = None


@dataclass(frozen=True)
class Article:
    title: str
    url: str
    source_name: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    author: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> Optional["Article"]:
        title = payload.get("title")
        url = payload.get("url")
        if not isinstance(title, str) or not title.strip():
            return None
        if not isinstance(url, str) or not url.strip():
            return None
        source = payload.get("source")
        source_name = ""
        if isinstance(source, dict) and isinstance(source.get("name"), str):
            source_name = source["name"]
        elif isinstance(source, str):
            source_name = source
        return cls(
            title=title.strip(),
            url=url.strip(),
            source_name=source_name,
            description=_optional_text(payload.get("description")),
            image_url=_optional_text(payload.get("urlToImage")),
            published_at=parse_iso8601_utc(payload.get("publishedAt")),
            author=_optional_text(payload.get("author")),
        )


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


@dataclass(frozen=True)
class NewsResult:
    articles: Tuple[Article, ...]
    total_results: int
    status: str = "ok"
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class NewsFailure:
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    upstream_code: Optional[str] = None
    status: str = field(default="error", init=False)

    @property
    def ok(self) -> bool:
        return False

    @property
    def retryable(self) -> bool:
        """Whether a front end should offer a retry affordance."""
        return self.kind in RETRYABLE_ERRORS

    @property
    def needs_configuration(self) -> bool:
        return self.kind in CONFIGURATION_ERRORS


NewsOutcome = Union[NewsResult, NewsFailure]


@dataclass(frozen=True)
class CacheEntry:
    payload: Any
    stored_at: float


__all__ = [
    "Article",
    "CONFIGURATION_ERRORS",
    "CacheEntry",
    "ErrorKind",
    "LanguageProfile",
    "NewsFailure",
    "NewsOutcome",
    "NewsResult",
    "NewsSource",
    "RETRYABLE_ERRORS",
    "RequestKind",
    "RequestOptions",
    "TransportMode",
    "VALIDATION_ERRORS",
]
