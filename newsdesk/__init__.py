"""NewsDesk: client-side access layer for the NewsAPI service.

Turns category browsing, keyword search, paging and language/source
preferences into validated, cached, retrying HTTP requests and returns
normalized results or tagged failures.

Example
-------
from newsdesk import build_request_service

service = build_request_service()
outcome = service.fetch_headlines(category="technology", page=1)
if outcome.ok:
    for article in outcome.articles:
        print(article.published_at, article.source_name, article.title)
else:
    print(outcome.kind, outcome.message)

Updates: v0.1 - 2026-10-18 - Created package scaffold.
"""

from .cache import ResponseCache
from .config import ApiSettings, load_api_settings
from .exceptions import NewsApiError
from .models import (
    Article,
    ErrorKind,
    LanguageProfile,
    NewsFailure,
    NewsResult,
    NewsSource,
    RequestKind,
    RequestOptions,
    TransportMode,
)
from .preferences import PreferenceResolver
from .service import RequestService, build_request_service
from .settings_store import JsonFileStore, MemoryStore
from .transport import NewsTransport, RetryPolicy

__all__ = [
    "ApiSettings",
    "Article",
    "ErrorKind",
    "JsonFileStore",
    "LanguageProfile",
    "MemoryStore",
    "NewsApiError",
    "NewsFailure",
    "NewsResult",
    "NewsSource",
    "NewsTransport",
    "PreferenceResolver",
    "RequestKind",
    "RequestOptions",
    "RequestService",
    "ResponseCache",
    "RetryPolicy",
    "TransportMode",
    "build_request_service",
    "load_api_settings",
]
