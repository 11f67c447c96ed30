"""Request service: validated, cached access to headlines and search.

``RequestService`` is the only entry point the front end needs. Each call
validates its options, resolves language and source preferences, consults the
response cache and finally goes through :class:`NewsTransport`. Failures come
back as :class:`NewsFailure` values rather than exceptions so callers can
branch on ``result.ok`` and ``failure.kind``.

Updates: v0.1 - 2026-10-18 - Introduced the request service with headlines and search.
Updates: v0.2 - 2026-10-18 - Added background submission and cache namespaces per operation.
"""

from __future__ import annotations

import atexit
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Tuple

from .cache import ResponseCache, make_cache_key
from .config import (
    HEADLINES_ENDPOINT,
    MAX_REPORTABLE_RESULTS,
    SEARCH_ENDPOINT,
    ApiSettings,
    load_api_settings,
)
from .exceptions import NewsApiError
from .models import (
    Article,
    LanguageProfile,
    NewsOutcome,
    NewsResult,
    NewsSource,
    RequestKind,
    RequestOptions,
    VALIDATION_ERRORS,
)
from .preferences import PreferenceResolver
from .settings_store import JsonFileStore, KeyValueStore
from .transport import NewsTransport
from .validation import (
    validate_category,
    validate_language,
    validate_page,
    validate_page_size,
    validate_query,
    validate_sort_order,
)

logger = logging.getLogger(__name__)

_REQUEST_EXECUTOR = ThreadPoolExecutor(max_workers=4, thread_name_prefix="newsdesk")


def shutdown_executor() -> None:
    _REQUEST_EXECUTOR.shutdown(wait=False)


atexit.register(shutdown_executor)

_ENDPOINTS: Dict[RequestKind, str] = {
    RequestKind.HEADLINES: HEADLINES_ENDPOINT,
    RequestKind.SEARCH: SEARCH_ENDPOINT,
}


def normalize_payload(payload: Mapping[str, Any], page_size: int) -> NewsResult:
    """Turn an upstream envelope into a :class:`NewsResult`.

    Articles without a title or URL are dropped, the list is cut to
    ``page_size`` and the total is clamped to the window the upstream lets
    clients page through.
    """

    raw_articles = payload.get("articles")
    articles = []
    if isinstance(raw_articles, list):
        for entry in raw_articles:
            if not isinstance(entry, dict):
                continue
            article = Article.from_dict(entry)
            if article is not None:
                articles.append(article)

    total = payload.get("totalResults")
    if isinstance(total, bool) or not isinstance(total, int):
        total = len(articles)
    total = max(0, min(total, MAX_REPORTABLE_RESULTS))
    return NewsResult(articles=tuple(articles[:page_size]), total_results=total)


class RequestService:
    def __init__(
        self,
        transport: NewsTransport,
        preferences: PreferenceResolver,
        cache: ResponseCache,
    ) -> None:
        self.transport = transport
        self.preferences = preferences
        self.cache = cache

    def fetch_headlines(
        self, options: Optional[RequestOptions] = None, **kwargs: Any
    ) -> NewsOutcome:
        """Top headlines, optionally narrowed to one category."""
        return self._run(_coerce_options(RequestKind.HEADLINES, options, kwargs))

    def search_articles(
        self, options: Optional[RequestOptions] = None, **kwargs: Any
    ) -> NewsOutcome:
        """Keyword search across all articles."""
        return self._run(_coerce_options(RequestKind.SEARCH, options, kwargs))

    def submit_headlines(
        self, options: Optional[RequestOptions] = None, **kwargs: Any
    ) -> "Future[NewsOutcome]":
        return _REQUEST_EXECUTOR.submit(self.fetch_headlines, options, **kwargs)

    def submit_search(
        self, options: Optional[RequestOptions] = None, **kwargs: Any
    ) -> "Future[NewsOutcome]":
        return _REQUEST_EXECUTOR.submit(self.search_articles, options, **kwargs)

    def current_language(self) -> LanguageProfile:
        return self.preferences.get_active_language()

    def available_sources(self, language: Optional[str] = None) -> Tuple[NewsSource, ...]:
        return self.preferences.available_sources(language)

    def selected_sources(self, language: Optional[str] = None) -> Tuple[str, ...]:
        code = language or self.preferences.get_active_language().code
        return self.preferences.get_selected_sources(code)

    def clear_cache(self) -> int:
        removed = self.cache.clear()
        logger.info("Cleared %d cached response(s).", removed)
        return removed

    def _run(self, options: RequestOptions) -> NewsOutcome:
        try:
            params, page_size = self._build_params(options)
            return self._fetch(options.kind, params, page_size)
        except NewsApiError as exc:
            level = logging.DEBUG if exc.kind in VALIDATION_ERRORS else logging.INFO
            logger.log(level, "%s request failed: %s (%s)", options.kind.value, exc.kind.value, exc.message)
            return exc.to_failure()

    def _build_params(self, options: RequestOptions) -> Tuple[Dict[str, Any], int]:
        if options.kind is RequestKind.SEARCH:
            query = validate_query(options.query).unwrap()
            category = None
        else:
            query = None
            category = validate_category(options.category).unwrap()
        page = validate_page(options.page).unwrap()
        page_size = validate_page_size(options.page_size).unwrap()
        code = validate_language(options.language).unwrap()
        profile = (
            self.preferences.languages[code]
            if code
            else self.preferences.get_active_language()
        )

        params: Dict[str, Any] = {
            "language": profile.api_language,
            "page": page,
            "pageSize": page_size,
        }
        if query is not None:
            params["q"] = query
            params["sortBy"] = validate_sort_order(options.sort_by).unwrap()
        if category:
            params["category"] = category
        sources = self.preferences.get_selected_sources(profile.code)
        if sources:
            params["sources"] = ",".join(sources)
        return params, page_size

    def _fetch(self, kind: RequestKind, params: Dict[str, Any], page_size: int) -> NewsResult:
        key = make_cache_key(kind.value, params)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

        payload = self.transport.get(_ENDPOINTS[kind], params)
        result = normalize_payload(payload, page_size)
        logger.info(
            "Fetched %d %s article(s) (total %d).",
            len(result.articles),
            kind.value,
            result.total_results,
        )
        self.cache.set(key, replace(result, from_cache=True))
        return result


_OPTION_NAMES = frozenset(
    {"category", "q", "query", "language", "sort_by", "sortBy", "page", "page_size", "pageSize"}
)


def _coerce_options(
    kind: RequestKind, options: Optional[RequestOptions], overrides: Mapping[str, Any]
) -> RequestOptions:
    if options is not None:
        if overrides:
            raise TypeError("Pass either a RequestOptions instance or keyword options, not both")
        return options if options.kind is kind else replace(options, kind=kind)
    unknown = set(overrides) - _OPTION_NAMES
    if unknown:
        raise TypeError(f"Unexpected request option(s): {', '.join(sorted(unknown))}")
    return RequestOptions(
        kind=kind,
        category=overrides.get("category"),
        query=overrides.get("q", overrides.get("query")),
        language=overrides.get("language"),
        sort_by=overrides.get("sort_by", overrides.get("sortBy")),
        page=overrides.get("page"),
        page_size=overrides.get("page_size", overrides.get("pageSize")),
    )


def build_request_service(
    store: Optional[KeyValueStore] = None,
    settings: Optional[ApiSettings] = None,
    **transport_kwargs: Any,
) -> RequestService:
    """Wire a request service from environment settings and the settings file."""

    settings = settings or load_api_settings()
    transport = NewsTransport.from_settings(settings, **transport_kwargs)
    logger.debug("News transport mode %s with settings %s", transport.mode.value, settings.describe())
    return RequestService(
        transport=transport,
        preferences=PreferenceResolver(store if store is not None else JsonFileStore()),
        cache=ResponseCache(settings.cache_ttl_seconds),
    )


__all__ = ["RequestService", "build_request_service", "normalize_payload", "shutdown_executor"]
