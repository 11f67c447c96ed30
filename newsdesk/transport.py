"""HTTP transport for the news API.

The transport decides once, at construction, whether to talk to the news API
directly (credential in a header) or through a forwarding endpoint that adds
the credential itself. Every response is classified here: callers receive
either the decoded JSON envelope or a :class:`NewsApiError`.

Updates: v0.1 - 2026-10-18 - Added direct/forwarding addressing and status classification.
Updates: v0.2 - 2026-10-18 - Moved retries from the HTTP adapter into a linear backoff loop.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import requests
from requests import Session

from .config import (
    API_KEY_HEADER,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_BACKOFF_SECONDS,
    FORWARDING_ENDPOINT_PARAM,
    NEWS_API_BASE_URL,
    ApiSettings,
)
from .exceptions import NewsApiError
from .http_client import get_http_session
from .models import ErrorKind, TransportMode

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = frozenset({ErrorKind.NETWORK_FAILURE, ErrorKind.RATE_LIMITED})


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = DEFAULT_RETRY_ATTEMPTS
    backoff_seconds: float = DEFAULT_RETRY_BACKOFF_SECONDS

    def delay_after(self, failures: int) -> float:
        """Seconds to wait after ``failures`` consecutive transient failures."""
        return self.backoff_seconds * failures


def resolve_transport_mode(proxy_url: Optional[str]) -> TransportMode:
    if isinstance(proxy_url, str) and proxy_url.strip():
        return TransportMode.FORWARDING
    return TransportMode.DIRECT


class NewsTransport:
    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        proxy_url: Optional[str] = None,
        base_url: str = NEWS_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        retry: RetryPolicy = RetryPolicy(),
        session: Optional[Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.mode = resolve_transport_mode(proxy_url)
        self._api_key = api_key or None
        self.proxy_url = proxy_url.strip() if self.mode is TransportMode.FORWARDING else None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry = retry
        self._session = session
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: ApiSettings, **kwargs: Any) -> "NewsTransport":
        return cls(
            api_key=settings.api_key,
            proxy_url=settings.proxy_url,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            retry=RetryPolicy(
                attempts=settings.retry_attempts,
                backoff_seconds=settings.retry_backoff_seconds,
            ),
            **kwargs,
        )

    def build_request(
        self, endpoint: str, params: Mapping[str, Any]
    ) -> Tuple[str, Dict[str, str], Dict[str, str]]:
        """Return ``(url, query, headers)`` for a logical endpoint call."""

        query = {key: str(value) for key, value in params.items()}
        if self.proxy_url:
            return self.proxy_url, {FORWARDING_ENDPOINT_PARAM: endpoint, **query}, {}
        if self._api_key is None:
            raise NewsApiError(
                ErrorKind.MISSING_CREDENTIAL,
                "No news API key configured; set NEWS_API_KEY or NEWS_API_PROXY_URL.",
            )
        return f"{self.base_url}/{endpoint}", query, {API_KEY_HEADER: self._api_key}

    def get(self, endpoint: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Call ``endpoint`` and return its JSON envelope, retrying transient failures."""

        url, query, headers = self.build_request(endpoint, params)
        attempts = max(1, self.retry.attempts)
        for attempt in range(1, attempts + 1):
            try:
                return self._send(url, query, headers)
            except NewsApiError as exc:
                if exc.kind not in TRANSIENT_ERRORS:
                    raise
                if attempt == attempts:
                    logger.warning(
                        "Giving up on %s after %d attempts: %s", endpoint, attempts, exc
                    )
                    raise
                delay = self.retry.delay_after(attempt)
                logger.warning(
                    "%s from %s (attempt %d/%d); retrying in %.1fs",
                    exc.kind.value,
                    endpoint,
                    attempt,
                    attempts,
                    delay,
                )
                self._sleep(delay)
        raise NewsApiError(ErrorKind.NETWORK_FAILURE, f"No attempts made for {endpoint}.")

    def _send(self, url: str, query: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
        session = self._session if self._session is not None else get_http_session()
        try:
            response = session.get(url, params=query, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NewsApiError(
                ErrorKind.NETWORK_FAILURE, f"No response from news service: {exc}"
            ) from exc
        return self._classify(response)

    def _classify(self, response: requests.Response) -> Dict[str, Any]:
        status = response.status_code
        try:
            payload = response.json()
        except ValueError:
            payload = None
        upstream_code, upstream_message = _envelope_error(payload)

        if status >= 400:
            kind, message = self._status_failure(status)
            if upstream_message:
                message = f"{message} ({upstream_message})"
            raise NewsApiError(kind, message, status_code=status, upstream_code=upstream_code)

        if not isinstance(payload, dict):
            raise NewsApiError(
                ErrorKind.UPSTREAM_UNAVAILABLE,
                "News service returned a response that is not a JSON object.",
                status_code=status,
            )
        if payload.get("status") == "error":
            kind = _envelope_kind(upstream_code)
            raise NewsApiError(
                kind,
                upstream_message or "News service reported an error.",
                status_code=status,
                upstream_code=upstream_code,
            )
        return payload

    def _status_failure(self, status: int) -> Tuple[ErrorKind, str]:
        forwarding = self.mode is TransportMode.FORWARDING
        if status == 401:
            if forwarding:
                return (
                    ErrorKind.AUTHENTICATION_FAILED,
                    "Authentication failed upstream; check the forwarding endpoint's configuration.",
                )
            return (
                ErrorKind.AUTHENTICATION_FAILED,
                "The news API rejected the request; check your NEWS_API_KEY credential.",
            )
        if status == 403:
            return ErrorKind.ACCESS_DENIED, "The credential is not allowed to perform this request."
        if status == 429:
            return ErrorKind.RATE_LIMITED, "Too many requests to the news API."
        if status >= 500:
            if forwarding:
                return ErrorKind.UPSTREAM_UNAVAILABLE, f"Forwarding endpoint failed with HTTP {status}."
            return ErrorKind.UPSTREAM_UNAVAILABLE, f"News API unavailable (HTTP {status})."
        return ErrorKind.UPSTREAM_REJECTED, f"News API rejected the request (HTTP {status})."


def _envelope_error(payload: Any) -> Tuple[Optional[str], Optional[str]]:
    if not isinstance(payload, dict):
        return None, None
    code = payload.get("code")
    message = payload.get("message")
    return (
        code if isinstance(code, str) else None,
        message if isinstance(message, str) and message.strip() else None,
    )


def _envelope_kind(code: Optional[str]) -> ErrorKind:
    if not code:
        return ErrorKind.UPSTREAM_UNAVAILABLE
    if code.startswith("apiKey"):
        return ErrorKind.AUTHENTICATION_FAILED
    if code == "rateLimited":
        return ErrorKind.RATE_LIMITED
    if code.startswith("parameter") or code.startswith("sources"):
        return ErrorKind.UPSTREAM_REJECTED
    return ErrorKind.UPSTREAM_UNAVAILABLE


__all__ = ["NewsTransport", "RetryPolicy", "TRANSIENT_ERRORS", "resolve_transport_mode"]
