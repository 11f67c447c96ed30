"""Shared HTTP session management for NewsDesk network requests.

Updates: v0.1 - 2026-10-18 - Pooled sessions with adapter-level retries disabled;
the news transport applies its own retry policy.
"""

from __future__ import annotations

import atexit
import threading
from typing import Sequence, Set

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

USER_AGENT = "NewsDesk/0.2 (+https://newsapi.org)"

_HTTP_THREAD_LOCAL = threading.local()
_HTTP_SESSION_LOCK = threading.Lock()
_HTTP_SESSIONS: Set[Session] = set()


def _build_retry() -> Retry:
    # Attempts and backoff are counted by NewsTransport; a second layer here
    # would multiply them.
    return Retry(
        total=0,
        connect=0,
        read=0,
        status=0,
        allowed_methods=["GET"],
        raise_on_status=False,
        respect_retry_after_header=False,
    )


def get_http_session() -> Session:
    """Return a thread-local shared requests session."""

    session = getattr(_HTTP_THREAD_LOCAL, "session", None)
    if session is not None:
        return session
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    session.headers["Accept"] = "application/json"
    adapter = HTTPAdapter(pool_connections=4, pool_maxsize=8, max_retries=_build_retry())
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    with _HTTP_SESSION_LOCK:
        _HTTP_SESSIONS.add(session)
    _HTTP_THREAD_LOCAL.session = session
    return session


def close_all_sessions() -> None:
    """Close pooled HTTP sessions at shutdown."""

    with _HTTP_SESSION_LOCK:
        sessions: Sequence[Session] = tuple(_HTTP_SESSIONS)
        _HTTP_SESSIONS.clear()
    for session in sessions:
        try:
            session.close()
        except Exception:  # pragma: no cover - shutdown path
            continue


atexit.register(close_all_sessions)


__all__ = ["USER_AGENT", "close_all_sessions", "get_http_session"]
