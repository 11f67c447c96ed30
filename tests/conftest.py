"""Pytest configuration and shared fakes for the NewsDesk test-suite.

- Prepend project root to sys.path so 'newsdesk' is importable with testpaths.
- Provide a scripted HTTP session so no test touches the network.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests


def _ensure_project_root_on_syspath() -> None:
    """Prepend repository root to sys.path for package imports."""
    tests_dir = Path(__file__).resolve().parent
    project_root = tests_dir.parent
    root_str = str(project_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


_ensure_project_root_on_syspath()

from newsdesk.cache import ResponseCache  # noqa: E402
from newsdesk.preferences import PreferenceResolver  # noqa: E402
from newsdesk.service import RequestService  # noqa: E402
from newsdesk.settings_store import MemoryStore  # noqa: E402
from newsdesk.transport import NewsTransport, RetryPolicy  # noqa: E402


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self) -> Any:
        if self._text is not None:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    """Replays scripted responses (or raises scripted exceptions) in order."""

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def get(self, url: str, params=None, headers=None, timeout=None) -> FakeResponse:
        self.calls.append(
            {"url": url, "params": dict(params or {}), "headers": dict(headers or {}), "timeout": timeout}
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def ok_payload(count: int = 2, total: int = 2) -> Dict[str, Any]:
    return {
        "status": "ok",
        "totalResults": total,
        "articles": [
            {
                "source": {"id": "bbc-news", "name": "BBC News"},
                "author": "Reporter",
                "title": f"Headline {index}",
                "description": "Body",
                "url": f"https://example.com/{index}",
                "urlToImage": None,
                "publishedAt": "2026-10-18T08:00:00Z",
            }
            for index in range(count)
        ],
    }


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def preferences(store: MemoryStore) -> PreferenceResolver:
    return PreferenceResolver(store, host_locale=lambda: None)


@pytest.fixture
def make_service(session, preferences, clock, sleeps):
    def factory(*, api_key: Optional[str] = "secret-key", proxy_url: Optional[str] = None, ttl: float = 60.0):
        transport = NewsTransport(
            api_key=api_key,
            proxy_url=proxy_url,
            session=session,
            retry=RetryPolicy(attempts=3, backoff_seconds=0.5),
            sleep=sleeps.append,
        )
        return RequestService(transport, preferences, ResponseCache(ttl, clock=clock))

    return factory


@pytest.fixture
def service(make_service) -> RequestService:
    return make_service()


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
