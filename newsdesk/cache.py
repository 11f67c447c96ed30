"""In-process response cache with time-based expiry.

Entries live for the lifetime of the process; expired entries are dropped
lazily the next time their key is read.

Updates: v0.1 - 2026-10-18 - Replaced the shared remote cache with a per-process TTL map.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

from .models import CacheEntry

logger = logging.getLogger(__name__)


def make_cache_key(namespace: str, params: Mapping[str, Any]) -> str:
    """Return the canonical cache key for a namespace and request parameters."""

    canonical = json.dumps(dict(params), sort_keys=True, separators=(",", ":"))
    return f"{namespace}:{canonical}"


class ResponseCache:
    def __init__(
        self,
        ttl_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            logger.debug("Cache entry expired for %s", key)
            self._entries.pop(key, None)
            return None
        return entry.payload

    def set(self, key: str, payload: Any) -> None:
        self._entries[key] = CacheEntry(payload=payload, stored_at=self._clock())

    def clear(self) -> int:
        removed = len(self._entries)
        self._entries = {}
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["ResponseCache", "make_cache_key"]
