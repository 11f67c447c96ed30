"""Key-value persistence backing user preferences.

Two stores share one small string-keyed, string-valued contract: an in-memory
dict for tests and throwaway sessions, and a JSON file mirroring the browser
storage the preferences were originally kept in.

Updates: v0.1 - 2026-10-18 - Generalised settings load/save into key-value stores.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from .config import default_settings_path

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> List[str]: ...


class MemoryStore:
    """Dict-backed store; every operation is a single dict access."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore:
    """Store persisted as one JSON object on disk, rewritten on every change."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()
        self._data: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._data is not None:
            return self._data
        data: Dict[str, str] = {}
        try:
            if self.path.exists():
                with self.path.open("r", encoding="utf-8") as handle:
                    raw = json.load(handle)
                if isinstance(raw, dict):
                    data = {
                        str(key): value
                        for key, value in raw.items()
                        if isinstance(value, str)
                    }
                else:
                    logger.warning("Ignoring settings file %s: not a JSON object.", self.path)
        except (OSError, ValueError) as exc:
            logger.warning("Unable to load settings: %s", exc)
        self._data = data
        return data

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(self._load(), handle, indent=2, ensure_ascii=False)
        except OSError as exc:
            logger.warning("Unable to save settings: %s", exc)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        self._load()[key] = str(value)
        self._save()

    def delete(self, key: str) -> None:
        if self._load().pop(key, None) is not None:
            self._save()

    def keys(self) -> List[str]:
        return list(self._load())


__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore"]
