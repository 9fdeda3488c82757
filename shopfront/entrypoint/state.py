"""Persisted URL slots and the key-value store they live in."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from loguru import logger

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "LAST_LOADED_URL_KEY",
    "LAST_REMOTE_URL_KEY",
    "PersistedUrlState",
]

log = logger.bind(module="entrypoint.state")

LAST_LOADED_URL_KEY = "lastLoadedUrl"
LAST_REMOTE_URL_KEY = "lastRemoteUrl"


@runtime_checkable
class KeyValueStore(Protocol):
    """String key-value persistence consumed by the resolver."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()
        self.writes = 0

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self.writes += 1

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._data)


class PersistedUrlState:
    """Typed view over the two URL slots.

    ``last_loaded_url`` is the last page that rendered successfully;
    ``last_remote_url`` is the last value returned by the remote store.
    Empty strings and missing keys both read back as ``""``.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _read(self, key: str) -> str:
        return (self.store.get(key) or "").strip()

    @property
    def last_loaded_url(self) -> str:
        return self._read(LAST_LOADED_URL_KEY)

    @last_loaded_url.setter
    def last_loaded_url(self, value: str) -> None:
        self.store.set(LAST_LOADED_URL_KEY, value)

    @property
    def last_remote_url(self) -> str:
        return self._read(LAST_REMOTE_URL_KEY)

    @last_remote_url.setter
    def last_remote_url(self, value: str) -> None:
        self.store.set(LAST_REMOTE_URL_KEY, value)

    def clear_last_loaded_url(self) -> None:
        self.store.delete(LAST_LOADED_URL_KEY)

    def clear(self) -> None:
        """Forget both slots."""
        self.store.delete(LAST_LOADED_URL_KEY)
        self.store.delete(LAST_REMOTE_URL_KEY)
        log.info("Cleared persisted entrypoint URLs")

    def as_dict(self) -> dict[str, str]:
        return {
            LAST_LOADED_URL_KEY: self.last_loaded_url,
            LAST_REMOTE_URL_KEY: self.last_remote_url,
        }
