# persistence/stores.py

"""
KEY-VALUE STORES

A tiny text-only key-value interface shaped like browser localStorage:
- get_item(key)  -> str | None
- set_item(key, value)
- remove_item(key)

Implementations:
- InMemoryKeyValueStore: dict-backed fake for tests (optional quota)
- SessionKeyValueStore: per-visitor store living in the Django session
- CacheKeyValueStore: shared, process-wide store living in a Django cache

No implementation offers isolation between writers. Last write wins.
"""

from __future__ import annotations

from typing import Protocol

from django.conf import settings
from django.core.cache import caches

from persistence.services.exceptions import StorageQuotaExceeded

SESSION_KEY_PREFIX = "kv:"


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """
    Dict-backed store.

    quota: maximum total characters (keys + values). None = unlimited.
    """

    def __init__(self, initial: dict[str, str] | None = None, *, quota: int | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self.quota = quota

    def _size_with(self, key: str, value: str) -> int:
        size = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
        return size + len(key) + len(value)

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("values must be text")
        if self.quota is not None and self._size_with(key, value) > self.quota:
            raise StorageQuotaExceeded(f"writing {key!r} exceeds quota of {self.quota}")
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class SessionKeyValueStore:
    """Per-visitor store. Keys are prefixed so they never clash with auth session keys."""

    def __init__(self, session):
        self.session = session

    def get_item(self, key: str) -> str | None:
        return self.session.get(SESSION_KEY_PREFIX + key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("values must be text")
        self.session[SESSION_KEY_PREFIX + key] = value

    def remove_item(self, key: str) -> None:
        self.session.pop(SESSION_KEY_PREFIX + key, None)


class CacheKeyValueStore:
    """Shared store. Entries never expire on their own."""

    def __init__(self, alias: str = "default", *, prefix: str = "flowerfarm:"):
        self.alias = alias
        self.prefix = prefix

    @property
    def cache(self):
        return caches[self.alias]

    def get_item(self, key: str) -> str | None:
        return self.cache.get(self.prefix + key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("values must be text")
        self.cache.set(self.prefix + key, value, timeout=None)

    def remove_item(self, key: str) -> None:
        self.cache.delete(self.prefix + key)


def visitor_store(request) -> SessionKeyValueStore:
    return SessionKeyValueStore(request.session)


def shared_store() -> CacheKeyValueStore:
    return CacheKeyValueStore(getattr(settings, "SHARED_STORE_CACHE_ALIAS", "default"))
