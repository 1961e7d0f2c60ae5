# uistate/services/scoped_store.py

"""
SCOPED UI STATE

Keyed stores that let list/detail views remember where the visitor
was (scroll offset, page index) while they navigate away and back.

- KeyedStateStore: get(key) never fails, unknown keys give the default
- ScrollPositionStore / PaginationStore: the two concrete stores
- ViewScope: owns one of each; its values live exactly as long as the scope
- ViewScopeRegistry: explicit mount / unmount of scopes, injected where needed

Scopes live in a Django cache with a timeout so every worker process sees
the same scope. Nothing is written to the database: an unmount, the timeout
or a cache flush forgets it all.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from typing import Any

from django.core.cache import caches


class KeyedStateStore:
    def __init__(self, default: Any = None, *, default_factory: Callable[[], Any] | None = None):
        self._default = default
        self._default_factory = default_factory
        self._values: dict[str, Any] = {}

    def _make_default(self) -> Any:
        if self._default_factory is not None:
            return self._default_factory()
        return self._default

    def get(self, key: str) -> Any:
        return self._values.get(key, self._make_default())

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def keys(self):
        return list(self._values)

    def items(self) -> dict[str, Any]:
        return dict(self._values)

    def load(self, values: dict[str, Any]) -> None:
        self._values = dict(values)

    def clear(self) -> None:
        self._values.clear()


class ScrollPositionStore(KeyedStateStore):
    """Vertical offsets in pixels. Unknown keys read as 0."""

    def __init__(self):
        super().__init__(default=0)

    def save_scroll_position(self, key: str, position) -> None:
        self.set(key, max(0, int(position)))

    def get_scroll_position(self, key: str) -> int:
        return self.get(key)


class PaginationStore(KeyedStateStore):
    """Zero-based page / item index per list. Unknown keys read as 0."""

    def __init__(self):
        super().__init__(default=0)

    def set_index(self, key: str, index, total: int | None = None) -> int:
        index = max(0, int(index))
        if total is not None:
            index = min(index, max(0, int(total) - 1))
        self.set(key, index)
        return index

    def step(self, key: str, delta: int, total: int) -> int:
        """Move by delta, clamped to [0, total - 1]: prev at the start and next at the end are no-ops."""
        return self.set_index(key, self.get(key) + int(delta), total)

    def has_prev(self, key: str) -> bool:
        return self.get(key) > 0

    def has_next(self, key: str, total: int) -> bool:
        return self.get(key) < int(total) - 1

    def label(self, key: str, total: int) -> str:
        return f"{self.get(key) + 1} / {int(total)}"


class ViewScope:
    def __init__(self, scope_id: str | None = None):
        self.id = scope_id or uuid.uuid4().hex
        self.scroll = ScrollPositionStore()
        self.pagination = PaginationStore()

    def snapshot(self) -> dict[str, dict[str, int]]:
        return {"scroll": self.scroll.items(), "pagination": self.pagination.items()}

    @classmethod
    def restore(cls, scope_id: str, snapshot: dict) -> ViewScope:
        scope = cls(scope_id)
        scope.scroll.load(snapshot.get("scroll") or {})
        scope.pagination.load(snapshot.get("pagination") or {})
        return scope


class ViewScopeRegistry:
    """
    Owns every mounted scope, shared by all processes using the same cache.

    Mount when a view tree appears, unmount when it goes away.
    get() hands out a copy: changes are kept only after save(scope).
    Lookups of unmounted or expired ids return None. Every save restarts
    the timeout. Concurrent saves to one scope: last write wins.
    """

    def __init__(
        self,
        alias: str = "default",
        *,
        timeout: int = 24 * 60 * 60,
        prefix: str = "uistate:scope:",
    ):
        self.alias = alias
        self.timeout = timeout
        self.prefix = prefix

    @property
    def cache(self):
        return caches[self.alias]

    def _key(self, scope_id: str) -> str:
        return self.prefix + scope_id

    def mount(self) -> ViewScope:
        scope = ViewScope()
        self.save(scope)
        return scope

    def get(self, scope_id: str) -> ViewScope | None:
        snapshot = self.cache.get(self._key(scope_id))
        if snapshot is None:
            return None
        return ViewScope.restore(scope_id, snapshot)

    def save(self, scope: ViewScope) -> None:
        self.cache.set(self._key(scope.id), scope.snapshot(), timeout=self.timeout)

    def unmount(self, scope_id: str) -> bool:
        return bool(self.cache.delete(self._key(scope_id)))
