"""In-memory implementation of `core.interfaces.cache.ResponseCache`.

No TTL and no eviction: entries live as long as the owning client.
"""

from __future__ import annotations

from typing import Any

from core.interfaces.cache import ResponseCache


class MemoryCache(ResponseCache):
    """Unbounded dict-backed cache, scoped to one client instance."""

    def __init__(self) -> None:
        self._store: dict[str, Any] = {}

    def has(self, key: str) -> bool:
        return key in self._store

    def get(self, key: str) -> Any:
        return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def __len__(self) -> int:
        return len(self._store)

    def keys(self) -> list[str]:
        return list(self._store)
