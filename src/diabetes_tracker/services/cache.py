"""TTL cache for external lookups."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: float) -> None:
        """Store a value for `ttl_seconds`."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache keyed by lookup string."""

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[object, float]] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: float) -> None:
        self._entries[key] = (value, self.clock() + ttl_seconds)
