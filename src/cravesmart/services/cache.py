"""Expiring in-process cache used for login sessions."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def delete(self, key: str) -> None:
        """Drop a cached value if present."""


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries vanish on restart.

    Expiry is measured on a monotonic clock.
    """

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[object, float]] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        self._entries[key] = (value, self.clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        """Remove a cached value."""
        self._entries.pop(key, None)
