"""Process-wide key/value cache with per-entry expiry, used for access tokens."""

import threading
import time
from typing import Callable, Protocol


class TokenCache(Protocol):
    """Key/value store with time-to-live support."""

    def get(self, key: str) -> str | None:
        """Return the live value for key, or None when missing or expired."""
        ...

    def set(self, key: str, value: str, ttl_seconds: float) -> None:
        """Store value under key for ttl_seconds."""
        ...

    def remember(self, key: str, ttl_seconds: float, compute: Callable[[], str]) -> str:
        """Return the cached value, or compute, store and return a fresh one."""
        ...


class MemoryTokenCache:
    """Thread-safe in-memory TokenCache.

    The lock only covers reads and writes of the store. ``remember`` runs
    ``compute`` outside the lock, so concurrent misses may each compute and
    the last writer wins. Failed computes store nothing.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[str, float]] = {}  # key -> (value, expires_at)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, ttl_seconds: float) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def forget(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def remember(self, key: str, ttl_seconds: float, compute: Callable[[], str]) -> str:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = compute()
        self.set(key, value, ttl_seconds)
        return value


# Shared by every transport built without an explicit cache.
default_cache = MemoryTokenCache()
