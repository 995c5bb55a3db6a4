"""In-memory key/value cache with per-key expiry."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional

logger = logging.getLogger(__name__)

_NO_TTL_GIVEN = object()


@dataclass
class CacheEntry:
    """Cached value and its expiry on the cache clock (None = never expires)."""

    value: Any
    inserted_at: float
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class TTLCache:
    """
    Thread-safe TTL cache with lazy expiry.

    Entries store their deadline and are dropped when read after it, so an
    expired value is never returned. Expired entries nobody reads again are
    removed by ``sweep()``, which ``set()`` runs every ``sweep_every`` writes
    (never when ``sweep_every <= 0``).
    """

    def __init__(
        self,
        default_ttl_seconds: Optional[float] = 300,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = 100,
    ):
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._sweep_every = sweep_every
        self._entries: dict[Hashable, CacheEntry] = {}
        self._lock = threading.Lock()
        self._writes = 0

    def set(self, key: Hashable, value: Any, ttl_seconds: Any = _NO_TTL_GIVEN) -> None:
        """Store ``value``; any previous entry for ``key`` and its TTL are replaced."""
        ttl = self._default_ttl if ttl_seconds is _NO_TTL_GIVEN else ttl_seconds
        with self._lock:
            now = self._clock()
            expires_at = now + ttl if ttl is not None else None
            self._entries[key] = CacheEntry(value=value, inserted_at=now, expires_at=expires_at)
            self._writes += 1
            if self._sweep_every > 0 and self._writes % self._sweep_every == 0:
                self._sweep_locked(now)
        logger.debug("Cache set: %s with TTL %ss", key, ttl)

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the live value for ``key`` or ``default`` on a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired(self._clock()):
                del self._entries[key]
                entry = None
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return default
        logger.debug("Cache hit: %s", key)
        return entry.value

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)
        logger.debug("Cache delete: %s", key)

    def clear(self) -> None:
        """Drop every entry (test isolation)."""
        with self._lock:
            self._entries.clear()
        logger.debug("Cache cleared")

    def has(self, key: Hashable) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def size(self) -> int:
        """Number of unexpired entries."""
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def sweep(self) -> int:
        """Remove expired entries; returns how many were dropped."""
        with self._lock:
            return self._sweep_locked(self._clock())

    def _sweep_locked(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)
