"""Bounded, time-expiring result cache."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

from json_query.cache.keys import file_prefix
from json_query.core.logging import get_logger
from json_query.core.metrics import CACHE_EVICTIONS, CACHE_SIZE

logger = get_logger(__name__)


@dataclass(slots=True)
class CacheEntry:
    value: Any
    expires_at: float


@dataclass(slots=True)
class CacheStats:
    keys: int
    hits: int
    misses: int
    evictions: int

    def to_dict(self) -> dict[str, int]:
        return {
            "keys": self.keys,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }


class CacheStore:
    """Thread-safe key/value store with per-entry TTL and a size cap.

    When full, the oldest-inserted entry is evicted; overwriting a key counts
    as a fresh insertion. Expired entries read as misses and are dropped on
    access, and a sweep over all entries runs at most once per
    ``check_period`` seconds during ``set``.

    Values are stored by reference. Callers must not mutate what ``get``
    returns.
    """

    def __init__(
        self,
        ttl: float,
        max_size: int,
        check_period: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.ttl = ttl
        self.max_size = max_size
        self.check_period = check_period if check_period is not None else ttl * 0.2
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._last_sweep = clock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and entry.expires_at > self._clock()

    def get(self, key: str) -> Any | None:
        """Return the cached value or None on a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                self._evictions += 1
                self._misses += 1
                CACHE_EVICTIONS.labels(reason="expired").inc()
                CACHE_SIZE.set(len(self._entries))
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite ``key``, evicting the oldest entry when full."""
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self.check_period:
                self._sweep_locked(now)
            if key in self._entries:
                del self._entries[key]
            while len(self._entries) >= self.max_size:
                evicted_key, _ = self._entries.popitem(last=False)
                self._evictions += 1
                CACHE_EVICTIONS.labels(reason="capacity").inc()
                logger.debug("Evicted cache entry %s", evicted_key)
            self._entries[key] = CacheEntry(value=value, expires_at=now + self.ttl)
            CACHE_SIZE.set(len(self._entries))

    def keys(self) -> list[str]:
        """Live keys in insertion order."""
        with self._lock:
            now = self._clock()
            return [key for key, entry in self._entries.items() if entry.expires_at > now]

    def clear_all(self) -> int:
        """Remove every entry and return how many were held."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            CACHE_SIZE.set(0)
        logger.info("Cleared %s cache entries", count)
        return count

    def clear_by_prefix(self, file_name: str) -> int:
        """Remove every entry built for ``file_name`` and return the count."""
        prefix = file_prefix(file_name)
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            CACHE_SIZE.set(len(self._entries))
        logger.info("Cleared %s cache entries for %s", len(doomed), file_name)
        return len(doomed)

    def sweep(self) -> int:
        """Drop expired entries now and return how many were removed."""
        with self._lock:
            return self._sweep_locked(self._clock())

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                keys=len(self._entries),
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def _sweep_locked(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            self._evictions += len(expired)
            CACHE_EVICTIONS.labels(reason="expired").inc(len(expired))
            CACHE_SIZE.set(len(self._entries))
        self._last_sweep = now
        return len(expired)


__all__ = ["CacheEntry", "CacheStats", "CacheStore"]
