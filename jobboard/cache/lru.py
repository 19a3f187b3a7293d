"""Bounded in-memory cache with per-entry TTL and LRU eviction."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL = 30.0


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    """Value stored in the cache together with its timing metadata."""

    value: T
    timestamp: float
    ttl: float
    last_accessed: float

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp > self.ttl


@dataclass(slots=True)
class CacheStats:
    """Snapshot of cache utilisation used for monitoring."""

    size: int
    max_size: int
    utilization: float
    expired_count: int
    average_age: float
    oldest_entry: str | None
    newest_entry: str | None


class LRUCache(Generic[T]):
    """Key-value cache evicting the least recently used entry when full.

    Expiry is checked lazily on access; ``cleanup`` sweeps expired entries on
    demand. ``clock`` returns seconds and is injectable for tests.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        default_ttl: float = DEFAULT_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        # Least recently used first.
        self._access_order: list[str] = []

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        """Return stored keys from least to most recently used."""

        return list(self._access_order)

    def set(self, key: str, value: T, ttl: float | None = None) -> None:
        """Insert or replace ``key``, evicting the LRU entry when at capacity."""

        now = self._clock()
        if key in self._entries:
            self._remove_from_access_order(key)
        elif len(self._entries) >= self._max_size:
            self._evict_lru()

        self._entries[key] = CacheEntry(
            value=value,
            timestamp=now,
            ttl=self._default_ttl if ttl is None else ttl,
            last_accessed=now,
        )
        self._access_order.append(key)

    def get(self, key: str) -> T | None:
        """Return the cached value or ``None`` when absent or expired."""

        entry = self._entries.get(key)
        if entry is None:
            return None

        now = self._clock()
        if entry.is_expired(now):
            self.delete(key)
            return None

        entry.last_accessed = now
        self._move_to_end(key)
        return entry.value

    def has(self, key: str) -> bool:
        """Check presence without promoting the key's recency."""

        entry = self._entries.get(key)
        if entry is None:
            return False
        if entry.is_expired(self._clock()):
            self.delete(key)
            return False
        return True

    def delete(self, key: str) -> bool:
        if key not in self._entries:
            return False
        del self._entries[key]
        self._remove_from_access_order(key)
        return True

    def clear(self) -> None:
        self._entries.clear()
        self._access_order.clear()

    def delete_pattern(self, pattern: str) -> int:
        """Remove every entry whose key contains ``pattern``."""

        matching = [key for key in self._entries if pattern in key]
        for key in matching:
            self.delete(key)
        return len(matching)

    def cleanup(self) -> int:
        """Remove all expired entries and return how many were dropped."""

        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            self.delete(key)
        return len(expired)

    def get_stats(self) -> CacheStats:
        now = self._clock()
        ages = [now - entry.timestamp for entry in self._entries.values()]
        expired_count = sum(1 for entry in self._entries.values() if entry.is_expired(now))
        size = len(self._entries)
        return CacheStats(
            size=size,
            max_size=self._max_size,
            utilization=size / self._max_size * 100,
            expired_count=expired_count,
            average_age=sum(ages) / size if size else 0.0,
            oldest_entry=self._access_order[0] if self._access_order else None,
            newest_entry=self._access_order[-1] if self._access_order else None,
        )

    def _evict_lru(self) -> None:
        if self._access_order:
            self.delete(self._access_order[0])

    def _move_to_end(self, key: str) -> None:
        self._remove_from_access_order(key)
        self._access_order.append(key)

    def _remove_from_access_order(self, key: str) -> None:
        try:
            self._access_order.remove(key)
        except ValueError:
            pass


@dataclass(slots=True)
class QueryCacheEntry(Generic[T]):
    """Cached result of a list query."""

    data: T
    count: int | None
    timestamp: float
    ttl: float
    last_accessed: float


class QueryResultCache(LRUCache[QueryCacheEntry[T]]):
    """LRU cache specialised for ``(data, count)`` query results."""

    def set_cached_query(self, key: str, data: T, count: int | None, ttl: float | None = None) -> None:
        now = self._clock()
        final_ttl = ttl or self._default_ttl
        entry = QueryCacheEntry(
            data=data,
            count=count,
            timestamp=now,
            ttl=final_ttl,
            last_accessed=now,
        )
        self.set(key, entry, final_ttl)

    def get_cached_query(self, key: str) -> tuple[T, int | None] | None:
        entry = self.get(key)
        if entry is None:
            return None
        return entry.data, entry.count
