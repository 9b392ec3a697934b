# src/cache/memory_store.py — v1
"""In-process LRU cache with lazy time-to-live expiry.

Capacity eviction drops the least-recently-used entry; both ``get`` and
``set`` refresh recency. Expiry is checked only when an entry is looked
up: an entry older than the TTL counts as a miss and is removed. There is
no background sweeping.

All public operations hold a single re-entrant lock, and ``get_or_set``
keeps it across the lookup, the computation and the insert, so one key is
never computed twice by concurrent callers.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable

from tokenslim.cache.base_cache_store import BaseCacheStore
from tokenslim.cache.models import CacheEntry, CacheStats

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_SECONDS = 60.0 * 60.0


class MemoryCacheStore(BaseCacheStore):
    """Bounded, time-expiring in-memory store."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be > 0, got {ttl_seconds}")
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._lookup(key)
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            entry.last_access = self._clock()
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(
                value=value, inserted_at=now, last_access=now
            )
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)
                logger.debug("Evicted LRU cache entry (size=%d)", self._max_size)

    def has(self, key: str) -> bool:
        with self._lock:
            return self._lookup(key) is not None

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def capacity(self) -> int:
        return self._max_size

    def get_or_set(self, key: str, factory: Callable[[], Any]) -> Any:
        with self._lock:
            entry = self._lookup(key)
            if entry is not None:
                self._hits += 1
                entry.last_access = self._clock()
                self._entries.move_to_end(key)
                return entry.value
            self._misses += 1
            value = factory()
            self.set(key, value)
            return value

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                max_size=self._max_size,
                hits=self._hits,
                misses=self._misses,
            )

    def _lookup(self, key: str) -> CacheEntry | None:
        """Return the live entry for ``key``, dropping it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at > self._ttl:
            del self._entries[key]
            logger.debug("Cache entry expired after %.0fs", self._ttl)
            return None
        return entry
