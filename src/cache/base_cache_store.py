# src/cache/base_cache_store.py — v1
"""Abstract cache store interface shared by every transform."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from tokenslim.cache.models import CacheStats


class BaseCacheStore(ABC):
    """Unified interface for bounded key/value cache backends."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss or expiry."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value, evicting as needed to respect capacity."""

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check presence without refreshing recency."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove an entry if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""

    @abstractmethod
    def size(self) -> int:
        """Number of live entries."""

    @abstractmethod
    def capacity(self) -> int:
        """Maximum number of entries."""

    @abstractmethod
    def get_or_set(self, key: str, factory: Callable[[], Any]) -> Any:
        """Return the cached value or compute, store and return it atomically."""

    def stats(self) -> CacheStats:
        """Diagnostics snapshot. Backends may add hit/miss counters."""
        return CacheStats(size=self.size(), max_size=self.capacity())
