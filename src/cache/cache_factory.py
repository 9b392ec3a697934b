# src/cache/cache_factory.py — v1
"""Factory for cache store instantiation from settings."""

from __future__ import annotations

import logging

from tokenslim.cache.base_cache_store import BaseCacheStore
from tokenslim.cache.memory_store import (
    DEFAULT_MAX_SIZE,
    DEFAULT_TTL_SECONDS,
    MemoryCacheStore,
)
from tokenslim.config.settings import Settings

logger = logging.getLogger(__name__)


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the cache backend.

    Args:
        settings: Application settings. Defaults to 100 entries, one hour TTL.

    Returns:
        Configured BaseCacheStore implementation.
    """
    if settings is None:
        store = MemoryCacheStore(
            max_size=DEFAULT_MAX_SIZE, ttl_seconds=DEFAULT_TTL_SECONDS
        )
    else:
        store = MemoryCacheStore(
            max_size=settings.cache_max_size,
            ttl_seconds=settings.cache_ttl_seconds,
        )
    logger.debug(
        "Created memory cache store (max_size=%d, ttl=%.0fs)",
        store.capacity(),
        store.ttl_seconds,
    )
    return store
