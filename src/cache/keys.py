# src/cache/keys.py — v1
"""Deterministic cache key construction for transform requests."""

from __future__ import annotations

import json
from typing import Any

from tokenslim.cache.models import CacheKey


def serialize_parameters(parameters: Any) -> str:
    """Serialize operation parameters deterministically.

    ``None`` and empty containers serialize to ``""``. Mappings are emitted
    with sorted keys; sequences keep their order (filter order matters).
    """
    if parameters is None:
        return ""
    if isinstance(parameters, (dict, list, tuple)) and not parameters:
        return ""
    if isinstance(parameters, str):
        return parameters
    return json.dumps(
        parameters, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def build_cache_key(operation: str, parameters: Any, content: str) -> CacheKey:
    """Build the key for ``operation`` applied to ``content`` with ``parameters``."""
    return CacheKey(
        operation=operation,
        parameters=serialize_parameters(parameters),
        content=content,
    )
