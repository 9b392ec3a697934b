# src/cache/models.py — v1
"""Cache domain models: CacheKey, CacheEntry, CacheStats."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheKey(BaseModel):
    """Identity of one transform request: (operation, parameters, raw content).

    ``parameters`` is already serialized deterministically (see
    ``cache.keys.serialize_parameters``). Two keys are equal exactly when all
    three fields are equal.
    """

    model_config = ConfigDict(frozen=True)

    operation: str
    parameters: str = ""
    content: str

    def as_string(self) -> str:
        """Unambiguous flat form used as the store key.

        A JSON array keeps field boundaries explicit, so no choice of
        parameters or content can make two distinct keys concatenate to
        the same string.
        """
        return json.dumps(
            [self.operation, self.parameters, self.content], ensure_ascii=False
        )


class CacheEntry(BaseModel):
    """Single cached transform result with its timestamps (clock seconds)."""

    value: Any
    inserted_at: float
    last_access: float


class CacheStats(BaseModel):
    """Read-only diagnostics snapshot of a cache."""

    model_config = ConfigDict(populate_by_name=True)

    size: int = 0
    max_size: int = Field(default=0, alias="maxSize")
    hits: int = 0
    misses: int = 0

    def as_dict(self) -> dict[str, int]:
        """``{"size": ..., "maxSize": ...}`` form for UI display."""
        return {"size": self.size, "maxSize": self.max_size}
