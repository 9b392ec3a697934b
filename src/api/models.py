# src/api/models.py — v1
"""API-level models: OptimizationReport."""

from __future__ import annotations

from pydantic import BaseModel


def estimate_tokens(text: str) -> int:
    """Rough token estimate (4 chars per token). Not a tokenizer."""
    return len(text) // 4


class OptimizationReport(BaseModel):
    """Before/after size comparison of one optimization."""

    original_chars: int
    optimized_chars: int
    original_tokens_est: int
    optimized_tokens_est: int
    savings_pct: float = 0.0

    @property
    def tokens_saved(self) -> int:
        return self.original_tokens_est - self.optimized_tokens_est

    @classmethod
    def compare(cls, original: str, optimized: str) -> OptimizationReport:
        original_tokens = estimate_tokens(original)
        optimized_tokens = estimate_tokens(optimized)
        savings = (
            round((1 - optimized_tokens / original_tokens) * 100, 1)
            if original_tokens
            else 0.0
        )
        return cls(
            original_chars=len(original),
            optimized_chars=len(optimized),
            original_tokens_est=original_tokens,
            optimized_tokens_est=optimized_tokens,
            savings_pct=savings,
        )
