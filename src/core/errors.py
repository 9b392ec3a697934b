# src/core/errors.py — v1
"""Base error for recoverable transform failures.

Carries enough context to log meaningfully (operation name, input length)
without leaking the content itself.
"""

from __future__ import annotations


class OptimizationError(Exception):
    """A transform failed in a way the caller may recover from."""

    prefix = "optimization failed"

    def __init__(self, cause: str, operation: str = "", input_length: int = 0) -> None:
        self.cause = cause
        self.operation = operation
        self.input_length = input_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        details = []
        if self.operation:
            details.append(f"operation={self.operation}")
        details.append(f"input_length={self.input_length}")
        return f"{self.prefix}: {self.cause} ({', '.join(details)})"
