# src/logging/context.py — v1
"""Contextual logging support: attach operation and request_id to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    operation: str | None = None
    request_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        operation=_operation.get(),
        request_id=_request_id.get(),
    )


def set_request_context(request_id: str) -> None:
    """Set request-level context (called once per caller request)."""
    _request_id.set(request_id)


def set_operation_context(operation: str | None) -> contextvars.Token:
    """Set the running operation; returns a token for ``reset_operation_context``."""
    return _operation.set(operation)


def reset_operation_context(token: contextvars.Token) -> None:
    """Restore the operation that was active before ``set_operation_context``."""
    _operation.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _operation.set(None)
    _request_id.set(None)
