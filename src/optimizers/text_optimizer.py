# src/optimizers/text_optimizer.py — v1
"""Plain-text normalization: collapse whitespace runs."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run (spaces, tabs, newlines) with one space."""
    return _WHITESPACE_RE.sub(" ", text)


def optimize_text(text: str) -> str:
    """Collapse whitespace runs to a single space, then trim. Idempotent."""
    return collapse_whitespace(text).strip()
