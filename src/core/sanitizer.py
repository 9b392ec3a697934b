# src/core/sanitizer.py — v1
"""Pure text/structure cleaning applied before encoding.

Sanitization is irreversible: it defends downstream consumers against
markup/script injection and is not a transport encoding. No decoder
recovers the original text.
"""

from __future__ import annotations

import re
from typing import Any

from tokenslim.core.models import Document

# Ampersand first so entities inserted by later steps are not re-escaped.
_TEXT_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)

_KEY_STRIP_RE = re.compile(r"[<>&\"']")
_LINE_BREAK_RE = re.compile(r"[\r\n]")


def sanitize_text(text: Any) -> str:
    """Escape the five HTML-significant characters and trim."""
    if not isinstance(text, str):
        text = str(text)
    for char, entity in _TEXT_ESCAPES:
        text = text.replace(char, entity)
    return text.strip()


def sanitize_key(key: Any) -> str:
    """Strip HTML-significant characters from a mapping key.

    Line breaks become single spaces so a key can never span rows in a
    line-oriented codec.
    """
    if not isinstance(key, str):
        key = str(key)
    key = _KEY_STRIP_RE.sub("", key)
    return _LINE_BREAK_RE.sub(" ", key)


def sanitize_document(document: Document) -> Document:
    """Recursively sanitize every mapping key; scalar values are untouched.

    Returns a new structure. When two keys collapse to the same sanitized
    form, the later one wins.
    """
    if isinstance(document, list):
        return [sanitize_document(item) for item in document]
    if isinstance(document, dict):
        return {
            sanitize_key(key): sanitize_document(value)
            for key, value in document.items()
        }
    return document
