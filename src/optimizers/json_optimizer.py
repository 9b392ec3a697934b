# src/optimizers/json_optimizer.py — v1
"""JSON minification with key sanitization.

Malformed input is a recoverable condition: the text is returned unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from tokenslim.core.sanitizer import sanitize_document

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def parse_json(text: str) -> Any:
    """Strict JSON parse (NaN/Infinity rejected).

    Raises:
        ValueError: If ``text`` is not a JSON document.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nesting too deep") from e


def minify_json(document: Any) -> str:
    """Serialize with no insignificant whitespace, non-ASCII kept as-is."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


def optimize_json(text: str) -> str:
    """Minify ``text`` as JSON with every mapping key sanitized.

    Returns ``text`` unchanged when it does not parse, or when it nests
    deeper than the key sanitizer or serializer can follow.
    """
    try:
        document = parse_json(text)
    except ValueError as e:
        logger.debug("JSON optimization skipped (input_length=%d): %s", len(text), e)
        return text
    try:
        return minify_json(sanitize_document(document))
    except RecursionError:
        logger.debug("JSON optimization skipped (input_length=%d): nesting too deep", len(text))
        return text
