# src/codecs/fields.py — v1
"""Field-level helpers shared by the tabular codecs."""

from __future__ import annotations

import json
import math
from typing import Any

QUOTE = '"'


def quote_field(text: str) -> str:
    """Wrap in double quotes, doubling any internal quote."""
    return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE


def has_delimiter(text: str) -> bool:
    """True when a field must be quoted to survive comma-splitting."""
    return "," in text or QUOTE in text


def scalar_text(value: Any) -> str:
    """Literal display form of a scalar.

    Booleans and null use their JSON spelling; integral floats drop the
    fractional part (``2.0`` renders as ``2``).
    """
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def inline_json(value: Any, lenient: bool = False) -> str:
    """Compact single-line JSON for a nested value inside a row.

    ``lenient`` allows NaN/Infinity and stringifies unknown types, for
    display-only output.
    """
    if lenient:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, default=str
        )
    return json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )
