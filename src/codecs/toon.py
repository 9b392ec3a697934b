# src/codecs/toon.py — v1
"""Toon: one-way, display-oriented compaction of JSON-shaped data.

Uniform arrays of records become a table::

    [3]{id,name,role}:
    1,Alice,admin
    2,Bob,user
    3,Carol,user

Other arrays render as ``[a, b, c]`` and mappings as ``key: value`` lines.
Nested mappings are not indented, so deep structures flatten into the
same column of lines. There is no decoder; output is never parsed back.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from tokenslim.codecs.fields import has_delimiter, inline_json, quote_field, scalar_text
from tokenslim.core.models import detect_shape

_CELL_BREAK_RE = re.compile(r"[\n\r,]")
_KEY_BREAK_RE = re.compile(r"[\n\r:]")


def format_toon(value: Any, schema: Mapping[str, str] | None = None) -> str:
    """Render ``value`` in Toon notation.

    Args:
        value: JSON-shaped data.
        schema: Optional column/key rename table, looked up by original key.

    Returns:
        Toon text.
    """
    if isinstance(value, list):
        if not value:
            return "[]"
        shape = detect_shape(value)
        if shape.is_uniform:
            header = ",".join(_rename(column, schema) for column in shape.columns)
            rows = [
                ",".join(_format_cell(record[column]) for column in shape.columns)
                for record in value
            ]
            return f"[{shape.row_count}]{{{header}}}:\n" + "\n".join(rows)
        return "[" + ", ".join(format_toon(item, schema) for item in value) + "]"

    if isinstance(value, dict):
        lines = []
        for key, item in value.items():
            clean_key = _KEY_BREAK_RE.sub(" ", str(key))
            lines.append(f"{_rename(clean_key, schema)}: {format_toon(item, schema)}")
        return "\n".join(lines)

    return scalar_text(value)


def _rename(key: str, schema: Mapping[str, str] | None) -> str:
    if not schema:
        return key
    return schema.get(key) or key


def _format_cell(value: Any) -> str:
    """One table cell: strings are flattened, then quoted if still ambiguous."""
    if isinstance(value, str):
        text = _CELL_BREAK_RE.sub(" ", value)
    elif isinstance(value, (dict, list)):
        text = inline_json(value, lenient=True)
    else:
        text = scalar_text(value)
    if has_delimiter(text):
        return quote_field(text)
    return text
