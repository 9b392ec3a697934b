# src/core/models.py — v1
"""Core value model shared by every transform: Document, content classes, tabular shape.

A Document is plain JSON-shaped Python data: ``str``, ``int``, ``float``,
``bool``, ``None``, ``list`` of Documents, or ``dict`` mapping ``str`` keys
to Documents. Cycles are illegal.
"""

from __future__ import annotations

from typing import Any, Literal, get_args

from pydantic import BaseModel, Field

Document = Any  # recursive: str | int | float | bool | None | list[Document] | dict[str, Document]

ContentType = Literal["text", "markdown", "json"]
TabularKind = Literal["toon", "zon"]

CONTENT_TYPES: tuple[str, ...] = get_args(ContentType)
TABULAR_KINDS: tuple[str, ...] = get_args(TabularKind)


class TabularShape(BaseModel):
    """Derived description of whether a sequence can be rendered as a table."""

    is_uniform: bool = False
    row_count: int = 0
    columns: list[str] = Field(default_factory=list)


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def detect_shape(value: Any) -> TabularShape:
    """Check whether ``value`` is a uniform array of records.

    Uniform means a non-empty list whose elements are all mappings sharing
    exactly the same, non-empty key set. Column order follows the first
    record. Recomputed on every call.
    """
    if not isinstance(value, list) or not value:
        return TabularShape()

    first = value[0]
    if not is_mapping(first) or not first:
        return TabularShape()

    columns = list(first.keys())
    key_set = set(columns)
    for item in value[1:]:
        if not is_mapping(item) or set(item.keys()) != key_set:
            return TabularShape()

    return TabularShape(is_uniform=True, row_count=len(value), columns=columns)
