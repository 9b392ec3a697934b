# src/api/facade.py — v1
"""Public API facade: the optimizer service.

Usage:
    from tokenslim.api.facade import TokenOptimizer
    optimizer = TokenOptimizer()
    compact = optimizer.optimize_content(raw_text, "text")

Every operation builds a cache key from (operation, parameters, raw
content). A hit returns the stored value without sanitizing or
transforming again; a miss sanitizes, transforms, stores and returns.
Failed transforms are never stored.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, Sequence

from tokenslim.api.models import OptimizationReport
from tokenslim.cache.base_cache_store import BaseCacheStore
from tokenslim.cache.cache_factory import create_cache_store
from tokenslim.cache.keys import build_cache_key
from tokenslim.cache.models import CacheStats
from tokenslim.codecs.toon import format_toon
from tokenslim.codecs.zon import ZonDecodeError, ZonEncodeError, decode_zon, encode_zon
from tokenslim.config.settings import Settings
from tokenslim.core.models import CONTENT_TYPES, TABULAR_KINDS, ContentType, Document, TabularKind
from tokenslim.core.sanitizer import sanitize_document, sanitize_text
from tokenslim.filters.output_filter import InvalidFilterPatternError, filter_output
from tokenslim.logging.context import reset_operation_context, set_operation_context
from tokenslim.optimizers.json_optimizer import optimize_json, parse_json
from tokenslim.optimizers.markdown_optimizer import optimize_markdown
from tokenslim.optimizers.text_optimizer import optimize_text

logger = logging.getLogger(__name__)

_OPTIMIZERS: dict[str, Callable[[str], str]] = {
    "text": optimize_text,
    "markdown": optimize_markdown,
    "json": optimize_json,
}


class TokenOptimizer:
    """Caching front for the sanitizers, optimizers, codecs and filters.

    Owns one cache for its lifetime. Pass ``cache`` to share or inject a
    store; otherwise one is built from ``settings``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        cache: BaseCacheStore | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._cache = cache if cache is not None else create_cache_store(self._settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache(self) -> BaseCacheStore:
        return self._cache

    # --- Content optimization ---

    def optimize_content(self, content: str, content_type: ContentType = "text") -> str:
        """Sanitize then normalize ``content`` for its content class.

        The generic text sanitizer runs before the class-specific pass, so
        JSON carrying quoted strings is already entity-escaped when the
        JSON optimizer sees it; it then fails to parse and the sanitized
        text is returned as-is.

        Raises:
            ValueError: If ``content_type`` is not text, markdown or json.
        """
        if content_type not in CONTENT_TYPES:
            raise ValueError(
                f"Unsupported content type: {content_type!r} "
                f"(expected one of {', '.join(CONTENT_TYPES)})"
            )
        optimizer = _OPTIMIZERS[content_type]
        return self._cached(
            "optimize",
            content_type,
            content,
            lambda: optimizer(sanitize_text(content)),
        )

    # --- Tabular codecs ---

    def to_tabular(
        self,
        content: str,
        kind: TabularKind = "toon",
        schema: Mapping[str, str] | None = None,
    ) -> str:
        """Convert JSON text into a tabular encoding.

        Args:
            content: JSON text.
            kind: ``"toon"`` (display only) or ``"zon"`` (reversible).
            schema: Column rename table, Toon only.

        Raises:
            ValueError: If ``kind`` is unknown.
            ZonEncodeError: Zon only, if ``content`` is not JSON or cannot
                be encoded.
        """
        if kind == "toon":
            return self.json_to_toon(content, schema)
        if kind == "zon":
            return self.json_to_zon(content)
        raise ValueError(
            f"Unsupported tabular kind: {kind!r} (expected one of {', '.join(TABULAR_KINDS)})"
        )

    def json_to_toon(
        self, content: str, schema: Mapping[str, str] | None = None
    ) -> str:
        """Render JSON text as Toon. Unparseable input degrades to sanitized text."""
        parameters = dict(schema) if schema else None
        return self._cached(
            "toon", parameters, content, lambda: _json_to_toon(content, schema)
        )

    def json_to_zon(self, content: str) -> str:
        """Encode JSON text as Zon.

        Raises:
            ZonEncodeError: If ``content`` is not JSON or cannot be encoded.
        """
        return self._cached("zon", None, content, lambda: _json_to_zon(content))

    def zon_to_json(self, zon_text: str) -> str:
        """Decode Zon text into indented JSON text with sanitized keys.

        Raises:
            ZonDecodeError: If ``zon_text`` is malformed.
        """
        return self._cached(
            "zon_to_json", None, zon_text, lambda: _zon_to_json(zon_text)
        )

    def from_zon(self, zon_text: str) -> Document:
        """Decode Zon text into a Document (fresh copy on every call).

        Raises:
            ZonDecodeError: If ``zon_text`` is malformed.
        """
        return json.loads(self.zon_to_json(zon_text))

    # --- Output filtering ---

    def filter_output(self, output: str, filters: Sequence[str] | None = None) -> str:
        """Apply named output filters in order, then trim.

        Raises:
            InvalidFilterPatternError: If a custom pattern is not a valid regex.
        """
        names = list(filters or [])
        return self._cached(
            "filter", names, output, lambda: _filter(output, names)
        )

    # --- Diagnostics ---

    def get_cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.debug("Cache cleared")

    @staticmethod
    def report(original: str, optimized: str) -> OptimizationReport:
        """Compare sizes before and after an optimization."""
        return OptimizationReport.compare(original, optimized)

    # --- Internals ---

    def _cached(
        self,
        operation: str,
        parameters: Any,
        content: str,
        compute: Callable[[], Any],
    ) -> Any:
        key = build_cache_key(operation, parameters, content).as_string()
        token = set_operation_context(operation)
        try:
            return self._cache.get_or_set(
                key, lambda: _on_miss(operation, content, compute)
            )
        finally:
            reset_operation_context(token)


def _on_miss(operation: str, content: str, compute: Callable[[], Any]) -> Any:
    logger.debug("Cache miss: operation=%s, input_length=%d", operation, len(content))
    return compute()


def _json_to_toon(content: str, schema: Mapping[str, str] | None) -> str:
    try:
        document = parse_json(content)
    except ValueError:
        logger.debug("Toon conversion fell back to sanitized text (input_length=%d)", len(content))
        return sanitize_text(content)
    try:
        return format_toon(sanitize_document(document), schema)
    except RecursionError:
        logger.debug("Toon conversion fell back to sanitized text (input_length=%d): nesting too deep", len(content))
        return sanitize_text(content)


def _json_to_zon(content: str) -> str:
    try:
        document = parse_json(content)
    except ValueError as e:
        logger.warning("Zon conversion rejected non-JSON input (input_length=%d)", len(content))
        raise ZonEncodeError(
            f"invalid JSON input: {e}", operation="json_to_zon", input_length=len(content)
        ) from e
    try:
        return encode_zon(sanitize_document(document))
    except RecursionError as e:
        logger.warning("Zon encoding failed (input_length=%d): nesting too deep", len(content))
        raise ZonEncodeError(
            "document nesting too deep", operation="json_to_zon", input_length=len(content)
        ) from e
    except ZonEncodeError as e:
        logger.warning("Zon encoding failed (input_length=%d): %s", len(content), e.cause)
        raise ZonEncodeError(
            e.cause, operation="json_to_zon", input_length=len(content)
        ) from e


def _zon_to_json(zon_text: str) -> str:
    try:
        document = decode_zon(zon_text)
        return json.dumps(sanitize_document(document), indent=2, ensure_ascii=False)
    except RecursionError as e:
        logger.warning("Zon decoding failed (input_length=%d): nesting too deep", len(zon_text))
        raise ZonDecodeError(
            "document nesting too deep", operation="zon_to_json", input_length=len(zon_text)
        ) from e
    except ZonDecodeError as e:
        logger.warning("Zon decoding failed (input_length=%d): %s", len(zon_text), e.cause)
        raise ZonDecodeError(
            e.cause, operation="zon_to_json", input_length=len(zon_text)
        ) from e


def _filter(output: str, names: list[str]) -> str:
    try:
        return filter_output(output, names)
    except InvalidFilterPatternError as e:
        raise InvalidFilterPatternError(
            e.cause, operation="filter_output", input_length=len(output)
        ) from e
