# src/codecs/zon.py — v1
"""Zon: bidirectional, columnar text encoding of JSON-shaped data.

Forms produced by ``encode_zon``:

- Uniform array of records (same non-empty key set)::

      @data(3):id,name,role
      1,Alice,admin
      2,Bob,user
      3,Carol,user

- Non-empty mapping: one ``key: value`` line per entry. A value that is
  itself a non-empty mapping or a uniform array is written as ``key:``
  followed by its own block, indented by two spaces.

- Anything else (scalar, empty container, non-uniform array): a single
  inline value.

Inline values: ``null``, ``T``/``F`` for booleans, JSON numbers, strings
(bare, or double-quoted with internal quotes doubled when they contain a
delimiter or could be mistaken for another literal), and compact JSON for
nested arrays/mappings.

``decode_zon(encode_zon(d)) == d`` for every Document whose keys and
string values contain no line break. Line breaks are the row separator,
so such input is refused rather than silently corrupted.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from tokenslim.codecs.fields import QUOTE, inline_json, quote_field
from tokenslim.core.errors import OptimizationError
from tokenslim.core.models import Document, TabularShape, detect_shape

HEADER_PREFIX = "@data("
INDENT = "  "

_HEADER_RE = re.compile(r"^@data\((\d+)\):(.*)$")
_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_LITERALS: dict[str, Any] = {"null": None, "T": True, "F": False}
_RESERVED_CHARS = (",", QUOTE, ":")
_RESERVED_LEADERS = ("{", "[", "@")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


_JSON_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


class ZonEncodeError(OptimizationError):
    """Raised when a value cannot be represented in Zon."""

    prefix = "Zon encoding failed"


class ZonDecodeError(OptimizationError):
    """Raised when text is not well-formed Zon."""

    prefix = "Zon decoding failed"


# --- Encoding ---


def encode_zon(document: Document) -> str:
    """Encode a Document as Zon text.

    Raises:
        ZonEncodeError: On cycles, unsupported types, non-finite numbers,
            non-string keys, or keys/strings containing a line break.
    """
    try:
        _validate(document, set())
        return _encode_block(document)
    except RecursionError as e:
        raise ZonEncodeError(
            "document nesting too deep",
            operation="zon.encode",
            input_length=_measure(document),
        ) from e
    except (TypeError, ValueError) as e:
        raise ZonEncodeError(
            str(e), operation="zon.encode", input_length=_measure(document)
        ) from e


def _measure(document: Any) -> int:
    try:
        return len(document)
    except TypeError:
        return 0


def _validate(value: Any, ancestors: set[int]) -> None:
    """Reject values with no Document equivalent."""
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("non-finite number cannot be encoded")
        return
    if isinstance(value, (list, dict)):
        marker = id(value)
        if marker in ancestors:
            raise ValueError("cyclic reference detected")
        ancestors.add(marker)
        if isinstance(value, dict):
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError(
                        f"mapping keys must be strings, got {type(key).__name__}"
                    )
                _validate(item, ancestors)
        else:
            for item in value:
                _validate(item, ancestors)
        ancestors.discard(marker)
        return
    raise TypeError(f"unsupported type {type(value).__name__}")


def _encode_block(value: Any) -> str:
    shape = detect_shape(value)
    if shape.is_uniform:
        return _encode_table(value, shape)
    if isinstance(value, dict) and value:
        return _encode_object(value)
    return _encode_value(value)


def _encode_table(records: list[dict[str, Any]], shape: TabularShape) -> str:
    header = f"{HEADER_PREFIX}{shape.row_count}):" + ",".join(
        _encode_key(column) for column in shape.columns
    )
    rows = [
        ",".join(_encode_value(record[column]) for column in shape.columns)
        for record in records
    ]
    return "\n".join([header, *rows])


def _encode_object(mapping: dict[str, Any]) -> str:
    lines: list[str] = []
    for key, item in mapping.items():
        encoded_key = _encode_key(key)
        if _is_block(item):
            lines.append(f"{encoded_key}:")
            lines.extend(INDENT + line for line in _encode_block(item).split("\n"))
        else:
            lines.append(f"{encoded_key}: {_encode_value(item)}")
    return "\n".join(lines)


def _is_block(value: Any) -> bool:
    return (isinstance(value, dict) and bool(value)) or detect_shape(value).is_uniform


def _encode_value(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "T"
    if value is False:
        return "F"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return json.dumps(value)
    if isinstance(value, str):
        return _encode_string(value)
    return inline_json(value)


def _encode_string(text: str) -> str:
    if "\n" in text or "\r" in text:
        raise ValueError("string value contains a line break (ambiguous row separator)")
    if _string_needs_quotes(text):
        return quote_field(text)
    return text


def _string_needs_quotes(text: str) -> bool:
    if not text or text != text.strip():
        return True
    if any(char in text for char in _RESERVED_CHARS):
        return True
    if text.startswith(_RESERVED_LEADERS) or text in _LITERALS:
        return True
    try:
        float(text)
    except ValueError:
        return False
    return True


def _encode_key(key: str) -> str:
    if "\n" in key or "\r" in key:
        raise ValueError("mapping key contains a line break (ambiguous row separator)")
    if (
        not key
        or key != key.strip()
        or any(char in key for char in _RESERVED_CHARS)
        or key.startswith(_RESERVED_LEADERS)
    ):
        return quote_field(key)
    return key


# --- Decoding ---


def decode_zon(text: str) -> Document:
    """Decode Zon text back into a Document.

    Raises:
        ZonDecodeError: If ``text`` is empty or malformed.
    """
    try:
        lines = text.replace("\r\n", "\n").split("\n")
        return _decode_lines(lines)
    except RecursionError as e:
        raise ZonDecodeError(
            "document nesting too deep", operation="zon.decode", input_length=len(text)
        ) from e
    except ValueError as e:
        raise ZonDecodeError(
            str(e), operation="zon.decode", input_length=len(text)
        ) from e


def _decode_lines(lines: list[str]) -> Any:
    while lines and lines[-1] == "":
        lines = lines[:-1]
    if not lines:
        raise ValueError("empty input")

    first = lines[0]
    if first.startswith(HEADER_PREFIX):
        return _decode_table(lines)
    if _is_object_line(first):
        return _decode_object(lines)
    if len(lines) > 1:
        raise ValueError("unexpected content after a single value")
    return _decode_inline(first)


def _decode_table(lines: list[str]) -> list[dict[str, Any]]:
    match = _HEADER_RE.match(lines[0])
    if not match:
        raise ValueError("malformed @data header")
    count = int(match.group(1))
    columns = [_token_key(token) for token in _scan_fields(match.group(2))]

    rows = lines[1:]
    if len(rows) != count:
        raise ValueError(f"header declares {count} rows, found {len(rows)}")

    records: list[dict[str, Any]] = []
    for index, row in enumerate(rows, start=1):
        tokens = _scan_fields(row)
        if len(tokens) != len(columns):
            raise ValueError(
                f"row {index} has {len(tokens)} fields, expected {len(columns)}"
            )
        records.append(
            {column: _token_value(token) for column, token in zip(columns, tokens)}
        )
    return records


def _decode_object(lines: list[str]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    index = 0
    while index < len(lines):
        line_number = index + 1
        line = lines[index]
        if line.startswith(" "):
            raise ValueError(f"unexpected indentation on line {line_number}")
        key, rest = _split_key_line(line, line_number)
        index += 1
        if rest is not None:
            result[key] = _decode_inline(rest)
            continue
        block: list[str] = []
        while index < len(lines) and lines[index].startswith(INDENT):
            block.append(lines[index][len(INDENT):])
            index += 1
        if not block:
            raise ValueError(f"missing nested block after line {line_number}")
        result[key] = _decode_lines(block)
    return result


def _is_object_line(line: str) -> bool:
    if not line or line.startswith(("{", "[")):
        return False
    if line.startswith(QUOTE):
        try:
            _, end = _read_quoted(line, 0)
        except ValueError:
            return False
        return line[end:end + 1] == ":"
    return ":" in line


def _split_key_line(line: str, line_number: int) -> tuple[str, str | None]:
    """Split ``key: value`` / ``key:``; the value is None for a nested block."""
    if line.startswith(QUOTE):
        key, end = _read_quoted(line, 0)
    else:
        end = line.find(":")
        key = line[:end]
        if end <= 0 or "," in key:
            raise ValueError(f"expected 'key: value' on line {line_number}")
    if line[end:end + 1] != ":":
        raise ValueError(f"expected ':' after key on line {line_number}")
    rest = line[end + 1:]
    if not rest:
        return key, None
    if not rest.startswith(" "):
        raise ValueError(f"expected ': ' after key on line {line_number}")
    return key, rest[1:]


def _decode_inline(text: str) -> Any:
    tokens = _scan_fields(text)
    if len(tokens) != 1:
        raise ValueError(f"expected a single value, found {len(tokens)} fields")
    return _token_value(tokens[0])


def _scan_fields(line: str) -> list[tuple[str, Any]]:
    """Split a comma-separated row into (kind, payload) tokens.

    Kinds: ``quoted`` (payload is the unescaped text), ``json`` (payload
    is the parsed value) and ``bare`` (payload is the raw text).
    """
    tokens: list[tuple[str, Any]] = []
    pos = 0
    length = len(line)
    while True:
        if line.startswith(QUOTE, pos):
            text, pos = _read_quoted(line, pos)
            tokens.append(("quoted", text))
        elif line.startswith(("{", "["), pos):
            try:
                value, pos = _JSON_DECODER.raw_decode(line, pos)
            except ValueError as e:
                raise ValueError(f"malformed inline value at column {pos + 1}") from e
            tokens.append(("json", value))
        else:
            end = line.find(",", pos)
            if end == -1:
                end = length
            tokens.append(("bare", line[pos:end]))
            pos = end

        if pos == length:
            return tokens
        if line[pos] != ",":
            raise ValueError(f"expected ',' at column {pos + 1}")
        pos += 1


def _read_quoted(line: str, start: int) -> tuple[str, int]:
    """Read a quoted field starting at ``start``; return (text, end index)."""
    chars: list[str] = []
    pos = start + 1
    while pos < len(line):
        char = line[pos]
        if char == QUOTE:
            if line.startswith(QUOTE, pos + 1):
                chars.append(QUOTE)
                pos += 2
                continue
            return "".join(chars), pos + 1
        chars.append(char)
        pos += 1
    raise ValueError(f"unterminated quoted field at column {start + 1}")


def _token_value(token: tuple[str, Any]) -> Any:
    kind, payload = token
    if kind != "bare":
        return payload
    if payload in _LITERALS:
        return _LITERALS[payload]
    if _NUMBER_RE.fullmatch(payload):
        if any(char in payload for char in ".eE"):
            return float(payload)
        return int(payload)
    return payload


def _token_key(token: tuple[str, Any]) -> str:
    kind, payload = token
    if kind == "json":
        raise ValueError("column name cannot be a structured value")
    return payload
