# src/filters/output_filter.py — v1
"""Post-hoc filtering of already-generated agent text.

Filters run in the order given, each on the previous one's output; the
final result is trimmed once. Built-in names:

- ``markdown-code-blocks``: drop fence lines, keep the block content.
- ``extra-whitespace``: collapse whitespace runs to one space.
- ``repeated-lines``: collapse immediately repeated identical lines.

Any other name is a regular expression whose matches are deleted.
"""

from __future__ import annotations

import functools
import itertools
import logging
import re
from typing import Callable, Iterable, Pattern

from tokenslim.core.errors import OptimizationError
from tokenslim.optimizers.text_optimizer import collapse_whitespace

logger = logging.getLogger(__name__)

_CODE_BLOCK_RE = re.compile(r"```[\s\S]*?```")
_FENCED_CONTENT_RE = re.compile(r"```.*\n([\s\S]*?)```")


class InvalidFilterPatternError(OptimizationError):
    """Raised when a custom filter is not a valid regular expression."""

    prefix = "invalid filter pattern"


def strip_code_fences(text: str) -> str:
    """Remove ``` fences (and the info string) around fenced blocks."""
    return _CODE_BLOCK_RE.sub(
        lambda match: _FENCED_CONTENT_RE.sub(r"\1", match.group(0), count=1), text
    )


def collapse_repeated_lines(text: str) -> str:
    """Keep one copy of each run of identical adjacent lines."""
    return "\n".join(line for line, _ in itertools.groupby(text.split("\n")))


BUILTIN_FILTERS: dict[str, Callable[[str], str]] = {
    "markdown-code-blocks": strip_code_fences,
    "extra-whitespace": collapse_whitespace,
    "repeated-lines": collapse_repeated_lines,
}


@functools.lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile a custom filter pattern.

    Raises:
        InvalidFilterPatternError: If ``pattern`` is not a valid regex.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.warning(
            "Rejected filter pattern (pattern_length=%d): %s", len(pattern), e
        )
        raise InvalidFilterPatternError(
            f"{e}", operation="filter", input_length=len(pattern)
        ) from e


def resolve_filters(filter_names: Iterable[str]) -> list[Callable[[str], str]]:
    """Map filter names to callables, compiling custom patterns eagerly."""
    steps: list[Callable[[str], str]] = []
    for name in filter_names:
        builtin = BUILTIN_FILTERS.get(name)
        if builtin is not None:
            steps.append(builtin)
            continue
        pattern = compile_pattern(name)
        steps.append(functools.partial(pattern.sub, ""))
    return steps


def filter_output(text: str, filter_names: Iterable[str] = ()) -> str:
    """Apply ``filter_names`` to ``text`` in order, then trim.

    Raises:
        InvalidFilterPatternError: If a custom pattern does not compile.
            Raised before any filter runs.
    """
    for step in resolve_filters(filter_names):
        text = step(text)
    return text.strip()
