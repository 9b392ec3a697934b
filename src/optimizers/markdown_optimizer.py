# src/optimizers/markdown_optimizer.py — v1
"""Markdown normalization: drop indentation and surplus blank lines."""

from __future__ import annotations

import re

# Leading horizontal whitespace on each line; newlines are left in place.
_INDENT_RE = re.compile(r"^[^\S\n]+", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def optimize_markdown(markdown: str) -> str:
    """Normalize markdown for token efficiency.

    Strips leading whitespace from every line, reduces any run of two or
    more blank lines to exactly one blank line, then trims. Indentation is
    stripped first so whitespace-only lines count as blank. Idempotent.

    Note that indented code blocks lose their indentation; fenced blocks
    keep their content but not its indentation either.
    """
    text = _INDENT_RE.sub("", markdown)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()
