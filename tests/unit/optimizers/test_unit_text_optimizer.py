# tests/unit/optimizers/test_unit_text_optimizer.py — v1
"""Tests for optimizers/text_optimizer.py."""

from __future__ import annotations

import pytest

from tokenslim.optimizers.text_optimizer import collapse_whitespace, optimize_text

SAMPLES = [
    "   multiple    spaces    between    words   ",
    "tabs\t\tand\nnewlines\r\n\r\nmixed",
    "",
    "    ",
    "already optimized",
    " non-breaking space em",
]


class TestOptimizeText:
    def test_collapses_and_trims(self):
        assert optimize_text("   multiple    spaces    between    words   ") == (
            "multiple spaces between words"
        )

    def test_newlines_and_tabs(self):
        assert optimize_text("a\n\n\tb\r\nc") == "a b c"

    def test_whitespace_only(self):
        assert optimize_text("    ") == ""

    def test_empty(self):
        assert optimize_text("") == ""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = optimize_text(text)
        assert optimize_text(once) == once


class TestCollapseWhitespace:
    def test_does_not_trim(self):
        assert collapse_whitespace("  a   b  ") == " a b "
