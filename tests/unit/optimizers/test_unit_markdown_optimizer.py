# tests/unit/optimizers/test_unit_markdown_optimizer.py — v1
"""Tests for optimizers/markdown_optimizer.py."""

from __future__ import annotations

import pytest

from tokenslim.optimizers.markdown_optimizer import optimize_markdown

SAMPLES = [
    "# Title\n\n\n\nBody",
    "  # Title  \n\n\n  Content  ",
    "a\n   \n  \n\t\nb",
    "- item\n  - nested\n\n\n\n\n## Next",
    "",
]


class TestOptimizeMarkdown:
    def test_blank_line_runs_collapse_to_one(self):
        assert optimize_markdown("# Title\n\n\n\nBody") == "# Title\n\nBody"

    def test_single_blank_line_kept(self):
        assert optimize_markdown("para one\n\npara two") == "para one\n\npara two"

    def test_leading_whitespace_stripped_per_line(self):
        assert optimize_markdown("  a\n    b\n\tc") == "a\nb\nc"

    def test_whitespace_only_lines_count_as_blank(self):
        assert optimize_markdown("a\n   \n  \n\t\nb") == "a\n\nb"

    def test_trailing_whitespace_inside_lines_kept(self):
        assert optimize_markdown("  # Title  \n\n\n  Content  ") == "# Title  \n\nContent"

    def test_outer_trim(self):
        assert optimize_markdown("\n\n  text  \n\n") == "text"

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = optimize_markdown(text)
        assert optimize_markdown(once) == once
