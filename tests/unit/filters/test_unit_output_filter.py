# tests/unit/filters/test_unit_output_filter.py — v1
"""Tests for filters/output_filter.py — sequential output filtering."""

from __future__ import annotations

import pytest

from tokenslim.filters.output_filter import (
    InvalidFilterPatternError,
    collapse_repeated_lines,
    filter_output,
    strip_code_fences,
)


class TestBuiltinFilters:
    def test_repeated_lines(self):
        assert filter_output("a\na\nb", ["repeated-lines"]) == "a\nb"

    def test_extra_whitespace(self):
        assert filter_output("  multi   space  ", ["extra-whitespace"]) == "multi space"

    def test_code_blocks_keep_content(self):
        text = "Here:\n```python\nprint(1)\n```\nDone"
        assert filter_output(text, ["markdown-code-blocks"]) == "Here:\nprint(1)\n\nDone"

    def test_multiple_code_blocks(self):
        text = "```\na\n```\nmid\n```sh\nb\n```"
        assert strip_code_fences(text) == "a\n\nmid\nb\n"

    def test_inline_fence_untouched(self):
        assert strip_code_fences("use ```x``` here") == "use ```x``` here"


class TestCollapseRepeatedLines:
    def test_only_adjacent_repeats(self):
        assert collapse_repeated_lines("a\nb\na") == "a\nb\na"

    def test_runs(self):
        assert collapse_repeated_lines("a\na\na\nb\nb") == "a\nb"

    def test_repeat_at_end(self):
        assert collapse_repeated_lines("b\na\na") == "b\na"


class TestComposition:
    def test_order_matters(self):
        text = "a\na\nb"
        assert filter_output(text, ["extra-whitespace", "repeated-lines"]) == "a a b"
        assert filter_output(text, ["repeated-lines", "extra-whitespace"]) == "a b"

    def test_custom_pattern_deleted_globally(self):
        text = "Answer: 42 [DEBUG] x [DEBUG]"
        assert filter_output(text, [r"\[DEBUG\]"]) == "Answer: 42  x"

    def test_custom_then_whitespace(self):
        text = "Answer: 42 [DEBUG] x"
        assert filter_output(text, [r"\[DEBUG\]", "extra-whitespace"]) == "Answer: 42 x"

    def test_no_filters_only_trims(self):
        assert filter_output("  as is \n") == "as is"


class TestInvalidPattern:
    def test_raises(self):
        with pytest.raises(InvalidFilterPatternError, match="invalid filter pattern"):
            filter_output("text", ["(unclosed"])

    def test_raised_before_any_filter_runs(self):
        with pytest.raises(InvalidFilterPatternError):
            filter_output("text", ["extra-whitespace", "[bad"])

    def test_error_context(self):
        with pytest.raises(InvalidFilterPatternError) as exc_info:
            filter_output("text", ["(unclosed"])
        assert exc_info.value.operation == "filter"
        assert exc_info.value.input_length == len("(unclosed")
