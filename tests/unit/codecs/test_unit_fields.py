# tests/unit/codecs/test_unit_fields.py — v1
"""Tests for codecs/fields.py."""

from __future__ import annotations

import math

import pytest

from tokenslim.codecs.fields import has_delimiter, inline_json, quote_field, scalar_text


class TestQuoteField:
    def test_wraps_and_doubles(self):
        assert quote_field('a"b') == '"a""b"'

    def test_has_delimiter(self):
        assert has_delimiter("a,b") is True
        assert has_delimiter('a"b') is True
        assert has_delimiter("ab") is False


class TestScalarText:
    def test_special_floats(self):
        assert scalar_text(math.nan) == "NaN"
        assert scalar_text(math.inf) == "Infinity"
        assert scalar_text(-math.inf) == "-Infinity"

    def test_large_integral_float_keeps_exponent(self):
        assert scalar_text(1e21) == "1e+21"


class TestInlineJson:
    def test_strict_rejects_nan(self):
        with pytest.raises(ValueError):
            inline_json([math.nan])

    def test_lenient_accepts_nan(self):
        assert inline_json([math.nan], lenient=True) == "[NaN]"
