# tests/unit/api/test_unit_api_models.py — v1
"""Tests for api/models.py."""

from __future__ import annotations

from tokenslim.api.models import OptimizationReport, estimate_tokens


class TestEstimateTokens:
    def test_four_chars_per_token(self):
        assert estimate_tokens("abcdefgh") == 2
        assert estimate_tokens("abc") == 0
        assert estimate_tokens("") == 0


class TestOptimizationReport:
    def test_compare(self):
        report = OptimizationReport.compare("x" * 100, "x" * 60)
        assert report.original_chars == 100
        assert report.optimized_chars == 60
        assert report.savings_pct == 40.0

    def test_empty_original(self):
        report = OptimizationReport.compare("", "")
        assert report.savings_pct == 0.0
        assert report.tokens_saved == 0
