# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

import pytest

from tokenslim.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.cache_max_size == 100
        assert s.cache_ttl_seconds == 3600

    def test_default_switches(self):
        s = Settings(_env_file=None)
        assert s.optimization_enabled is True
        assert s.output_filter_enabled is True

    def test_default_filters(self):
        s = Settings(_env_file=None)
        assert s.default_output_filters_list == ["extra-whitespace", "repeated-lines"]

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_file is None


class TestSettingsValidation:
    def test_cache_size_must_be_positive(self):
        with pytest.raises(ValueError, match="cache_max_size"):
            Settings(_env_file=None, cache_max_size=0)

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValueError, match="cache_ttl_seconds"):
            Settings(_env_file=None, cache_ttl_seconds=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_level="TRACE")

    def test_log_file_requires_retention(self, tmp_path):
        with pytest.raises(ConfigurationError, match="LOG_RETENTION"):
            Settings(_env_file=None, log_file=tmp_path / "x.log", log_retention=0)

    def test_log_file_requires_valid_rotation(self, tmp_path):
        with pytest.raises(ConfigurationError, match="LOG_ROTATION"):
            Settings(_env_file=None, log_file=tmp_path / "x.log", log_rotation="big")

    def test_rotation_ignored_without_log_file(self):
        s = Settings(_env_file=None, log_rotation="big")
        assert s.log_rotation == "big"


class TestSettingsSources:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CACHE_MAX_SIZE", "7")
        assert Settings(_env_file=None).cache_max_size == 7

    def test_env_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("CACHE_TTL_SECONDS=120\nUNRELATED=1\n", encoding="utf-8")
        assert Settings(_env_file=env).cache_ttl_seconds == 120

    def test_filter_list_parsing(self):
        s = Settings(_env_file=None, default_output_filters=" a , ,b ")
        assert s.default_output_filters_list == ["a", "b"]

    def test_load_settings_overrides(self):
        s = load_settings(_env_file=None, cache_max_size=3)
        assert s.cache_max_size == 3
