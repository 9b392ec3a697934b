# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for cache sizing, filter defaults and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Cache ===
    cache_max_size: int = 100
    cache_ttl_seconds: float = 3600.0

    # === Presentation boundary switches ===
    optimization_enabled: bool = True
    output_filter_enabled: bool = True
    default_output_filters: str = "extra-whitespace,repeated-lines"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("cache_max_size")
    @classmethod
    def validate_cache_max_size(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("cache_max_size must be >= 1")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.log_file is not None and self.log_retention < 1:
            errors.append("LOG_FILE requires LOG_RETENTION >= 1")

        if self.log_file is not None:
            from tokenslim.logging.handlers import parse_size

            try:
                parse_size(self.log_rotation)
            except ValueError as e:
                errors.append(f"LOG_ROTATION: {e}")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def default_output_filters_list(self) -> list[str]:
        """Parse comma-separated output filter names."""
        return [
            f.strip() for f in self.default_output_filters.split(",") if f.strip()
        ]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
