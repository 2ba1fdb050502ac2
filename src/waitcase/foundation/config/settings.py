"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from waitcase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.explorer.total_samples
    100000
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # WAITCASE_RANDOM_SEED=42
    # WAITCASE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, PositiveInt, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RandomSettings(BaseSettings):
    """Shared random source configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WAITCASE_RANDOM_",
        extra="ignore",
    )

    seed: int | None = Field(
        default=None,
        description="Seed for the process-wide random source (None = OS entropy)",
    )

    @computed_field
    @property
    def deterministic(self) -> bool:
        """Whether unseeded strategies will replay the same draws across runs."""
        return self.seed is not None


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WAITCASE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ExplorerSettings(BaseSettings):
    """Defaults for the jitter V2 distribution explorer."""

    model_config = SettingsConfigDict(
        env_prefix="WAITCASE_EXPLORER_",
        extra="ignore",
    )

    total_samples: PositiveInt = Field(default=100_000, description="Independent sequences to sample")
    slots_per_unit: PositiveInt = Field(default=10, description="Histogram slots per median-first-delay unit")
    max_retries: Annotated[int, Field(ge=1, le=16)] = 6


class WaitcaseSettings(BaseSettings):
    """Root settings for waitcase.

    Loads configuration from environment variables with WAITCASE_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        WAITCASE_RANDOM_SEED=7
        WAITCASE_LOG_LEVEL=DEBUG
        WAITCASE_EXPLORER_TOTAL_SAMPLES=20000
    """

    model_config = SettingsConfigDict(
        env_prefix="WAITCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    # Nested settings (loaded with WAITCASE_RANDOM_, WAITCASE_LOG_, etc.)
    random: RandomSettings = Field(default_factory=RandomSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    explorer: ExplorerSettings = Field(default_factory=ExplorerSettings)


# Singleton pattern for settings
@lru_cache(maxsize=1)
def get_settings() -> WaitcaseSettings:
    """Get the global settings instance (cached).

    Returns:
        Cached WaitcaseSettings instance
    """
    return WaitcaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
