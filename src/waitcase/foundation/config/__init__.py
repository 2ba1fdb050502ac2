"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation,
plus the opt-in logging setup driven by it.
"""

from .logging import JsonFormatter, configure_logging
from .settings import (
    ExplorerSettings,
    LoggingSettings,
    RandomSettings,
    WaitcaseSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ExplorerSettings",
    "JsonFormatter",
    "LoggingSettings",
    "RandomSettings",
    "WaitcaseSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
