"""Foundation layer: errors and configuration shared by every strategy."""

from .config import (
    ExplorerSettings,
    LoggingSettings,
    RandomSettings,
    WaitcaseSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)
from .errors import ArgumentError, BackoffArgumentError, ErrorCode

__all__ = [
    # Errors
    "ArgumentError", "BackoffArgumentError", "ErrorCode",
    # Config
    "WaitcaseSettings", "RandomSettings", "LoggingSettings", "ExplorerSettings",
    "get_settings", "clear_settings_cache", "configure_logging",
]
