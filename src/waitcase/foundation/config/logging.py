"""Logging setup for the ``waitcase`` logger hierarchy.

Library modules only ever call ``logging.getLogger("waitcase.<area>")``;
nothing is emitted unless the application configures handlers. This helper
is the opt-in for applications (and debugging sessions) that want to see
those records without wiring the stdlib themselves.

Example:
    >>> from waitcase.foundation.config import configure_logging
    >>> configure_logging(level="DEBUG")  # or WAITCASE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

from .settings import get_settings

ROOT_LOGGER = "waitcase"

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, event (+ exc_info)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    level: str | None = None,
    format: str | None = None,  # noqa: A002 - shadows builtin but matches settings field
    *,
    output: TextIO | None = None,
) -> logging.Logger:
    """Attach a single stream handler to the ``waitcase`` logger.

    Args:
        level: Log level name; defaults to ``LoggingSettings.level``
        format: "text" or "json"; defaults to ``LoggingSettings.format``
        output: Stream to write to (default: stderr)

    Returns:
        The configured ``waitcase`` logger

    Calling again replaces the previously installed handler.
    """
    settings = get_settings().logging
    level = (level or settings.level).upper()
    format = format or settings.format

    match format:
        case "text": formatter: logging.Formatter = logging.Formatter(_TEXT_FORMAT)
        case "json": formatter = JsonFormatter()
        case _: raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, "_waitcase", False)]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(formatter)
    handler._waitcase = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.INFO))
    return logger
