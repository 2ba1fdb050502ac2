"""Tests for settings and logging configuration."""

from __future__ import annotations

import io
import json
import logging
from datetime import timedelta

import pytest

from waitcase import ConstantBackoff, configure_logging, get_settings


def test_default_settings() -> None:
    settings = get_settings()

    assert settings.random.seed is None
    assert settings.random.deterministic is False
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "text"
    assert settings.explorer.total_samples == 100_000
    assert settings.explorer.slots_per_unit == 10
    assert settings.explorer.max_retries == 6


def test_settings_cached() -> None:
    assert get_settings() is get_settings()


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAITCASE_RANDOM_SEED", "5")
    monkeypatch.setenv("WAITCASE_LOG_LEVEL", "debug")
    monkeypatch.setenv("WAITCASE_EXPLORER_TOTAL_SAMPLES", "500")

    settings = get_settings()

    assert settings.random.seed == 5
    assert settings.random.deterministic is True
    assert settings.logging.level == "DEBUG"
    assert settings.explorer.total_samples == 500


def test_invalid_environment_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    from pydantic import ValidationError

    monkeypatch.setenv("WAITCASE_EXPLORER_TOTAL_SAMPLES", "0")

    with pytest.raises(ValidationError):
        get_settings()


def test_configure_logging_text(waitcase_logger: logging.Logger) -> None:
    out = io.StringIO()
    logger = configure_logging(level="DEBUG", format="text", output=out)

    assert logger is waitcase_logger
    list(ConstantBackoff(timedelta(milliseconds=1), 2))

    assert "Starting traversal of ConstantBackoff(retry_count=2, fast_first=False)" in out.getvalue()
    assert "waitcase.backoff" in out.getvalue()


def test_configure_logging_json(waitcase_logger: logging.Logger) -> None:
    out = io.StringIO()
    configure_logging(level="DEBUG", format="json", output=out)

    list(ConstantBackoff(timedelta(milliseconds=1), 1, fast_first=True))

    record = json.loads(out.getvalue().splitlines()[0])
    assert record["level"] == "debug"
    assert record["logger"] == "waitcase.backoff"
    assert record["event"].startswith("Starting traversal of ConstantBackoff")


def test_configure_logging_replaces_handler(waitcase_logger: logging.Logger) -> None:
    configure_logging(level="INFO", output=io.StringIO())
    configure_logging(level="INFO", output=io.StringIO())

    assert len(waitcase_logger.handlers) == 1


def test_configure_logging_respects_level(waitcase_logger: logging.Logger) -> None:
    out = io.StringIO()
    configure_logging(level="INFO", output=out)

    list(ConstantBackoff(timedelta(milliseconds=1), 2))

    assert out.getvalue() == ""


def test_configure_logging_uses_settings(monkeypatch: pytest.MonkeyPatch, waitcase_logger: logging.Logger) -> None:
    monkeypatch.setenv("WAITCASE_LOG_LEVEL", "WARNING")

    configure_logging(output=io.StringIO())

    assert waitcase_logger.level == logging.WARNING


def test_configure_logging_unknown_format(waitcase_logger: logging.Logger) -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(format="xml")


def test_zero_retries_logs_nothing(waitcase_logger: logging.Logger) -> None:
    out = io.StringIO()
    configure_logging(level="DEBUG", output=out)

    assert list(ConstantBackoff(timedelta(milliseconds=1), 0)) == []
    assert out.getvalue() == ""
