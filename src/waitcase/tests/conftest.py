"""Shared fixtures: isolate settings and the shared random source per test."""

from __future__ import annotations

import logging

import pytest

from waitcase import clear_settings_cache, reset_shared_random


@pytest.fixture(autouse=True)
def clean_state() -> object:
    """Reset cached settings and the process-wide random source around each test."""
    clear_settings_cache()
    reset_shared_random()
    yield
    clear_settings_cache()
    reset_shared_random()


@pytest.fixture
def waitcase_logger() -> object:
    """The ``waitcase`` logger, stripped of handlers and level after the test."""
    logger = logging.getLogger("waitcase")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
