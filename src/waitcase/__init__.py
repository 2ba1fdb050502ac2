"""waitcase - Retry delay sequences for callers that back off and retry.

Computes how long to wait before each retry; never sleeps or retries anything
itself. Every strategy validates its parameters up front and yields a lazy,
finite sequence of ``timedelta`` values, one per retry.

Quick Start:
    >>> from datetime import timedelta
    >>> from waitcase import ExponentialBackoff
    >>>
    >>> for delay in ExponentialBackoff(timedelta(milliseconds=100), retry_count=4):
    ...     ...  # time.sleep(delay.total_seconds()); try again

Strategies:
    ConstantBackoff(delay, retry_count)                       200ms, 200ms, 200ms
    LinearBackoff(initial_delay, retry_count, factor=1.0)     100ms, 200ms, 300ms
    ExponentialBackoff(initial_delay, retry_count, factor=2.0) 100ms, 200ms, 400ms
    AwsDecorrelatedJitterBackoff(min_delay, max_delay, retry_count, seed=None)
    DecorrelatedJitterBackoffV2(median_first_retry_delay, retry_count, seed=None)

All take ``fast_first=True`` to make the first retry immediate. Durations may
be given as ``timedelta`` or as seconds.

Errors:
    >>> from waitcase import BackoffArgumentError
    >>> try:
    ...     LinearBackoff(timedelta(milliseconds=10), retry_count=-1)
    ... except BackoffArgumentError as e:
    ...     print(e)
    retry_count should be >= 0 (got -1)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import ArgumentError, BackoffArgumentError, ErrorCode

# Config
from .foundation.config import (
    WaitcaseSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)

# Random source
from .runtime.random import ConcurrentRandom, get_shared_random, reset_shared_random

# Strategies
from .runtime.backoff import (
    AwsDecorrelatedJitterBackoff,
    ConstantBackoff,
    DecorrelatedJitterBackoffV2,
    DelaySequence,
    DurationLike,
    ExponentialBackoff,
    LinearBackoff,
    decorrelated_jitter_backoff,
)

__all__ = [
    "__version__",
    # Strategies
    "ConstantBackoff",
    "LinearBackoff",
    "ExponentialBackoff",
    "AwsDecorrelatedJitterBackoff",
    "DecorrelatedJitterBackoffV2",
    "DelaySequence",
    "DurationLike",
    "decorrelated_jitter_backoff",
    # Random source
    "ConcurrentRandom",
    "get_shared_random",
    "reset_shared_random",
    # Errors
    "ArgumentError",
    "BackoffArgumentError",
    "ErrorCode",
    # Config
    "WaitcaseSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
]
