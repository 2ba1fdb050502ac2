"""Tests for decorrelated jitter backoff V2.

Single runs are checked against structural bounds; the median behaviour is
checked over large samples.
"""

from __future__ import annotations

import statistics
from datetime import timedelta

import pytest

from waitcase import BackoffArgumentError, DecorrelatedJitterBackoffV2
from waitcase.runtime.backoff import upper_bound_factor


def assert_within_bound(attempt: int, delay: timedelta, median_first: timedelta) -> None:
    """``attempt`` is 1-indexed over real (non fast-first) retries."""
    assert delay >= timedelta(0)
    assert delay <= median_first * upper_bound_factor(attempt)


# ═════════════════════════════════════════════════════════════════════════════
# Validation & shape
# ═════════════════════════════════════════════════════════════════════════════


def test_median_first_delay_less_than_zero_raises() -> None:
    with pytest.raises(BackoffArgumentError) as exc_info:
        DecorrelatedJitterBackoffV2(timedelta(microseconds=-1), 3, seed=1)
    assert exc_info.value.param_name == "median_first_retry_delay"


def test_retry_count_less_than_zero_raises() -> None:
    with pytest.raises(BackoffArgumentError) as exc_info:
        DecorrelatedJitterBackoffV2(timedelta(seconds=1), -1, seed=1)
    assert exc_info.value.param_name == "retry_count"


def test_zero_retries_is_empty() -> None:
    assert list(DecorrelatedJitterBackoffV2(timedelta(seconds=2), 0, seed=1)) == []


def test_fast_first() -> None:
    median_first = timedelta(seconds=2)
    result = list(DecorrelatedJitterBackoffV2(median_first, 10, seed=1, fast_first=True))

    assert len(result) == 10
    assert result[0] == timedelta(0)
    for attempt, delay in enumerate(result[1:], start=1):
        assert_within_bound(attempt, delay, median_first)


def test_fast_first_does_not_consume_attempt_index() -> None:
    """After the zero, a fast-first run replays the plain run for the same seed."""
    plain = list(DecorrelatedJitterBackoffV2(timedelta(seconds=1), 5, seed=8))
    fast = list(DecorrelatedJitterBackoffV2(timedelta(seconds=1), 6, seed=8, fast_first=True))

    assert fast[1:] == plain


@pytest.mark.parametrize("seed", range(1000))
def test_result_in_range(seed: int) -> None:
    median_first = timedelta(seconds=3)
    result = list(DecorrelatedJitterBackoffV2(median_first, 6, seed=seed))

    assert len(result) == 6
    for attempt, delay in enumerate(result, start=1):
        assert_within_bound(attempt, delay, median_first)


def test_upper_bound_factor() -> None:
    assert [upper_bound_factor(t) for t in range(1, 7)] == [4, 6, 12, 24, 48, 96]
    assert upper_bound_factor(0) == 2


def test_zero_median_yields_zeros() -> None:
    assert list(DecorrelatedJitterBackoffV2(timedelta(0), 4, seed=2)) == [timedelta(0)] * 4


def test_same_seed_is_deterministic() -> None:
    a = DecorrelatedJitterBackoffV2(timedelta(seconds=1), 8, seed=21)
    b = DecorrelatedJitterBackoffV2(timedelta(seconds=1), 8, seed=21)

    assert list(a) == list(b)


def test_reiteration_draws_fresh_values() -> None:
    seq = DecorrelatedJitterBackoffV2(timedelta(seconds=1), 8, seed=21)

    assert list(seq) != list(seq)


def test_unseeded_uses_shared_source() -> None:
    result = list(DecorrelatedJitterBackoffV2(timedelta(milliseconds=100), 6))

    assert len(result) == 6
    for attempt, delay in enumerate(result, start=1):
        assert_within_bound(attempt, delay, timedelta(milliseconds=100))


def test_microsecond_resolution() -> None:
    result = list(DecorrelatedJitterBackoffV2(timedelta(milliseconds=1), 6, seed=5))

    assert any(d.microseconds % 1000 for d in result)


def test_long_run_saturates_instead_of_overflowing() -> None:
    """The formula leaves the float range near attempt 1024; delays cap at timedelta.max."""
    result = list(DecorrelatedJitterBackoffV2(timedelta(milliseconds=1), 1100, seed=1))

    assert len(result) == 1100
    assert all(timedelta(0) <= d <= timedelta.max for d in result)
    assert result[-1] == timedelta.max
    assert result[:6] == list(DecorrelatedJitterBackoffV2(timedelta(milliseconds=1), 6, seed=1))


def test_long_run_with_zero_median_stays_zero() -> None:
    assert list(DecorrelatedJitterBackoffV2(timedelta(0), 1100, seed=1)) == [timedelta(0)] * 1100


# ═════════════════════════════════════════════════════════════════════════════
# Large-sample behaviour
# ═════════════════════════════════════════════════════════════════════════════


SAMPLES = 10_000
RETRIES = 6


@pytest.fixture(scope="module")
def samples() -> list[list[float]]:
    """Delays in seconds from SAMPLES independent runs with a 1s median first delay."""
    seq = DecorrelatedJitterBackoffV2(timedelta(seconds=1), RETRIES, seed=12345)
    return [[d.total_seconds() for d in seq] for _ in range(SAMPLES)]


def test_cumulative_retry_time_median_doubles(samples: list[list[float]]) -> None:
    """Median retry time after attempt r is close to 2^r median first delays."""
    for attempt in range(RETRIES):
        median = statistics.median(sum(run[: attempt + 1]) for run in samples)
        assert median == pytest.approx(2 ** attempt, rel=0.15)


def test_delay_median_growth_rate(samples: list[list[float]]) -> None:
    """Past the first tries, each attempt's median delay is about twice the previous one."""
    medians = [statistics.median(run[attempt] for run in samples) for attempt in range(RETRIES)]

    for attempt in range(2, RETRIES - 1):
        assert 1.8 <= medians[attempt + 1] / medians[attempt] <= 2.2


def test_first_delay_median_near_configured(samples: list[list[float]]) -> None:
    assert statistics.median(run[0] for run in samples) == pytest.approx(1.0, rel=0.15)
