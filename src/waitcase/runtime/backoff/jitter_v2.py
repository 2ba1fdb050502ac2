"""Decorrelated jitter backoff, V2.

Delays whose median, taken over many independent runs, follows exponential
backoff by powers of two (cumulative retry times near 1, 2, 4, 8, 16 x
median_first_retry_delay), while any single run shows smooth random variation.

Formula credit: @george-polevoy, discussed in Polly issue 530
(https://github.com/App-vNext/Polly/issues/530). For attempt index ``i``:

    t = i + U[0, 1)
    next = 2^t * tanh(sqrt(P_FACTOR * t))
    delay = (next - prev) * RP_SCALING_FACTOR * median_first_retry_delay

Since ``next`` is increasing in ``t`` and each ``t`` exceeds the previous one,
the cumulative delay after attempt ``i`` telescopes to
``next * RP_SCALING_FACTOR * median_first_retry_delay``.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from itertools import count

from waitcase.runtime.random import ConcurrentRandom

from .base import delays, from_micros, require_non_negative_duration, require_retry_count

# Smooths the first delay; 4.0 tips the median progression toward 1, 2, 4, 8, 16
P_FACTOR = 4.0
# Pulls medians from ~1.4, 2.8, 5.6, ... down to near whole multiples
RP_SCALING_FACTOR = 1 / 1.4

_MICROSECOND = timedelta(microseconds=1)


def upper_bound_factor(attempt: int) -> int:
    """Multiple of median_first_retry_delay no delay at 1-indexed ``attempt`` exceeds."""
    if attempt < 2:
        return 2 ** (attempt + 1)
    return 2 ** (attempt + 1) - 2 ** (attempt - 1)


def formula_value(t: float) -> float:
    """Cumulative shape value at fractional attempt ``t`` (in median-delay units before scaling).

    Past the float range (t above about 1024) the value is ``inf``.
    """
    try:
        return 2 ** t * math.tanh(math.sqrt(P_FACTOR * t))
    except OverflowError:
        return math.inf


@dataclass(frozen=True, slots=True)
class DecorrelatedJitterBackoffV2:
    """Jittered exponential backoff with a median that doubles per attempt.

    Attributes:
        median_first_retry_delay: Median of the first retry delay; scales the whole curve
        retry_count: Number of retries, in addition to the original call
        seed: Optional seed; None uses the shared process-wide random source
        fast_first: Make the first retry immediate (does not consume an attempt index)

    Example:
        >>> seq = DecorrelatedJitterBackoffV2(timedelta(seconds=1), 5, seed=7)
        >>> len(list(seq))
        5
    """

    median_first_retry_delay: timedelta
    retry_count: int
    seed: int | None = None
    fast_first: bool = False
    _random: ConcurrentRandom = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "median_first_retry_delay",
            require_non_negative_duration("median_first_retry_delay", self.median_first_retry_delay),
        )
        require_retry_count(self.retry_count)
        object.__setattr__(self, "_random", ConcurrentRandom.for_seed(self.seed))

    def _steps(self) -> Iterator[timedelta]:
        target_us = self.median_first_retry_delay // _MICROSECOND
        prev = 0.0
        for i in count():
            nxt = formula_value(i + self._random.next_double())
            # inf - inf is NaN once both values overflow; from_micros saturates either way
            us = (nxt - prev) * RP_SCALING_FACTOR * target_us if target_us else 0.0
            prev = nxt
            yield from_micros(us)

    def __iter__(self) -> Iterator[timedelta]:
        return delays(self, self._steps)

    def __len__(self) -> int:
        return self.retry_count
