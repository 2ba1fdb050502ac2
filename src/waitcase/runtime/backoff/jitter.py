"""AWS-style decorrelated jitter backoff.

Reference: https://aws.amazon.com/blogs/architecture/exponential-backoff-and-jitter/
Formula from the AWS backoff simulator:
    sleep = min(cap, random.uniform(base, sleep * 3))
"""

from __future__ import annotations

import warnings
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import timedelta

from waitcase.foundation.errors import BackoffArgumentError
from waitcase.runtime.random import ConcurrentRandom

from .base import (
    DurationLike, delays, from_millis, require_non_negative_duration, require_retry_count, to_millis,
)


@dataclass(frozen=True, slots=True)
class AwsDecorrelatedJitterBackoff:
    """Decorrelated jitter: each delay is drawn relative to the previous one.

    For example: 117ms, 236ms, 141ms, 424ms, ...

    Each draw is uniform in [min_delay, min(max_delay, previous * 3)], a soft
    ceiling rather than clamping every draw to max_delay (which skews the
    distribution). Every delay stays within [min_delay, max_delay].

    Attributes:
        min_delay: Lower bound of every delay
        max_delay: Upper bound of every delay (>= min_delay)
        retry_count: Number of retries, in addition to the original call
        seed: Optional seed; None uses the shared process-wide random source
        fast_first: Make the first retry immediate (not a jitter draw)
    """

    min_delay: timedelta
    max_delay: timedelta
    retry_count: int
    seed: int | None = None
    fast_first: bool = False
    _random: ConcurrentRandom = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lo = require_non_negative_duration("min_delay", self.min_delay)
        hi = require_non_negative_duration("max_delay", self.max_delay)
        if hi < lo:
            raise BackoffArgumentError.create("max_delay", hi, f">= {lo}")
        require_retry_count(self.retry_count)
        object.__setattr__(self, "min_delay", lo)
        object.__setattr__(self, "max_delay", hi)
        object.__setattr__(self, "_random", ConcurrentRandom.for_seed(self.seed))

    def _steps(self) -> Iterator[timedelta]:
        lo, hi = to_millis(self.min_delay), to_millis(self.max_delay)
        prev = lo
        while True:
            prev = self._random.uniform(lo, min(hi, prev * 3))
            yield from_millis(prev)

    def __iter__(self) -> Iterator[timedelta]:
        return delays(self, self._steps)

    def __len__(self) -> int:
        return self.retry_count


def decorrelated_jitter_backoff(
    min_delay: DurationLike,
    max_delay: DurationLike,
    retry_count: int,
    fast_first: bool = False,
    seed: int | None = None,
) -> AwsDecorrelatedJitterBackoff:
    """Deprecated name for AwsDecorrelatedJitterBackoff.

    Note the older argument order: fast_first comes before seed.
    """
    warnings.warn(
        "decorrelated_jitter_backoff is deprecated; use AwsDecorrelatedJitterBackoff "
        "or DecorrelatedJitterBackoffV2",
        DeprecationWarning,
        stacklevel=2,
    )
    return AwsDecorrelatedJitterBackoff(min_delay, max_delay, retry_count, seed=seed, fast_first=fast_first)  # type: ignore[arg-type]
