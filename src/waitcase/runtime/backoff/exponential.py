"""Exponential backoff: delays multiply by a constant factor."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timedelta

from .base import (
    delays, from_millis, require_factor, require_non_negative_duration, require_retry_count, to_millis,
)


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential backoff.

    Delay = initial_delay * factor ^ attempt
    For example (factor=2): 100ms, 200ms, 400ms, 800ms, ...

    Factors below 1.0 are rejected since they would shrink the delay.

    Attributes:
        initial_delay: Wait before the first (non fast-first) retry
        retry_count: Number of retries, in addition to the original call
        factor: Growth factor per attempt (default: 2.0, must be >= 1.0)
        fast_first: Make the first retry immediate
    """

    initial_delay: timedelta
    retry_count: int
    factor: float = 2.0
    fast_first: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "initial_delay", require_non_negative_duration("initial_delay", self.initial_delay))
        require_retry_count(self.retry_count)
        object.__setattr__(self, "factor", require_factor(self.factor, 1.0))

    def _steps(self) -> Iterator[timedelta]:
        yield self.initial_delay
        ms = to_millis(self.initial_delay)
        while True:
            ms *= self.factor
            yield from_millis(ms)

    def __iter__(self) -> Iterator[timedelta]:
        return delays(self, self._steps)

    def __len__(self) -> int:
        return self.retry_count
