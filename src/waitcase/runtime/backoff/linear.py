"""Linear backoff: delays grow by a constant step."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timedelta

from .base import (
    delays, from_millis, require_factor, require_non_negative_duration, require_retry_count, to_millis,
)


@dataclass(frozen=True, slots=True)
class LinearBackoff:
    """Linear backoff.

    Delay = initial_delay * (1 + factor * attempt)
    For example (factor=1): 100ms, 200ms, 300ms, 400ms, ...

    Attributes:
        initial_delay: Wait before the first (non fast-first) retry
        retry_count: Number of retries, in addition to the original call
        factor: Linear factor applied per attempt (default: 1.0, 0 = constant)
        fast_first: Make the first retry immediate
    """

    initial_delay: timedelta
    retry_count: int
    factor: float = 1.0
    fast_first: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "initial_delay", require_non_negative_duration("initial_delay", self.initial_delay))
        require_retry_count(self.retry_count)
        object.__setattr__(self, "factor", require_factor(self.factor, 0.0))

    def _steps(self) -> Iterator[timedelta]:
        yield self.initial_delay
        ms = to_millis(self.initial_delay)
        step = self.factor * ms
        while True:
            ms += step
            yield from_millis(ms)

    def __iter__(self) -> Iterator[timedelta]:
        return delays(self, self._steps)

    def __len__(self) -> int:
        return self.retry_count
