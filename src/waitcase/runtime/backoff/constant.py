"""Constant backoff: the same delay before every retry."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timedelta
from itertools import repeat

from .base import delays, require_non_negative_duration, require_retry_count


@dataclass(frozen=True, slots=True)
class ConstantBackoff:
    """Fixed delay between retries.

    Delay = delay. For example: 200ms, 200ms, 200ms, ...

    Attributes:
        delay: Wait before each retry (timedelta or seconds)
        retry_count: Number of retries, in addition to the original call
        fast_first: Make the first retry immediate

    Example:
        >>> list(ConstantBackoff(timedelta(milliseconds=200), 3, fast_first=True))
        [datetime.timedelta(0), datetime.timedelta(microseconds=200000), datetime.timedelta(microseconds=200000)]
    """

    delay: timedelta
    retry_count: int
    fast_first: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "delay", require_non_negative_duration("delay", self.delay))
        require_retry_count(self.retry_count)

    def __iter__(self) -> Iterator[timedelta]:
        return delays(self, lambda: repeat(self.delay))

    def __len__(self) -> int:
        return self.retry_count
