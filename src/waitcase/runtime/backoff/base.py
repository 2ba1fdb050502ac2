"""Shared pieces of the backoff strategies.

Every strategy is a frozen dataclass that validates its parameters on
construction and yields a fresh, lazy traversal on each ``iter()``. The
formulas themselves are written as (possibly infinite) generators of
durations; ``delays`` bounds them to ``retry_count`` and handles
the fast-first zero, so each strategy only states its formula.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from datetime import timedelta
from itertools import islice
from typing import Protocol, TypeAlias, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from waitcase.foundation.errors import BackoffArgumentError

logger = logging.getLogger("waitcase.backoff")

# Anything pydantic accepts as a timedelta: timedelta, seconds as int/float, ISO 8601 string
DurationLike: TypeAlias = timedelta | float | int | str
StepFactory: TypeAlias = Callable[[], Iterator[timedelta]]

ZERO = timedelta(0)

_DURATION = TypeAdapter(timedelta)
# Saturation threshold kept a second below timedelta.max so float rounding cannot overflow
_MAX_MS = (timedelta.max - timedelta(seconds=1)) / timedelta(milliseconds=1)
_MAX_US = _MAX_MS * 1000


@runtime_checkable
class DelaySequence(Protocol):
    """Protocol for retry delay sequences.

    ``len()`` is the retry count. Each ``iter()`` is an independent run of the
    strategy; jittered strategies draw new random values per run.
    """

    @property
    def retry_count(self) -> int: ...

    @property
    def fast_first(self) -> bool: ...

    def __iter__(self) -> Iterator[timedelta]: ...

    def __len__(self) -> int: ...


# ─────────────────────────────────────────────────────────────────────────────
# Duration conversion
# ─────────────────────────────────────────────────────────────────────────────


def to_millis(value: timedelta) -> float:
    return value / timedelta(milliseconds=1)


def from_millis(ms: float) -> timedelta:
    """Convert fractional milliseconds to timedelta, saturating at timedelta.max."""
    if not ms < _MAX_MS:  # also catches NaN
        return timedelta.max
    return timedelta(milliseconds=max(ms, 0.0))


def from_micros(us: float) -> timedelta:
    """Truncate to whole microseconds, saturating at timedelta.max."""
    if not us < _MAX_US:
        return timedelta.max
    return timedelta(microseconds=max(0, int(us)))


# ─────────────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────────────


def coerce_duration(name: str, value: DurationLike) -> timedelta:
    """Normalize a duration argument or raise BackoffArgumentError naming it."""
    try:
        return _DURATION.validate_python(value)
    except ValidationError as e:
        raise BackoffArgumentError.create(name, value, "a duration (timedelta or seconds)") from e


def require_non_negative_duration(name: str, value: DurationLike) -> timedelta:
    td = coerce_duration(name, value)
    if td < ZERO:
        raise BackoffArgumentError.create(name, td, ">= 0ms")
    return td


def require_retry_count(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BackoffArgumentError.create("retry_count", value, "an int")
    if value < 0:
        raise BackoffArgumentError.create("retry_count", value, ">= 0")
    return value


def require_factor(value: float, minimum: float) -> float:
    try:
        factor = float(value)
    except (TypeError, ValueError) as e:
        raise BackoffArgumentError.create("factor", value, "a number") from e
    if not math.isfinite(factor):
        raise BackoffArgumentError.create("factor", value, "finite")
    if factor < minimum:
        raise BackoffArgumentError.create("factor", value, f">= {minimum}")
    return factor


# ─────────────────────────────────────────────────────────────────────────────
# Sequence combinators
# ─────────────────────────────────────────────────────────────────────────────


def delays(seq: DelaySequence, steps: StepFactory) -> Iterator[timedelta]:
    """Start one traversal of ``seq``: optional zero, then values from ``steps``.

    Yields exactly ``seq.retry_count`` durations, taken from ``steps`` as is.
    ``steps`` is called once per traversal, so any running state it keeps
    belongs to that traversal alone.
    """
    if seq.retry_count == 0:
        return iter(())
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Starting traversal of {describe(seq)}")
    return _traverse(seq.retry_count, seq.fast_first, steps)


def _traverse(retry_count: int, fast_first: bool, steps: StepFactory) -> Iterator[timedelta]:
    remaining = retry_count
    if fast_first:
        remaining -= 1
        yield ZERO
    yield from islice(steps(), remaining)


def describe(seq: DelaySequence) -> str:
    """Short human-readable summary used in debug logs."""
    return f"{type(seq).__name__}(retry_count={seq.retry_count}, fast_first={seq.fast_first})"
