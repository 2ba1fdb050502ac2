"""Large-sample exploration of DecorrelatedJitterBackoffV2.

Verifies that the V2 coefficients produce retry times whose 50th percentiles
fall broadly on exponential backoff by powers of two. A single sequence
deliberately varies from that curve (the jitter); sampling enough sequences
averages the jitter out again.

Each sample accumulates the retry *time* of every attempt (the sum of the
delays so far, assuming the operation fails instantly), normalised by the
median first delay, and credits it to a histogram slot. The report carries
the per-try and combined distributions plus the interpolated median per try.

Example:
    >>> report = explore_jitter_v2(total_samples=20_000, seed=1)
    >>> [round(m) for m in report.medians]
    [1, 2, 4, 8, 16, 32]
"""

from __future__ import annotations

import logging
import math
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, computed_field

from waitcase.foundation.config import get_settings
from waitcase.foundation.errors import BackoffArgumentError
from waitcase.runtime.backoff import DecorrelatedJitterBackoffV2
from waitcase.runtime.backoff.base import DurationLike, coerce_duration

logger = logging.getLogger("waitcase.dev.explorer")


class JitterDistribution(BaseModel):
    """Histogram report of sampled V2 retry times.

    Slot ``s`` covers ``[s, s + 1) / slots_per_unit`` median-first-delay units;
    ``midpoints`` holds the centre of each slot in those units.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    median_first_retry_delay: timedelta
    max_retries: int = Field(ge=1)
    total_samples: int = Field(ge=1)
    slots_per_unit: int = Field(ge=1)
    midpoints: tuple[float, ...]
    per_try: tuple[tuple[float, ...], ...] = Field(repr=False)
    medians: tuple[float, ...] = Field(description="50th percentile retry time per try, in seconds")

    @computed_field
    @property
    def combined(self) -> tuple[float, ...]:
        """Distribution over all tries together."""
        return tuple(math.fsum(col) for col in zip(*self.per_try))


def _fiftieth_percentile(distribution: list[float], midpoints: list[float]) -> float:
    total = 0.0
    for slot, share in enumerate(distribution):
        prev_total, total = total, total + share
        if total >= 0.5:
            if slot == 0:
                raise AssertionError("50th percentile fell in the first slot; increase slots_per_unit")
            below, above = midpoints[slot - 1], midpoints[slot]
            return below + (above - below) * (0.5 - prev_total) / (total - prev_total)
    raise AssertionError("distribution never reached the 50th percentile")


def explore_jitter_v2(
    max_retries: int | None = None,
    median_first_retry_delay: DurationLike = timedelta(seconds=1),
    *,
    total_samples: int | None = None,
    slots_per_unit: int | None = None,
    seed: int | None = None,
) -> JitterDistribution:
    """Sample V2 sequences and report retry-time distributions and medians.

    Args:
        max_retries: Retries per sequence (default: ExplorerSettings.max_retries)
        median_first_retry_delay: Scale of the curve; medians scale with it
        total_samples: Sequences to sample (default: ExplorerSettings.total_samples)
        slots_per_unit: Histogram resolution (default: ExplorerSettings.slots_per_unit)
        seed: Optional seed for a reproducible report

    Raises:
        BackoffArgumentError: For a non-positive median_first_retry_delay
        AssertionError: If a sample falls outside the histogram (formula invariant broken)
    """
    settings = get_settings().explorer
    max_retries = max_retries or settings.max_retries
    total_samples = total_samples or settings.total_samples
    slots_per_unit = slots_per_unit or settings.slots_per_unit
    median_first_retry_delay = coerce_duration("median_first_retry_delay", median_first_retry_delay)
    if median_first_retry_delay <= timedelta(0):
        raise BackoffArgumentError.create("median_first_retry_delay", median_first_retry_delay, "> 0ms")

    # By induction from the formula, no retry time reaches 2^(max_retries + 1) units
    total_slots = math.ceil(slots_per_unit * 2 ** (max_retries + 1))
    credit = 1.0 / total_samples
    per_try = [[0.0] * total_slots for _ in range(max_retries)]

    logger.info(f"Sampling {total_samples} V2 sequences of {max_retries} retries over {total_slots} slots")
    formula = DecorrelatedJitterBackoffV2(median_first_retry_delay, max_retries, seed=seed)
    for _ in range(total_samples):
        elapsed = 0.0
        for attempt, delay in enumerate(formula):
            elapsed += delay / median_first_retry_delay
            slot = int(elapsed * slots_per_unit)
            if slot >= total_slots:
                raise AssertionError(f"retry time {elapsed:.3f} beyond histogram ceiling at try {attempt}")
            per_try[attempt][slot] += credit

    half = 1 / slots_per_unit / 2
    midpoints = [s / slots_per_unit + half for s in range(total_slots)]
    scale = median_first_retry_delay.total_seconds()
    medians = tuple(_fiftieth_percentile(dist, midpoints) * scale for dist in per_try)
    for attempt, median in enumerate(medians):
        logger.debug(f"Try {attempt}: 50th percentile of retry times approximates {median:.3f}s")

    return JitterDistribution(
        median_first_retry_delay=median_first_retry_delay,
        max_retries=max_retries,
        total_samples=total_samples,
        slots_per_unit=slots_per_unit,
        midpoints=tuple(midpoints),
        per_try=tuple(tuple(dist) for dist in per_try),
        medians=medians,
    )
