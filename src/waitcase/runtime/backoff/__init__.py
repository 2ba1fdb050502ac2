"""Backoff strategies producing lazy, finite sequences of retry delays.

- ConstantBackoff: Fixed delay
- LinearBackoff: Linear growth
- ExponentialBackoff: Exponential growth
- AwsDecorrelatedJitterBackoff: AWS-style decorrelated jitter in [min, max]
- DecorrelatedJitterBackoffV2: Jitter whose median doubles per attempt

Every strategy validates on construction, has ``len() == retry_count`` and
starts an independent run on each ``iter()``.

Example:
    >>> from datetime import timedelta
    >>> from waitcase import ExponentialBackoff
    >>> [d.total_seconds() for d in ExponentialBackoff(timedelta(milliseconds=100), 4)]
    [0.1, 0.2, 0.4, 0.8]
"""

from .base import DelaySequence, DurationLike, from_micros, from_millis, to_millis
from .constant import ConstantBackoff
from .exponential import ExponentialBackoff
from .jitter import AwsDecorrelatedJitterBackoff, decorrelated_jitter_backoff
from .jitter_v2 import P_FACTOR, RP_SCALING_FACTOR, DecorrelatedJitterBackoffV2, formula_value, upper_bound_factor
from .linear import LinearBackoff

__all__ = [
    # Protocol & conversion
    "DelaySequence", "DurationLike", "to_millis", "from_millis", "from_micros",
    # Strategies
    "ConstantBackoff", "LinearBackoff", "ExponentialBackoff",
    "AwsDecorrelatedJitterBackoff", "DecorrelatedJitterBackoffV2",
    # V2 formula
    "P_FACTOR", "RP_SCALING_FACTOR", "formula_value", "upper_bound_factor",
    # Deprecated
    "decorrelated_jitter_backoff",
]
