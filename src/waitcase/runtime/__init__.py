"""Runtime layer: the random source and the backoff strategies built on it."""

from .backoff import (
    AwsDecorrelatedJitterBackoff,
    ConstantBackoff,
    DecorrelatedJitterBackoffV2,
    DelaySequence,
    ExponentialBackoff,
    LinearBackoff,
    decorrelated_jitter_backoff,
)
from .random import ConcurrentRandom, get_shared_random, reset_shared_random

__all__ = [
    "AwsDecorrelatedJitterBackoff",
    "ConcurrentRandom",
    "ConstantBackoff",
    "DecorrelatedJitterBackoffV2",
    "DelaySequence",
    "ExponentialBackoff",
    "LinearBackoff",
    "decorrelated_jitter_backoff",
    "get_shared_random",
    "reset_shared_random",
]
