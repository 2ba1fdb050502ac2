"""Thread-safe random source used by the jittered strategies."""

from .concurrent import ConcurrentRandom, get_shared_random, reset_shared_random

__all__ = ["ConcurrentRandom", "get_shared_random", "reset_shared_random"]
