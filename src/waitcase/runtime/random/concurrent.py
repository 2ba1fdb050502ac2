"""Thread-safe uniform random source for jittered backoff strategies.

``random.Random`` keeps mutable engine state, so every draw is serialized
through a lock held only for the engine call itself. Scaling into the
requested interval happens outside the lock.

Seeded instances are private to the strategy that created them. Unseeded
strategies share one process-wide instance, seeded from OS entropy (or from
``WAITCASE_RANDOM_SEED`` when set) so that concurrent callers do not produce
correlated sequences.
"""

from __future__ import annotations

import logging
import random
import threading

from waitcase.foundation.config import get_settings

logger = logging.getLogger("waitcase.random")


class ConcurrentRandom:
    """Uniform random number source safe for concurrent use.

    Args:
        seed: Optional seed. Same seed => same sequence of draws.

    Example:
        >>> rng = ConcurrentRandom(seed=2)
        >>> 100 <= rng.uniform(100, 1000) <= 1000
        True
    """

    __slots__ = ("_rng", "_lock", "_seed")

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    @property
    def seed(self) -> int | None:
        return self._seed

    def next_double(self) -> float:
        """Draw a float in [0.0, 1.0)."""
        with self._lock:
            return self._rng.random()

    def uniform(self, low: float, high: float) -> float:
        """Draw a float in the closed interval [low, high]."""
        if low == high:
            return low
        return min(high, low + self.next_double() * (high - low))

    @classmethod
    def shared(cls) -> ConcurrentRandom:
        return get_shared_random()

    @classmethod
    def for_seed(cls, seed: int | None) -> ConcurrentRandom:
        """Private instance for an explicit seed, shared instance otherwise."""
        return cls(seed) if seed is not None else get_shared_random()

    def __repr__(self) -> str:
        return f"ConcurrentRandom(seed={self._seed!r})"


# Global shared instance
_shared: ConcurrentRandom | None = None
_shared_lock = threading.Lock()


def get_shared_random() -> ConcurrentRandom:
    """Get the process-wide random source (created on first use)."""
    global _shared
    if (rng := _shared) is not None:
        return rng
    with _shared_lock:
        if _shared is None:
            seed = get_settings().random.seed
            _shared = ConcurrentRandom(seed)
            logger.debug(f"Created shared random source (seeded: {seed is not None})")
        return _shared


def reset_shared_random() -> None:
    """Drop the shared instance (useful for testing).

    The next get_shared_random() call re-reads settings and reseeds.
    """
    global _shared
    with _shared_lock:
        _shared = None
