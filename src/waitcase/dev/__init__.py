"""Developer tooling: statistical checks of the jittered strategies."""

from .explorer import JitterDistribution, explore_jitter_v2

__all__ = ["JitterDistribution", "explore_jitter_v2"]
