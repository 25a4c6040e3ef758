"""Deterministic random number generation for level generation.

Every component of the generation pipeline draws its randomness from a single
SeededRng built from the run's seed. Nothing inside the core consults the
global ``random`` module or a time based source, so the same seed, settings
and tile catalog always reproduce the same level.

Usage:
    from levelforge.util.rng import SeededRng

    rng = SeededRng(42)
    width = rng.randint(3, 8)
    index = rng.randrange(len(candidates))
    tile = rng.weighted_choice(tiles, [t.spawn_weight for t in tiles])

The one exception is ``random_seed()``, which picks a fresh seed from system
entropy *before* a SeededRng is built. The chosen seed is reported so the run
can be reproduced.
"""

from __future__ import annotations

from collections.abc import Sequence
from random import Random, SystemRandom
from typing import TypeVar

from levelforge import config

T = TypeVar("T")


class SeededRng:
    """Reproducible random source wrapping a seeded ``random.Random``.

    The wrapper exposes only the operations the generators use, which keeps
    the consumption of random numbers easy to audit.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    # -------------------------------------------------------------------------
    # Random method proxies
    # -------------------------------------------------------------------------

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()

    def randrange(self, n: int) -> int:
        """Return random integer in [0, n)."""
        return self._rng.randrange(n)

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng.randint(a, b)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability.

        A probability of zero never consumes a random number.
        """
        if probability <= 0.0:
            return False
        return self._rng.random() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng.choice(seq)

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        """Return k unique elements from population."""
        return self._rng.sample(population, k)

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Pick one item by cumulative-weight sampling.

        Draws a single uniform value scaled by the total weight and walks the
        running sum. Items with zero weight are never picked unless every
        weight is zero, in which case the first item wins.

        Raises:
            ValueError: If items is empty or the lengths differ.
        """
        if not items:
            raise ValueError("weighted_choice() requires at least one item")
        if len(items) != len(weights):
            raise ValueError("items and weights must have the same length")

        total = float(sum(weights))
        target = self._rng.random() * total
        if total <= 0.0:
            return items[0]

        cumulative = 0.0
        for item, weight in zip(items, weights, strict=True):
            cumulative += weight
            if target < cumulative:
                return item
        # Floating point rounding can leave target == total.
        for item, weight in zip(reversed(items), reversed(weights), strict=True):
            if weight > 0:
                return item
        return items[-1]

    def __repr__(self) -> str:
        return f"SeededRng(seed={self._seed})"


def random_seed() -> int:
    """Draw a fresh seed from system entropy.

    Used only to choose the seed of a run that asked for a random one.
    """
    return SystemRandom().randrange(config.RANDOM_SEED_UPPER_BOUND)
