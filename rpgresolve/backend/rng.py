"""Random sources used by the token pool and dice engines."""

from __future__ import annotations

import random
from typing import Protocol


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:
        """Return a uniform integer N such that a <= N <= b."""


def create_random_source(seed: int | None = None) -> RandomSource:
    """Return a seeded PRNG, or an OS-entropy source when no seed is given."""
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)
