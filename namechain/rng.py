#!/usr/bin/env python3
"""Random source used by the generator walk and rebranching."""

from __future__ import annotations

import random
from typing import Optional


class RandomSource:
    """
    Instance-owned pseudo-random generator.

    Anything exposing ``random_int(low, high)`` and ``random_index(n)`` can be
    injected into NameGenerator in its place, e.g. a stub returning fixed
    draws for golden-output tests.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        return self._random.randint(low, high)

    def random_index(self, n: int) -> int:
        """Uniform index in [0, n - 1]."""
        return self._random.randrange(n)

    def reseed(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random.seed(seed)
