import random
from typing import Optional


class RandomIntRandomizer:
    """Bounded random ints. Pass a seed to get the same owner grouping on every run."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def intn(self, n: int) -> int:
        """Return an int in [0, n)."""
        return self._rng.randrange(n)


class DisabledRandomizer:
    """Used where no owner grouping takes place."""

    def intn(self, n: int) -> int:
        return 0
