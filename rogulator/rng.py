from __future__ import annotations

import random
from typing import Optional


class RNG(random.Random):
    """Seeded RNG threaded through generation and the monster AI pass."""

    def chance(self, probability: float) -> bool:
        return self.random() < probability


def new_rng(seed: Optional[int] = None) -> RNG:
    rng = RNG()
    rng.seed(seed)
    return rng
