"""Standard-normal draws for diffusion shocks."""

from __future__ import annotations

import math
import random
from typing import Optional, Protocol


class Sampler(Protocol):
    def sample(self, mean: float, std_dev: float) -> float:
        """Return one Normal(mean, std_dev**2) draw."""

    def uniform(self) -> float:
        """Return one uniform draw in [0, 1)."""


class NormalSampler:
    """Box-Muller sampler over an injectable uniform source.

    Each call to ``sample`` consumes exactly two uniforms (more only when a
    zero is drawn and resampled). Pass ``rng`` or ``seed`` to make paths
    replayable.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.rng = rng if rng is not None else random.Random(seed)

    def uniform(self) -> float:
        return self.rng.random()

    def sample(self, mean: float, std_dev: float) -> float:
        u = 0.0
        v = 0.0
        while u == 0.0:
            u = self.rng.random()
        while v == 0.0:
            v = self.rng.random()
        z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
        return z * std_dev + mean
