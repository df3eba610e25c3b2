"""
Random error applied to every averaged height.

The error for a pass is a uniformly distributed integer in
``[-interval, interval]``, so perturbations shrink geometrically as the grid
is refined. This is the only source of randomness in terrain generation;
swap the model to change the character of the terrain or to make generation
deterministic in tests.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..utils.random import get_prng
from .alea_prng import AleaPRNG, Seed


class ErrorModel(ABC):
    """Source of per-cell height perturbations."""

    @abstractmethod
    def error(self, bound: int) -> int:
        """Return one error value in ``[-bound, bound]``."""

    def draw(self, bound: int, count: int) -> np.ndarray:
        """Return ``count`` error values in ``[-bound, bound]`` as an int64 array."""
        return np.fromiter(
            (self.error(bound) for _ in range(count)), dtype=np.int64, count=count
        )


class UniformError(ErrorModel):
    """
    Uniform integer error backed by an Alea generator.

    Draws are serialized through the generator's own lock, so every model
    wrapping the same generator (including the package default) shares one
    lock. Each task draws its whole batch under one acquisition.
    """

    def __init__(self, seed: Optional[Seed] = None, prng: Optional[AleaPRNG] = None):
        """
        Args:
            seed: Seed for a private generator
            prng: Existing generator to draw from; wins over ``seed``. When
                neither is given the package default generator is used.
        """
        if prng is None:
            prng = AleaPRNG(seed) if seed is not None else get_prng()
        self.prng = prng

    def error(self, bound: int) -> int:
        with self.prng.lock:
            return self.prng.randint(-bound, bound)

    def draw(self, bound: int, count: int) -> np.ndarray:
        randint = self.prng.randint
        with self.prng.lock:
            values = [randint(-bound, bound) for _ in range(count)]
        return np.array(values, dtype=np.int64)


class ZeroError(ErrorModel):
    """Always 0; terrain becomes a pure neighbor average."""

    def error(self, bound: int) -> int:
        return 0

    def draw(self, bound: int, count: int) -> np.ndarray:
        return np.zeros(count, dtype=np.int64)


class FixedError(ErrorModel):
    """A constant error, clipped to the allowed ``[-bound, bound]`` range."""

    def __init__(self, value: int):
        self.value = int(value)

    def error(self, bound: int) -> int:
        return max(-bound, min(bound, self.value))

    def draw(self, bound: int, count: int) -> np.ndarray:
        return np.full(count, self.error(bound), dtype=np.int64)


def default_error_model(seed: Optional[Seed] = None) -> ErrorModel:
    """
    Build the error model used when the caller does not provide one.

    An explicit seed gives a private, reproducible stream. Otherwise draws
    come from the package default generator, which is seeded once from
    ``settings.default_seed`` and shared across calls.
    """
    return UniformError(seed=seed)
