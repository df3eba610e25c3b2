"""
Terrain generation driver.

Starts from a blank grid (or a caller-supplied one with pre-seeded values)
and runs passes 1..degree in order. Passes are strictly sequential; only the
cells inside a single step are computed in parallel.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

import structlog

from ..config import settings
from .alea_prng import Seed
from .error_model import ErrorModel, default_error_model
from .exceptions import InvalidDegree
from .grid import Grid, validate_degree
from .passes import run_pass

logger = structlog.get_logger()


@dataclass
class TerrainConfig:
    """Configuration for terrain generation."""

    degree: int
    seed: Optional[Seed] = None
    workers: int = field(default_factory=lambda: settings.default_workers)
    partition_size: int = field(default_factory=lambda: settings.partition_size)

    def __post_init__(self):
        self.degree = validate_degree(self.degree)
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.partition_size < 1:
            raise ValueError(f"partition_size must be >= 1, got {self.partition_size}")


class TerrainGenerator:
    """
    Generates Diamond-Square terrain for one configuration.

    Attributes:
        config: Generation parameters
        error_model: Source of per-cell perturbations
        elapsed_ms: Duration of the last ``generate`` call in milliseconds
    """

    def __init__(self, config: TerrainConfig, error_model: Optional[ErrorModel] = None):
        self.config = config
        self.error_model = error_model or default_error_model(config.seed)
        self.elapsed_ms: Optional[float] = None

    def generate(self, grid: Optional[Grid] = None) -> Grid:
        """
        Run every pass and return the finished grid.

        Args:
            grid: Optional starting grid of the configured degree, e.g. with
                corner heights already set. It is updated in place.

        Returns:
            The finished terrain

        Raises:
            InvalidDegree: If ``grid`` does not match the configured degree
        """
        degree = self.config.degree
        if grid is None:
            grid = Grid.blank(degree)
        elif grid.degree != degree:
            raise InvalidDegree(
                grid.degree,
                message=f"Starting grid has degree {grid.degree}, expected {degree}",
            )

        logger.info(
            "Generating terrain",
            degree=degree,
            size=grid.size,
            workers=self.config.workers,
        )
        start = time.perf_counter()

        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                self._run_passes(grid, pool)
        else:
            self._run_passes(grid, None)

        self.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Terrain generated",
            degree=degree,
            elapsed_ms=round(self.elapsed_ms, 2),
            min_height=grid.min(),
            max_height=grid.max(),
        )
        return grid

    def _run_passes(self, grid: Grid, executor) -> None:
        degree = self.config.degree
        for pass_num in range(1, degree + 1):
            run_pass(
                grid,
                degree,
                pass_num,
                self.error_model,
                workers=self.config.workers,
                executor=executor,
                partition_size=self.config.partition_size,
            )
            logger.debug("Pass complete", pass_num=pass_num, of=degree)


def terrain(
    degree: int,
    error_model: Optional[ErrorModel] = None,
    *,
    seed: Optional[Seed] = None,
    workers: Optional[int] = None,
    grid: Optional[Grid] = None,
) -> Grid:
    """
    Generate a ``(2^degree + 1)`` square terrain grid.

    Args:
        degree: Grid degree (>= 1)
        error_model: Error source; a uniform Alea-backed model when None
        seed: Seed for the default error model, ignored if ``error_model``
            is given
        workers: Threads per step; ``settings.default_workers`` when None
        grid: Optional starting grid of the same degree

    Returns:
        The finished grid

    Raises:
        InvalidDegree: If ``degree`` is not a positive integer within the
            configured maximum
    """
    config = TerrainConfig(
        degree=degree,
        seed=seed,
        workers=workers if workers is not None else settings.default_workers,
    )
    return TerrainGenerator(config, error_model).generate(grid)
