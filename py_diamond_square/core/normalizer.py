"""Rescaling of raw heights into a bounded index range for renderers."""

from typing import Optional, Tuple

import numpy as np
import structlog

from ..config import settings
from .exceptions import DegenerateNormalization
from .grid import HEIGHT_DTYPE, Grid

logger = structlog.get_logger()


def terrain_bounds(grid: Grid) -> Tuple[int, int]:
    """Lowest and highest height in the grid."""
    return grid.min(), grid.max()


def normalize(grid: Grid, steps: Optional[int] = None, *, strict: bool = False) -> Grid:
    """
    Map every height linearly from ``[min, max]`` into ``[0, steps]``.

    ``norm(x) = floor((x - min) * steps / (max - min))``, so the lowest cell
    becomes 0 and the highest becomes ``steps``. A new grid is returned; the
    input is not modified. Normalizing an already normalized grid is not
    guaranteed to give the same result.

    Args:
        grid: Terrain to normalize
        steps: Top of the output range, typically palette size - 1;
            ``settings.default_steps`` when None
        strict: Raise on flat terrain instead of recovering

    Returns:
        Grid of indices in ``[0, steps]``

    Raises:
        ValueError: If ``steps`` is not a positive integer, or so large that
            ``(max - min) * steps`` does not fit in int64
        DegenerateNormalization: If the grid is flat and ``strict`` is set
    """
    if steps is None:
        steps = settings.default_steps
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)) or steps < 1:
        raise ValueError(f"steps must be a positive integer, got {steps!r}")

    low, high = terrain_bounds(grid)
    if high == low:
        if strict:
            raise DegenerateNormalization(low)
        logger.warning("Flat terrain, normalizing to mid-range", value=low, steps=steps)
        return Grid(np.full_like(grid.heights, steps // 2, dtype=HEIGHT_DTYPE), grid.degree)

    if (high - low) * int(steps) > np.iinfo(HEIGHT_DTYPE).max:
        raise ValueError(
            f"steps={steps} overflows int64 for a height range of {high - low}"
        )

    # Operands are non-negative, so floor division equals truncation
    scaled = (grid.heights - low) * int(steps) // (high - low)
    return Grid(scaled.astype(HEIGHT_DTYPE), grid.degree)
