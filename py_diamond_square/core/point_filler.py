"""
Height computation for individual cells.

A target cell gets the average of its already-known neighbors at distance
``interval``, truncated toward zero, plus an error term. The square step
reads the four diagonal corners; the diamond step reads the four
axis-aligned edges. Neighbors that fall outside the grid are left out of the
average rather than counted as zero, so edge cells average three values and
corners of a sub-square never read past the border.
"""

from enum import Enum
from typing import Optional

import numpy as np

from .coordinates import interval as pass_interval
from .error_model import ErrorModel, default_error_model
from .exceptions import OutOfBounds
from .grid import Grid


class Step(Enum):
    """Which half of a pass a cell belongs to."""

    SQUARE = "square"
    DIAMOND = "diamond"


# Unit offsets (dx, dy), scaled by the pass interval
_NEIGHBOR_OFFSETS = {
    # top-left, top-right, bottom-left, bottom-right
    Step.SQUARE: np.array([[-1, -1], [1, -1], [-1, 1], [1, 1]], dtype=np.int64),
    # left, right, up, down
    Step.DIAMOND: np.array([[-1, 0], [1, 0], [0, -1], [0, 1]], dtype=np.int64),
}


def neighbor_offsets(step: Step, interval: int) -> np.ndarray:
    """``(4, 2)`` array of ``[dx, dy]`` neighbor offsets for a step."""
    return _NEIGHBOR_OFFSETS[Step(step)] * interval


def truncated_mean(total: np.ndarray, count: np.ndarray) -> np.ndarray:
    """Integer mean rounded toward zero, element-wise."""
    return np.sign(total) * (np.abs(total) // count)


def neighbor_average(
    heights: np.ndarray, coords: np.ndarray, step: Step, interval: int
) -> np.ndarray:
    """
    Truncated average of the in-bounds neighbors of each coordinate.

    Args:
        heights: ``(size, size)`` height array indexed ``[y, x]``; only read
        coords: ``(N, 2)`` array of ``[x, y]`` targets
        step: Neighbor pattern to use
        interval: Neighbor distance

    Returns:
        ``(N,)`` int64 array of averages
    """
    size = heights.shape[0]
    xs = coords[:, 0]
    ys = coords[:, 1]
    total = np.zeros(len(coords), dtype=np.int64)
    count = np.zeros(len(coords), dtype=np.int64)

    for dx, dy in neighbor_offsets(step, interval):
        nx = xs + dx
        ny = ys + dy
        valid = (nx >= 0) & (nx < size) & (ny >= 0) & (ny < size)
        total[valid] += heights[ny[valid], nx[valid]]
        count += valid

    return truncated_mean(total, count)


def compute_step_values(
    heights: np.ndarray,
    coords: np.ndarray,
    step: Step,
    interval: int,
    errors: np.ndarray,
) -> np.ndarray:
    """
    New heights for a batch of cells of one step.

    Pure function of the height snapshot: nothing is written, so batches of
    the same step can be computed in any order or concurrently.
    """
    return neighbor_average(heights, coords, step, interval) + errors


def fill_point(
    grid: Grid,
    degree: int,
    pass_num: int,
    x: int,
    y: int,
    step: Step,
    error_model: Optional[ErrorModel] = None,
) -> Grid:
    """
    Compute and write the height of a single cell.

    Raises:
        OutOfBounds: If ``(x, y)`` is outside the grid
        InvalidPass: If ``pass_num`` is not in [1, degree]
    """
    if not grid.in_bounds(x, y):
        raise OutOfBounds(x, y, grid.size)
    distance = pass_interval(degree, pass_num)
    error_model = error_model or default_error_model()
    coords = np.array([[x, y]], dtype=np.int64)
    errors = np.array([error_model.error(distance)], dtype=np.int64)
    value = compute_step_values(grid.heights, coords, step, distance, errors)[0]
    return grid.set(x, y, int(value))


def fill_square(
    grid: Grid,
    degree: int,
    pass_num: int,
    x: int,
    y: int,
    error_model: Optional[ErrorModel] = None,
) -> Grid:
    """Fill ``(x, y)`` from its four diagonal corners plus error."""
    return fill_point(grid, degree, pass_num, x, y, Step.SQUARE, error_model)


def fill_diamond(
    grid: Grid,
    degree: int,
    pass_num: int,
    x: int,
    y: int,
    error_model: Optional[ErrorModel] = None,
) -> Grid:
    """Fill ``(x, y)`` from its four axis-aligned neighbors plus error."""
    return fill_point(grid, degree, pass_num, x, y, Step.DIAMOND, error_model)
