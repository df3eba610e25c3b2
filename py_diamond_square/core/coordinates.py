"""
Coordinate patterns for the square and diamond steps of each pass.

A pass is a square step followed by a diamond step. A grid of degree ``n``
needs exactly ``n`` passes. For a degree 3 (9x9) grid the cells touched are:

    Pass 1 square   (4,4)
    Pass 1 diamond  (4,0) (0,4) (8,4) (4,8)
    Pass 2 square   (2,2) (6,2) (2,6) (6,6)
    Pass 2 diamond  (2,0) (6,0) (0,2) (4,2) (8,2) (2,4) (6,4) ...
    Pass 3 square   every (odd, odd) cell
    Pass 3 diamond  every remaining cell except the four grid corners

Coordinates are returned as ``(N, 2)`` int64 arrays of ``[x, y]`` rows,
ordered row by row. A fresh array is built on every call and the result only
depends on ``(degree, pass_num)``.
"""

from numbers import Integral
from typing import FrozenSet, NamedTuple, Tuple

import numpy as np

from .exceptions import InvalidPass
from .grid import exp2, grid_size, validate_degree


class PassCoordinates(NamedTuple):
    """Cells targeted by one pass."""

    square: np.ndarray
    diamond: np.ndarray


def validate_pass(degree: int, pass_num) -> int:
    """Check ``1 <= pass_num <= degree``; returns the pass as an int."""
    degree = validate_degree(degree)
    if isinstance(pass_num, bool) or not isinstance(pass_num, Integral):
        raise InvalidPass(degree, pass_num)
    if pass_num < 1 or pass_num > degree:
        raise InvalidPass(degree, pass_num)
    return int(pass_num)


def interval(degree: int, pass_num: int) -> int:
    """Spacing between cells touched by ``pass_num``; also its maximum error."""
    pass_num = validate_pass(degree, pass_num)
    return exp2(degree - pass_num)


def square_coords(degree: int, pass_num: int) -> np.ndarray:
    """
    Cells filled by the square step of a pass.

    These are the midpoints of the squares left by the previous pass: every
    cell whose x and y are both odd multiples of the pass interval.

    Args:
        degree: Grid degree
        pass_num: Pass number in [1, degree]

    Returns:
        ``(4^(pass_num - 1), 2)`` array of ``[x, y]`` rows
    """
    step = interval(degree, pass_num)
    axis = step + 2 * step * np.arange(exp2(pass_num - 1), dtype=np.int64)
    ys, xs = np.meshgrid(axis, axis, indexing="ij")
    return np.column_stack([xs.ravel(), ys.ravel()])


def diamond_coords(degree: int, pass_num: int) -> np.ndarray:
    """
    Cells filled by the diamond step of a pass.

    Walks every multiple of the interval on both axes. Rows at an even
    multiple take the odd-indexed columns and rows at an odd multiple take
    the even-indexed columns, giving the edge midpoints of the diamonds
    formed by the square step of the same pass.

    Args:
        degree: Grid degree
        pass_num: Pass number in [1, degree]

    Returns:
        Array of ``[x, y]`` rows
    """
    step = interval(degree, pass_num)
    count = grid_size(pass_num)
    axis = step * np.arange(count, dtype=np.int64)
    rows, cols = np.meshgrid(np.arange(count), np.arange(count), indexing="ij")
    selected = (rows + cols) % 2 == 1
    return np.column_stack([axis[cols[selected]], axis[rows[selected]]])


def pass_coords(degree: int, pass_num: int) -> PassCoordinates:
    """Both coordinate sets of one pass."""
    return PassCoordinates(
        square=square_coords(degree, pass_num),
        diamond=diamond_coords(degree, pass_num),
    )


def coord_set(coords: np.ndarray) -> FrozenSet[Tuple[int, int]]:
    """Coordinates as a frozenset of ``(x, y)`` tuples."""
    return frozenset((int(x), int(y)) for x, y in coords)
