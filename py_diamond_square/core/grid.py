"""
Square heightmap grid and its addressing primitives.

A grid of degree ``n`` is a ``(2^n + 1) x (2^n + 1)`` array of signed integer
heights. Cells are addressed ``(x, y)`` with the origin at the top-left,
``x`` growing rightward and ``y`` growing downward. Internally the array is
indexed ``[y, x]`` so each row of the array is one row of terrain.

The odd ``2^n + 1`` size guarantees that every subdivision midpoint at every
pass falls on an exact integer coordinate.
"""

from numbers import Integral
from typing import List, Optional, Tuple

import numpy as np

from ..config import settings
from .exceptions import InvalidDegree, OutOfBounds

HEIGHT_DTYPE = np.int64

# Legal sizes for degrees 1..30: 3, 5, 9, 17, ... 1073741825
GRID_SIZES = tuple((1 << n) + 1 for n in range(1, 31))


def exp2(n: int) -> int:
    """Return 2^n as an integer."""
    return 1 << n


def grid_size(degree: int) -> int:
    """Linear size of a grid of the given degree."""
    return exp2(degree) + 1


def validate_degree(degree, max_degree: Optional[int] = None) -> int:
    """
    Check that ``degree`` is an integer in [1, max_degree].

    Raises:
        InvalidDegree: If the degree is not acceptable
    """
    if max_degree is None:
        max_degree = settings.max_degree
    if isinstance(degree, bool) or not isinstance(degree, Integral):
        raise InvalidDegree(degree, max_degree)
    if degree < 1 or degree > max_degree:
        raise InvalidDegree(degree, max_degree)
    return int(degree)


def degree_for_size(size: int) -> Optional[int]:
    """Return the degree whose grid size is ``size``, or None if there is none."""
    n = size - 1
    if n < 2 or n & (n - 1):
        return None
    return n.bit_length() - 1


class Grid:
    """
    Mutable square heightmap.

    Writes happen in place; ``set`` and ``add_at`` return the grid itself so
    calls can be chained. Use ``copy()`` when an independent grid is needed.

    Attributes:
        heights: ``(size, size)`` int64 array indexed ``[y, x]``
        degree: Grid degree, ``size == 2^degree + 1``
    """

    __slots__ = ("heights", "degree")

    def __init__(self, heights: np.ndarray, degree: int):
        self.heights = heights
        self.degree = degree

    @classmethod
    def blank(cls, degree: int) -> "Grid":
        """All-zero grid of size ``2^degree + 1``."""
        degree = validate_degree(degree)
        size = grid_size(degree)
        return cls(np.zeros((size, size), dtype=HEIGHT_DTYPE), degree)

    @classmethod
    def from_array(cls, array) -> "Grid":
        """
        Wrap an existing square array, e.g. one with pre-seeded corners.

        The data is copied and converted to int64.

        Raises:
            InvalidDegree: If the array is not square with a legal size
        """
        heights = np.array(array, dtype=HEIGHT_DTYPE)
        if heights.ndim != 2 or heights.shape[0] != heights.shape[1]:
            raise InvalidDegree(
                heights.shape, message=f"Grid array must be square, got shape {heights.shape}"
            )
        degree = degree_for_size(heights.shape[0])
        if degree is None:
            raise InvalidDegree(
                heights.shape[0],
                message=f"Grid size {heights.shape[0]} is not of the form 2^n + 1",
            )
        validate_degree(degree)
        return cls(heights, degree)

    @property
    def size(self) -> int:
        return self.heights.shape[0]

    @property
    def corners(self) -> Tuple[Tuple[int, int], ...]:
        last = self.size - 1
        return ((0, 0), (last, 0), (0, last), (last, last))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def _check(self, x, y) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self.size)

    def get(self, x: int, y: int) -> int:
        """Height at ``(x, y)``."""
        self._check(x, y)
        return int(self.heights[y, x])

    def set(self, x: int, y: int, value: int) -> "Grid":
        """Write ``value`` at ``(x, y)``."""
        self._check(x, y)
        self.heights[y, x] = value
        return self

    def add_at(self, x: int, y: int, delta: int) -> "Grid":
        """Add ``delta`` to the height at ``(x, y)``."""
        return self.set(x, y, self.get(x, y) + delta)

    def min(self) -> int:
        return int(self.heights.min())

    def max(self) -> int:
        return int(self.heights.max())

    def copy(self) -> "Grid":
        return Grid(self.heights.copy(), self.degree)

    def to_list(self) -> List[List[int]]:
        """Rows of heights, top row first."""
        return self.heights.tolist()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.degree == other.degree and np.array_equal(self.heights, other.heights)

    def __repr__(self) -> str:
        return f"Grid(degree={self.degree}, size={self.size})"

    def __str__(self) -> str:
        return format_grid(self)


def format_grid(grid: Grid) -> str:
    """Render the grid one row per line with right-aligned columns."""
    width = max(len(str(grid.min())), len(str(grid.max())))
    return "\n".join(
        " ".join(str(v).rjust(width) for v in row) for row in grid.to_list()
    )


# Functional API mirroring the Grid methods


def blank(degree: int) -> Grid:
    """All-zero grid of size ``2^degree + 1``."""
    return Grid.blank(degree)


def get(grid: Grid, x: int, y: int) -> int:
    """Height at ``(x, y)``; raises OutOfBounds outside the grid."""
    return grid.get(x, y)


def set_value(grid: Grid, x: int, y: int, value: int) -> Grid:
    """Write ``value`` at ``(x, y)`` and return the grid."""
    return grid.set(x, y, value)


def add_at(grid: Grid, x: int, y: int, delta: int) -> Grid:
    """Add ``delta`` at ``(x, y)`` and return the grid."""
    return grid.add_at(x, y, delta)


set = set_value  # noqa: A001
