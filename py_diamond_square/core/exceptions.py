"""
Exception hierarchy for terrain generation.

Every error raised by the package derives from DiamondSquareError and also
from the matching builtin, so callers catching ValueError or IndexError keep
working.
"""


class DiamondSquareError(Exception):
    """Base class for all terrain generation errors."""


class InvalidDegree(DiamondSquareError, ValueError):
    """Grid degree is below 1, above the configured maximum, or not an integer."""

    def __init__(self, degree, max_degree=None, message=None):
        self.degree = degree
        self.max_degree = max_degree
        if message is None:
            upper = "" if max_degree is None else f" and <= {max_degree}"
            message = f"Invalid grid degree {degree!r}: must be an integer >= 1{upper}"
        super().__init__(message)


class InvalidPass(DiamondSquareError, ValueError):
    """Pass number outside [1, degree]."""

    def __init__(self, degree: int, pass_num):
        self.degree = degree
        self.pass_num = pass_num
        super().__init__(
            f"Invalid pass {pass_num!r} for degree {degree}: must be in [1, {degree}]"
        )


class OutOfBounds(DiamondSquareError, IndexError):
    """Cell access outside [0, size) on either axis."""

    def __init__(self, x, y, size: int):
        self.x = x
        self.y = y
        self.size = size
        super().__init__(f"Coordinate ({x}, {y}) outside grid of size {size}")


class DegenerateNormalization(DiamondSquareError, ArithmeticError):
    """Normalization requested on a perfectly flat grid (max == min)."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Cannot normalize flat terrain: every cell is {value}")


class OverlappingWrite(DiamondSquareError, RuntimeError):
    """Two partitions of one step targeted the same cell."""

    def __init__(self, cells):
        self.cells = cells
        preview = ", ".join(f"({x}, {y})" for x, y in cells[:5])
        super().__init__(
            f"{len(cells)} cell(s) written more than once in a single step: {preview}"
        )
