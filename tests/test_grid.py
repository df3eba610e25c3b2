"""Tests for the heightmap grid and its addressing primitives."""

import numpy as np
import pytest

from py_diamond_square.core import grid as grid_module
from py_diamond_square.core.exceptions import InvalidDegree, OutOfBounds
from py_diamond_square.core.grid import (
    GRID_SIZES, Grid, add_at, blank, degree_for_size, exp2, format_grid, get,
    grid_size, set_value, validate_degree,
)


class TestGridSizes:
    """Test size and degree helpers."""

    def test_exp2(self):
        """Test integer powers of two."""
        assert [exp2(n) for n in range(5)] == [1, 2, 4, 8, 16]

    def test_grid_size(self):
        """Test that a grid of degree n has size 2^n + 1."""
        assert [grid_size(n) for n in range(1, 6)] == [3, 5, 9, 17, 33]

    def test_size_table(self):
        """Test the table of legal sizes."""
        assert GRID_SIZES[0] == 3
        assert GRID_SIZES[9] == 1025
        assert GRID_SIZES[-1] == 1073741825
        assert all(size % 2 == 1 for size in GRID_SIZES)

    def test_degree_for_size(self):
        """Test reverse lookup of the degree."""
        assert degree_for_size(3) == 1
        assert degree_for_size(9) == 3
        assert degree_for_size(1025) == 10
        assert degree_for_size(2) is None
        assert degree_for_size(4) is None
        assert degree_for_size(7) is None

    @pytest.mark.parametrize("degree", [0, -1, 31, 1.5, "3", True, None])
    def test_invalid_degrees(self, degree):
        """Test that bad degrees are rejected."""
        with pytest.raises(InvalidDegree):
            validate_degree(degree)

    def test_invalid_degree_is_value_error(self):
        """Test that InvalidDegree can be caught as ValueError."""
        with pytest.raises(ValueError):
            blank(0)

    def test_custom_max_degree(self):
        """Test an explicit upper bound."""
        assert validate_degree(4, max_degree=4) == 4
        with pytest.raises(InvalidDegree):
            validate_degree(5, max_degree=4)


class TestBlankGrid:
    """Test blank grid creation."""

    @pytest.mark.parametrize("degree", [1, 2, 3, 6])
    def test_blank_shape(self, degree):
        """Test that blank grids are square, sized 2^n + 1 and all zero."""
        grid = blank(degree)
        size = 2 ** degree + 1

        assert grid.degree == degree
        assert grid.size == size
        assert grid.heights.shape == (size, size)
        assert grid.heights.dtype == np.int64
        assert np.all(grid.heights == 0)

    def test_corners(self):
        """Test the four corner coordinates."""
        assert blank(3).corners == ((0, 0), (8, 0), (0, 8), (8, 8))


class TestGridAccess:
    """Test get/set/add_at."""

    @pytest.fixture
    def grid(self):
        return blank(2)

    def test_set_and_get(self, grid):
        """Test that a written value reads back."""
        result = set_value(grid, 3, 1, 42)

        assert result is grid
        assert get(grid, 3, 1) == 42
        # (x, y) addressing: x is the column, y the row
        assert grid.heights[1, 3] == 42
        assert get(grid, 1, 3) == 0

    def test_set_alias(self, grid):
        """Test the module-level ``set`` operation."""
        grid_module.set(grid, 0, 4, -7)
        assert grid.get(0, 4) == -7

    def test_add_at(self, grid):
        """Test adding to an existing value."""
        add_at(grid, 2, 2, 5)
        add_at(grid, 2, 2, -8)
        assert grid.get(2, 2) == -3

    def test_add_at_on_zero_matches_set(self, grid):
        """Test that add_at on an unset cell is equivalent to set."""
        other = blank(2)
        add_at(grid, 1, 2, 9)
        set_value(other, 1, 2, 9)
        assert grid == other

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 5), (5, 5)])
    def test_get_out_of_bounds(self, grid, x, y):
        """Test that reads outside the grid fail."""
        with pytest.raises(OutOfBounds):
            grid.get(x, y)

    def test_set_out_of_bounds(self, grid):
        """Test that writes outside the grid fail and change nothing."""
        with pytest.raises(OutOfBounds):
            grid.set(5, 0, 1)
        with pytest.raises(IndexError):
            grid.add_at(-1, 2, 1)
        assert np.all(grid.heights == 0)

    def test_out_of_bounds_details(self, grid):
        """Test the error carries the offending coordinate."""
        with pytest.raises(OutOfBounds) as exc_info:
            grid.get(7, 2)
        assert exc_info.value.x == 7
        assert exc_info.value.size == 5

    def test_min_max(self, grid):
        """Test height extremes."""
        grid.set(0, 0, -3).set(4, 4, 11)
        assert grid.min() == -3
        assert grid.max() == 11

    def test_copy_is_independent(self, grid):
        """Test that copies do not share storage."""
        clone = grid.copy()
        clone.set(1, 1, 5)
        assert grid.get(1, 1) == 0
        assert clone != grid


class TestFromArray:
    """Test wrapping existing arrays."""

    def test_valid_array(self):
        """Test a legal 5x5 array."""
        data = [[i * 5 + j for j in range(5)] for i in range(5)]
        grid = Grid.from_array(data)

        assert grid.degree == 2
        assert grid.get(4, 0) == 4
        assert grid.get(0, 4) == 20
        assert grid.to_list() == data

    def test_array_is_copied(self):
        """Test that the source array is not aliased."""
        source = np.zeros((3, 3), dtype=np.int64)
        grid = Grid.from_array(source)
        grid.set(1, 1, 9)
        assert source[1, 1] == 0

    @pytest.mark.parametrize("shape", [(4, 4), (3, 5), (2, 2), (1, 1), (9,)])
    def test_invalid_shapes(self, shape):
        """Test that non-square or badly sized arrays are rejected."""
        with pytest.raises(InvalidDegree):
            Grid.from_array(np.zeros(shape))


class TestFormatting:
    """Test the text rendering of grids."""

    def test_format_blank(self):
        """Test a blank 3x3 grid."""
        assert format_grid(blank(1)) == "0 0 0\n0 0 0\n0 0 0"

    def test_format_aligns_columns(self):
        """Test that columns line up for mixed widths."""
        grid = blank(1).set(1, 1, -12)
        lines = str(grid).splitlines()

        assert len(lines) == 3
        assert lines[1] == "  0 -12   0"
        assert len({len(line) for line in lines}) == 1

    def test_repr(self):
        """Test the short representation."""
        assert repr(blank(2)) == "Grid(degree=2, size=5)"
