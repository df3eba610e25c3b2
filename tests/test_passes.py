"""Tests for pass orchestration and step partitioning."""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from py_diamond_square.core.coordinates import coord_set, diamond_coords, pass_coords, square_coords
from py_diamond_square.core.error_model import FixedError, UniformError, ZeroError
from py_diamond_square.core.exceptions import InvalidPass, OverlappingWrite
from py_diamond_square.core.grid import blank
from py_diamond_square.core.passes import (
    merge_partitions, partition_coords, run_pass, run_step,
)
from py_diamond_square.core.point_filler import Step


def grid_with_corners(degree, value):
    grid = blank(degree)
    for x, y in grid.corners:
        grid.set(x, y, value)
    return grid


class TestPartitioning:
    """Test splitting coordinates into chunks."""

    @pytest.mark.parametrize("parts", [1, 2, 3, 7, 12, 100])
    def test_partitions_cover_input(self, parts):
        """Test that chunks concatenate back to the input."""
        coords = diamond_coords(3, 2)
        chunks = partition_coords(coords, parts)

        assert 1 <= len(chunks) <= min(parts, len(coords))
        assert all(len(chunk) for chunk in chunks)
        np.testing.assert_array_equal(np.concatenate(chunks), coords)

    def test_invalid_parts(self):
        """Test that zero parts is rejected."""
        with pytest.raises(ValueError):
            partition_coords(square_coords(2, 1), 0)

    def test_empty_input(self):
        """Test that an empty coordinate set yields no chunks."""
        assert partition_coords(np.empty((0, 2), dtype=np.int64), 4) == []


class TestMerge:
    """Test disjoint-union merging of chunk results."""

    def test_union(self):
        """Test that disjoint chunks are concatenated."""
        first = (np.array([[1, 0], [0, 1]]), np.array([5, 6]))
        second = (np.array([[2, 1]]), np.array([7]))

        coords, values = merge_partitions([first, second], size=3)

        assert coord_set(coords) == {(1, 0), (0, 1), (2, 1)}
        assert sorted(values.tolist()) == [5, 6, 7]

    def test_overlap_detected(self):
        """Test that a cell targeted by two chunks is reported."""
        first = (np.array([[1, 0], [0, 1]]), np.array([5, 6]))
        second = (np.array([[0, 1]]), np.array([7]))

        with pytest.raises(OverlappingWrite) as exc_info:
            merge_partitions([first, second], size=3)

        assert exc_info.value.cells == [(0, 1)]

    def test_empty(self):
        """Test merging nothing."""
        coords, values = merge_partitions([], size=5)
        assert coords.shape == (0, 2)
        assert values.shape == (0,)

    @pytest.mark.parametrize("degree", [3, 5])
    def test_real_steps_never_overlap(self, degree):
        """Test every step of every pass as a merge of many chunks."""
        size = 2 ** degree + 1
        for pass_num in range(1, degree + 1):
            for coords in pass_coords(degree, pass_num):
                chunks = partition_coords(coords, 5)
                results = [(chunk, np.zeros(len(chunk))) for chunk in chunks]
                merged, _ = merge_partitions(results, size)
                assert len(merged) == len(coords)


class TestRunPass:
    """Test one full pass."""

    def test_square_committed_before_diamond(self):
        """Test that the diamond step reads the new center value."""
        grid = grid_with_corners(1, 9)
        run_pass(grid, 1, 1, ZeroError())

        # With a stale center the edges would be (9 + 9 + 0) / 3 = 6
        assert np.all(grid.heights == 9)

    def test_only_pass_cells_written(self):
        """Test that pass 1 of a 9x9 grid touches exactly five cells."""
        grid = blank(3)
        run_pass(grid, 3, 1, FixedError(1))

        written = {(int(x), int(y)) for y, x in zip(*np.nonzero(grid.heights))}
        expected = coord_set(square_coords(3, 1)) | coord_set(diamond_coords(3, 1))
        assert written == expected
        assert all(grid.get(x, y) == 1 for x, y in expected)

    def test_invalid_pass(self):
        """Test that an out-of-range pass is rejected."""
        with pytest.raises(InvalidPass):
            run_pass(blank(2), 2, 3, ZeroError())

    def test_parallel_matches_serial(self):
        """Test that a thread pool gives the same result with zero error."""
        serial = grid_with_corners(4, 16)
        serial.set(16, 0, -16)
        parallel = serial.copy()

        for pass_num in range(1, 5):
            run_pass(serial, 4, pass_num, ZeroError())
            run_pass(parallel, 4, pass_num, ZeroError(), workers=4, partition_size=3)

        assert serial == parallel

    def test_shared_executor(self):
        """Test reusing one executor across passes."""
        grid = blank(4)
        model = UniformError(seed="executor")
        with ThreadPoolExecutor(max_workers=3) as pool:
            for pass_num in range(1, 5):
                run_pass(grid, 4, pass_num, model, workers=3, executor=pool, partition_size=8)

        # Heights are bounded by the sum of all pass intervals: 8 + 4 + 2 + 1
        assert np.all(np.abs(grid.heights) <= 15)

    def test_run_step_directly(self):
        """Test filling a single step."""
        grid = grid_with_corners(2, 4)
        run_step(grid, square_coords(2, 1), Step.SQUARE, 2, ZeroError())
        assert grid.get(2, 2) == 4
        assert grid.get(2, 0) == 0
