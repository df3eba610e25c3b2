"""
Pass orchestration: the square step then the diamond step of one pass.

Within a step every target cell reads only cells written by earlier passes
or, for the diamond step, by the square step just committed. Targets never
read each other, so a step is computed as:

1. partition the step's coordinates into chunks
2. compute each chunk's heights from a read-only snapshot of the grid,
   optionally on a thread pool
3. merge the chunk results by disjoint union and commit them to the grid

Only the calling thread writes to the grid, and only after every chunk of
the step has finished.
"""

from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

import numpy as np
import structlog

from ..config import settings
from .coordinates import diamond_coords, interval as pass_interval, square_coords
from .error_model import ErrorModel, default_error_model
from .exceptions import OverlappingWrite
from .grid import Grid
from .point_filler import Step, compute_step_values

logger = structlog.get_logger()

StepResult = Tuple[np.ndarray, np.ndarray]


def partition_coords(coords: np.ndarray, parts: int) -> List[np.ndarray]:
    """
    Split coordinates into at most ``parts`` contiguous, non-empty chunks.

    Args:
        coords: ``(N, 2)`` coordinate array
        parts: Desired number of chunks (>= 1)

    Returns:
        List of ``(M, 2)`` arrays whose concatenation is ``coords``
    """
    if parts < 1:
        raise ValueError(f"parts must be >= 1, got {parts}")
    parts = min(parts, max(1, len(coords)))
    return [chunk for chunk in np.array_split(coords, parts) if len(chunk)]


def merge_partitions(results: Iterable[StepResult], size: int) -> StepResult:
    """
    Union of per-chunk results, verifying no cell appears twice.

    Args:
        results: ``(coords, values)`` pairs, one per chunk
        size: Grid size, used to key cells

    Returns:
        Concatenated ``(coords, values)``

    Raises:
        OverlappingWrite: If two entries target the same cell
    """
    results = list(results)
    if not results:
        return np.empty((0, 2), dtype=np.int64), np.empty(0, dtype=np.int64)

    coords = np.concatenate([c for c, _ in results])
    values = np.concatenate([v for _, v in results])

    keys = coords[:, 1] * size + coords[:, 0]
    unique_keys, counts = np.unique(keys, return_counts=True)
    if len(unique_keys) != len(keys):
        repeated = unique_keys[counts > 1]
        raise OverlappingWrite([(int(k % size), int(k // size)) for k in repeated])

    return coords, values


def _partition_count(n_coords: int, workers: int, partition_size: int) -> int:
    parts = max(1, -(-n_coords // partition_size))
    if workers > 1:
        parts = max(parts, min(workers, n_coords))
    return parts


def run_step(
    grid: Grid,
    coords: np.ndarray,
    step: Step,
    interval: int,
    error_model: ErrorModel,
    executor: Optional[Executor] = None,
    workers: int = 1,
    partition_size: Optional[int] = None,
) -> Grid:
    """
    Fill every coordinate of one step and commit the result.

    Args:
        grid: Grid to update in place
        coords: Targets of the step
        step: SQUARE or DIAMOND
        interval: Neighbor distance and error bound
        error_model: Error source
        executor: Pool to fan chunks out to; computed inline when None
        workers: Worker count, used to size the partitioning
        partition_size: Maximum coordinates per chunk

    Returns:
        The updated grid
    """
    partition_size = partition_size or settings.partition_size
    snapshot = grid.heights.view()
    snapshot.flags.writeable = False

    def compute(chunk: np.ndarray) -> StepResult:
        errors = error_model.draw(interval, len(chunk))
        return chunk, compute_step_values(snapshot, chunk, step, interval, errors)

    chunks = partition_coords(coords, _partition_count(len(coords), workers, partition_size))
    if executor is None or len(chunks) == 1:
        results = [compute(chunk) for chunk in chunks]
    else:
        results = list(executor.map(compute, chunks))

    merged, values = merge_partitions(results, grid.size)
    grid.heights[merged[:, 1], merged[:, 0]] = values

    logger.debug(
        "Step committed",
        step=step.value,
        interval=interval,
        cells=len(merged),
        chunks=len(chunks),
    )
    return grid


def run_pass(
    grid: Grid,
    degree: int,
    pass_num: int,
    error_model: Optional[ErrorModel] = None,
    workers: int = 1,
    executor: Optional[Executor] = None,
    partition_size: Optional[int] = None,
) -> Grid:
    """
    Run the square step and then the diamond step of ``pass_num``.

    The square step is fully committed before the diamond step reads the
    grid. When ``workers > 1`` and no executor is given, a thread pool is
    created for the duration of the pass.

    Args:
        grid: Grid of the given degree, updated in place
        degree: Grid degree
        pass_num: Pass number in [1, degree]
        error_model: Error source; the default model when None
        workers: Threads to use per step
        executor: Existing pool to reuse across passes
        partition_size: Maximum coordinates per parallel task

    Returns:
        The updated grid
    """
    distance = pass_interval(degree, pass_num)
    error_model = error_model or default_error_model()

    if executor is None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return run_pass(
                grid, degree, pass_num, error_model, workers, pool, partition_size
            )

    run_step(
        grid, square_coords(degree, pass_num), Step.SQUARE, distance,
        error_model, executor, workers, partition_size,
    )
    run_step(
        grid, diamond_coords(degree, pass_num), Step.DIAMOND, distance,
        error_model, executor, workers, partition_size,
    )
    return grid
