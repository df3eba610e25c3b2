"""
Core terrain generation functionality.
"""

from .exceptions import (
    DiamondSquareError, InvalidDegree, InvalidPass, OutOfBounds,
    DegenerateNormalization, OverlappingWrite,
)
from .grid import Grid, blank, get, set_value, add_at, grid_size, format_grid
from .coordinates import square_coords, diamond_coords, pass_coords, PassCoordinates
from .error_model import ErrorModel, UniformError, ZeroError, FixedError
from .point_filler import Step, fill_square, fill_diamond
from .passes import run_pass, partition_coords, merge_partitions
from .terrain import terrain, TerrainConfig, TerrainGenerator
from .normalizer import normalize, terrain_bounds

__all__ = ['DiamondSquareError', 'InvalidDegree', 'InvalidPass', 'OutOfBounds',
           'DegenerateNormalization', 'OverlappingWrite',
           'Grid', 'blank', 'get', 'set_value', 'add_at', 'grid_size', 'format_grid',
           'square_coords', 'diamond_coords', 'pass_coords', 'PassCoordinates',
           'ErrorModel', 'UniformError', 'ZeroError', 'FixedError',
           'Step', 'fill_square', 'fill_diamond',
           'run_pass', 'partition_coords', 'merge_partitions',
           'terrain', 'TerrainConfig', 'TerrainGenerator',
           'normalize', 'terrain_bounds']
