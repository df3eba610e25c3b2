"""
Diamond-Square fractal terrain generation.

    >>> from py_diamond_square import terrain, normalize
    >>> grid = terrain(5, seed="example")
    >>> tiles = normalize(grid, 10)
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .utils.logging_setup import configure_logging

__version__ = "0.1.0"

__all__ = list(_core_all) + ['configure_logging']
