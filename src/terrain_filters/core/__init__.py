"""Core data structures: grid addressing, options, easing and validation."""

from .grid import HeightGrid, TerrainOptions, grid_index, grid_coords, load_options
from .buffer import ScratchBuffer
from .easing import Easing, resolve_easing

__all__ = [
    "HeightGrid",
    "TerrainOptions",
    "grid_index",
    "grid_coords",
    "load_options",
    "ScratchBuffer",
    "Easing",
    "resolve_easing",
]
