"""
Terrain Filters

Post-processing filters for procedurally generated heightmaps:
normalization, edge shaping, smoothing, stepping and turbulence.
"""

__version__ = "0.1.0"

from .core.grid import HeightGrid, TerrainOptions
from .core.easing import Linear, EaseIn, EaseOut, EaseInOut, InEaseOut
from .core.validation import (
    ValidationError,
    DegenerateRangeError,
    InvalidParameterError,
    MissingConfigurationError,
)
from .filters import (
    normalize,
    linear_edges,
    radial_edges,
    smooth_mean,
    smooth_median,
    smooth_conservative,
    step,
    turbulence,
)

__all__ = [
    "HeightGrid",
    "TerrainOptions",
    "Linear",
    "EaseIn",
    "EaseOut",
    "EaseInOut",
    "InEaseOut",
    "ValidationError",
    "DegenerateRangeError",
    "InvalidParameterError",
    "MissingConfigurationError",
    "normalize",
    "linear_edges",
    "radial_edges",
    "smooth_mean",
    "smooth_median",
    "smooth_conservative",
    "step",
    "turbulence",
]
