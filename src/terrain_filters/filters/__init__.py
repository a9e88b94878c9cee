"""Heightmap post-processing filters."""

from .normalize import normalize
from .edges import EdgeSelection, linear_edges, radial_edges
from .smoothing import smooth_mean, smooth_median, smooth_conservative
from .step import Bucket, step
from .turbulence import turbulence

__all__ = [
    "normalize",
    "EdgeSelection",
    "linear_edges",
    "radial_edges",
    "smooth_mean",
    "smooth_median",
    "smooth_conservative",
    "Bucket",
    "step",
    "turbulence",
]
