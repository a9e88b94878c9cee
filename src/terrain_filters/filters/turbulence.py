"""
Turbulence Transform

Folds elevations around the midpoint of the configured range, turning a
smooth gradient into tent-shaped ridges.
"""

from __future__ import annotations

import numpy as np

from ..core.grid import TerrainOptions
from ..core.validation import require_height, validate_heights


def turbulence(heights: np.ndarray, options: TerrainOptions) -> np.ndarray:
    """
    Transform to turbulent noise.

    ``z' = min_height + |2 (z - min_height) - (max_height - min_height)|``.
    Values outside [min_height, max_height] fold outside the range too.

    Raises:
        MissingConfigurationError: If either elevation bound is unset
    """
    flat = validate_heights(heights)
    max_height = require_height(options, "max_height", "Turbulence")
    min_height = require_height(options, "min_height", "Turbulence")

    span = max_height - min_height
    flat[:] = min_height + np.abs((flat - min_height) * 2 - span)
    return heights
