"""
Range Normalizer

Rescales a heightmap into the configured elevation bounds.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..core.easing import resolve_easing
from ..core.grid import TerrainOptions
from ..core.validation import DegenerateRangeError, validate_heights


def target_range(
    low: float,
    high: float,
    options: TerrainOptions,
) -> Tuple[float, float]:
    """
    Resolve the (target_min, target_max) window for data spanning [low, high].

    Unset bounds fall back to the data extremes. Without ``stretch`` the
    window is clamped to the data; if clamping inverts it, the configured
    maximum is used as-is.
    """
    opt_max = high if options.max_height is None else options.max_height
    opt_min = low if options.min_height is None else options.min_height

    if options.stretch:
        t_max, t_min = opt_max, opt_min
    else:
        t_max = min(high, opt_max)
        t_min = max(low, opt_min)

    if t_max < t_min:
        t_max = opt_max

    return (t_min, t_max)


def normalize(heights: np.ndarray, options: TerrainOptions) -> np.ndarray:
    """
    Rescale every elevation into the target range through an easing curve.

    Only ``max_height``, ``min_height``, ``easing`` and ``stretch`` are read
    from the options; the options object itself is never modified.

    Args:
        heights: Elevation array, modified in place
        options: Terrain options

    Returns:
        The same ``heights`` array

    Raises:
        DegenerateRangeError: If every elevation is identical
    """
    flat = validate_heights(heights)
    rescale(flat, options)
    return heights


def rescale(flat: np.ndarray, options: TerrainOptions) -> np.ndarray:
    """Normalize an already validated flat elevation array in place."""
    easing = resolve_easing(options.easing)

    low = float(flat.min())
    high = float(flat.max())
    actual_range = high - low
    if actual_range == 0:
        raise DegenerateRangeError(
            f"Cannot normalize a flat heightmap (every cell is {low}). "
            "Add variation before normalizing."
        )

    t_min, t_max = target_range(low, high, options)

    progress = (flat - low) / actual_range
    flat[:] = np.asarray(easing(progress), dtype=np.float64) * (t_max - t_min) + t_min
    return flat
