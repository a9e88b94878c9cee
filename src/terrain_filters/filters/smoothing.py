"""
Neighborhood Smoothing Filters

Each filter recomputes every cell from its 3x3 neighborhood. Neighbors
outside the grid are excluded (no wraparound or reflection), results are
written to a scratch buffer and committed only after the full pass, so
every cell sees original values only.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from scipy.ndimage import convolve, maximum_filter, minimum_filter

from ..core.buffer import ScratchBuffer
from ..core.grid import TerrainOptions
from ..core.validation import InvalidParameterError, validate_heights

# Footprint of the conservative filter: corner neighbors only
DIAGONAL_FOOTPRINT = np.array([
    [1, 0, 1],
    [0, 0, 0],
    [1, 0, 1],
], dtype=bool)


def _neighborhood_stack(z: np.ndarray) -> np.ndarray:
    """
    Stack the 3x3 neighborhood of every cell along a new first axis.

    Returns an array of shape (9, rows, cols); neighbors outside the grid
    are NaN.
    """
    rows, cols = z.shape
    padded = np.pad(z, 1, mode='constant', constant_values=np.nan)
    return np.stack([
        padded[1 + dr:1 + dr + rows, 1 + dc:1 + dc + cols]
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
    ])


def smooth_mean(
    heights: np.ndarray,
    options: TerrainOptions,
    weight: float = 0.0,
    buffer: Optional[ScratchBuffer] = None,
) -> np.ndarray:
    """
    Smooth the terrain by setting each cell to the mean of its neighborhood.

    Args:
        heights: Elevation array, modified in place
        options: Terrain options (grid dimensions)
        weight: How much to weight the original elevation against the
            neighborhood mean; 0 gives the plain mean
        buffer: Scratch storage to reuse between calls

    Returns:
        The same ``heights`` array
    """
    flat = validate_heights(heights, options)
    if not np.isfinite(weight) or weight <= -1:
        raise InvalidParameterError(f"weight must be greater than -1, got {weight}")

    z = flat.reshape(options.shape)
    kernel = np.ones((3, 3))
    sums = convolve(z, kernel, mode='constant', cval=0.0)
    counts = convolve(np.ones_like(z), kernel, mode='constant', cval=0.0)

    if buffer is None:
        buffer = ScratchBuffer()
    work = buffer.acquire(flat.size).reshape(options.shape)
    np.divide(sums, counts, out=work)
    work += z * weight
    work /= 1 + weight

    buffer.commit(flat)
    return heights


def smooth_median(
    heights: np.ndarray,
    options: TerrainOptions,
    buffer: Optional[ScratchBuffer] = None,
) -> np.ndarray:
    """
    Smooth the terrain by setting each cell to the median of its neighborhood.

    The cell itself is part of its neighborhood. With an even number of
    neighbors (edges and corners) the two central values are averaged.
    """
    flat = validate_heights(heights, options)
    z = flat.reshape(options.shape)

    if buffer is None:
        buffer = ScratchBuffer()
    work = buffer.acquire(flat.size).reshape(options.shape)
    np.nanmedian(_neighborhood_stack(z), axis=0, out=work)

    buffer.commit(flat)
    return heights


def smooth_conservative(
    heights: np.ndarray,
    options: TerrainOptions,
    multiplier: Optional[float] = None,
    buffer: Optional[ScratchBuffer] = None,
) -> np.ndarray:
    """
    Smooth the terrain by clamping each cell within its neighbors' extremes.

    The extremes are taken over the diagonal neighbors only. Cells without
    any diagonal neighbor (single-row or single-column grids) are left as
    they are.

    Args:
        heights: Elevation array, modified in place
        options: Terrain options (grid dimensions)
        multiplier: Scales the allowed window around its midpoint; values
            above 1 let a cell sit farther outside its neighbors' range.
            None behaves like 1.
        buffer: Scratch storage to reuse between calls

    Returns:
        The same ``heights`` array
    """
    flat = validate_heights(heights, options)
    if multiplier is not None and not np.isfinite(multiplier):
        raise InvalidParameterError(f"multiplier must be finite, got {multiplier}")

    z = flat.reshape(options.shape)
    high = maximum_filter(z, footprint=DIAGONAL_FOOTPRINT, mode='constant', cval=-np.inf)
    low = minimum_filter(z, footprint=DIAGONAL_FOOTPRINT, mode='constant', cval=np.inf)
    has_neighbors = np.isfinite(high)

    if multiplier is not None:
        half_diff = np.where(has_neighbors, (high - low) * 0.5, 0.0)
        middle = np.where(has_neighbors, low + half_diff, z)
        high = middle + half_diff * multiplier
        low = middle - half_diff * multiplier

    if buffer is None:
        buffer = ScratchBuffer()
    work = buffer.acquire(flat.size).reshape(options.shape)
    clamped = np.where(z > high, high, np.where(z < low, low, z))
    np.copyto(work, np.where(has_neighbors, clamped, z))

    buffer.commit(flat)
    return heights
