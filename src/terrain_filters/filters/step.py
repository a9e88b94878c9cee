"""
Step Quantizer

Partitions a terrain into flat steps. Buckets are formed by population
(equal numbers of cells), not by equal elevation ranges.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..core.validation import validate_heights, validate_levels


@dataclass(frozen=True)
class Bucket:
    """Elevation extremes and mean of one population slice."""
    min: float
    max: float
    avg: float

    def contains(self, values: np.ndarray) -> np.ndarray:
        return (values >= self.min) & (values <= self.max)


def default_levels(cell_count: int) -> int:
    """(cells / 2) ** 0.25, rounded down, at least 1."""
    return max(1, int(np.floor((cell_count * 0.5) ** 0.25)))


def compute_buckets(
    values: np.ndarray,
    levels: int,
    merge_remainder: bool = False,
) -> List[Bucket]:
    """
    Split the sorted elevations into ``levels`` slices of equal population.

    Each slice holds ``len(values) // levels`` values. The remainder at the
    top of the sorted order belongs to no bucket unless ``merge_remainder``
    is set, in which case it joins the last one.
    """
    ordered = np.sort(values, axis=None)
    inc = ordered.size // levels
    buckets = []
    for i in range(levels):
        end = ordered.size if merge_remainder and i == levels - 1 else (i + 1) * inc
        subset = ordered[i * inc:end]
        buckets.append(Bucket(
            min=float(subset[0]),
            max=float(subset[-1]),
            avg=float(np.mean(subset)),
        ))
    return buckets


def step(
    heights: np.ndarray,
    levels: Optional[int] = None,
    merge_remainder: bool = False,
) -> np.ndarray:
    """
    Collapse the terrain into at most ``levels`` flat steps.

    Every cell takes the mean of the first bucket whose [min, max] range
    contains its elevation. Cells in the undistributed remainder (when the
    cell count is not a multiple of ``levels``) keep their elevation unless
    ``merge_remainder`` is set.

    Args:
        heights: Elevation array, modified in place
        levels: Number of steps (default (cells / 2) ** 0.25)
        merge_remainder: Fold the remainder into the last bucket

    Returns:
        The same ``heights`` array

    Raises:
        InvalidParameterError: If levels is not a positive integer
    """
    flat = validate_heights(heights)
    if levels is None:
        levels = default_levels(flat.size)
    else:
        levels = validate_levels(levels, flat.size)

    buckets = compute_buckets(flat, levels, merge_remainder)

    stepped = flat.copy()
    unmatched = np.ones(flat.size, dtype=bool)
    for bucket in buckets:
        members = unmatched & bucket.contains(flat)
        stepped[members] = bucket.avg
        unmatched &= ~members

    flat[:] = stepped
    return heights
