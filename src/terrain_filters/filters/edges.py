"""
Edge Shaping Filters

Raise or lower the terrain toward a peak elevation near its boundary,
useful for islands (edges down) or enclosing walls and cliffs (edges up).
Two variants:

- linear_edges: bands along the four rectangular edges
- radial_edges: an annulus measured from the grid center
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, fields
from typing import Mapping, Optional, Union

import numpy as np

from ..core.buffer import ScratchBuffer
from ..core.easing import EaseInOut, EasingLike, Linear, resolve_easing
from ..core.grid import TerrainOptions
from ..core.validation import (
    InvalidParameterError,
    require_height,
    validate_distance,
    validate_heights,
)
from .normalize import rescale


@dataclass(frozen=True)
class EdgeSelection:
    """Which rectangular edges linear_edges should affect."""
    top: bool = True
    bottom: bool = True
    left: bool = True
    right: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, bool]) -> EdgeSelection:
        """Build from a dict; missing edges default to enabled."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidParameterError(
                f"Unknown edge name(s): {', '.join(sorted(unknown))}. "
                "Valid edges are top, bottom, left, right."
            )
        return cls(**{k: bool(v) for k, v in data.items()})


EdgesLike = Union[EdgeSelection, Mapping[str, bool], None]


def resolve_edges(edges: EdgesLike) -> EdgeSelection:
    if edges is None:
        return EdgeSelection()
    if isinstance(edges, EdgeSelection):
        return edges
    if isinstance(edges, Mapping):
        return EdgeSelection.from_mapping(edges)
    raise InvalidParameterError(
        f"edges must be an EdgeSelection or a mapping, got {type(edges).__name__}"
    )


def push_toward(z: np.ndarray, peak: float, multiplier, direction: bool) -> np.ndarray:
    """
    Interpolate ``z`` toward ``peak`` but never move it away from the peak.

    With ``direction`` True the result is never below ``z``; otherwise it
    is never above it.
    """
    moved = (peak - z) * multiplier + z
    return np.maximum(z, moved) if direction else np.minimum(z, moved)


def _band_width(distance: float, segment_size: float) -> int:
    """
    Number of segments covered by ``distance``.

    A distance shorter than one segment still covers one; a negative
    distance gives a negative width, so no band rows or columns are shaped.
    """
    band = int(np.floor(distance / segment_size))
    return band if band != 0 else 1


def linear_edges(
    heights: np.ndarray,
    options: TerrainOptions,
    direction: bool,
    distance: float,
    easing: EasingLike = None,
    edges: EdgesLike = None,
    buffer: Optional[ScratchBuffer] = None,
) -> np.ndarray:
    """
    Move the rectangular edges of the terrain up or down.

    Cells within ``distance`` of an enabled edge are pulled toward
    ``max_height`` (direction True) or ``min_height`` (direction False),
    fully at the edge and fading to nothing at the inner limit of the band.
    Rows (top/bottom) are processed before columns (left/right). The grid
    is then re-normalized with stretch so it spans the configured bounds.

    Args:
        heights: Elevation array, modified in place
        options: Terrain options
        direction: True to turn the edges up, False to turn them down
        distance: Physical distance from each edge over which the effect fades;
            negative values leave the edges alone and only re-normalize
        easing: Transition curve (default EaseInOut)
        edges: Edges to affect (default all four)
        buffer: Scratch storage to reuse between calls

    Returns:
        The same ``heights`` array

    Raises:
        MissingConfigurationError: If the peak bound is unset
        InvalidParameterError: If distance is not a finite number
        DegenerateRangeError: If shaping leaves the grid flat
    """
    flat = validate_heights(heights, options)
    distance = validate_distance(distance)
    peak = require_height(
        options, "max_height" if direction else "min_height", "Edge shaping"
    )
    easing = resolve_easing(easing, default=EaseInOut())
    edges = resolve_edges(edges)

    rows, columns = options.rows, options.columns
    x_band = _band_width(distance, options.x_segment_size)
    y_band = _band_width(distance, options.y_segment_size)
    if x_band > columns or y_band > rows:
        warnings.warn(
            f"Edge distance {distance} is wider than the grid; "
            "band rows and columns beyond the grid are skipped.",
            UserWarning,
            stacklevel=2
        )

    # Work on a copy so a failing re-normalization leaves the grid untouched
    if buffer is None:
        buffer = ScratchBuffer()
    work = buffer.load(flat)
    z = work.reshape(rows, columns)

    for j in range(min(y_band, rows)):
        multiplier = float(easing(1 - j / y_band))
        if edges.top:
            z[j] = push_toward(z[j], peak, multiplier, direction)
        if edges.bottom:
            row = options.height_segments - j
            z[row] = push_toward(z[row], peak, multiplier, direction)

    for j in range(min(x_band, columns)):
        multiplier = float(easing(1 - j / x_band))
        if edges.left:
            z[:, j] = push_toward(z[:, j], peak, multiplier, direction)
        if edges.right:
            col = options.width_segments - j
            z[:, col] = push_toward(z[:, col], peak, multiplier, direction)

    rescale(work, options.resolved(stretch=True, easing=Linear()))
    buffer.commit(flat)
    return heights


def radial_edges(
    heights: np.ndarray,
    options: TerrainOptions,
    direction: bool,
    distance: float,
    easing: EasingLike = None,
) -> np.ndarray:
    """
    Move the edges of the terrain up or down based on distance from the center.

    Cells farther than ``distance`` from the center are pulled toward the
    peak, increasingly so up to ``min(width, height) / 2``. Each multiplier
    computed for a row in the top half is also applied to its mirrored row;
    the middle row of an odd row count is its own mirror and is pushed twice.
    A negative ``distance`` widens the band past the center.
    Unlike linear_edges the result is not re-normalized.

    Args:
        heights: Elevation array, modified in place
        options: Terrain options
        direction: True to turn the edges up, False to turn them down
        distance: Radius of the unaffected core
        easing: Transition curve (default EaseInOut)

    Returns:
        The same ``heights`` array

    Raises:
        MissingConfigurationError: If the peak bound is unset
        InvalidParameterError: If distance is not a finite number
    """
    flat = validate_heights(heights, options)
    distance = validate_distance(distance)
    peak = require_height(
        options, "max_height" if direction else "min_height", "Edge shaping"
    )
    easing = resolve_easing(easing, default=EaseInOut())

    edge_radius = min(options.width, options.height) * 0.5 - distance
    if edge_radius <= 0:
        warnings.warn(
            f"Radial distance {distance} leaves no edge band inside "
            f"{options.width} x {options.height}; the grid is unchanged.",
            UserWarning,
            stacklevel=2
        )
        return heights

    rows, columns = options.rows, options.columns
    center_x = columns * 0.5
    center_y = rows * 0.5
    half_rows = int(np.ceil(center_y))

    row_idx = np.arange(half_rows)
    dx = (center_x - np.arange(columns)[np.newaxis, :]) * options.x_segment_size
    dy = (center_y - row_idx[:, np.newaxis]) * options.y_segment_size
    vertex_distance = np.minimum(edge_radius, np.sqrt(dx * dx + dy * dy) - distance)

    affected = vertex_distance >= 0
    multiplier = np.asarray(
        easing(np.where(affected, vertex_distance, 0.0) / edge_radius), dtype=np.float64
    )

    z = flat.reshape(rows, columns)
    top = z[:half_rows]
    new_top = np.where(affected, push_toward(top, peak, multiplier, direction), top)

    z[:half_rows] = new_top

    # Mirrored rows are read after the top half is written, so the middle
    # row of an odd row count is pushed a second time
    mirror_rows = options.height_segments - row_idx
    bottom = z[mirror_rows]
    z[mirror_rows] = np.where(
        affected, push_toward(bottom, peak, multiplier, direction), bottom
    )
    return heights
