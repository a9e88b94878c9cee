"""
Height Grid Module

Grid addressing, terrain options and the HeightGrid container that
chains the post-processing filters over a heightmap.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from .buffer import ScratchBuffer
from .easing import EASINGS, Easing, EasingLike, Linear, resolve_easing
from .validation import (
    GridShapeError,
    ValidationError,
    validate_extent,
    validate_optional_height,
    validate_segments,
)


def grid_index(col: int, row: int, columns: int) -> int:
    """Linear offset of (col, row) in a row-major grid."""
    return row * columns + col


def grid_coords(index: int, columns: int) -> Tuple[int, int]:
    """Inverse of grid_index: (col, row) of a linear offset."""
    row, col = divmod(index, columns)
    return (col, row)


# Keys accepted in JSON configs alongside the snake_case field names
_CAMEL_KEYS = {
    "widthSegments": "width_segments",
    "heightSegments": "height_segments",
    "xSegments": "width_segments",
    "ySegments": "height_segments",
    "maxHeight": "max_height",
    "minHeight": "min_height",
}


@dataclass(frozen=True)
class TerrainOptions:
    """
    Grid dimensions and elevation bounds shared by every filter.

    Attributes:
        width: Physical extent along the x axis
        height: Physical extent along the y axis
        width_segments: Cells along x (columns = width_segments + 1)
        height_segments: Cells along y (rows = height_segments + 1)
        max_height: Upper elevation bound, None to use the data maximum
        min_height: Lower elevation bound, None to use the data minimum
        easing: Curve used by the range normalizer
        stretch: Force the full [min_height, max_height] range to be used
    """
    width: float = 1024.0
    height: float = 1024.0
    width_segments: int = 63
    height_segments: int = 63
    max_height: Optional[float] = 100.0
    min_height: Optional[float] = -100.0
    easing: Easing = field(default_factory=Linear)
    stretch: bool = True

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "width", validate_extent(self.width, "width"))
        object.__setattr__(self, "height", validate_extent(self.height, "height"))
        object.__setattr__(
            self, "width_segments", validate_segments(self.width_segments, "width_segments")
        )
        object.__setattr__(
            self, "height_segments", validate_segments(self.height_segments, "height_segments")
        )
        object.__setattr__(
            self, "max_height", validate_optional_height(self.max_height, "max_height")
        )
        object.__setattr__(
            self, "min_height", validate_optional_height(self.min_height, "min_height")
        )
        object.__setattr__(self, "easing", resolve_easing(self.easing))
        object.__setattr__(self, "stretch", bool(self.stretch))

    @property
    def columns(self) -> int:
        return self.width_segments + 1

    @property
    def rows(self) -> int:
        return self.height_segments + 1

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions (rows, columns)."""
        return (self.rows, self.columns)

    @property
    def size(self) -> int:
        return self.columns * self.rows

    @property
    def x_segment_size(self) -> float:
        # A single vertex spans the whole extent
        return self.width / max(self.width_segments, 1)

    @property
    def y_segment_size(self) -> float:
        return self.height / max(self.height_segments, 1)

    def index(self, col: int, row: int) -> int:
        return grid_index(col, row, self.columns)

    def coords(self, index: int) -> Tuple[int, int]:
        return grid_coords(index, self.columns)

    def resolved(self, **changes) -> TerrainOptions:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Custom easings have no registered name and are written as None,
        which loads back as Linear.
        """
        easing = self.easing.name if EASINGS.get(self.easing.name) == self.easing else None
        return {
            "width": self.width,
            "height": self.height,
            "width_segments": self.width_segments,
            "height_segments": self.height_segments,
            "max_height": self.max_height,
            "min_height": self.min_height,
            "easing": easing,
            "stretch": self.stretch,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TerrainOptions:
        """
        Build options from a mapping.

        Accepts the field names as well as camelCase keys such as
        ``widthSegments`` and ``maxHeight``.

        Raises:
            ValidationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                raise ValidationError(
                    f"Unknown terrain option '{key}'. "
                    f"Valid options: {', '.join(sorted(known))}"
                )
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def for_shape(cls, rows: int, columns: int, **kwargs) -> TerrainOptions:
        """Options whose segment counts match an array of shape (rows, columns)."""
        if rows < 1 or columns < 1:
            raise GridShapeError(
                f"A heightmap needs at least one vertex, got {rows} x {columns}"
            )
        return cls(width_segments=columns - 1, height_segments=rows - 1, **kwargs)


def load_options(filepath: Union[str, Path]) -> TerrainOptions:
    """Read TerrainOptions from a JSON file."""
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValidationError(f"Options file '{filepath}' must contain a JSON object")
    return TerrainOptions.from_dict(data)


@dataclass
class HeightGrid:
    """
    A heightmap together with the options that describe it.

    Filter methods modify ``elevations`` in place and return ``self`` so
    calls can be chained::

        grid.smooth().edges(direction=False, distance=100).step(8)

    Attributes:
        elevations: 2D float array of elevations [rows, columns]
        options: Grid dimensions and elevation bounds
    """
    elevations: np.ndarray
    options: TerrainOptions = field(default_factory=TerrainOptions)

    _scratch: ScratchBuffer = field(
        default_factory=ScratchBuffer, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        elevations = np.ascontiguousarray(self.elevations, dtype=np.float64)
        if elevations.ndim == 1:
            if elevations.size != self.options.size:
                raise GridShapeError(
                    f"Flat elevations of length {elevations.size} do not match "
                    f"{self.options.columns} x {self.options.rows} grid"
                )
            elevations = elevations.reshape(self.options.shape)
        if elevations.shape != self.options.shape:
            raise GridShapeError(
                f"elevations shape {elevations.shape} does not match options "
                f"shape {self.options.shape} (rows, columns)"
            )
        self.elevations = elevations

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions (rows, columns)."""
        return self.elevations.shape

    @property
    def rows(self) -> int:
        return self.elevations.shape[0]

    @property
    def columns(self) -> int:
        return self.elevations.shape[1]

    @property
    def flat(self) -> np.ndarray:
        """Row-major 1-D view of the elevations."""
        return self.elevations.reshape(-1)

    def __len__(self) -> int:
        return self.elevations.size

    def index(self, col: int, row: int) -> int:
        return grid_index(col, row, self.columns)

    def coords(self, index: int) -> Tuple[int, int]:
        return grid_coords(index, self.columns)

    def get(self, col: int, row: int) -> float:
        return float(self.elevations[row, col])

    def copy(self) -> HeightGrid:
        return HeightGrid(elevations=self.elevations.copy(), options=self.options)

    def statistics(self) -> dict:
        """Calculate basic statistics for the heightmap."""
        z = self.elevations
        return {
            "rows": int(self.rows),
            "columns": int(self.columns),
            "cells": int(z.size),
            "min_elevation": float(np.min(z)),
            "max_elevation": float(np.max(z)),
            "mean_elevation": float(np.mean(z)),
            "std_elevation": float(np.std(z)),
            "elevation_range": float(np.max(z) - np.min(z)),
            "distinct_elevations": int(np.unique(z).size),
        }

    # Filters

    def normalize(self, **changes) -> HeightGrid:
        """Rescale into the option bounds; keyword args override options."""
        from ..filters.normalize import normalize

        options = self.options.resolved(**changes) if changes else self.options
        normalize(self.elevations, options)
        return self

    def edges(self, direction: bool = True, distance: float = 0.0,
              easing: EasingLike = None, edges=None) -> HeightGrid:
        from ..filters.edges import linear_edges

        linear_edges(self.elevations, self.options, direction, distance,
                     easing=easing, edges=edges, buffer=self._scratch)
        return self

    def radial_edges(self, direction: bool = True, distance: float = 0.0,
                     easing: EasingLike = None) -> HeightGrid:
        from ..filters.edges import radial_edges

        radial_edges(self.elevations, self.options, direction, distance, easing=easing)
        return self

    def smooth(self, weight: float = 0.0) -> HeightGrid:
        from ..filters.smoothing import smooth_mean

        smooth_mean(self.elevations, self.options, weight, buffer=self._scratch)
        return self

    def smooth_median(self) -> HeightGrid:
        from ..filters.smoothing import smooth_median

        smooth_median(self.elevations, self.options, buffer=self._scratch)
        return self

    def smooth_conservative(self, multiplier: Optional[float] = None) -> HeightGrid:
        from ..filters.smoothing import smooth_conservative

        smooth_conservative(self.elevations, self.options, multiplier, buffer=self._scratch)
        return self

    def step(self, levels: Optional[int] = None, merge_remainder: bool = False) -> HeightGrid:
        from ..filters.step import step

        step(self.elevations, levels, merge_remainder=merge_remainder)
        return self

    def turbulence(self) -> HeightGrid:
        from ..filters.turbulence import turbulence

        turbulence(self.elevations, self.options)
        return self

    @classmethod
    def from_array(cls, elevations: np.ndarray, **option_kwargs) -> HeightGrid:
        """Wrap a (rows, columns) array, deriving segment counts from its shape."""
        elevations = np.asarray(elevations, dtype=np.float64)
        if elevations.ndim != 2:
            raise GridShapeError(
                f"Expected a 2D (rows, columns) array, got {elevations.ndim} dimensions"
            )
        options = TerrainOptions.for_shape(*elevations.shape, **option_kwargs)
        return cls(elevations=elevations, options=options)
