"""
Input Validation Module

Provides validation functions and custom exceptions for the terrain_filters package.
All validation functions provide clear, actionable error messages.
"""

from __future__ import annotations

import os
import warnings
from numbers import Integral, Real
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

if TYPE_CHECKING:
    from .grid import TerrainOptions


class ValidationError(ValueError):
    """Base exception for validation errors with user-friendly messages."""
    pass


class GridShapeError(ValidationError):
    """Elevation array does not match the configured grid."""
    pass


class DegenerateRangeError(ValidationError):
    """Grid is perfectly flat, so its elevation range cannot be rescaled."""
    pass


class InvalidParameterError(ValidationError):
    """Filter parameter is outside its valid domain."""
    pass


class MissingConfigurationError(ValidationError):
    """A required option is unset."""
    pass


class FilePermissionError(ValidationError):
    """Cannot write to specified path."""
    pass


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_segments(segments: int, context: str = "segments") -> int:
    """
    Validate a segment count is a non-negative integer.

    Zero segments describes a single vertex along that axis.

    Raises:
        ValidationError: If segments is None, not an integer, or negative
    """
    if segments is None:
        raise ValidationError(f"{context} cannot be None")

    if not isinstance(segments, Integral) or isinstance(segments, bool):
        raise ValidationError(
            f"{context} must be an integer, got {type(segments).__name__}"
        )

    if segments < 0:
        raise ValidationError(
            f"{context} cannot be negative, got {segments}. "
            "The grid has segments + 1 vertices along each axis."
        )

    return int(segments)


def validate_extent(extent: float, context: str = "extent") -> float:
    """
    Validate a physical extent is a positive number.

    Raises:
        ValidationError: If extent is None, not a number, or <= 0
    """
    if extent is None:
        raise ValidationError(f"{context} cannot be None")

    if not _is_number(extent):
        raise ValidationError(
            f"{context} must be a number, got {type(extent).__name__}"
        )

    if not np.isfinite(extent) or extent <= 0:
        raise ValidationError(f"{context} must be a positive finite number, got {extent}")

    return float(extent)


def validate_optional_height(value: Optional[float], context: str) -> Optional[float]:
    """Validate an elevation bound that may be left unset (None)."""
    if value is None:
        return None

    if not _is_number(value):
        raise ValidationError(
            f"{context} must be a number or None, got {type(value).__name__}"
        )

    if not np.isfinite(value):
        raise ValidationError(f"{context} must be finite, got {value}")

    return float(value)


def require_height(options: 'TerrainOptions', name: str, context: str) -> float:
    """
    Return a numeric elevation bound from options.

    Raises:
        MissingConfigurationError: If the bound is unset
    """
    value = getattr(options, name)
    if value is None:
        raise MissingConfigurationError(
            f"{context} requires options.{name} to be set. "
            "Pass a numeric bound in TerrainOptions."
        )
    return float(value)


def validate_levels(levels: int, cell_count: int) -> int:
    """
    Validate the number of quantization steps.

    Returns:
        The validated level count, capped at the number of cells

    Raises:
        InvalidParameterError: If levels is not a positive integer
    """
    if not isinstance(levels, Integral) or isinstance(levels, bool):
        raise InvalidParameterError(
            f"levels must be an integer, got {type(levels).__name__}"
        )

    if levels <= 0:
        raise InvalidParameterError(
            f"levels must be positive, got {levels}. "
            "Omit it to use the default of (cells / 2) ** 0.25."
        )

    if levels > cell_count:
        warnings.warn(
            f"levels={levels} exceeds the number of cells ({cell_count}); "
            f"using {cell_count} levels instead.",
            UserWarning,
            stacklevel=3
        )
        return int(cell_count)

    return int(levels)


def validate_distance(distance: float, context: str = "distance") -> float:
    """
    Validate an edge-shaping distance.

    Negative distances are allowed: they widen the radial band and disable
    the linear one.

    Raises:
        InvalidParameterError: If distance is not a finite number
    """
    if not _is_number(distance):
        raise InvalidParameterError(
            f"{context} must be a number, got {type(distance).__name__}"
        )

    if not np.isfinite(distance):
        raise InvalidParameterError(
            f"{context} must be a finite number, got {distance}"
        )

    return float(distance)


def validate_heights(heights: np.ndarray, options: Optional['TerrainOptions'] = None) -> np.ndarray:
    """
    Validate an elevation array and return a flat, writable view of it.

    Args:
        heights: Flat or (rows, columns) float array, modified in place by filters
        options: Grid configuration; when given, the cell count must match

    Returns:
        1-D view sharing memory with ``heights``

    Raises:
        GridShapeError: If the array cannot be filtered in place
    """
    if not isinstance(heights, np.ndarray):
        raise GridShapeError(
            f"heights must be a numpy array, got {type(heights).__name__}. "
            "Use np.asarray(values, dtype=float) first."
        )

    if not np.issubdtype(heights.dtype, np.floating):
        raise GridShapeError(
            f"heights must have a floating dtype, got {heights.dtype}. "
            "Integer grids cannot hold filtered elevations."
        )

    if not heights.flags.c_contiguous or not heights.flags.writeable:
        raise GridShapeError("heights must be a writable, C-contiguous array")

    if heights.size == 0:
        raise GridShapeError("heights must contain at least one cell")

    if options is not None and heights.size != options.size:
        raise GridShapeError(
            f"heights has {heights.size} cells but the options describe "
            f"{options.columns} x {options.rows} = {options.size} cells."
        )

    if not np.all(np.isfinite(heights)):
        raise GridShapeError("heights contains NaN or infinite values")

    return heights.reshape(-1)


def validate_output_path(filepath: Union[str, Path], context: str = "output file") -> Path:
    """
    Validate output path is writable before attempting to write.

    Args:
        filepath: The path to validate
        context: Description of what will be written (used in error messages)

    Returns:
        The validated path as a Path object

    Raises:
        FilePermissionError: If directory doesn't exist or isn't writable
    """
    path = Path(filepath)
    parent = path.parent

    # Handle empty parent (current directory)
    if str(parent) == '.':
        parent = Path.cwd()

    if not parent.exists():
        raise FilePermissionError(
            f"Cannot write {context}: directory '{parent}' does not exist. "
            "Create the directory first or specify a different path."
        )

    if not os.access(parent, os.W_OK):
        raise FilePermissionError(
            f"Cannot write {context}: no write permission for directory '{parent}'."
        )

    if path.exists() and not os.access(path, os.W_OK):
        raise FilePermissionError(
            f"Cannot overwrite {context}: file '{path}' exists but is not writable."
        )

    return path
