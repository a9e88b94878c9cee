"""
Heightmap File Module

Reads and writes numeric heightmap grids (.npy, .csv, .txt) and
exports grid statistics. Image formats are not handled here.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from ..core.validation import GridShapeError, validate_output_path

SUPPORTED_FORMATS = {
    '.npy': 'NumPy array',
    '.csv': 'Comma-separated values',
    '.txt': 'Whitespace-separated values',
}


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported format: {suffix}. "
            f"Supported: {', '.join(SUPPORTED_FORMATS)}"
        )
    return suffix


def load_heightmap(filepath: Union[str, Path]) -> np.ndarray:
    """
    Load a heightmap as a 2D float64 array of shape (rows, columns).

    Raises:
        ValueError: If the format is not supported
        GridShapeError: If the file does not hold a non-empty 2D grid
    """
    path = Path(filepath)
    suffix = _check_suffix(path)

    if suffix == '.npy':
        data = np.load(path, allow_pickle=False)
    elif suffix == '.csv':
        data = np.loadtxt(path, delimiter=',', dtype=np.float64, ndmin=2)
    else:
        data = np.loadtxt(path, dtype=np.float64, ndmin=2)

    data = np.asarray(data, dtype=np.float64)
    if data.ndim != 2 or data.size == 0:
        raise GridShapeError(
            f"{path.name} must contain a non-empty 2D grid, got shape {data.shape}"
        )
    if not np.all(np.isfinite(data)):
        raise GridShapeError(f"{path.name} contains NaN or infinite elevations")

    return np.ascontiguousarray(data)


def save_heightmap(
    elevations: np.ndarray,
    filepath: Union[str, Path],
    precision: int = 6,
) -> Path:
    """
    Save a 2D heightmap; the format follows the file suffix.

    Args:
        elevations: (rows, columns) array
        filepath: Output path (.npy, .csv or .txt)
        precision: Decimal places for text formats
    """
    path = validate_output_path(filepath, "heightmap output")
    suffix = _check_suffix(path)
    data = np.asarray(elevations, dtype=np.float64)

    if suffix == '.npy':
        np.save(path, data)
    else:
        delimiter = ',' if suffix == '.csv' else ' '
        np.savetxt(path, data, delimiter=delimiter, fmt=f"%.{precision}f")

    return path


def export_statistics_json(
    statistics: Dict[str, Any],
    filepath: Union[str, Path],
    metadata: Dict[str, Any] = None,
) -> Path:
    """
    Export grid statistics (and optional metadata such as options or the
    applied operations) to a JSON file.
    """
    path = validate_output_path(filepath, "statistics JSON")

    data = {"statistics": statistics}
    if metadata:
        data["metadata"] = metadata

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    return path
