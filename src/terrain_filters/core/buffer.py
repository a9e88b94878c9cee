"""
Scratch Buffer

Double-buffer storage for filters that must read only original
elevations while computing new ones: results are written to the scratch
array during a full pass and committed to the grid afterwards.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


class ScratchBuffer:
    """
    Reusable float64 work array.

    ``acquire`` hands out the same allocation for as long as the requested
    length does not change, so repeated filter calls on one grid do not
    reallocate.
    """

    def __init__(self, size: int = 0):
        self._data: Optional[np.ndarray] = np.empty(size, dtype=np.float64) if size else None

    @property
    def size(self) -> int:
        return 0 if self._data is None else self._data.size

    def acquire(self, size: int) -> np.ndarray:
        """Return a work array of ``size`` cells (contents undefined)."""
        if self._data is None or self._data.size != size:
            self._data = np.empty(size, dtype=np.float64)
        return self._data

    def load(self, source: np.ndarray) -> np.ndarray:
        """Acquire a work array holding a copy of ``source``."""
        data = self.acquire(source.size)
        np.copyto(data, source.reshape(-1))
        return data

    def commit(self, target: np.ndarray) -> np.ndarray:
        """Copy the work array into ``target`` (flat view of the grid)."""
        if self._data is None or self._data.size != target.size:
            raise ValueError("scratch buffer does not match the target grid")
        np.copyto(target, self._data)
        return target
