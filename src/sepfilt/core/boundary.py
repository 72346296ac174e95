# src/sepfilt/core/boundary.py
"""Mirror boundary extension for 1D indices."""
from __future__ import annotations

import numpy as np

from sepfilt.errors import InvalidDimension

__all__ = [
    "mirror_index",
    "mirror_indices",
]


def mirror_index(i: int, n: int) -> int:
    """
    Map an arbitrary index onto ``[0, n)`` by mirror reflection.

    The reflection axis is the edge sample itself, which is not repeated:
    ``-1 -> 1``, ``-2 -> 2``, ``n -> n-2``, ``n+1 -> n-3``. Indices further out
    keep folding with period ``2n - 2``, so any radius resolves.

    Parameters
    ----------
    i : int
        Requested index, possibly out of range.
    n : int
        Length of the axis. Must be >= 1.

    Returns
    -------
    j : int
        In-range index.
    """
    if n < 1:
        raise InvalidDimension(f"axis length must be >= 1, got {n}")
    if n == 1:
        return 0
    period = 2 * n - 2
    j = abs(int(i)) % period
    if j >= n:
        j = period - j
    return j


def mirror_indices(start: int, stop: int, n: int) -> np.ndarray:
    """
    Vectorized :func:`mirror_index` for the half-open range ``[start, stop)``.

    Returns
    -------
    idx : ndarray of int, shape (stop - start,)
    """
    if n < 1:
        raise InvalidDimension(f"axis length must be >= 1, got {n}")
    i = np.arange(start, stop, dtype=np.int64)
    if n == 1:
        return np.zeros_like(i)
    period = 2 * n - 2
    j = np.abs(i) % period
    return np.where(j >= n, period - j, j)
