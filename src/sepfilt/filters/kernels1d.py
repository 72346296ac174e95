# src/sepfilt/filters/kernels1d.py
"""1D kernels: 3-tap average, centered difference, 5-tap average."""
from __future__ import annotations

import numpy as np

from sepfilt.core.boundary import mirror_index, mirror_indices
from sepfilt.errors import InvalidDimension

__all__ = [
    "average3",
    "difference3",
    "average5",
    "average5_recursive",
    "window_sum",
]


ArrayLike = np.ndarray


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _as_sequence(seq: ArrayLike, min_len: int, name: str) -> np.ndarray:
    s = np.asarray(seq, dtype=np.float64)
    if s.ndim != 1:
        raise InvalidDimension(f"{name} expects a 1D sequence, got shape {s.shape}")
    if s.shape[0] < min_len:
        raise InvalidDimension(
            f"{name} needs at least {min_len} samples, got {s.shape[0]}"
        )
    return s


# ---------------------------------------------------------------------------
# 3-tap kernels
# ---------------------------------------------------------------------------

def average3(seq: ArrayLike) -> np.ndarray:
    """
    Moving average of length 3 with mirror boundary conditions.

    Parameters
    ----------
    seq : ndarray, shape (n,)
        Input sequence, n >= 2.

    Returns
    -------
    out : ndarray, shape (n,)
        ``out[k] = (s[k-1] + s[k] + s[k+1]) / 3``. At the ends the missing
        neighbour is the mirrored one, so ``out[0] = (s[0] + 2 s[1]) / 3``.
    """
    s = _as_sequence(seq, 2, "average3")
    out = np.empty_like(s)
    out[0] = (s[0] + 2.0 * s[1]) / 3.0
    out[1:-1] = (s[:-2] + s[1:-1] + s[2:]) / 3.0
    out[-1] = (s[-1] + 2.0 * s[-2]) / 3.0
    return out


def difference3(seq: ArrayLike) -> np.ndarray:
    """
    Centered difference of length 3 with mirror boundary conditions.

    ``out[k] = (s[k+1] - s[k-1]) / 2``; both ends are 0 because the
    mirrored neighbours are equal.
    """
    s = _as_sequence(seq, 2, "difference3")
    out = np.zeros_like(s)
    out[1:-1] = (s[2:] - s[:-2]) / 2.0
    return out


# ---------------------------------------------------------------------------
# 5-tap average
# ---------------------------------------------------------------------------

def average5(seq: ArrayLike) -> np.ndarray:
    """
    Moving average of length 5 with mirror boundary conditions (closed form).

    Parameters
    ----------
    seq : ndarray, shape (n,)
        Input sequence, n >= 4.

    Returns
    -------
    out : ndarray, shape (n,)
        Interior samples are the plain 5-tap mean. The two samples at each
        end fold the missing taps back onto existing samples:

        - ``out[0]   = (s[0] + 2 s[1] + 2 s[2]) / 5``
        - ``out[1]   = (s[0] + 2 s[1] + s[2] + s[3]) / 5``
        - ``out[n-2] = (s[n-4] + s[n-3] + 2 s[n-2] + s[n-1]) / 5``
        - ``out[n-1] = (2 s[n-3] + 2 s[n-2] + s[n-1]) / 5``
    """
    s = _as_sequence(seq, 4, "average5")
    out = np.empty_like(s)
    out[0] = (s[0] + 2.0 * s[1] + 2.0 * s[2]) / 5.0
    out[1] = (s[0] + 2.0 * s[1] + s[2] + s[3]) / 5.0
    out[2:-2] = (s[:-4] + s[1:-3] + s[2:-2] + s[3:-1] + s[4:]) / 5.0
    out[-2] = (s[-4] + s[-3] + 2.0 * s[-2] + s[-1]) / 5.0
    out[-1] = (2.0 * s[-3] + 2.0 * s[-2] + s[-1]) / 5.0
    return out


def window_sum(seq: ArrayLike, end: int, count: int) -> float:
    """
    Sum of ``count`` samples ending at index ``end`` (inclusive), walking
    backwards. Indices outside the sequence are mirrored.
    """
    s = np.asarray(seq, dtype=np.float64)
    n = s.shape[0]
    total = 0.0
    for i in range(end, end - count, -1):
        total += s[mirror_index(i, n)]
    return total


def average5_recursive(seq: ArrayLike) -> np.ndarray:
    """
    Moving average of length 5 built from accumulated window sums.

    Same result as :func:`average5` up to floating-point rounding; every
    output sample is ``window_sum(s, k + 2, 5) / 5``.
    """
    s = _as_sequence(seq, 4, "average5_recursive")
    return _trailing_sums(s, 2, 5) / 5.0


def _trailing_sums(s: np.ndarray, lead: int, count: int) -> np.ndarray:
    """
    ``window_sum(s, k + lead, count)`` for every ``k`` at once: the window is
    walked backwards one mirrored shift of the whole sequence at a time.
    """
    n = s.shape[0]
    total = np.zeros_like(s)
    for back in range(count):
        total += s[mirror_indices(lead - back, n + lead - back, n)]
    return total
