# src/sepfilt/filters/nonseparable.py
"""Direct (non-separable) stencil filters over mirrored neighborhoods."""
from __future__ import annotations

from typing import Union

import numpy as np

from sepfilt.core.boundary import mirror_indices
from sepfilt.core.buffer import WINDOW_SIZES, SampleBuffer
from sepfilt.errors import InvalidDimension
from sepfilt.filters._validation import (
    MIN_SIZE_3,
    MIN_SIZE_5,
    checked_buffer,
    frozen_kernel,
)

__all__ = [
    "VERTICAL_EDGE_3x3",
    "HORIZONTAL_EDGE_3x3",
    "AVERAGE_5x5",
    "EDGE_NORM",
    "AVERAGE5_NORM",
    "apply_stencil",
    "detect_edge_vertical_nonseparable",
    "detect_edge_horizontal_nonseparable",
    "moving_average5_nonseparable",
]

Field = Union[SampleBuffer, np.ndarray]


# ---------------------------------------------------------------------------
# Kernels (indexed [row offset, column offset])
# ---------------------------------------------------------------------------

VERTICAL_EDGE_3x3 = frozen_kernel(
    [
        [-1.0, 0.0, 1.0],
        [-1.0, 0.0, 1.0],
        [-1.0, 0.0, 1.0],
    ]
)

HORIZONTAL_EDGE_3x3 = frozen_kernel(
    [
        [-1.0, -1.0, -1.0],
        [0.0, 0.0, 0.0],
        [1.0, 1.0, 1.0],
    ]
)

AVERAGE_5x5 = frozen_kernel(np.ones((5, 5)))

EDGE_NORM = 6.0
AVERAGE5_NORM = 25.0


# ---------------------------------------------------------------------------
# Stencil driver
# ---------------------------------------------------------------------------

def apply_stencil(
    field: Field,
    kernel: np.ndarray,
    norm: float = 1.0,
    *,
    min_size: int = MIN_SIZE_3,
    name: str = "apply_stencil",
) -> np.ndarray:
    """
    Weighted sum of each pixel's mirrored neighborhood, divided by ``norm``.

    Parameters
    ----------
    field : SampleBuffer or ndarray, shape (ny, nx)
        Input field. Not modified.
    kernel : ndarray, shape (3, 3) or (5, 5)
        Weights, ``kernel[j, i]`` applied to the sample at
        ``(x + i - r, y + j - r)``. This is a correlation, not a
        convolution: the kernel is not flipped.
    norm : float
        Normalization constant.
    min_size : int
        Smallest accepted width and height.

    Returns
    -------
    out : ndarray, shape (ny, nx), float64
    """
    k = np.asarray(kernel, dtype=np.float64)
    if k.ndim != 2 or k.shape[0] != k.shape[1] or k.shape[0] not in WINDOW_SIZES:
        raise InvalidDimension(
            f"stencil must be square with side in {WINDOW_SIZES}, got shape {k.shape}"
        )
    buf = checked_buffer(field, min_size, name)
    nx, ny = buf.width(), buf.height()
    r = k.shape[0] // 2
    data = buf.to_array()
    out = np.zeros((ny, nx), dtype=np.float64)

    # One mirrored shift of the whole field per tap.
    for j in range(k.shape[0]):
        rows = mirror_indices(j - r, ny + j - r, ny)
        for i in range(k.shape[1]):
            if k[j, i] == 0.0:
                continue
            cols = mirror_indices(i - r, nx + i - r, nx)
            out += k[j, i] * data[np.ix_(rows, cols)]

    return out / norm


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def detect_edge_vertical_nonseparable(field: Field) -> np.ndarray:
    """
    Vertical edges, right column minus left column of the 3x3 window, / 6.

    Kernel::

        | -1  0  1 |
        | -1  0  1 |
        | -1  0  1 |
    """
    return apply_stencil(
        field,
        VERTICAL_EDGE_3x3,
        EDGE_NORM,
        min_size=MIN_SIZE_3,
        name="detect_edge_vertical_nonseparable",
    )


def detect_edge_horizontal_nonseparable(field: Field) -> np.ndarray:
    """Horizontal edges, row below minus row above of the 3x3 window, / 6."""
    return apply_stencil(
        field,
        HORIZONTAL_EDGE_3x3,
        EDGE_NORM,
        min_size=MIN_SIZE_3,
        name="detect_edge_horizontal_nonseparable",
    )


def moving_average5_nonseparable(field: Field) -> np.ndarray:
    """Mean of the 25 samples of each pixel's 5x5 window."""
    return apply_stencil(
        field,
        AVERAGE_5x5,
        AVERAGE5_NORM,
        min_size=MIN_SIZE_5,
        name="moving_average5_nonseparable",
    )
