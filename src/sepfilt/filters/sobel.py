# src/sepfilt/filters/sobel.py
"""Sobel gradient magnitude from two direct 3x3 stencils."""
from __future__ import annotations

from typing import Tuple, Union

import numpy as np

from sepfilt.core.buffer import SampleBuffer, as_buffer
from sepfilt.filters._validation import MIN_SIZE_3, frozen_kernel
from sepfilt.filters.nonseparable import EDGE_NORM, apply_stencil

__all__ = [
    "SOBEL_VERTICAL_3x3",
    "SOBEL_HORIZONTAL_3x3",
    "sobel_components",
    "gradient_magnitude",
    "sobel",
]

Field = Union[SampleBuffer, np.ndarray]

SOBEL_VERTICAL_3x3 = frozen_kernel(
    [
        [-1.0, 0.0, 1.0],
        [-2.0, 0.0, 2.0],
        [-1.0, 0.0, 1.0],
    ]
)

SOBEL_HORIZONTAL_3x3 = frozen_kernel(SOBEL_VERTICAL_3x3.T)


def sobel_components(field: Field) -> Tuple[np.ndarray, np.ndarray]:
    """
    Directional Sobel responses, each normalized by 6.

    Returns
    -------
    vertical, horizontal : ndarray, shape (ny, nx)
        Response to vertical edges (x-gradient) and to horizontal edges
        (y-gradient).
    """
    vertical = apply_stencil(
        field, SOBEL_VERTICAL_3x3, EDGE_NORM, min_size=MIN_SIZE_3, name="sobel"
    )
    horizontal = apply_stencil(
        field, SOBEL_HORIZONTAL_3x3, EDGE_NORM, min_size=MIN_SIZE_3, name="sobel"
    )
    return vertical, horizontal


def gradient_magnitude(vertical: Field, horizontal: Field) -> np.ndarray:
    """
    ``sqrt(vertical**2 + horizontal**2)`` element-wise.

    Raises
    ------
    DimensionMismatch
        If the two fields differ in shape.
    """
    v = as_buffer(vertical).power(2.0)
    h = as_buffer(horizontal).power(2.0)
    return v.add(h).sqrt().to_array()


def sobel(field: Field) -> np.ndarray:
    """
    Sobel gradient magnitude, computed with the direct 3x3 stencils.

    Output is non-negative and has the input's shape.
    """
    vertical, horizontal = sobel_components(field)
    return gradient_magnitude(vertical, horizontal)
