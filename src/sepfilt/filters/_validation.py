# src/sepfilt/filters/_validation.py
"""Shared input checks for the 2D filters."""
from __future__ import annotations

from typing import Union

import numpy as np

from sepfilt.core.buffer import ImageBuffer, SampleBuffer, as_buffer
from sepfilt.errors import InvalidDimension

# Smallest axis length each kernel family accepts.
MIN_SIZE_3 = 2
MIN_SIZE_5 = 4


def checked_buffer(
    field: Union[SampleBuffer, np.ndarray],
    min_size: int,
    name: str,
) -> ImageBuffer:
    """Wrap ``field`` and fail early when either axis is below ``min_size``."""
    buf = as_buffer(field)
    nx, ny = buf.width(), buf.height()
    if nx < min_size or ny < min_size:
        raise InvalidDimension(
            f"{name} needs a field of at least {min_size}x{min_size}, "
            f"got nx={nx}, ny={ny}"
        )
    return buf


def frozen_kernel(rows) -> np.ndarray:
    """Read-only float64 copy of a stencil."""
    k = np.array(rows, dtype=np.float64)
    k.setflags(write=False)
    return k
