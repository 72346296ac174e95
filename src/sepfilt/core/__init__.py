"""
sepfilt.core
============

Low-level primitives shared by every filter.

Submodules
----------
- :mod:`sepfilt.core.boundary` : Mirror boundary extension of 1D indices.
- :mod:`sepfilt.core.buffer`   : 2D sample buffer (neighborhood, row, column access).
"""

from .boundary import (
    mirror_index,
    mirror_indices,
)
from .buffer import (
    SampleBuffer,
    ImageBuffer,
    as_buffer,
    WINDOW_SIZES,
)

__all__ = [
    # boundary
    "mirror_index",
    "mirror_indices",
    # buffer
    "SampleBuffer",
    "ImageBuffer",
    "as_buffer",
    "WINDOW_SIZES",
]
