"""
sepfilt.io
==========

Image IO helpers for hosting the filters.

This module exposes:
- Image read/write with deterministic uint8 conversion
- Luminance reduction of color images to a scalar field
- Display mapping of signed filter outputs

Submodules:
- sepfilt.io.image
"""

from .image import (
    read_image,
    read_field,
    write_image,
    write_field,
    as_float32,
    as_uint8,
    rgb_to_luma,
    to_display,
)

__all__ = [
    "read_image",
    "read_field",
    "write_image",
    "write_field",
    "as_float32",
    "as_uint8",
    "rgb_to_luma",
    "to_display",
]
