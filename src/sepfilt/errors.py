# src/sepfilt/errors.py
"""Typed failures raised by the filter core."""
from __future__ import annotations

__all__ = [
    "FilterError",
    "InvalidDimension",
    "DimensionMismatch",
]


class FilterError(ValueError):
    """Base class for all filter usage errors."""


class InvalidDimension(FilterError):
    """A sequence or field is too small (or has the wrong rank) for a kernel."""


class DimensionMismatch(FilterError):
    """Two fields or a field and a sequence disagree in size."""
