"""
sepfilt
Separable and non-separable 2D image filters.
"""

# Robust version detection that works even when not installed
try:
    from importlib import metadata as _metadata
except Exception:
    _metadata = None  # type: ignore

try:
    __version__ = _metadata.version("sepfilt") if _metadata else "0.0.0.dev0"
except Exception:
    # Not installed (dev mode) or no metadata available
    __version__ = "0.0.0.dev0"

from . import core, filters, io  # noqa: E402
from .errors import FilterError, InvalidDimension, DimensionMismatch  # noqa: E402

__all__ = [
    "core",
    "filters",
    "io",
    "FilterError",
    "InvalidDimension",
    "DimensionMismatch",
    "__version__",
]
