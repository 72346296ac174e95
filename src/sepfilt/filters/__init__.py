"""
sepfilt.filters
===============

Edge detectors, moving averages and the Sobel operator.

Submodules
----------
- :mod:`sepfilt.filters.kernels1d`    : 1D kernels (average3, difference3, average5).
- :mod:`sepfilt.filters.separable`    : Row pass + column pass 2D filters.
- :mod:`sepfilt.filters.nonseparable` : Direct 3x3 / 5x5 stencil filters.
- :mod:`sepfilt.filters.sobel`        : Sobel gradient magnitude.
"""

from typing import Callable, Dict

import numpy as np

from .kernels1d import (
    average3,
    difference3,
    average5,
    average5_recursive,
    window_sum,
)
from .separable import (
    separable_filter,
    detect_edge_vertical_separable,
    detect_edge_horizontal_separable,
    moving_average5_separable,
    moving_average5_recursive,
)
from .nonseparable import (
    apply_stencil,
    detect_edge_vertical_nonseparable,
    detect_edge_horizontal_nonseparable,
    moving_average5_nonseparable,
)
from .sobel import (
    sobel,
    sobel_components,
    gradient_magnitude,
)

FILTERS: Dict[str, Callable[..., np.ndarray]] = {
    "edge-vertical": detect_edge_vertical_nonseparable,
    "edge-vertical-separable": detect_edge_vertical_separable,
    "edge-horizontal": detect_edge_horizontal_nonseparable,
    "edge-horizontal-separable": detect_edge_horizontal_separable,
    "average5": moving_average5_nonseparable,
    "average5-separable": moving_average5_separable,
    "average5-recursive": moving_average5_recursive,
    "sobel": sobel,
}


def get_filter(name: str) -> Callable[..., np.ndarray]:
    """Look up a registered filter by name."""
    key = name.strip().lower()
    if key not in FILTERS:
        raise ValueError(f"Unknown filter {name!r}; choose from {sorted(FILTERS)}")
    return FILTERS[key]


__all__ = [
    # 1D kernels
    "average3",
    "difference3",
    "average5",
    "average5_recursive",
    "window_sum",
    # separable
    "separable_filter",
    "detect_edge_vertical_separable",
    "detect_edge_horizontal_separable",
    "moving_average5_separable",
    "moving_average5_recursive",
    # non-separable
    "apply_stencil",
    "detect_edge_vertical_nonseparable",
    "detect_edge_horizontal_nonseparable",
    "moving_average5_nonseparable",
    # sobel
    "sobel",
    "sobel_components",
    "gradient_magnitude",
    # registry
    "FILTERS",
    "get_filter",
]
