# src/sepfilt/diagnostics.py
"""Separable vs. non-separable equivalence checks."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from sepfilt.filters import (
    detect_edge_horizontal_nonseparable,
    detect_edge_horizontal_separable,
    detect_edge_vertical_nonseparable,
    detect_edge_vertical_separable,
    moving_average5_nonseparable,
    moving_average5_recursive,
    moving_average5_separable,
)

__all__ = [
    "EQUIVALENCE_TOL",
    "EQUIVALENT_PAIRS",
    "equivalence_report",
    "random_field",
]

EQUIVALENCE_TOL = 1e-9

EQUIVALENT_PAIRS = {
    "edge-vertical": (detect_edge_vertical_nonseparable, detect_edge_vertical_separable),
    "edge-horizontal": (detect_edge_horizontal_nonseparable, detect_edge_horizontal_separable),
    "average5": (moving_average5_nonseparable, moving_average5_separable),
    "average5-recursive": (moving_average5_separable, moving_average5_recursive),
}


def random_field(height: int, width: int, seed: Optional[int] = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.random((height, width), dtype=np.float64)


def equivalence_report(field: np.ndarray) -> Dict[str, Tuple[float, bool]]:
    """
    Max absolute difference between each pair of equivalent filters.

    Returns
    -------
    report : dict
        ``name -> (max_abs_error, within_tolerance)``
    """
    report: Dict[str, Tuple[float, bool]] = {}
    for name, (reference, candidate) in EQUIVALENT_PAIRS.items():
        err = float(np.max(np.abs(reference(field) - candidate(field))))
        report[name] = (err, err <= EQUIVALENCE_TOL)
    return report
