# src/sepfilt/filters/separable.py
"""Separable 2D filters: a 1D pass along every row, then along every column."""
from __future__ import annotations

from typing import Callable, Union

import numpy as np

from sepfilt.core.buffer import ImageBuffer, SampleBuffer
from sepfilt.filters._validation import MIN_SIZE_3, MIN_SIZE_5, checked_buffer
from sepfilt.filters.kernels1d import (
    average3,
    average5,
    average5_recursive,
    difference3,
)

__all__ = [
    "separable_filter",
    "detect_edge_vertical_separable",
    "detect_edge_horizontal_separable",
    "moving_average5_separable",
    "moving_average5_recursive",
]

Field = Union[SampleBuffer, np.ndarray]
Kernel1D = Callable[[np.ndarray], np.ndarray]


def separable_filter(
    field: Field,
    row_kernel: Kernel1D,
    column_kernel: Kernel1D,
    *,
    min_size: int = MIN_SIZE_3,
    name: str = "separable_filter",
) -> np.ndarray:
    """
    Apply ``row_kernel`` to every row, then ``column_kernel`` to every column
    of the row-filtered result.

    Parameters
    ----------
    field : SampleBuffer or ndarray, shape (ny, nx)
        Input field. Not modified.
    row_kernel, column_kernel : callable
        1D kernels mapping a sequence to a same-length sequence.
    min_size : int
        Smallest accepted width and height.
    name : str
        Used in error messages.

    Returns
    -------
    out : ndarray, shape (ny, nx), float64
    """
    buf = checked_buffer(field, min_size, name)
    nx, ny = buf.width(), buf.height()
    out = ImageBuffer.zeros(nx, ny)

    for y in range(ny):
        out.put_row(y, row_kernel(buf.get_row(y)))

    # Column pass reads the finished row pass from `out`.
    for x in range(nx):
        out.put_column(x, column_kernel(out.get_column(x)))

    return out.to_array()


def detect_edge_vertical_separable(field: Field) -> np.ndarray:
    """
    Vertical edges: centered difference along rows, 3-tap average along columns.

    Equivalent to the 3x3 kernel ``[[-1, 0, 1]] * 3 / 6``.
    """
    return separable_filter(
        field,
        difference3,
        average3,
        min_size=MIN_SIZE_3,
        name="detect_edge_vertical_separable",
    )


def detect_edge_horizontal_separable(field: Field) -> np.ndarray:
    """Horizontal edges: 3-tap average along rows, centered difference along columns."""
    return separable_filter(
        field,
        average3,
        difference3,
        min_size=MIN_SIZE_3,
        name="detect_edge_horizontal_separable",
    )


def moving_average5_separable(field: Field, recursive: bool = False) -> np.ndarray:
    """
    5x5 moving average as two 5-tap passes.

    Parameters
    ----------
    field : SampleBuffer or ndarray
        Input field, at least 4x4.
    recursive : bool
        If True, use the accumulated-sum kernel :func:`average5_recursive`
        instead of the closed form.
    """
    kernel = average5_recursive if recursive else average5
    return separable_filter(
        field,
        kernel,
        kernel,
        min_size=MIN_SIZE_5,
        name="moving_average5_separable",
    )


def moving_average5_recursive(field: Field) -> np.ndarray:
    """5x5 moving average from two accumulated-sum 5-tap passes."""
    return moving_average5_separable(field, recursive=True)
