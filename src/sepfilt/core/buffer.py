# src/sepfilt/core/buffer.py
"""2D sample buffer with mirror-extended neighborhood, row and column access."""
from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

import numpy as np

from sepfilt.core.boundary import mirror_index, mirror_indices
from sepfilt.errors import DimensionMismatch, InvalidDimension

ArrayLike = np.ndarray

__all__ = [
    "SampleBuffer",
    "ImageBuffer",
    "as_buffer",
    "WINDOW_SIZES",
]

WINDOW_SIZES = (3, 5)


@runtime_checkable
class SampleBuffer(Protocol):
    """Contract the filters consume from their host."""

    def width(self) -> int: ...

    def height(self) -> int: ...

    def get_neighborhood(self, x: int, y: int, size: int) -> np.ndarray: ...

    def get_row(self, y: int) -> np.ndarray: ...

    def put_row(self, y: int, seq: ArrayLike) -> None: ...

    def get_column(self, x: int) -> np.ndarray: ...

    def put_column(self, x: int, seq: ArrayLike) -> None: ...

    def get_pixel(self, x: int, y: int) -> float: ...

    def put_pixel(self, x: int, y: int, value: float) -> None: ...

    def power(self, exponent: float) -> "SampleBuffer": ...

    def add(self, other: "SampleBuffer") -> "SampleBuffer": ...

    def sqrt(self) -> "SampleBuffer": ...

    def duplicate(self) -> "SampleBuffer": ...

    def to_array(self) -> np.ndarray: ...


class ImageBuffer:
    """
    Scalar 2D field backed by a float64 array of shape (ny, nx).

    Rows are indexed by ``y`` (first axis), columns by ``x`` (second axis).
    Element-wise operations return new buffers; only the ``put_*`` methods
    write in place.
    """

    __slots__ = ("_data",)

    def __init__(self, data: ArrayLike):
        try:
            arr = np.array(data, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidDimension(f"Cannot read a 2D field from {type(data).__name__}") from exc
        if arr.ndim != 2:
            raise InvalidDimension(f"Expected 2D field, got shape {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise InvalidDimension(f"Field must be at least 1x1, got shape {arr.shape}")
        self._data = arr

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zeros(cls, nx: int, ny: int) -> "ImageBuffer":
        return cls(np.zeros((ny, nx), dtype=np.float64))

    @classmethod
    def from_array(cls, arr: ArrayLike) -> "ImageBuffer":
        return cls(arr)

    def to_array(self) -> np.ndarray:
        """Copy of the samples as a (ny, nx) float64 array."""
        return self._data.copy()

    @property
    def shape(self) -> tuple:
        return self._data.shape

    def width(self) -> int:
        return int(self._data.shape[1])

    def height(self) -> int:
        return int(self._data.shape[0])

    # ------------------------------------------------------------------
    # Pixel / window access
    # ------------------------------------------------------------------

    def get_pixel(self, x: int, y: int) -> float:
        """Sample at (x, y); out-of-range coordinates are mirrored."""
        return float(
            self._data[mirror_index(y, self.height()), mirror_index(x, self.width())]
        )

    def put_pixel(self, x: int, y: int, value: float) -> None:
        self._data[y, x] = value

    def get_neighborhood(self, x: int, y: int, size: int) -> np.ndarray:
        """
        Square window centered at (x, y).

        Parameters
        ----------
        x, y : int
            Center column and row.
        size : {3, 5}
            Window side.

        Returns
        -------
        window : ndarray, shape (size, size)
            ``window[j, i]`` is the sample at ``(x + i - r, y + j - r)`` with
            ``r = size // 2``, out-of-range positions mirrored.
        """
        if size not in WINDOW_SIZES:
            raise InvalidDimension(f"window size must be one of {WINDOW_SIZES}, got {size}")
        r = size // 2
        rows = mirror_indices(y - r, y + r + 1, self.height())
        cols = mirror_indices(x - r, x + r + 1, self.width())
        return self._data[np.ix_(rows, cols)].copy()

    # ------------------------------------------------------------------
    # Row / column access
    # ------------------------------------------------------------------

    def get_row(self, y: int) -> np.ndarray:
        return self._data[y, :].copy()

    def put_row(self, y: int, seq: ArrayLike) -> None:
        seq = np.asarray(seq, dtype=np.float64)
        if seq.shape != (self.width(),):
            raise DimensionMismatch(
                f"row length {seq.shape} does not match width {self.width()}"
            )
        self._data[y, :] = seq

    def get_column(self, x: int) -> np.ndarray:
        return self._data[:, x].copy()

    def put_column(self, x: int, seq: ArrayLike) -> None:
        seq = np.asarray(seq, dtype=np.float64)
        if seq.shape != (self.height(),):
            raise DimensionMismatch(
                f"column length {seq.shape} does not match height {self.height()}"
            )
        self._data[:, x] = seq

    # ------------------------------------------------------------------
    # Element-wise arithmetic
    # ------------------------------------------------------------------

    def power(self, exponent: float) -> "ImageBuffer":
        return ImageBuffer(np.power(self._data, exponent))

    def add(self, other: "ImageBuffer") -> "ImageBuffer":
        if self.shape != other.shape:
            raise DimensionMismatch(
                f"cannot add fields of shape {self.shape} and {other.shape}"
            )
        return ImageBuffer(self._data + other._data)

    def sqrt(self) -> "ImageBuffer":
        return ImageBuffer(np.sqrt(self._data))

    def duplicate(self) -> "ImageBuffer":
        return ImageBuffer(self._data)

    def __repr__(self) -> str:
        return f"ImageBuffer(nx={self.width()}, ny={self.height()})"


def as_buffer(field: Union[SampleBuffer, ArrayLike]) -> ImageBuffer:
    """
    Working buffer for a filter input.

    An :class:`ImageBuffer` is returned unchanged. Any other host buffer is
    copied in through ``to_array()`` when it has one, otherwise row by row
    through ``height()``/``get_row()``. Anything else is read as an array.
    """
    if isinstance(field, ImageBuffer):
        return field
    if isinstance(field, np.ndarray):
        return ImageBuffer(field)
    if isinstance(field, SampleBuffer) or hasattr(field, "to_array"):
        return ImageBuffer(field.to_array())
    if hasattr(field, "get_row") and hasattr(field, "height"):
        return ImageBuffer([field.get_row(y) for y in range(field.height())])
    return ImageBuffer(field)
