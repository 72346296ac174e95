# sepfilt/io/image.py
"""
Image I/O for the filter CLI, using Pillow."""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional, Union

import numpy as np
from PIL import Image

ArrayLike = np.ndarray
PathLike = Union[str, Path]
ImageMode = Literal["L", "RGB", "RGBA", "keep"]
DisplayMode = Literal["rescale", "clip", "abs"]

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


def _pathify(path: PathLike) -> str:
    return str(Path(path))


def read_image(
    path: PathLike,
    *,
    mode: ImageMode = "RGB",
    dtype: Union[np.dtype, str] = "uint8",
) -> np.ndarray:
    """
    Read an image via Pillow.

    Parameters
    ----------
    path : str or Path
        Input image path.
    mode : {"L", "RGB", "RGBA", "keep"}, default="RGB"
        - "keep": use the file's native mode.
        - otherwise: convert via Pillow's .convert(mode).
    dtype : numpy dtype or str, default="uint8"
        Output dtype for the ndarray.

    Returns
    -------
    img : ndarray
        Image data, 2D for "L" or 3D for color.
    """
    p = _pathify(path)
    with Image.open(p) as im:
        if mode != "keep":
            im = im.convert(mode)
        arr = np.asarray(im)

    if dtype is not None:
        arr = arr.astype(dtype, copy=False)

    return arr


def read_field(path: PathLike) -> np.ndarray:
    """
    Read an image as a scalar field: Rec.709 luminance, float64 in [0, 1].
    """
    with Image.open(_pathify(path)) as im:
        # Grayscale modes keep their bit depth, everything else goes through RGB.
        if im.mode not in ("L", "I;16", "RGB", "RGBA"):
            im = im.convert("RGB")
        img = np.asarray(im)
    return rgb_to_luma(as_float32(img)).astype(np.float64)


def as_float32(x: ArrayLike) -> np.ndarray:
    """
    Convert image-like array to float32.

    - uint8: scaled to [0, 1] by dividing 255
    - other unsigned ints: scaled by max value to [0, 1]
    - bool: 0.0 / 1.0
    - floats: cast without rescaling
    """
    arr = np.asarray(x)

    if np.issubdtype(arr.dtype, np.floating):
        return arr.astype(np.float32, copy=False)

    if arr.dtype == np.bool_:
        return arr.astype(np.float32)

    if np.issubdtype(arr.dtype, np.unsignedinteger):
        info = np.iinfo(arr.dtype)
        return (arr.astype(np.float32) / float(info.max)).astype(np.float32)

    if np.issubdtype(arr.dtype, np.signedinteger):
        info = np.iinfo(arr.dtype)
        scale = float(max(abs(info.min), abs(info.max)))
        return (arr.astype(np.float32) / scale).astype(np.float32)

    return arr.astype(np.float32)


def as_uint8(x: ArrayLike) -> np.ndarray:
    """
    Convert an array to uint8 for deterministic image saving.

    Floats with min>=0 and max<=1 are scaled by 255; anything else is
    clipped to [0, 255].
    """
    arr = np.asarray(x)

    if arr.dtype == np.uint8:
        return arr

    arr_f = arr.astype(np.float64)
    if np.issubdtype(arr.dtype, np.floating):
        vmin = float(np.nanmin(arr_f))
        vmax = float(np.nanmax(arr_f))
        if np.isfinite(vmin) and np.isfinite(vmax) and 0.0 <= vmin and vmax <= 1.0 + 1e-8:
            arr_f = arr_f * 255.0
    arr_f = np.nan_to_num(arr_f, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.round(arr_f), 0.0, 255.0).astype(np.uint8)


def rgb_to_luma(x: ArrayLike) -> np.ndarray:
    """
    Convert RGB(A) image to 2D luminance using Rec.709 coefficients.

    2D input is returned as float64; for 3D input with fewer than three
    channels the first channel is used.
    """
    arr = np.asarray(x)

    if arr.ndim == 2:
        return arr.astype(np.float64, copy=False)

    if arr.ndim != 3:
        raise ValueError(f"Expected 2D or 3D image, got {arr.shape}")

    if arr.shape[2] < 3:
        return arr[..., 0].astype(np.float64, copy=False)

    r = arr[..., 0].astype(np.float64)
    g = arr[..., 1].astype(np.float64)
    b = arr[..., 2].astype(np.float64)

    # Rec.709 / sRGB
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def to_display(field: ArrayLike, mode: DisplayMode = "rescale") -> np.ndarray:
    """
    Map a filter output to [0, 1] float32 for saving.

    Parameters
    ----------
    field : ndarray
        Filter output, possibly signed.
    mode : {"rescale", "clip", "abs"}
        - "rescale": linear min/max stretch; a flat field maps to zeros.
        - "clip": clip to [0, 1] (averages of [0, 1] inputs stay in range).
        - "abs": absolute value, then clip (edge strength regardless of sign).
    """
    y = np.asarray(field, dtype=np.float64)

    if mode == "clip":
        return np.clip(y, 0.0, 1.0).astype(np.float32)

    if mode == "abs":
        return np.clip(np.abs(y), 0.0, 1.0).astype(np.float32)

    if mode == "rescale":
        ymin = float(np.min(y))
        ymax = float(np.max(y))
        eps = np.finfo(np.float64).eps
        if ymax <= ymin + eps:
            return np.zeros_like(y, dtype=np.float32)
        return ((y - ymin) / (ymax - ymin)).astype(np.float32)

    raise ValueError(f"Unknown display mode: {mode!r}")


def write_image(
    path: PathLike,
    data: ArrayLike,
    *,
    mode: Optional[str] = None,
) -> None:
    """
    Save an image via Pillow with deterministic uint8 conversion.

    Parameters
    ----------
    path : str or Path
        Output file path (extension decides format).
    data : ndarray
        Image data, 2D or 3D with 1, 3 or 4 channels.
    mode : str or None
        Pillow image mode. If None, deduced from data shape.
    """
    arr = np.asarray(data)

    if arr.ndim == 2:
        img_mode = "L"
    elif arr.ndim == 3:
        c = arr.shape[2]
        if c == 1:
            img_mode = "L"
            arr = arr[..., 0]
        elif c == 3:
            img_mode = "RGB"
        elif c == 4:
            img_mode = "RGBA"
        else:
            raise ValueError(f"Unsupported channel count {c}")
    else:
        raise ValueError(f"Expected 2D or 3D array, got {arr.shape}")

    if mode is not None:
        img_mode = mode

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    img = Image.fromarray(as_uint8(arr)).convert(img_mode)
    img.save(_pathify(out))


def write_field(path: PathLike, field: ArrayLike, *, display: DisplayMode = "rescale") -> None:
    """Save a filter output as an 8-bit grayscale image."""
    write_image(path, to_display(field, mode=display))
