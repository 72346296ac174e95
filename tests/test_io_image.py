from pathlib import Path

import numpy as np
import pytest

from sepfilt.io.image import (
    as_float32,
    as_uint8,
    read_field,
    read_image,
    rgb_to_luma,
    to_display,
    write_field,
    write_image,
)


def test_dtype_conversions():
    arr_u8 = np.array([[0, 128, 255]], dtype=np.uint8)
    arr_f = as_float32(arr_u8)
    assert arr_f.dtype == np.float32
    np.testing.assert_allclose(arr_f, [[0.0, 128 / 255, 1.0]], atol=1e-6)

    arr_u8_rt = as_uint8(arr_f)
    assert arr_u8_rt.dtype == np.uint8
    np.testing.assert_array_equal(arr_u8_rt, arr_u8)

    # out-of-unit floats are clipped, not rescaled
    np.testing.assert_array_equal(as_uint8(np.array([-4.0, 2.0, 300.0])), [0, 2, 255])


def test_rgb_to_luma_weights():
    rgb = np.zeros((1, 3, 3))
    rgb[0, 0, 0] = rgb[0, 1, 1] = rgb[0, 2, 2] = 1.0
    np.testing.assert_allclose(rgb_to_luma(rgb), [[0.2126, 0.7152, 0.0722]])
    with pytest.raises(ValueError):
        rgb_to_luma(np.zeros((2, 2, 2, 2)))


def test_to_display_modes():
    y = np.array([[-2.0, 0.0], [1.0, 2.0]])
    np.testing.assert_allclose(to_display(y, "rescale"), [[0.0, 0.5], [0.75, 1.0]])
    np.testing.assert_allclose(to_display(y, "clip"), [[0.0, 0.0], [1.0, 1.0]])
    np.testing.assert_allclose(to_display(y, "abs"), [[1.0, 0.0], [1.0, 1.0]])
    np.testing.assert_array_equal(to_display(np.full((2, 2), 3.0)), 0.0)
    with pytest.raises(ValueError):
        to_display(y, "log")


def test_gray_roundtrip_through_field(tmp_path: Path):
    gray = np.arange(0, 240, 15, dtype=np.uint8).reshape(4, 4)
    path = tmp_path / "gray.png"
    write_image(path, gray)

    np.testing.assert_array_equal(read_image(path, mode="L"), gray)
    field = read_field(path)
    assert field.dtype == np.float64
    assert field.shape == (4, 4)
    np.testing.assert_allclose(field, gray / 255.0, atol=1e-6)


def test_rgb_image_is_reduced_to_luma(tmp_path: Path):
    rgb = np.full((3, 5, 3), 255, dtype=np.uint8)
    path = tmp_path / "white.png"
    write_image(path, rgb)
    field = read_field(path)
    assert field.shape == (3, 5)
    np.testing.assert_allclose(field, 1.0, atol=1e-6)


def test_write_field_creates_parents(tmp_path: Path):
    out = tmp_path / "nested" / "edges.png"
    write_field(out, np.array([[-1.0, 1.0], [0.0, 0.0]]))
    img = read_image(out, mode="L")
    np.testing.assert_array_equal(img, [[0, 255], [128, 128]])
