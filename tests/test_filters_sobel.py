import numpy as np
import pytest
from scipy import ndimage

from sepfilt.errors import DimensionMismatch, InvalidDimension
from sepfilt.filters.sobel import (
    SOBEL_HORIZONTAL_3x3,
    SOBEL_VERTICAL_3x3,
    gradient_magnitude,
    sobel,
    sobel_components,
)


def test_sobel_is_non_negative_and_shape_preserving(random_field):
    mag = sobel(random_field)
    assert mag.shape == random_field.shape
    assert np.all(mag >= 0.0)


def test_sobel_is_zero_on_constant_field():
    np.testing.assert_allclose(sobel(np.full((6, 9), 7.5)), 0.0, atol=1e-12)


def test_sobel_matches_scipy_reference(random_field):
    gx = ndimage.correlate(random_field, SOBEL_VERTICAL_3x3, mode="mirror") / 6.0
    gy = ndimage.correlate(random_field, SOBEL_HORIZONTAL_3x3, mode="mirror") / 6.0
    np.testing.assert_allclose(sobel(random_field), np.hypot(gx, gy), rtol=1e-9, atol=1e-12)


def test_sobel_on_horizontal_ramp(ramp_5x5):
    vertical, horizontal = sobel_components(ramp_5x5)
    expected = np.tile([0.0, 4.0 / 3.0, 4.0 / 3.0, 4.0 / 3.0, 0.0], (5, 1))
    np.testing.assert_allclose(vertical, expected, atol=1e-12)
    np.testing.assert_allclose(horizontal, 0.0, atol=1e-12)
    np.testing.assert_allclose(sobel(ramp_5x5), expected, atol=1e-12)


def test_gradient_magnitude_combines_elementwise():
    v = np.array([[3.0, -5.0], [0.0, 1.0]])
    h = np.array([[4.0, 12.0], [0.0, -1.0]])
    np.testing.assert_allclose(gradient_magnitude(v, h), [[5.0, 13.0], [0.0, np.sqrt(2.0)]])


def test_gradient_magnitude_shape_mismatch():
    with pytest.raises(DimensionMismatch):
        gradient_magnitude(np.zeros((3, 4)), np.zeros((4, 3)))


def test_sobel_rejects_degenerate_field():
    with pytest.raises(InvalidDimension):
        sobel(np.zeros((1, 8)))
