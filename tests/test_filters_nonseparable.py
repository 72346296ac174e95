import numpy as np
import pytest
from scipy import ndimage

from sepfilt.errors import InvalidDimension
from sepfilt.filters.nonseparable import (
    AVERAGE_5x5,
    HORIZONTAL_EDGE_3x3,
    VERTICAL_EDGE_3x3,
    apply_stencil,
    detect_edge_horizontal_nonseparable,
    detect_edge_vertical_nonseparable,
    moving_average5_nonseparable,
)
from sepfilt.filters.sobel import SOBEL_HORIZONTAL_3x3, SOBEL_VERTICAL_3x3


def test_stencils_match_scipy_mirror_correlation(random_field):
    cases = [
        (detect_edge_vertical_nonseparable, VERTICAL_EDGE_3x3, 6.0),
        (detect_edge_horizontal_nonseparable, HORIZONTAL_EDGE_3x3, 6.0),
        (moving_average5_nonseparable, AVERAGE_5x5, 25.0),
    ]
    for fn, kernel, norm in cases:
        ref = ndimage.correlate(random_field, kernel, mode="mirror") / norm
        np.testing.assert_allclose(fn(random_field), ref, rtol=1e-9, atol=1e-12)


def test_apply_stencil_generic_kernel(random_field):
    ref = ndimage.correlate(random_field, SOBEL_VERTICAL_3x3, mode="mirror") / 3.0
    out = apply_stencil(random_field, SOBEL_VERTICAL_3x3, 3.0)
    np.testing.assert_allclose(out, ref, rtol=1e-9, atol=1e-12)


def test_kernels_are_read_only():
    for k in (VERTICAL_EDGE_3x3, HORIZONTAL_EDGE_3x3, AVERAGE_5x5, SOBEL_VERTICAL_3x3):
        with pytest.raises(ValueError):
            k[0, 0] = 42.0
    np.testing.assert_array_equal(SOBEL_HORIZONTAL_3x3, SOBEL_VERTICAL_3x3.T)


def test_average_sum_is_reset_for_every_pixel():
    field = np.ones((6, 6))
    np.testing.assert_allclose(moving_average5_nonseparable(field), 1.0)


def test_apply_stencil_rejects_bad_kernels():
    field = np.zeros((5, 5))
    with pytest.raises(InvalidDimension):
        apply_stencil(field, np.ones((3, 5)))
    with pytest.raises(InvalidDimension):
        apply_stencil(field, np.ones((7, 7)))
    with pytest.raises(InvalidDimension):
        apply_stencil(np.zeros((3, 3)), np.ones((5, 5)), min_size=4)
