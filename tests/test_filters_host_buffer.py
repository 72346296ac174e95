import time

import numpy as np
import pytest
from scipy import ndimage

from sepfilt.core.buffer import ImageBuffer, SampleBuffer, as_buffer
from sepfilt.errors import InvalidDimension
from sepfilt.filters import FILTERS, average5, average5_recursive
from sepfilt.filters.sobel import SOBEL_HORIZONTAL_3x3, SOBEL_VERTICAL_3x3


class HostBuffer:
    """Minimal buffer a host application might hand over."""

    def __init__(self, data):
        self._data = np.asarray(data, dtype=np.float64)

    def width(self):
        return self._data.shape[1]

    def height(self):
        return self._data.shape[0]

    def get_row(self, y):
        return self._data[y, :].copy()

    def get_column(self, x):
        return self._data[:, x].copy()

    def to_array(self):
        return self._data.copy()


class RowOnlyBuffer:
    def __init__(self, data):
        self._data = np.asarray(data, dtype=np.float64)

    def height(self):
        return self._data.shape[0]

    def get_row(self, y):
        return self._data[y, :].copy()


def test_image_buffer_satisfies_protocol():
    assert isinstance(ImageBuffer(np.zeros((2, 2))), SampleBuffer)
    assert not isinstance(np.zeros((2, 2)), SampleBuffer)


@pytest.mark.parametrize("name", sorted(FILTERS))
def test_every_filter_accepts_a_host_buffer(name, random_field):
    fn = FILTERS[name]
    expected = fn(random_field)
    np.testing.assert_allclose(fn(HostBuffer(random_field)), expected, rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(fn(RowOnlyBuffer(random_field)), expected, rtol=1e-12, atol=1e-12)


def test_as_buffer_copies_host_samples(random_field):
    host = HostBuffer(random_field)
    buf = as_buffer(host)
    assert isinstance(buf, ImageBuffer)
    assert (buf.width(), buf.height()) == (9, 13)
    buf.put_pixel(0, 0, 99.0)
    assert host.to_array()[0, 0] == random_field[0, 0]

    same = ImageBuffer(random_field)
    assert as_buffer(same) is same


def test_as_buffer_rejects_non_fields():
    with pytest.raises(InvalidDimension):
        as_buffer(object())


def test_sobel_on_large_field_is_fast(rng):
    field = rng.random((512, 512))
    t0 = time.perf_counter()
    out = FILTERS["sobel"](field)
    elapsed = time.perf_counter() - t0

    gx = ndimage.correlate(field, SOBEL_VERTICAL_3x3, mode="mirror") / 6.0
    gy = ndimage.correlate(field, SOBEL_HORIZONTAL_3x3, mode="mirror") / 6.0
    np.testing.assert_allclose(out, np.hypot(gx, gy), rtol=1e-9, atol=1e-12)
    assert elapsed < 5.0


def test_average5_recursive_long_sequence(rng):
    seq = rng.standard_normal(10_000)
    t0 = time.perf_counter()
    out = average5_recursive(seq)
    assert time.perf_counter() - t0 < 2.0
    np.testing.assert_allclose(out, average5(seq), rtol=1e-9, atol=1e-12)
