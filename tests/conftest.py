# tests/conftest.py
from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def random_field(rng) -> np.ndarray:
    """Non-square random field so row/column mix-ups show up."""
    return rng.standard_normal((13, 9))


@pytest.fixture
def ramp_5x5() -> np.ndarray:
    """5x5 horizontal ramp: value = x."""
    return np.tile(np.arange(5, dtype=np.float64), (5, 1))
