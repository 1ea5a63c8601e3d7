# -*- coding: utf-8 -*-
"""
Shared fixtures: sample rasters and a clean engine configuration per test.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import numpy as np
import pytest

from rasterhist.config import (
    ENV_DISABLED_FEATURES,
    ENV_WINDOW_BLOCK_ROWS,
    reset_config,
)
from rasterhist.raster import Raster


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Each test starts from the default configuration."""
    monkeypatch.delenv(ENV_DISABLED_FEATURES, raising=False)
    monkeypatch.delenv(ENV_WINDOW_BLOCK_ROWS, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def flat_image():
    """4x4 uchar image where every sample is 10."""
    return Raster(np.full((4, 4), 10, dtype=np.uint8))


@pytest.fixture
def gradient_image():
    """16x16 uchar image holding each value 0..255 exactly once."""
    return Raster(np.arange(256, dtype=np.uint8).reshape(16, 16))


@pytest.fixture
def rgb_image():
    """20x30 three-band uchar image of random samples."""
    rng = np.random.default_rng(42)
    return Raster(rng.integers(0, 256, size=(20, 30, 3), dtype=np.uint8))
