# -*- coding: utf-8 -*-
"""
LUT Application Tests - Band matching, index casting, overflow tally,
gamma correction.

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

import logging

import numpy as np
import pytest

from rasterhist.exceptions import ComputationFailedError, InvalidInputError
from rasterhist.lut import (
    LutApplication,
    apply_lut,
    build_lut,
    gamma_correct,
    identity,
    identity_wide,
)
from rasterhist.lut.apply import index_format
from rasterhist.raster import Raster
from rasterhist.vocabulary import BandFormat


class TestBandMatching:

    def test_identity_reproduces_image(self, rgb_image):
        result = apply_lut(rgb_image, identity(1))
        assert isinstance(result, LutApplication)
        assert result.overflow == 0
        assert result.image == rgb_image

    def test_per_band_tables(self, rgb_image):
        result = apply_lut(rgb_image, identity(3))
        np.testing.assert_array_equal(result.image.data, rgb_image.data)

    def test_one_band_image_fans_out(self, gradient_image):
        lut = build_lut([[0, 0, 255], [255, 255, 0]])
        mapped, overflow = apply_lut(gradient_image, lut)
        assert overflow == 0
        assert mapped.bands == 2
        assert mapped.band_format is BandFormat.DOUBLE
        values = gradient_image.data[:, :, 0].astype(np.float64)
        np.testing.assert_allclose(mapped.data[:, :, 0], values)
        np.testing.assert_allclose(mapped.data[:, :, 1], 255 - values)

    def test_incompatible_bands(self, rgb_image):
        two = Raster(rgb_image.data[:, :, :2])
        with pytest.raises(InvalidInputError, match="cannot map"):
            apply_lut(two, identity(3))

    def test_metadata_preserved(self):
        image = Raster(np.zeros((2, 2), dtype=np.uint8), xres=2.0,
                       yoffset=3)
        mapped = apply_lut(image, identity(1)).image
        assert mapped.xres == 2.0
        assert mapped.yoffset == 3

    def test_lut_required(self, flat_image):
        with pytest.raises(InvalidInputError, match="as_lut"):
            apply_lut(flat_image, flat_image)


class TestOverflow:

    def test_short_table_clamps(self, gradient_image):
        lut = build_lut([[0, 0], [99, 99]])
        assert lut.size == 100
        mapped, overflow = apply_lut(gradient_image, lut)
        assert overflow == 156
        values = gradient_image.data[:, :, 0]
        np.testing.assert_allclose(mapped.data[:, :, 0],
                                   np.minimum(values, 99))

    def test_table_origin_not_applied(self):
        lut = build_lut([[10, 0], [20, 100]])
        assert lut.xoffset == 10
        image = Raster(np.array([[10, 15, 20]], dtype=np.uint8))
        mapped, overflow = apply_lut(image, lut)
        # samples index the table from 0, so 15 and 20 run off its end
        np.testing.assert_allclose(mapped.data[0, :, 0], [100, 100, 100])
        assert overflow == 2

        shifted = Raster(image.data - lut.xoffset)
        mapped, overflow = apply_lut(shifted, lut)
        np.testing.assert_allclose(mapped.data[0, :, 0], [0, 50, 100])
        assert overflow == 0

    def test_overflow_logged(self, gradient_image, caplog):
        lut = build_lut([[0, 0], [99, 99]])
        with caplog.at_level(logging.WARNING, logger='rasterhist.lut.apply'):
            apply_lut(gradient_image, lut)
        assert "156 samples" in caplog.text


class TestIndexCasting:

    def test_signed_negatives_clamp_to_zero(self):
        image = Raster(np.array([[-5, 3]], dtype=np.int8))
        mapped = apply_lut(image, identity(1)).image
        np.testing.assert_array_equal(mapped.data[0, :, 0], [0, 3])

    def test_float_truncates(self):
        image = Raster(np.array([[1.7, 300.2]], dtype=np.float32))
        assert index_format(image) is BandFormat.USHORT
        mapped = apply_lut(image, identity_wide(1)).image
        np.testing.assert_array_equal(mapped.data[0, :, 0], [1, 300])

    def test_index_formats(self):
        assert index_format(Raster(np.zeros((1, 1), np.int8))) \
            is BandFormat.UCHAR
        assert index_format(Raster(np.zeros((1, 1), np.int32))) \
            is BandFormat.UINT
        assert index_format(Raster(np.full((1, 1), 7e4, np.float64))) \
            is BandFormat.UINT

    def test_nan_rejected(self):
        image = Raster(np.array([[np.nan, 1.0]]))
        with pytest.raises(InvalidInputError, match="NaN"):
            apply_lut(image, identity(1))

    def test_complex_rejected(self):
        image = Raster(np.zeros((2, 2), dtype=np.complex64))
        with pytest.raises(InvalidInputError, match="complex"):
            apply_lut(image, identity(1))


class TestGammaCorrect:

    def test_unit_exponent_is_identity(self, gradient_image):
        assert gamma_correct(gradient_image, 1.0) == gradient_image

    def test_square_root(self):
        image = Raster(np.array([[0, 64, 255]], dtype=np.uint8))
        out = gamma_correct(image, 0.5)
        assert out.band_format is BandFormat.UCHAR
        np.testing.assert_array_equal(out.data[0, :, 0], [0, 128, 255])

    def test_ushort(self):
        image = Raster(np.array([[0, 65535]], dtype=np.uint16))
        out = gamma_correct(image, 2.0)
        assert out.band_format is BandFormat.USHORT
        np.testing.assert_array_equal(out.data[0, :, 0], [0, 65535])

    def test_float_rejected(self):
        image = Raster(np.zeros((2, 2), dtype=np.float32))
        with pytest.raises(InvalidInputError, match="element type"):
            gamma_correct(image, 2.0)

    def test_negative_exponent_fails(self, flat_image):
        with pytest.raises(ComputationFailedError, match="gamma_correct"):
            gamma_correct(flat_image, -1.0)
