# -*- coding: utf-8 -*-
"""
Raster Model Tests - Construction, header reads, kind conversions.

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

from rasterhist.exceptions import InvalidInputError, RasterHistError
from rasterhist.raster import Histogram, Lut, Raster
from rasterhist.vocabulary import BandFormat, RasterKind


class TestConstruction:

    def test_2d_promoted_to_one_band(self):
        image = Raster(np.zeros((4, 6), dtype=np.uint8))
        assert image.shape == (4, 6, 1)
        assert (image.width, image.height, image.bands) == (6, 4, 1)
        assert image.band_format is BandFormat.UCHAR

    def test_3d_keeps_bands(self, rgb_image):
        assert rgb_image.bands == 3
        assert rgb_image.width == 30
        assert rgb_image.height == 20

    def test_data_is_copied(self):
        source = np.zeros((2, 2), dtype=np.uint8)
        image = Raster(source)
        source[0, 0] = 7
        assert image.data[0, 0, 0] == 0

    def test_data_is_read_only(self, flat_image):
        with pytest.raises(ValueError):
            flat_image.data[0, 0, 0] = 1

    def test_explicit_format_casts(self):
        image = Raster([[1, 2]], 'ushort')
        assert image.band_format is BandFormat.USHORT
        assert image.data.dtype == np.uint16

    def test_unsupported_dtype(self):
        with pytest.raises(InvalidInputError, match="unsupported"):
            Raster(np.zeros((2, 2), dtype=np.int64))

    def test_unknown_format_symbol(self):
        with pytest.raises(InvalidInputError, match="unsupported"):
            Raster(np.zeros((2, 2), dtype=np.uint8), 'half')

    def test_empty(self):
        with pytest.raises(InvalidInputError, match="empty"):
            Raster(np.zeros((0, 3), dtype=np.uint8))

    def test_wrong_rank(self):
        with pytest.raises(InvalidInputError, match="2D"):
            Raster(np.zeros((2, 2, 2, 2), dtype=np.uint8))

    def test_errors_share_base(self):
        with pytest.raises(RasterHistError):
            Raster(np.zeros(5, dtype=np.uint8))


class TestHeader:

    def test_metadata(self):
        image = Raster(np.zeros((2, 3), dtype=np.float32), xres=2.5,
                       yres=4.0, xoffset=-3, yoffset=7)
        assert image.xres == 2.5
        assert image.yres == 4.0
        assert image.xoffset == -3
        assert image.yoffset == 7

    def test_band_view(self, rgb_image):
        np.testing.assert_array_equal(rgb_image.band(2),
                                      rgb_image.data[:, :, 2])

    def test_band_out_of_range(self, rgb_image):
        with pytest.raises(InvalidInputError, match="band index 3"):
            rgb_image.band(3)

    def test_same_size_keeps_metadata(self):
        image = Raster(np.zeros((2, 2), dtype=np.uint8), xres=3.0,
                       xoffset=5)
        out = image.same_size(np.ones((2, 2, 1), dtype=np.float64))
        assert out.band_format is BandFormat.DOUBLE
        assert out.xres == 3.0
        assert out.xoffset == 5

    def test_repr(self, flat_image):
        assert "uchar" in repr(flat_image)
        assert "width=4" in repr(flat_image)


class TestKinds:

    def test_kind_tags(self, flat_image):
        assert flat_image.kind is RasterKind.IMAGE
        assert flat_image.as_histogram().kind is RasterKind.HISTOGRAM
        assert isinstance(flat_image.as_histogram(), Histogram)

    def test_equality_respects_kind(self, flat_image):
        assert flat_image == Raster(flat_image.data)
        assert flat_image != flat_image.as_histogram()
        assert flat_image.as_histogram().as_image() == flat_image

    def test_equality_respects_format(self):
        a = Raster(np.zeros((1, 2), dtype=np.uint8))
        b = Raster(np.zeros((1, 2), dtype=np.uint16))
        assert a != b

    def test_unhashable(self, flat_image):
        with pytest.raises(TypeError):
            hash(flat_image)

    def test_histogram_counts(self):
        hist = Histogram(np.arange(6, dtype=np.uint32).reshape(2, 3))
        assert hist.cells == 6
        assert not hist.is_1d
        np.testing.assert_array_equal(hist.counts()[:, 0], np.arange(6))


class TestLut:

    def test_column_stored_as_row(self):
        lut = Lut(np.arange(5, dtype=np.uint8).reshape(5, 1))
        assert (lut.width, lut.height) == (5, 1)
        assert lut.size == 5
        np.testing.assert_array_equal(lut.table[:, 0], np.arange(5))

    def test_table_shape(self):
        lut = Lut(np.zeros((1, 8, 3), dtype=np.float64))
        assert lut.table.shape == (8, 3)

    def test_two_dimensional_rejected(self):
        with pytest.raises(InvalidInputError, match="one row or one column"):
            Lut(np.zeros((2, 2), dtype=np.uint8))

    def test_as_lut_checks_shape(self, flat_image):
        with pytest.raises(InvalidInputError, match="one row or one column"):
            flat_image.as_lut()
