# -*- coding: utf-8 -*-
"""
Histogram Transform Tests - Normalise, cumulate, equalise, match, plot.

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

from rasterhist.exceptions import ComputationFailedError, InvalidInputError
from rasterhist.histogram import (
    cumulative,
    equalize,
    equalize_image,
    histogram,
    histogram_plot,
    joint_histogram,
    match,
    match_image,
    normalize,
    plot,
)
from rasterhist.raster import Histogram, Lut, Raster
from rasterhist.vocabulary import BandFormat


class TestNormalize:

    def test_sums_to_cells(self, rgb_image):
        norm = normalize(histogram(rgb_image))
        assert norm.band_format is BandFormat.DOUBLE
        np.testing.assert_allclose(norm.counts().sum(axis=0), [256.0] * 3)

    def test_constant_image(self, flat_image):
        norm = normalize(histogram(flat_image))
        assert norm.data[0, 10, 0] == pytest.approx(256.0)

    def test_empty_histogram_fails(self):
        with pytest.raises(ComputationFailedError, match="normalize"):
            normalize(Histogram(np.zeros((1, 4), dtype=np.uint32)))

    def test_image_needs_conversion(self, flat_image):
        with pytest.raises(InvalidInputError, match="as_histogram"):
            normalize(flat_image)


class TestCumulative:

    def test_last_equals_total(self, rgb_image):
        cum = cumulative(histogram(rgb_image))
        np.testing.assert_array_equal(cum.data[0, -1], [600, 600, 600])
        assert cum.band_format is BandFormat.UINT

    def test_non_decreasing(self, rgb_image):
        cum = cumulative(histogram(rgb_image))
        assert np.all(np.diff(cum.data[0].astype(np.int64), axis=0) >= 0)

    def test_double_stays_double(self, rgb_image):
        cum = cumulative(normalize(histogram(rgb_image)))
        assert cum.band_format is BandFormat.DOUBLE
        np.testing.assert_allclose(cum.data[0, -1], [256.0] * 3)

    def test_row_major_for_2d(self):
        hist = Histogram(np.array([[1, 2], [3, 4]], dtype=np.uint32))
        cum = cumulative(hist)
        np.testing.assert_array_equal(cum.data[:, :, 0], [[1, 3], [6, 10]])


class TestEqualize:

    def test_constant_image_map(self, flat_image):
        lut = equalize(histogram(flat_image))
        assert isinstance(lut, Lut)
        assert lut.size == 256
        assert lut.table[9, 0] == 0.0
        assert lut.table[10, 0] == pytest.approx(256.0)
        assert lut.table[255, 0] == pytest.approx(256.0)

    def test_uniform_histogram_map(self, gradient_image):
        lut = equalize(histogram(gradient_image))
        np.testing.assert_allclose(lut.table[:, 0], np.arange(1, 257))

    def test_two_dimensional_rejected(self, rgb_image):
        hist = joint_histogram(Raster(rgb_image.data[:, :, :2]), 4)
        with pytest.raises(InvalidInputError, match="one-row"):
            equalize(hist)

    def test_equalize_image_constant(self, flat_image):
        out = equalize_image(flat_image)
        assert out.band_format is BandFormat.UCHAR
        assert np.all(out.data == 255)

    def test_equalize_image_spreads_range(self):
        image = Raster(np.array([[100, 101], [102, 103]], dtype=np.uint8))
        out = equalize_image(image)
        # the four levels spread to quarters of the range
        np.testing.assert_array_equal(out.data[:, :, 0],
                                      [[64, 128], [191, 255]])

    def test_equalize_image_driving_band(self, rgb_image):
        out = equalize_image(rgb_image, band=0)
        assert out.bands == 3
        assert out.band_format is BandFormat.UCHAR


class TestMatch:

    def test_self_match_is_identity(self, gradient_image):
        hist = histogram(gradient_image)
        lut = match(hist, hist)
        assert lut.band_format is BandFormat.UCHAR
        np.testing.assert_array_equal(lut.table[:, 0], np.arange(256))

    def test_ushort_reference(self, gradient_image):
        reference = Raster(np.array([[0, 1000]], dtype=np.uint16))
        lut = match(histogram(gradient_image), histogram(reference))
        assert lut.band_format is BandFormat.USHORT
        assert lut.size == 256

    def test_single_band_reference_broadcast(self, rgb_image, flat_image):
        lut = match(histogram(rgb_image), histogram(flat_image))
        assert lut.bands == 3
        # every populated source bin lands on the single reference level
        assert lut.table.max() == 10
        np.testing.assert_array_equal(lut.table[255], [10, 10, 10])

    def test_band_mismatch(self, rgb_image):
        two = Raster(rgb_image.data[:, :, :2])
        with pytest.raises(InvalidInputError, match="reference has 2"):
            match(histogram(rgb_image), histogram(two))

    def test_match_image(self, gradient_image, flat_image):
        out = match_image(gradient_image, flat_image)
        assert out.band_format is BandFormat.UCHAR
        assert np.all(out.data == 10)

    def test_match_image_onto_ushort_reference(self, gradient_image):
        wide = gradient_image.data.astype(np.uint16) * 256
        out = match_image(gradient_image, Raster(wide))
        assert out.band_format is BandFormat.USHORT
        np.testing.assert_array_equal(out.data, wide)
        assert np.unique(out.data).size == 256

    def test_match_image_onto_uchar_reference(self, gradient_image):
        wide = Raster(gradient_image.data.astype(np.uint16) * 256)
        out = match_image(wide, gradient_image)
        assert out.band_format is BandFormat.UCHAR
        np.testing.assert_array_equal(out.data, gradient_image.data)

    def test_match_image_band_mismatch(self, rgb_image, flat_image):
        with pytest.raises(InvalidInputError, match="bands"):
            match_image(rgb_image, flat_image)


class TestPlot:

    def test_uchar_row(self):
        chart = plot(Raster(np.array([[0, 1, 2]], dtype=np.uint8)))
        assert chart.shape == (256, 3, 1)
        assert chart.band_format is BandFormat.UCHAR
        assert np.all(chart.data[:, 0, 0] == 0)
        assert chart.data[255, 2, 0] == 255
        assert chart.data[254, 2, 0] == 255
        assert chart.data[253, 2, 0] == 0

    def test_unsigned_extent_is_max(self):
        chart = plot(Raster(np.array([[0, 3, 1]], dtype=np.uint16)))
        assert chart.shape == (3, 3, 1)
        assert np.all(chart.data[:, 1, 0] == 255)
        np.testing.assert_array_equal(chart.data[:, 2, 0], [0, 0, 255])

    def test_column_grows_right(self):
        chart = plot(Raster(np.array([[2], [0]], dtype=np.uint16)))
        assert chart.shape == (2, 2, 1)
        np.testing.assert_array_equal(chart.data[:, :, 0],
                                      [[255, 255], [0, 0]])

    def test_signed_shifted(self):
        chart = plot(Raster(np.array([[-2, 0, 2]], dtype=np.int8)))
        assert chart.shape == (4, 3, 1)
        assert np.all(chart.data[:, 0, 0] == 0)
        assert np.all(chart.data[:, 2, 0] == 255)

    def test_float_is_square(self):
        chart = plot(Raster(np.array([[0.0, 0.5, 1.0, 2.0]],
                                     dtype=np.float32)))
        assert chart.shape == (4, 4, 1)
        assert np.all(chart.data[:, 3, 0] == 255)
        np.testing.assert_array_equal(chart.data[:, 1, 0], [0, 0, 0, 255])

    def test_bands_preserved(self, rgb_image):
        chart = plot(histogram(rgb_image))
        assert chart.bands == 3

    def test_two_dimensional_rejected(self, flat_image):
        with pytest.raises(InvalidInputError, match="one-row"):
            plot(flat_image)

    def test_histogram_plot(self, flat_image):
        chart = histogram_plot(flat_image)
        assert chart.shape == (16, 256, 1)
        assert np.all(chart.data[:, 10, 0] == 255)
        assert int(chart.data.astype(np.int64).sum()) == 16 * 255
