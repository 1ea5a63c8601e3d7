# -*- coding: utf-8 -*-
"""
LUT Construction Tests - Identity ramps, piecewise-linear and inverted
tables.

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

from rasterhist.exceptions import InvalidInputError
from rasterhist.lut import build_lut, identity, identity_wide, invert_lut
from rasterhist.raster import Lut
from rasterhist.vocabulary import BandFormat


class TestIdentity:

    def test_ramp(self):
        lut = identity(1)
        assert isinstance(lut, Lut)
        assert lut.band_format is BandFormat.UCHAR
        np.testing.assert_array_equal(lut.table[:, 0], np.arange(256))

    def test_bands(self):
        lut = identity(3)
        assert lut.bands == 3
        np.testing.assert_array_equal(lut.table[:, 2], np.arange(256))

    def test_bands_positive(self):
        with pytest.raises(InvalidInputError, match="bands"):
            identity(0)

    def test_wide(self):
        lut = identity_wide(2)
        assert lut.band_format is BandFormat.USHORT
        assert lut.size == 65536
        assert lut.table[65535, 1] == 65535

    def test_wide_size(self):
        assert identity_wide(1, size=1024).size == 1024
        with pytest.raises(InvalidInputError, match="size"):
            identity_wide(1, size=65537)


class TestBuildLut:

    def test_two_points(self):
        lut = build_lut([[0, 0], [255, 100]])
        assert lut.band_format is BandFormat.DOUBLE
        assert lut.size == 256
        assert lut.xoffset == 0
        assert lut.table[0, 0] == 0.0
        assert lut.table[51, 0] == pytest.approx(20.0)
        assert lut.table[255, 0] == pytest.approx(100.0)

    def test_order_invariant(self):
        points = [[0, 0], [64, 10], [128, 200], [255, 255]]
        shuffled = [points[2], points[0], points[3], points[1]]
        assert build_lut(points) == build_lut(shuffled)

    def test_passes_through_points(self):
        lut = build_lut([[0, 0], [64, 10], [128, 200], [255, 255]])
        np.testing.assert_allclose(lut.table[[0, 64, 128, 255], 0],
                                   [0, 10, 200, 255])

    def test_domain_offset(self):
        lut = build_lut([[10, 0], [20, 10]])
        assert lut.size == 11
        assert lut.xoffset == 10
        assert lut.table[5, 0] == pytest.approx(5.0)

    def test_negative_x(self):
        lut = build_lut([[-5, 0], [5, 10]])
        assert lut.size == 11
        assert lut.xoffset == -5

    def test_multiple_bands(self):
        lut = build_lut(np.array([[0, 0, 100], [10, 10, 0]]))
        assert lut.bands == 2
        np.testing.assert_allclose(lut.table[5], [5.0, 50.0])

    def test_duplicate_x_first_wins(self):
        lut = build_lut([[0, 0], [5, 50], [5, 99], [10, 100]])
        assert lut.table[5, 0] == pytest.approx(50.0)

    def test_x_rounded(self):
        lut = build_lut([[0.4, 0], [4.6, 5]])
        assert lut.size == 6

    def test_single_x_rejected(self):
        with pytest.raises(InvalidInputError, match="two distinct"):
            build_lut([[3, 0], [3, 1]])

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidInputError, match="numeric"):
            build_lut([['a', 'b'], ['c', 'd']])

    def test_one_column_rejected(self):
        with pytest.raises(InvalidInputError, match="two columns"):
            build_lut([[0], [1]])

    def test_nan_rejected(self):
        with pytest.raises(InvalidInputError, match="finite"):
            build_lut([[0, 0], [1, np.nan]])


class TestInvertLut:

    def test_linear_response_is_ramp(self):
        lut = invert_lut([[0, 0], [1, 1]], 256)
        assert lut.band_format is BandFormat.DOUBLE
        np.testing.assert_allclose(lut.table[:, 0], np.arange(256) / 255)

    def test_round_trip(self):
        targets = [0.0, 0.25, 0.5, 0.75, 1.0]
        measured = [0.0, 0.5, 0.7, 0.85, 1.0]
        lut = invert_lut(np.column_stack([targets, measured]), 101)
        np.testing.assert_allclose(lut.table[[0, 50, 70, 85, 100], 0],
                                   targets, atol=1e-12)

    def test_unsorted_rows(self):
        rows = [[1.0, 1.0], [0.0, 0.0], [0.5, 0.7]]
        lut = invert_lut(rows, 11)
        assert lut.table[7, 0] == pytest.approx(0.5)

    def test_head_runs_from_zero(self):
        lut = invert_lut([[0.2, 0.4], [1.0, 1.0]], 11)
        assert lut.table[0, 0] == 0.0
        assert lut.table[2, 0] == pytest.approx(0.1)

    def test_tail_runs_to_one(self):
        lut = invert_lut([[0.0, 0.0], [0.5, 0.5]], 11)
        assert lut.table[7, 0] == pytest.approx(0.7)
        assert lut.table[10, 0] == pytest.approx(1.0)

    def test_bands(self):
        lut = invert_lut([[0.0, 0.0, 0.0], [1.0, 1.0, 0.5]], 11)
        assert lut.bands == 2
        assert lut.table[5, 1] == pytest.approx(1.0)

    def test_values_outside_unit_range(self):
        with pytest.raises(InvalidInputError, match=r"\[0, 1\]"):
            invert_lut([[0, 0], [1, 1.5]], 256)

    def test_size_too_small(self):
        with pytest.raises(InvalidInputError, match="size"):
            invert_lut([[0, 0], [1, 1]], 1)
