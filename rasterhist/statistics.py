# -*- coding: utf-8 -*-
"""
Statistics and Thresholds - Percentiles, monotonicity, statistical differencing.

- ``percentile_threshold``: the value above which a given fraction of
  samples lie, from an image or from a precomputed histogram.
- ``monotonic``: whether a one-row or one-column raster never changes
  direction.
- ``statistical_diff``: Niblack's statistical differencing, a local
  contrast remap driven by windowed mean and standard deviation.

The windowed statistics use the variance decomposition
``std(x) = sqrt(E[x^2] - E[x]^2)`` over two ``uniform_filter`` passes with
edge replication (``mode='nearest'``), which is O(N) per pixel
regardless of window size.

Dependencies
------------
numpy
scipy

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

# Standard library
import logging
from typing import Union

# Third-party
import numpy as np
from scipy.ndimage import uniform_filter

# rasterhist internal
from rasterhist._validation import (
    HISTOGRAM_FORMATS,
    numeric_guard,
    require_bands,
    require_format,
    require_kind,
    require_non_complex,
    require_one_dimensional,
    require_positive_int,
    require_range,
)
from rasterhist.config import Feature, require_feature
from rasterhist.exceptions import ComputationFailedError
from rasterhist.histogram.compute import histogram
from rasterhist.raster import Histogram, Raster
from rasterhist.vocabulary import BandFormat

logger = logging.getLogger(__name__)


def _threshold_from_counts(counts: np.ndarray, fraction: float) -> int:
    """Smallest bin ``v`` with at most ``fraction`` of samples above it."""
    total = counts.sum()
    if total <= 0:
        raise ComputationFailedError(
            "percentile_threshold: histogram holds no samples"
        )
    above = total - np.cumsum(counts)
    return int(np.argmax(above <= fraction * total))


def percentile_threshold(source: Union[Raster, Histogram],
                         fraction: float) -> int:
    """Find the threshold above which *fraction* of the samples lie.

    Returns the smallest value ``V`` such that the share of samples
    strictly greater than ``V`` is at most *fraction*.  With
    ``fraction=0.1`` roughly 10% of samples exceed the result, which
    makes it handy for thresholding the scaled output of a filter.

    Parameters
    ----------
    source : Raster or Histogram
        A ``uchar``/``ushort`` image, or a one-dimensional histogram
        computed earlier (avoids recounting when called repeatedly).
        Floating-point histograms, such as the output of ``normalize``,
        are searched as fractional shares.  Multi-band inputs are pooled.
    fraction : float
        Share of samples allowed above the threshold, in ``[0, 1]``.

    Raises
    ------
    FeatureUnavailableError
        If *source* is a histogram and the ``percentile_from_histogram``
        capability is disabled.

    Examples
    --------
    >>> hist = histogram(Raster(np.full((4, 4), 10, dtype=np.uint8)))
    >>> percentile_threshold(hist, 0.0)
    10
    """
    operation = 'percentile_threshold'
    require_range(fraction, 'fraction', operation, low=0.0, high=1.0)

    if isinstance(source, Histogram):
        require_feature(Feature.PERCENTILE_FROM_HISTOGRAM, operation)
        require_one_dimensional(source, operation)
        require_non_complex(source, operation)
        wide = np.float64 if source.band_format.is_float else np.int64
        counts = source.counts().astype(wide).sum(axis=1)
    else:
        require_kind(source, Raster, 'source', operation)
        require_format(source, HISTOGRAM_FORMATS, operation)
        counts = histogram(source).counts().astype(np.int64).sum(axis=1)

    return _threshold_from_counts(counts, fraction)


def monotonic(raster: Raster) -> bool:
    """Test a one-row or one-column raster for monotonicity.

    True if, taken together, every band is non-decreasing, or every band
    is non-increasing.  A single entry is monotonic.

    Examples
    --------
    >>> monotonic(Raster(np.array([[1, 2, 3, 4, 5]], dtype=np.uint8)))
    True
    """
    operation = 'monotonic'
    require_kind(raster, Raster, 'raster', operation)
    require_one_dimensional(raster, operation)
    require_non_complex(raster, operation)

    values = raster.data.reshape(-1, raster.bands)
    if raster.band_format.is_float:
        steps = np.diff(values.astype(np.float64), axis=0)
    else:
        steps = np.diff(values.astype(np.int64), axis=0)
    return bool(np.all(steps >= 0) or np.all(steps <= 0))


def statistical_diff(image: Raster, a: float, m0: float, b: float,
                     s0: float, win_x: int, win_y: int) -> Raster:
    """Emphasise how each pixel differs from its neighbourhood.

    At ``(i, j)`` the output is::

        a * m0 + (1 - a) * meanv
            + (vin(i, j) - meanv) * (b * s0) / (s0 + b * stdv)

    where ``meanv`` and ``stdv`` are the mean and population standard
    deviation over the ``win_x`` x ``win_y`` window centred on the pixel.
    ``m0`` is the new mean and ``a`` its weight; ``s0`` is the new
    standard deviation and ``b`` its weight.  Useful for low-contrast
    images with lots of detail, such as X-ray plates.  Try
    ``statistical_diff(image, 0.5, 128, 0.5, 50, 11, 11)``.

    Parameters
    ----------
    image : Raster
        Single-band ``uchar`` image.
    a : float
        Weight of the new mean, ``[0, 1]``.
    m0 : float
        New mean, >= 0.
    b : float
        Weight of the new standard deviation, ``[0, 2]``.
    s0 : float
        New standard deviation, >= 0.
    win_x, win_y : int
        Window width and height, >= 1.

    Returns
    -------
    Raster
        Single-band ``uchar`` image, same size; values rounded and
        clipped to ``[0, 255]``.  Where ``s0 + b * stdv`` is zero the
        contrast term is zero.
    """
    operation = 'statistical_diff'
    require_kind(image, Raster, 'image', operation)
    require_format(image, (BandFormat.UCHAR,), operation)
    require_bands(image, (1,), operation)
    require_range(a, 'a', operation, low=0.0, high=1.0)
    require_range(b, 'b', operation, low=0.0, high=2.0)
    require_range(m0, 'm0', operation, low=0.0)
    require_range(s0, 's0', operation, low=0.0)
    require_positive_int(win_x, 'win_x', operation)
    require_positive_int(win_y, 'win_y', operation)

    # Float64 for numerical stability of E[x^2] - E[x]^2
    x = image.data[:, :, 0].astype(np.float64)
    size = (win_y, win_x)
    with numeric_guard(operation):
        mean = uniform_filter(x, size=size, mode='nearest')
        mean_sq = uniform_filter(x * x, size=size, mode='nearest')
        variance = mean_sq - mean * mean
        # Clamp tiny negative values from floating-point rounding
        np.maximum(variance, 0.0, out=variance)
        std = np.sqrt(variance)

        denom = s0 + b * std
        gain = np.zeros_like(denom)
        np.divide(b * s0, denom, out=gain, where=denom > 0)
        out = a * m0 + (1.0 - a) * mean + (x - mean) * gain

    logger.debug("statistical_diff: %dx%d image, %dx%d window",
                 image.width, image.height, win_x, win_y)
    result = np.clip(np.rint(out), 0, 255).astype(np.uint8)
    return image.same_size(result[:, :, np.newaxis], BandFormat.UCHAR)
