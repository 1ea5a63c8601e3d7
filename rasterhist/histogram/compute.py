# -*- coding: utf-8 -*-
"""
Histogram Computation - Frequency tables and projections from rasters.

- ``histogram``: per-band (or single-band) value counts of an 8/16-bit
  unsigned image.
- ``joint_histogram``: 1-, 2- or 3-D histogram over the bands of a
  pixel, each axis quantised into ``bins`` equal intervals.
- ``indexed_histogram``: scatter-add of a value image keyed by an index
  image.
- ``projection``: row sums and column sums.

Counting is done with ``np.bincount`` over flattened bands, so no
operation depends on the order in which pixels are visited.

Dependencies
------------
numpy

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
from typing import Optional, Tuple

# Third-party
import numpy as np

# rasterhist internal
from rasterhist._validation import (
    HISTOGRAM_FORMATS,
    bin_count,
    checked_cast,
    require_bands,
    require_format,
    require_kind,
    require_non_complex,
    require_positive_int,
)
from rasterhist.exceptions import InvalidInputError
from rasterhist.raster import Histogram, Raster
from rasterhist.vocabulary import BandFormat

logger = logging.getLogger(__name__)


def histogram(image: Raster, band: Optional[int] = None) -> Histogram:
    """Count the occurrences of every sample value.

    Parameters
    ----------
    image : Raster
        ``uchar`` or ``ushort`` image.
    band : int, optional
        Band to count.  When omitted every band is counted separately.

    Returns
    -------
    Histogram
        ``uint`` histogram, 256 (``uchar``) or 65536 (``ushort``) bins
        wide, one row high, with one band per counted input band.

    Raises
    ------
    InvalidInputError
        If the element type is not ``uchar``/``ushort`` or *band* is out
        of range.

    Examples
    --------
    >>> hist = histogram(Raster(np.full((4, 4), 10, dtype=np.uint8)))
    >>> int(hist.data[0, 10, 0])
    16
    """
    require_kind(image, Raster, 'image', 'histogram')
    require_format(image, HISTOGRAM_FORMATS, 'histogram')
    if band is not None and not 0 <= band < image.bands:
        raise InvalidInputError(
            f"histogram: band {band} out of range for "
            f"{image.bands}-band image"
        )

    nbins = bin_count(image.band_format)
    planes = range(image.bands) if band is None else (band,)
    counts = np.empty((1, nbins, len(planes)), dtype=np.uint32)
    for out_band, in_band in enumerate(planes):
        samples = image.data[:, :, in_band].ravel()
        counts[0, :, out_band] = np.bincount(samples, minlength=nbins)

    logger.debug("histogram: %d bins x %d bands from %dx%d %s image",
                 nbins, len(planes), image.width, image.height,
                 image.band_format.symbol)
    return Histogram._wrap(counts, BandFormat.UINT)


def joint_histogram(image: Raster, bins: int) -> Histogram:
    """Build a joint histogram over the bands of each pixel.

    Band 0 indexes the columns, band 1 the rows and band 2 the output
    bands, so a 1-band image gives ``bins x 1``, a 2-band image
    ``bins x bins`` and a 3-band image ``bins x bins`` with ``bins``
    bands.  Sample ``v`` falls in cell ``v * bins // domain`` where
    *domain* is 256 or 65536.

    Parameters
    ----------
    image : Raster
        ``uchar`` or ``ushort`` image with 1, 2 or 3 bands.
    bins : int
        Intervals per axis, ``1 <= bins <= domain``.

    Returns
    -------
    Histogram
        ``uint`` histogram whose cells sum to ``width * height``.
    """
    operation = 'joint_histogram'
    require_kind(image, Raster, 'image', operation)
    require_format(image, HISTOGRAM_FORMATS, operation)
    require_bands(image, (1, 2, 3), operation)
    domain = bin_count(image.band_format)
    require_positive_int(bins, 'bins', operation, maximum=domain)

    cells = (image.data.astype(np.int64) * bins) // domain
    nbands = image.bands
    shape = (
        bins if nbands > 1 else 1,
        bins,
        bins if nbands > 2 else 1,
    )
    flat = cells[:, :, 0]
    if nbands > 1:
        flat = flat + cells[:, :, 1] * bins
    if nbands > 2:
        flat = flat * bins + cells[:, :, 2]

    counts = np.bincount(flat.ravel(), minlength=int(np.prod(shape)))
    logger.debug("joint_histogram: %d bands, %d bins per axis",
                 nbands, bins)
    return Histogram._wrap(counts.reshape(shape).astype(np.uint32),
                           BandFormat.UINT)


def indexed_histogram(index_image: Raster, value_image: Raster) -> Histogram:
    """Sum the samples of *value_image* into bins picked by *index_image*.

    Cell ``k`` of band ``b`` holds the sum of band ``b`` of
    *value_image* over every pixel where *index_image* equals ``k``.
    Handy after labelling regions: dividing a coordinate-weighted sum by
    a plain count gives region centroids.

    Parameters
    ----------
    index_image : Raster
        Single-band ``uchar`` or ``ushort`` image.
    value_image : Raster
        Non-complex image with the same width and height.

    Returns
    -------
    Histogram
        One row of 256 bins (``uchar`` index) or ``max(index) + 1`` bins
        (``ushort`` index), one band per value band, element type the
        widened accumulator of the value format.
    """
    operation = 'indexed_histogram'
    require_kind(index_image, Raster, 'index_image', operation)
    require_kind(value_image, Raster, 'value_image', operation)
    require_format(index_image, HISTOGRAM_FORMATS, operation)
    require_bands(index_image, (1,), operation)
    require_non_complex(value_image, operation)
    if (index_image.width, index_image.height) != (
            value_image.width, value_image.height):
        raise InvalidInputError(
            f"{operation}: index image is {index_image.width}x"
            f"{index_image.height} but value image is "
            f"{value_image.width}x{value_image.height}"
        )

    index = index_image.data[:, :, 0].ravel()
    if index_image.band_format is BandFormat.UCHAR:
        nbins = 256
    else:
        nbins = int(index.max()) + 1

    out_format = value_image.band_format.accumulator
    wide = np.float64 if out_format is BandFormat.DOUBLE else np.int64
    sums = np.empty((1, nbins, value_image.bands), dtype=wide)
    for b in range(value_image.bands):
        weights = value_image.data[:, :, b].ravel()
        totals = np.bincount(index, weights=weights, minlength=nbins)
        # bincount accumulates weights in float64
        if wide is np.int64:
            totals = np.rint(totals)
        sums[0, :, b] = totals

    if out_format is not BandFormat.DOUBLE:
        sums = checked_cast(sums, out_format, operation)
    logger.debug("indexed_histogram: %d bins x %d bands", nbins,
                 value_image.bands)
    return Histogram._wrap(sums, out_format)


def projection(image: Raster) -> Tuple[Raster, Raster]:
    """Sum every row and every column of an image, band by band.

    Parameters
    ----------
    image : Raster
        Non-complex image.

    Returns
    -------
    rows : Raster
        Width 1, height ``image.height``: the sum of each row.
    columns : Raster
        Width ``image.width``, height 1: the sum of each column.

    Both outputs use the accumulator format of the input (``uint`` for
    unsigned, ``int`` for signed, ``double`` for floating point).

    Raises
    ------
    ComputationFailedError
        If an integer sum does not fit the 32-bit accumulator.
    """
    operation = 'projection'
    require_kind(image, Raster, 'image', operation)
    require_non_complex(image, operation)

    out_format = image.band_format.accumulator
    if out_format is BandFormat.DOUBLE:
        samples = image.data.astype(np.float64)
    else:
        samples = image.data.astype(np.int64)

    row_sums = samples.sum(axis=1, keepdims=True)
    col_sums = samples.sum(axis=0, keepdims=True)
    if out_format is not BandFormat.DOUBLE:
        row_sums = checked_cast(row_sums, out_format, operation)
        col_sums = checked_cast(col_sums, out_format, operation)

    return (
        image.same_size(row_sums, out_format),
        image.same_size(col_sums, out_format),
    )
