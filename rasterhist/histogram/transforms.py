# -*- coding: utf-8 -*-
"""
Histogram Transforms - Normalise, cumulate, equalise, match and plot.

Operations on histograms:

- ``normalize``: rescale each band so its cells sum to the cell count.
- ``cumulative``: running sum along the cells of each band.
- ``equalize``: ``cumulative(normalize(hist))`` as an equalisation LUT.
- ``match``: LUT that reshapes one distribution onto another.
- ``plot``: bar-chart image of a one-row or one-column raster.

Operations on images, built from the above:

- ``histogram_plot``: plot the histogram of an image.
- ``equalize_image``: histogram-equalise an image.
- ``match_image``: remap an image so its histogram matches a reference.

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
from typing import Optional

# Third-party
import numpy as np

# rasterhist internal
from rasterhist._validation import (
    HISTOGRAM_FORMATS,
    checked_cast,
    numeric_guard,
    require_format,
    require_kind,
    require_non_complex,
    require_one_dimensional,
)
from rasterhist.exceptions import InvalidInputError
from rasterhist.histogram.compute import histogram
from rasterhist.lut.apply import apply_lut
from rasterhist.raster import Histogram, Lut, Raster
from rasterhist.vocabulary import BandFormat

logger = logging.getLogger(__name__)

_PLOT_ON = 255


def normalize(hist: Histogram) -> Histogram:
    """Rescale each band so its cells sum to the number of cells.

    Parameters
    ----------
    hist : Histogram
        Any histogram with non-complex cells.

    Returns
    -------
    Histogram
        ``double`` histogram, same shape.

    Raises
    ------
    ComputationFailedError
        If a band sums to zero.
    """
    require_kind(hist, Histogram, 'hist', 'normalize')
    require_non_complex(hist, 'normalize')

    counts = hist.data.astype(np.float64)
    with numeric_guard('normalize'):
        totals = counts.sum(axis=(0, 1), keepdims=True)
        scaled = counts * (hist.cells / totals)
    return hist.same_size(scaled, BandFormat.DOUBLE, Histogram)


def cumulative(hist: Histogram) -> Histogram:
    """Form the running sum of each band, cells taken row-major.

    The last cell of each band equals that band's total and the
    sequence never decreases for non-negative counts.

    Returns
    -------
    Histogram
        Same shape, element type the accumulator of the input format.
    """
    require_kind(hist, Histogram, 'hist', 'cumulative')
    require_non_complex(hist, 'cumulative')

    out_format = hist.band_format.accumulator
    flat = hist.counts()
    if out_format is BandFormat.DOUBLE:
        running = np.cumsum(flat.astype(np.float64), axis=0)
    else:
        running = checked_cast(np.cumsum(flat.astype(np.int64), axis=0),
                               out_format, 'cumulative')
    return hist.same_size(running.reshape(hist.shape), out_format, Histogram)


def equalize(hist: Histogram) -> Lut:
    """Build the equalisation map of a one-dimensional histogram.

    Equal to ``cumulative(normalize(hist))``: entry ``i`` is the share of
    samples at or below bin ``i``, scaled to the bin count.

    Returns
    -------
    Lut
        ``double`` table with one entry per bin.
    """
    require_kind(hist, Histogram, 'hist', 'equalize')
    require_one_dimensional(hist, 'equalize')
    return cumulative(normalize(hist)).as_lut()


def match(hist_a: Histogram, hist_b: Histogram) -> Lut:
    """Derive a LUT mapping the distribution of *hist_a* onto *hist_b*.

    Applied to the image *hist_a* was computed from, the LUT produces an
    image whose histogram approximates *hist_b*.  Entry ``i`` is the
    first reference bin whose cumulative share reaches the cumulative
    share of source bin ``i``.

    Parameters
    ----------
    hist_a : Histogram
        Source histogram, one-dimensional.
    hist_b : Histogram
        Reference histogram, one-dimensional, with as many bands as
        *hist_a* or a single band shared by all.

    Returns
    -------
    Lut
        One entry per source bin; ``uchar`` when the reference has at
        most 256 bins, ``ushort`` up to 65536, ``uint`` above.
    """
    operation = 'match'
    require_kind(hist_a, Histogram, 'hist_a', operation)
    require_kind(hist_b, Histogram, 'hist_b', operation)
    for hist in (hist_a, hist_b):
        require_one_dimensional(hist, operation)
        require_non_complex(hist, operation)
    if hist_b.bands not in (1, hist_a.bands):
        raise InvalidInputError(
            f"{operation}: reference has {hist_b.bands} bands, expected 1 "
            f"or {hist_a.bands}"
        )

    src = hist_a.counts().astype(np.float64)
    ref = hist_b.counts().astype(np.float64)
    with numeric_guard(operation):
        src_cdf = np.cumsum(src, axis=0) / src.sum(axis=0)
        ref_cdf = np.cumsum(ref, axis=0) / ref.sum(axis=0)

    nref = hist_b.cells
    table = np.empty((hist_a.cells, hist_a.bands), dtype=np.int64)
    for b in range(hist_a.bands):
        reference = ref_cdf[:, b if hist_b.bands > 1 else 0]
        # tolerate rounding in the two cumulative sums
        positions = np.searchsorted(reference, src_cdf[:, b] - 1e-12,
                                    side='left')
        table[:, b] = np.minimum(positions, nref - 1)

    if nref <= 256:
        out_format = BandFormat.UCHAR
    elif nref <= 65536:
        out_format = BandFormat.USHORT
    else:
        out_format = BandFormat.UINT
    logger.debug("match: %d source bins onto %d reference bins, %d bands",
                 hist_a.cells, nref, hist_a.bands)
    return Lut._wrap(table[np.newaxis].astype(out_format.dtype), out_format)


def plot(raster: Raster) -> Raster:
    """Draw a one-row or one-column raster as a bar chart.

    A one-row input of ``N`` values gives an image ``N`` wide with bars
    growing up from the bottom row; a one-column input gives an image
    ``N`` high with bars growing right from the first column.  Lit
    pixels are 255, others 0, one output band per input band.

    The value extent (bar axis length) depends on the element type:

    - ``uchar``: fixed at 256.
    - other unsigned: ``max(values)``.
    - signed: a negative minimum is shifted to 0; extent ``max + |min|``.
    - floating: a negative minimum is shifted to 0, then values are
      scaled so the extent equals ``N`` (square output).

    Returns
    -------
    Raster
        ``uchar`` image.
    """
    operation = 'plot'
    require_kind(raster, Raster, 'raster', operation)
    require_one_dimensional(raster, operation)
    require_non_complex(raster, operation)

    fmt = raster.band_format
    horizontal = raster.height == 1
    values = raster.data.reshape(-1, raster.bands)
    length = values.shape[0]

    if fmt is BandFormat.UCHAR:
        heights = values.astype(np.int64)
        extent = 256
    elif fmt.is_unsigned:
        heights = values.astype(np.int64)
        extent = int(heights.max())
    elif fmt.is_signed:
        heights = values.astype(np.int64)
        low = int(heights.min())
        if low < 0:
            heights = heights - low
        extent = int(heights.max())
    else:
        shifted = values.astype(np.float64)
        shifted = shifted - min(float(shifted.min()), 0.0)
        top = float(shifted.max())
        if top > 0:
            shifted = shifted * (length / top)
        heights = shifted.astype(np.int64)
        extent = length
    extent = max(extent, 1)

    # level[k] is the bar height a pixel at distance k from the base needs
    level = np.arange(extent)
    lit = level[np.newaxis, :, np.newaxis] < heights[:, np.newaxis, :]
    chart = np.where(lit, _PLOT_ON, 0).astype(np.uint8)
    if horizontal:
        # (length, extent, bands) -> (extent, length, bands), base at bottom
        chart = chart.transpose(1, 0, 2)[::-1]
    return Raster._wrap(np.ascontiguousarray(chart), BandFormat.UCHAR)


def histogram_plot(image: Raster, band: Optional[int] = None) -> Raster:
    """Compute the histogram of *image* and plot it."""
    return plot(histogram(image, band))


def equalize_image(image: Raster, band: Optional[int] = None) -> Raster:
    """Histogram-equalise an 8- or 16-bit unsigned image.

    Parameters
    ----------
    image : Raster
        ``uchar`` or ``ushort`` image.
    band : int, optional
        Equalise using this band's histogram, mapping every band through
        it.  When omitted each band is equalised by its own histogram.

    Returns
    -------
    Raster
        Equalised image, same format as the input.
    """
    require_kind(image, Raster, 'image', 'equalize_image')
    require_format(image, HISTOGRAM_FORMATS, 'equalize_image')
    hist = histogram(image, band)
    nbins = hist.cells
    mapping = equalize(hist).table * ((nbins - 1) / nbins)
    table = np.clip(np.rint(mapping), 0, nbins - 1)
    lut = Lut._wrap(table[np.newaxis].astype(image.band_format.dtype),
                    image.band_format)
    return apply_lut(image, lut).image


def match_image(image: Raster, reference: Raster) -> Raster:
    """Remap *image* so its histogram matches that of *reference*.

    Both images must be ``uchar`` or ``ushort`` and have the same number
    of bands.  The result takes the format of the matching table, so a
    ``uchar`` image matched to a ``ushort`` reference comes back as
    ``ushort`` with reference-scale values.
    """
    operation = 'match_image'
    require_kind(image, Raster, 'image', operation)
    require_kind(reference, Raster, 'reference', operation)
    require_format(image, HISTOGRAM_FORMATS, operation)
    require_format(reference, HISTOGRAM_FORMATS, operation)
    if image.bands != reference.bands:
        raise InvalidInputError(
            f"{operation}: image has {image.bands} bands but reference "
            f"has {reference.bands}"
        )
    lut = match(histogram(image), histogram(reference))
    return apply_lut(image, lut).image
