# -*- coding: utf-8 -*-
"""
Tone Curves - Parametric tone reproduction curves for print-style work.

A tone curve works on a 0-100 lightness scale.  Between the black point
``lb`` and the white point ``lw`` three control positions are placed::

    ls = lb + ps * (lw - lb)      shadow
    lm = lb + pm * (lw - lb)      midtone
    lh = lb + ph * (lw - lb)      highlight

and the identity line is pushed up or down by three smooth bumps::

    y = x + s * bump(lb, ls, lm) + m * bump(lb, lm, lw)
          + h * bump(lm, lh, lw)

``bump(a, p, c)`` is 0 outside ``[a, c)``, rises as ``3t^2 - 2t^3`` from
``a`` to its peak of 1 at ``p`` and falls back as ``1 - 3t^2 + 2t^3``
towards ``c``.  The weights ``s``, ``m`` and ``h`` are the peak shifts in
lightness units; positive values brighten.  Outside ``lb .. lw`` the
curve is the identity.

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

# Third-party
import numpy as np

# rasterhist internal
from rasterhist._validation import (
    HISTOGRAM_FORMATS,
    require_format,
    require_kind,
    require_positive_int,
    require_range,
)
from rasterhist.config import Feature, require_feature
from rasterhist.exceptions import InvalidInputError
from rasterhist.histogram.compute import histogram
from rasterhist.raster import Lut, Raster
from rasterhist.statistics import percentile_threshold
from rasterhist.vocabulary import BandFormat

logger = logging.getLogger(__name__)

LABS_MAX = 32767


def _bump(x: np.ndarray, low: float, peak: float, high: float) -> np.ndarray:
    out = np.zeros_like(x)
    rise = (x >= low) & (x < peak)
    if rise.any():
        t = (x[rise] - low) / (peak - low)
        out[rise] = 3.0 * t ** 2 - 2.0 * t ** 3
    fall = (x >= peak) & (x < high)
    if fall.any():
        t = (x[fall] - peak) / (high - peak)
        out[fall] = 1.0 - 3.0 * t ** 2 + 2.0 * t ** 3
    return out


def _check_shape(operation: str, ps: float, pm: float, ph: float,
                 s: float, m: float, h: float) -> None:
    for name, value in (('ps', ps), ('pm', pm), ('ph', ph)):
        require_range(value, name, operation, low=0.0, high=1.0)
    if not ps < pm < ph:
        raise InvalidInputError(
            f"{operation}: positions must satisfy ps < pm < ph, got "
            f"{ps}, {pm}, {ph}"
        )
    for name, value in (('s', s), ('m', m), ('h', h)):
        require_range(value, name, operation, low=-30.0, high=30.0)


def tone_curve(in_max: int, out_max: int, lb: float, lw: float,
               ps: float, pm: float, ph: float,
               s: float, m: float, h: float) -> Lut:
    """Build a tone curve LUT.

    Parameters
    ----------
    in_max : int
        Largest input value, ``1 .. 65535``; the table has
        ``in_max + 1`` entries.
    out_max : int
        Largest output value, ``1 .. 65535``.
    lb, lw : float
        Black and white points on the 0-100 scale, ``lb < lw``.
    ps, pm, ph : float
        Shadow, midtone and highlight positions as fractions of the
        ``lb .. lw`` range, ``0 <= ps < pm < ph <= 1``.
    s, m, h : float
        Shadow, midtone and highlight adjustments, ``-30 .. 30``.

    Returns
    -------
    Lut
        ``ushort`` table of ``in_max + 1`` entries in ``[0, out_max]``.

    Examples
    --------
    >>> flat = tone_curve(255, 255, 0, 100, 0.2, 0.5, 0.8, 0, 0, 0)
    >>> int(flat.table[128, 0])
    128
    """
    operation = 'tone_curve'
    require_positive_int(in_max, 'in_max', operation, maximum=65535)
    require_positive_int(out_max, 'out_max', operation, maximum=65535)
    require_range(lb, 'lb', operation, low=0.0, high=100.0)
    require_range(lw, 'lw', operation, low=0.0, high=100.0)
    if not lb < lw:
        raise InvalidInputError(
            f"{operation}: black point {lb} must lie below white point {lw}"
        )
    _check_shape(operation, ps, pm, ph, s, m, h)

    span = lw - lb
    ls = lb + ps * span
    lm = lb + pm * span
    lh = lb + ph * span

    x = 100.0 * np.arange(in_max + 1, dtype=np.float64) / in_max
    y = (x
         + s * _bump(x, lb, ls, lm)
         + m * _bump(x, lb, lm, lw)
         + h * _bump(x, lm, lh, lw))
    np.clip(y, 0.0, 100.0, out=y)

    table = np.rint(out_max * y / 100.0).astype(np.uint16)
    logger.debug("tone_curve: lb=%.3g lw=%.3g ls=%.3g lm=%.3g lh=%.3g",
                 lb, lw, ls, lm, lh)
    return Lut._wrap(table[np.newaxis, :, np.newaxis], BandFormat.USHORT)


def tone_build(lb: float, lw: float, ps: float, pm: float, ph: float,
               s: float, m: float, h: float) -> Lut:
    """Tone curve for 15-bit LabS lightness (``in_max = out_max = 32767``)."""
    return tone_curve(LABS_MAX, LABS_MAX, lb, lw, ps, pm, ph, s, m, h)


def tone_curve_analyzed(image: Raster, ps: float, pm: float, ph: float,
                        s: float, m: float, h: float, band: int = 0) -> Lut:
    """Build a tone curve whose black and white points come from *image*.

    The black point is the value with 99.9% of samples above it and the
    white point the value with 0.1% of samples above it, both taken
    from the histogram of *band* and expressed on the 0-100 scale.

    Parameters
    ----------
    image : Raster
        ``uchar`` or ``ushort`` image; ``in_max`` and ``out_max`` are the
        top of its format.
    ps, pm, ph, s, m, h : float
        As for ``tone_curve``.
    band : int
        Band to analyse.

    Raises
    ------
    FeatureUnavailableError
        If the ``tone_analysis`` or ``percentile_from_histogram``
        capability is disabled.
    InvalidInputError
        If the image has no tonal spread (black point at or above the
        white point).
    """
    operation = 'tone_curve_analyzed'
    require_feature(Feature.TONE_ANALYSIS, operation)
    require_feature(Feature.PERCENTILE_FROM_HISTOGRAM, operation)
    require_kind(image, Raster, 'image', operation)
    require_format(image, HISTOGRAM_FORMATS, operation)
    _check_shape(operation, ps, pm, ph, s, m, h)

    hist = histogram(image, band)
    low = percentile_threshold(hist, 0.999)
    high = percentile_threshold(hist, 0.001)
    top = int(image.band_format.domain[1])
    lb = 100.0 * low / top
    lw = 100.0 * high / top
    if not lb < lw:
        raise InvalidInputError(
            f"{operation}: image has no tonal spread (black point {lb:.3g}, "
            f"white point {lw:.3g})"
        )

    logger.debug("tone_curve_analyzed: band %d black=%d white=%d",
                 band, low, high)
    return tone_curve(top, top, lb, lw, ps, pm, ph, s, m, h)
