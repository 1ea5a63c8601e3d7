# -*- coding: utf-8 -*-
"""
LUT Application - Map rasters through lookup tables.

``apply_lut`` casts the image to an unsigned integer index type and looks
every sample up in the table.  Band matching, in priority order:

1. A one-band table maps every image band.
2. A table with as many bands as the image maps band ``i`` through
   table band ``i``.
3. A one-band image is mapped through every table band, producing one
   output band per table band.

Any other combination is rejected.  Indices beyond the end of the table
are clamped to its last entry; the number of clamped samples is returned
as the overflow tally and logged as a warning, never raised.

``gamma_correct`` builds a power-law table for 8- and 16-bit images and
applies it.

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
from typing import NamedTuple

# Third-party
import numpy as np

# rasterhist internal
from rasterhist._validation import (
    HISTOGRAM_FORMATS,
    numeric_guard,
    require_format,
    require_kind,
    require_non_complex,
)
from rasterhist.exceptions import ComputationFailedError, InvalidInputError
from rasterhist.lut.build import identity, identity_wide
from rasterhist.raster import Lut, Raster
from rasterhist.vocabulary import BandFormat

logger = logging.getLogger(__name__)

_UNSIGNED_OF = {
    BandFormat.UCHAR: BandFormat.UCHAR,
    BandFormat.CHAR: BandFormat.UCHAR,
    BandFormat.USHORT: BandFormat.USHORT,
    BandFormat.SHORT: BandFormat.USHORT,
    BandFormat.UINT: BandFormat.UINT,
    BandFormat.INT: BandFormat.UINT,
}


class LutApplication(NamedTuple):
    """Result of mapping an image through a LUT.

    Attributes
    ----------
    image : Raster
        Mapped image, element type of the LUT.
    overflow : int
        Number of input samples whose index lay beyond the table and was
        clamped to the last entry.  Zero when the table covered every
        sample.
    """

    image: Raster
    overflow: int


def index_format(image: Raster) -> BandFormat:
    """Unsigned integer format *image* is cast to before a lookup.

    Integer formats keep their width.  Floating formats pick the
    narrowest of ``uchar``/``ushort``/``uint`` that holds their maximum.
    """
    fmt = image.band_format
    if fmt in _UNSIGNED_OF:
        return _UNSIGNED_OF[fmt]
    top = float(np.max(image.data))
    if top <= 255:
        return BandFormat.UCHAR
    if top <= 65535:
        return BandFormat.USHORT
    return BandFormat.UINT


def to_index(image: Raster) -> np.ndarray:
    """Cast samples to their unsigned index type, clamping negatives to 0.

    Floating samples are truncated toward zero after clamping.

    Raises
    ------
    InvalidInputError
        If the image is complex or holds NaN samples.
    """
    require_non_complex(image, 'apply_lut')
    data = image.data
    if image.band_format.is_unsigned:
        return data
    if image.band_format.is_float and np.isnan(data).any():
        raise InvalidInputError("apply_lut: image contains NaN samples")
    target = index_format(image)
    low, high = target.domain
    wide = data.astype(np.float64 if image.band_format.is_float else np.int64)
    return np.clip(wide, low, high).astype(target.dtype)


def apply_lut(image: Raster, lut: Lut) -> LutApplication:
    """Map every sample of *image* through *lut*.

    Parameters
    ----------
    image : Raster
        Non-complex image of any format.
    lut : Lut
        Table whose element type becomes the output element type.
        Sample ``v`` reads entry ``v``: the table's ``xoffset`` is not
        applied, so shift the image by it first when the table does not
        start at 0 (see ``build_lut``).

    Returns
    -------
    LutApplication
        ``(image, overflow)``; see the module docstring for the band
        matching rules and overflow policy.

    Raises
    ------
    InvalidInputError
        If the band counts cannot be matched, the image is complex or
        holds NaN samples.

    Examples
    --------
    >>> result = apply_lut(image, identity(image.bands))
    >>> result.overflow
    0
    """
    operation = 'apply_lut'
    require_kind(image, Raster, 'image', operation)
    require_kind(lut, Lut, 'lut', operation)
    if not (lut.bands == 1 or lut.bands == image.bands or image.bands == 1):
        raise InvalidInputError(
            f"{operation}: cannot map a {image.bands}-band image through a "
            f"{lut.bands}-band LUT"
        )

    index = to_index(image).astype(np.intp)
    last = lut.size - 1
    overflow = int(np.count_nonzero(index > last))
    np.minimum(index, last, out=index)

    table = lut.table
    if lut.bands == 1:
        out = table[:, 0][index]
    elif lut.bands == image.bands:
        out = table[index, np.arange(image.bands)]
    else:
        out = table[index[:, :, 0]]

    if overflow:
        logger.warning(
            "%s: %d samples exceeded the %d-entry LUT and were clamped to "
            "its last entry", operation, overflow, lut.size
        )
    return LutApplication(image.same_size(out, lut.band_format), overflow)


def gamma_correct(image: Raster, exponent: float) -> Raster:
    """Gamma-correct an 8- or 16-bit unsigned image through a LUT.

    Each sample becomes ``round(range * (v / range) ** exponent)`` with
    *range* 255 or 65535.  The output has the input's format.

    Raises
    ------
    ComputationFailedError
        If the table is not finite (e.g. a negative exponent at 0).
    """
    operation = 'gamma_correct'
    require_kind(image, Raster, 'image', operation)
    require_format(image, HISTOGRAM_FORMATS, operation)

    if image.band_format is BandFormat.UCHAR:
        ramp = identity(1)
    else:
        ramp = identity_wide(1)
    top = float(image.band_format.domain[1])

    with numeric_guard(operation):
        curve = top * (ramp.table[:, 0] / top) ** float(exponent)
    if not np.all(np.isfinite(curve)):
        raise ComputationFailedError(
            f"{operation}: exponent {exponent} gives a non-finite table"
        )
    table = np.clip(np.rint(curve), 0, top).astype(image.band_format.dtype)
    lut = Lut._wrap(table[np.newaxis, :, np.newaxis], image.band_format)
    return apply_lut(image, lut).image
