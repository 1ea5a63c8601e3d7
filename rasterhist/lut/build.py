# -*- coding: utf-8 -*-
"""
LUT Construction - Identity ramps and piecewise-linear tables.

- ``identity`` / ``identity_wide``: ramps that map every index to itself,
  the starting point for building tables by arithmetic.
- ``build_lut``: table through a set of ``(x, y1, ..., yn)`` control
  points, one band per y column.
- ``invert_lut``: table mapping measured responses back to targets, for
  linearising an image from measurements of a reference chart.

Control points may be any 2D array-like (nested lists, numpy arrays, or
mask objects numpy can convert): rows are points, column 0 holds ``x``
(or the target), the remaining columns one value per band.  Points do
not need to be sorted.

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
from rasterhist._validation import numeric_guard, require_positive_int
from rasterhist.exceptions import InvalidInputError
from rasterhist.raster import Lut
from rasterhist.vocabulary import BandFormat

logger = logging.getLogger(__name__)


def identity(bands: int) -> Lut:
    """Build a 256-entry ``uchar`` ramp with *bands* bands.

    Entry ``i`` of every band equals ``i``.
    """
    require_positive_int(bands, 'bands', 'identity')
    ramp = np.arange(256, dtype=np.uint8)
    table = np.repeat(ramp[np.newaxis, :, np.newaxis], bands, axis=2)
    return Lut._wrap(table, BandFormat.UCHAR)


def identity_wide(bands: int, size: int = 65536) -> Lut:
    """Build a ``ushort`` ramp of *size* entries (at most 65536)."""
    require_positive_int(bands, 'bands', 'identity_wide')
    require_positive_int(size, 'size', 'identity_wide', maximum=65536)
    ramp = np.arange(size, dtype=np.uint16)
    table = np.repeat(ramp[np.newaxis, :, np.newaxis], bands, axis=2)
    return Lut._wrap(table, BandFormat.USHORT)


def control_points(points, operation: str) -> np.ndarray:
    """Convert control points to a finite 2D ``float64`` array.

    Raises
    ------
    InvalidInputError
        If the points are not numeric, not 2D, have fewer than two
        columns or contain non-finite values.
    """
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            f"{operation}: control points must be numeric rows: {exc}"
        ) from exc
    if arr.ndim != 2 or arr.shape[1] < 2 or arr.shape[0] < 1:
        raise InvalidInputError(
            f"{operation}: control points must be a 2D table with at least "
            f"two columns, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(
            f"{operation}: control points must be finite"
        )
    return arr


def build_lut(points) -> Lut:
    """Build a table by piecewise-linear interpolation through points.

    ``x`` values are rounded to integers and need not start at zero;
    the table covers exactly ``min(x) .. max(x)`` and its ``xoffset``
    records ``min(x)``.  When several points share an ``x`` the first
    one given wins.

    ``apply_lut`` always indexes from 0 and ignores ``xoffset``, so
    subtract ``xoffset`` from an image before mapping it through a
    table that starts above 0.

    Parameters
    ----------
    points : array_like
        Rows of ``(x, y1, ..., yn)``.

    Returns
    -------
    Lut
        ``double`` table of ``max(x) - min(x) + 1`` entries with ``n``
        bands.

    Raises
    ------
    InvalidInputError
        If fewer than two distinct ``x`` values are given.

    Examples
    --------
    >>> lut = build_lut([[0, 0], [255, 100]])
    >>> lut.size, float(lut.table[255, 0])
    (256, 100.0)
    """
    pts = control_points(points, 'build_lut')
    xs = np.rint(pts[:, 0]).astype(np.int64)
    order = np.argsort(xs, kind='stable')
    xs = xs[order]
    ys = pts[order, 1:]

    first = np.ones(xs.shape, dtype=bool)
    first[1:] = xs[1:] != xs[:-1]
    xs = xs[first]
    ys = ys[first]
    if xs.size < 2:
        raise InvalidInputError(
            "build_lut: at least two distinct x values are required"
        )

    domain = np.arange(xs[0], xs[-1] + 1)
    table = np.empty((domain.size, ys.shape[1]), dtype=np.float64)
    for b in range(ys.shape[1]):
        table[:, b] = np.interp(domain, xs, ys[:, b])

    logger.debug("build_lut: %d points -> %d entries x %d bands",
                 xs.size, domain.size, ys.shape[1])
    return Lut._wrap(table[np.newaxis], BandFormat.DOUBLE,
                     xoffset=int(xs[0]))


def invert_lut(points, size: int) -> Lut:
    """Build a table mapping measured responses back to targets.

    Each row holds a target value followed by the value measured for it
    in every band, all in ``[0, 1]``.  For example
    ``[0.1, 0.2, 0.3, 0.1]`` says a patch with 10% reflectance was
    recorded as 20%, 30% and 10% in three bands.

    Per band the rows are sorted by measured value and joined by
    straight segments.  Below the lowest measurement the table runs
    linearly from 0; above the highest it runs linearly up to 1, so the
    table always spans the full output range.  Monotonicity is not
    checked: strongly non-monotonic responses give poor tables.

    Parameters
    ----------
    points : array_like
        Rows of ``(target, measured1, ..., measuredn)``.
    size : int
        Number of table entries, >= 2 (256 is typical).

    Returns
    -------
    Lut
        ``double`` table of *size* entries with ``n`` bands; entry ``k``
        corresponds to a measured value of ``k / (size - 1)``.
    """
    operation = 'invert_lut'
    pts = control_points(points, operation)
    require_positive_int(size, 'size', operation)
    if size < 2:
        raise InvalidInputError(f"{operation}: size must be >= 2, got {size}")
    if pts.min() < 0.0 or pts.max() > 1.0:
        raise InvalidInputError(
            f"{operation}: all targets and measurements must be in [0, 1]"
        )

    last = size - 1
    index = np.arange(size, dtype=np.float64)
    targets = pts[:, 0]
    nbands = pts.shape[1] - 1
    table = np.empty((size, nbands), dtype=np.float64)

    with numeric_guard(operation):
        for b in range(nbands):
            order = np.argsort(pts[:, b + 1], kind='stable')
            measured = pts[order, b + 1] * last
            target = targets[order]

            values = np.interp(index, measured, target)

            head = index < measured[0]
            if head.any():
                values[head] = index[head] * (target[0] / measured[0])

            tail = index > measured[-1]
            if tail.any():
                slope = (1.0 - target[-1]) / (last - measured[-1])
                values[tail] = (target[-1]
                                + (index[tail] - measured[-1]) * slope)

            table[:, b] = values

    logger.debug("invert_lut: %d points -> %d entries x %d bands",
                 pts.shape[0], size, nbands)
    return Lut._wrap(table[np.newaxis], BandFormat.DOUBLE)
