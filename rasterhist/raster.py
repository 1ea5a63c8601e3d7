# -*- coding: utf-8 -*-
"""
Raster Model - Typed sample buffers for images, histograms and LUTs.

A ``Raster`` wraps a read-only numpy array of shape ``(rows, cols, bands)``
(row-major, bands interleaved) together with its ``BandFormat`` tag and
the geometric metadata (resolution, pixel offset) that is carried through
operations without being used by them.

Histograms and lookup tables are the same kind of buffer, but they are
distinct classes here: ``Histogram`` and ``Lut`` subclass ``Raster`` and
each carries a ``RasterKind`` tag.  Moving between them is always an
explicit ``as_image()`` / ``as_histogram()`` / ``as_lut()`` call, so a
histogram cannot be handed to an operation that expects pixels by
accident.

Every raster is immutable.  Operations build new rasters; the buffer of
an existing raster is never written.

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
from typing import Optional, Tuple, Type, TypeVar

# Third-party
import numpy as np

# rasterhist internal
from rasterhist.exceptions import InvalidInputError
from rasterhist.vocabulary import BandFormat, RasterKind

R = TypeVar('R', bound='Raster')


class Raster:
    """Multi-band raster of typed samples.

    Parameters
    ----------
    data : array_like
        2D ``(rows, cols)`` or 3D ``(rows, cols, bands)`` samples.  The
        array is copied, so later changes to *data* do not leak in.
    band_format : BandFormat or str, optional
        Element type.  Inferred from the array dtype when omitted;
        otherwise the samples are cast to it.
    xres, yres : float
        Resolution in samples per unit.  Default ``1.0``.
    xoffset, yoffset : int
        Pixel offset of the raster origin.  Default ``0``.

    Raises
    ------
    InvalidInputError
        If the array is not 2D/3D, is empty, or its dtype (or the
        requested format) is not a supported ``BandFormat``.

    Examples
    --------
    >>> import numpy as np
    >>> from rasterhist.raster import Raster
    >>> image = Raster(np.zeros((4, 6), dtype=np.uint8))
    >>> image.width, image.height, image.bands, image.band_format
    (6, 4, 1, <BandFormat.UCHAR: 'uchar'>)
    """

    kind: RasterKind = RasterKind.IMAGE

    def __init__(
        self,
        data,
        band_format=None,
        xres: float = 1.0,
        yres: float = 1.0,
        xoffset: int = 0,
        yoffset: int = 0,
    ) -> None:
        arr = np.asarray(data)
        if band_format is None:
            fmt = BandFormat.from_dtype(arr.dtype)
        else:
            fmt = BandFormat.from_symbol(band_format)
        if fmt is BandFormat.NOTSET:
            requested = arr.dtype if band_format is None else band_format
            raise InvalidInputError(
                f"unsupported element type {requested!r}; expected one of "
                f"{[f.symbol for f in BandFormat if f is not BandFormat.NOTSET]}"
            )
        arr = np.array(arr, dtype=fmt.dtype, copy=True)
        self._init(arr, fmt, xres, yres, xoffset, yoffset)

    def _init(self, arr, fmt, xres, yres, xoffset, yoffset) -> None:
        if arr.ndim == 2:
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3:
            raise InvalidInputError(
                f"raster data must be 2D (rows, cols) or 3D "
                f"(rows, cols, bands), got {arr.ndim}D"
            )
        if 0 in arr.shape:
            raise InvalidInputError(
                f"raster data must not be empty, got shape {arr.shape}"
            )
        arr = self._conform(arr)
        arr.flags.writeable = False
        self._data = arr
        self._band_format = fmt
        self._xres = float(xres)
        self._yres = float(yres)
        self._xoffset = int(xoffset)
        self._yoffset = int(yoffset)

    def _conform(self, arr: np.ndarray) -> np.ndarray:
        """Hook for subclasses that constrain the buffer shape."""
        return arr

    @classmethod
    def _wrap(
        cls: Type[R],
        arr: np.ndarray,
        band_format: BandFormat,
        xres: float = 1.0,
        yres: float = 1.0,
        xoffset: int = 0,
        yoffset: int = 0,
    ) -> R:
        """Adopt a freshly computed array without copying it."""
        obj = cls.__new__(cls)
        if arr.dtype != band_format.dtype:
            arr = arr.astype(band_format.dtype)
        obj._init(arr, band_format, xres, yres, xoffset, yoffset)
        return obj

    # -----------------------------------------------------------------
    # Header reads
    # -----------------------------------------------------------------
    @property
    def data(self) -> np.ndarray:
        """Read-only samples, shape ``(rows, cols, bands)``."""
        return self._data

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self._data.shape

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def bands(self) -> int:
        return self._data.shape[2]

    @property
    def band_format(self) -> BandFormat:
        return self._band_format

    @property
    def xres(self) -> float:
        return self._xres

    @property
    def yres(self) -> float:
        return self._yres

    @property
    def xoffset(self) -> int:
        return self._xoffset

    @property
    def yoffset(self) -> int:
        return self._yoffset

    def band(self, index: int) -> np.ndarray:
        """Read-only 2D view of one band.

        Raises
        ------
        InvalidInputError
            If *index* is outside ``[0, bands)``.
        """
        if not 0 <= index < self.bands:
            raise InvalidInputError(
                f"band index {index} out of range for {self.bands}-band raster"
            )
        return self._data[:, :, index]

    # -----------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------
    def same_size(
        self,
        data: np.ndarray,
        band_format: Optional[BandFormat] = None,
        cls: Optional[Type['Raster']] = None,
    ) -> 'Raster':
        """Build an output raster that shares this raster's metadata.

        Parameters
        ----------
        data : np.ndarray
            Computed samples.  Adopted without copying.
        band_format : BandFormat, optional
            Element type of *data*.  Defaults to the inferred dtype format.
        cls : type, optional
            Raster class of the output.  Defaults to ``Raster``.
        """
        fmt = band_format or BandFormat.from_dtype(data.dtype)
        target = cls or Raster
        return target._wrap(data, fmt, self._xres, self._yres,
                            self._xoffset, self._yoffset)

    def _convert(self, cls: Type[R]) -> R:
        return cls._wrap(self._data, self._band_format, self._xres,
                         self._yres, self._xoffset, self._yoffset)

    def as_image(self) -> 'Raster':
        """Reinterpret the samples as a plain image."""
        return self._convert(Raster)

    def as_histogram(self) -> 'Histogram':
        """Reinterpret the samples as a histogram."""
        return self._convert(Histogram)

    def as_lut(self) -> 'Lut':
        """Reinterpret the samples as a lookup table.

        Raises
        ------
        InvalidInputError
            If the raster is neither one row nor one column.
        """
        return self._convert(Lut)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.kind is other.kind
            and self._band_format is other._band_format
            and np.array_equal(self._data, other._data)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self.width}, height={self.height}, "
            f"bands={self.bands}, band_format='{self._band_format.symbol}')"
        )


class Histogram(Raster):
    """Frequency table over one to three sample axes.

    Axis 1 runs along the columns; joint histograms use rows (and bands)
    for their second (and third) axis.  Counting operations produce
    ``UINT`` histograms; derived histograms (normalised, cumulative) may
    use other formats.
    """

    kind = RasterKind.HISTOGRAM

    @property
    def cells(self) -> int:
        """Number of cells per band."""
        return self.width * self.height

    @property
    def is_1d(self) -> bool:
        return self.width == 1 or self.height == 1

    def counts(self) -> np.ndarray:
        """Cells flattened row-major, shape ``(cells, bands)``."""
        return self._data.reshape(self.cells, self.bands)


class Lut(Raster):
    """Lookup table: one row of entries, one mapping per band.

    A single-column buffer is accepted and stored as a single row.
    """

    kind = RasterKind.LUT

    def _conform(self, arr: np.ndarray) -> np.ndarray:
        rows, cols, _ = arr.shape
        if rows == 1:
            return arr
        if cols == 1:
            return arr.transpose(1, 0, 2)
        raise InvalidInputError(
            f"a LUT must be one row or one column, got {cols}x{rows}"
        )

    @property
    def size(self) -> int:
        """Number of table entries."""
        return self.width

    @property
    def table(self) -> np.ndarray:
        """Read-only entries, shape ``(size, bands)``."""
        return self._data[0]
