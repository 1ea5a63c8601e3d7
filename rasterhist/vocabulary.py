# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for rasterhist.

Defines the single source of truth for the controlled vocabularies used
across the package: sample element types (``BandFormat``), the tag that
tells images, histograms and lookup tables apart (``RasterKind``), and the
categories used to tag processors (``ProcessorCategory``).

``BandFormat`` is the table every other module dispatches on.  Lookups by
symbol or by numpy dtype are total: anything unknown maps to
``BandFormat.NOTSET``.

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
from enum import Enum
from typing import Optional, Tuple, Union

# Third-party
import numpy as np


class BandFormat(Enum):
    """Element type of the samples held by a raster.

    Values are the symbolic names used in metadata and user-facing
    messages.  Complex formats hold two floating-point halves per sample.
    """

    NOTSET = "notset"
    UCHAR = "uchar"
    CHAR = "char"
    USHORT = "ushort"
    SHORT = "short"
    UINT = "uint"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    DOUBLE = "double"
    DPCOMPLEX = "dbcomplex"

    @classmethod
    def from_symbol(cls, symbol: Union[str, 'BandFormat', None]) -> 'BandFormat':
        """Look up a format by its symbolic name.

        Parameters
        ----------
        symbol : str or BandFormat
            Name such as ``'uchar'`` (case-insensitive).

        Returns
        -------
        BandFormat
            The matching format, or ``NOTSET`` for unknown names.
        """
        if isinstance(symbol, BandFormat):
            return symbol
        if not isinstance(symbol, str):
            return cls.NOTSET
        try:
            return cls(symbol.strip().lower())
        except ValueError:
            return cls.NOTSET

    @classmethod
    def from_dtype(cls, dtype) -> 'BandFormat':
        """Look up the format matching a numpy dtype.

        Returns ``NOTSET`` for dtypes outside the enumeration (bool,
        64-bit integers, float16, strings, ...).
        """
        try:
            dtype = np.dtype(dtype).newbyteorder('=')
        except TypeError:
            return cls.NOTSET
        return _DTYPE_TO_FORMAT.get(dtype, cls.NOTSET)

    @property
    def symbol(self) -> str:
        """Symbolic name of the format."""
        return self.value

    @property
    def dtype(self) -> Optional[np.dtype]:
        """numpy dtype of one sample, ``None`` for ``NOTSET``."""
        return _FORMAT_TO_DTYPE.get(self)

    @property
    def itemsize(self) -> int:
        """Bytes per sample (both halves for complex formats)."""
        dtype = self.dtype
        return 0 if dtype is None else dtype.itemsize

    @property
    def is_unsigned(self) -> bool:
        return self in (BandFormat.UCHAR, BandFormat.USHORT, BandFormat.UINT)

    @property
    def is_signed(self) -> bool:
        return self in (BandFormat.CHAR, BandFormat.SHORT, BandFormat.INT)

    @property
    def is_integer(self) -> bool:
        return self.is_unsigned or self.is_signed

    @property
    def is_float(self) -> bool:
        return self in (BandFormat.FLOAT, BandFormat.DOUBLE)

    @property
    def is_complex(self) -> bool:
        return self in (BandFormat.COMPLEX, BandFormat.DPCOMPLEX)

    @property
    def domain(self) -> Optional[Tuple[float, float]]:
        """Smallest and largest representable value.

        Complex formats report the domain of one real half.  ``NOTSET``
        has no domain.
        """
        dtype = self.dtype
        if dtype is None:
            return None
        if self.is_integer:
            info = np.iinfo(dtype)
            return int(info.min), int(info.max)
        finfo = np.finfo(dtype)
        return float(finfo.min), float(finfo.max)

    @property
    def accumulator(self) -> 'BandFormat':
        """Widened format used when summing samples of this format.

        Unsigned formats sum into ``UINT``, signed into ``INT`` and
        floating formats into ``DOUBLE``.  Complex and unset formats have
        no accumulator and return ``NOTSET``.
        """
        if self.is_unsigned:
            return BandFormat.UINT
        if self.is_signed:
            return BandFormat.INT
        if self.is_float:
            return BandFormat.DOUBLE
        return BandFormat.NOTSET


_FORMAT_TO_DTYPE = {
    BandFormat.UCHAR: np.dtype(np.uint8),
    BandFormat.CHAR: np.dtype(np.int8),
    BandFormat.USHORT: np.dtype(np.uint16),
    BandFormat.SHORT: np.dtype(np.int16),
    BandFormat.UINT: np.dtype(np.uint32),
    BandFormat.INT: np.dtype(np.int32),
    BandFormat.FLOAT: np.dtype(np.float32),
    BandFormat.COMPLEX: np.dtype(np.complex64),
    BandFormat.DOUBLE: np.dtype(np.float64),
    BandFormat.DPCOMPLEX: np.dtype(np.complex128),
}

_DTYPE_TO_FORMAT = {dtype: fmt for fmt, dtype in _FORMAT_TO_DTYPE.items()}


class RasterKind(Enum):
    """What a sample buffer represents.

    Images, histograms and lookup tables share one buffer abstraction;
    the kind keeps them from being used in each other's place.
    """

    IMAGE = "image"
    HISTOGRAM = "histogram"
    LUT = "lut"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    HISTOGRAM = "histogram"
    LUT = "lut"
    ENHANCE = "enhance"
    STATISTICS = "statistics"
