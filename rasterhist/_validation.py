# -*- coding: utf-8 -*-
"""
Validation Helpers - Shared precondition checks and numeric guards.

Every public operation calls these helpers before allocating output so
that precondition failures surface as ``InvalidInputError`` with a
message naming the operation, and numeric failures surface as
``ComputationFailedError`` carrying numpy's diagnostic.

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
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional, Type

# Third-party
import numpy as np

# rasterhist internal
from rasterhist.exceptions import ComputationFailedError, InvalidInputError
from rasterhist.raster import Raster
from rasterhist.vocabulary import BandFormat

HISTOGRAM_FORMATS = (BandFormat.UCHAR, BandFormat.USHORT)


def require_kind(obj, cls: Type[Raster], name: str, operation: str) -> None:
    """Check that *obj* is an instance of the raster class *cls*.

    Raises
    ------
    InvalidInputError
        If *obj* is not a *cls*.  Messages name the explicit conversion
        to use when a different raster kind was passed.
    """
    if isinstance(obj, cls):
        return
    if isinstance(obj, Raster):
        raise InvalidInputError(
            f"{operation}: {name} must be a {cls.kind.value}, got a "
            f"{obj.kind.value}; convert it explicitly with "
            f"as_{cls.kind.value}()"
        )
    raise InvalidInputError(
        f"{operation}: {name} must be a {cls.__name__}, "
        f"got {type(obj).__name__}"
    )


def require_format(raster: Raster, allowed: Iterable[BandFormat],
                   operation: str) -> None:
    """Check the raster's element type against *allowed*."""
    allowed = tuple(allowed)
    if raster.band_format not in allowed:
        raise InvalidInputError(
            f"{operation}: element type must be one of "
            f"{[f.symbol for f in allowed]}, got '{raster.band_format.symbol}'"
        )


def require_non_complex(raster: Raster, operation: str) -> None:
    if raster.band_format.is_complex:
        raise InvalidInputError(
            f"{operation}: complex element types are not supported, "
            f"got '{raster.band_format.symbol}'"
        )


def require_bands(raster: Raster, allowed: Iterable[int],
                  operation: str) -> None:
    allowed = tuple(allowed)
    if raster.bands not in allowed:
        raise InvalidInputError(
            f"{operation}: band count must be one of {list(allowed)}, "
            f"got {raster.bands}"
        )


def require_one_dimensional(raster: Raster, operation: str) -> None:
    """Check that the raster is a single row or a single column."""
    if raster.width != 1 and raster.height != 1:
        raise InvalidInputError(
            f"{operation}: expected a one-row or one-column raster, "
            f"got {raster.width}x{raster.height}"
        )


def require_positive_int(value, name: str, operation: str,
                         maximum: Optional[int] = None) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInputError(
            f"{operation}: {name} must be an integer, "
            f"got {type(value).__name__}"
        )
    if value < 1:
        raise InvalidInputError(f"{operation}: {name} must be >= 1, got {value}")
    if maximum is not None and value > maximum:
        raise InvalidInputError(
            f"{operation}: {name} must be <= {maximum}, got {value}"
        )


def require_range(value: float, name: str, operation: str,
                  low: Optional[float] = None,
                  high: Optional[float] = None) -> None:
    """Check ``low <= value <= high`` (either bound optional)."""
    if np.isnan(value):
        raise InvalidInputError(
            f"{operation}: {name} must be a number, got {value}"
        )
    if low is not None and value < low:
        raise InvalidInputError(
            f"{operation}: {name} must be >= {low}, got {value}"
        )
    if high is not None and value > high:
        raise InvalidInputError(
            f"{operation}: {name} must be <= {high}, got {value}"
        )


def bin_count(band_format: BandFormat) -> int:
    """Histogram bins needed for an 8- or 16-bit unsigned format."""
    return 256 if band_format is BandFormat.UCHAR else 65536


@contextmanager
def numeric_guard(operation: str) -> Iterator[None]:
    """Turn numpy floating-point errors into ``ComputationFailedError``.

    Divide-by-zero, invalid operations and overflow raise inside the
    block; the diagnostic is carried on the new exception.
    """
    with np.errstate(divide='raise', invalid='raise', over='raise'):
        try:
            yield
        except FloatingPointError as exc:
            raise ComputationFailedError(f"{operation}: {exc}") from exc


def checked_cast(values: np.ndarray, band_format: BandFormat,
                 operation: str) -> np.ndarray:
    """Narrow wide integer results into *band_format*.

    Raises
    ------
    ComputationFailedError
        If any value falls outside the format's domain.
    """
    low, high = band_format.domain
    if values.size and (values.min() < low or values.max() > high):
        raise ComputationFailedError(
            f"{operation}: result range [{values.min()}, {values.max()}] "
            f"does not fit element type '{band_format.symbol}'"
        )
    return values.astype(band_format.dtype)
