# -*- coding: utf-8 -*-
"""
Exception Hierarchy - Domain-specific exceptions for histogram and LUT work.

Lets callers catch rasterhist failures distinctly from Python built-in
exceptions. Every exception subclasses both ``RasterHistError`` and the
closest built-in so existing ``except ValueError`` style handlers keep
working.

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


class RasterHistError(Exception):
    """Base exception for all rasterhist errors."""


class InvalidInputError(RasterHistError, ValueError):
    """A precondition on an input raster or parameter does not hold.

    Raised for wrong element-type classes, wrong band counts, mismatched
    geometries, degenerate control points and out-of-range parameters.
    Always raised before any output is allocated.
    """


class ComputationFailedError(RasterHistError, RuntimeError):
    """The numeric routine behind an operation failed.

    Carries the underlying diagnostic (for example numpy's floating-point
    error message) and is chained to the original exception.
    """


class FeatureUnavailableError(RasterHistError, RuntimeError):
    """An optional capability is disabled in the active configuration.

    See :func:`rasterhist.config.require_feature`.
    """
