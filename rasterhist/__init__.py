# -*- coding: utf-8 -*-
"""
rasterhist - Histogram and lookup-table processing for raster images.

Computes per-band, joint and indexed histograms, builds lookup tables
from control points, maps rasters through them, and derives
equalisation, histogram matching, local contrast and tone curves from
histograms.  Rasters are ``(rows, cols, bands)`` numpy arrays wrapped in
``Raster``, with ``Histogram`` and ``Lut`` marking the two special
kinds.

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

__version__ = "0.1.0"

from rasterhist.exceptions import (
    RasterHistError,
    InvalidInputError,
    ComputationFailedError,
    FeatureUnavailableError,
)
from rasterhist.vocabulary import BandFormat, ProcessorCategory, RasterKind
from rasterhist.config import (
    EngineConfig,
    Feature,
    configure,
    get_config,
    reset_config,
)
from rasterhist.raster import Histogram, Lut, Raster
from rasterhist.histogram import (
    cumulative,
    equalize,
    equalize_image,
    histogram,
    histogram_plot,
    indexed_histogram,
    joint_histogram,
    local_equalize,
    match,
    match_image,
    normalize,
    plot,
    projection,
)
from rasterhist.lut import (
    LutApplication,
    apply_lut,
    build_lut,
    gamma_correct,
    identity,
    identity_wide,
    invert_lut,
)
from rasterhist.statistics import (
    monotonic,
    percentile_threshold,
    statistical_diff,
)
from rasterhist.tone import tone_build, tone_curve, tone_curve_analyzed

__all__ = [
    'RasterHistError',
    'InvalidInputError',
    'ComputationFailedError',
    'FeatureUnavailableError',
    'BandFormat',
    'ProcessorCategory',
    'RasterKind',
    'EngineConfig',
    'Feature',
    'configure',
    'get_config',
    'reset_config',
    'Raster',
    'Histogram',
    'Lut',
    'histogram',
    'joint_histogram',
    'indexed_histogram',
    'projection',
    'normalize',
    'cumulative',
    'equalize',
    'match',
    'plot',
    'histogram_plot',
    'equalize_image',
    'match_image',
    'local_equalize',
    'identity',
    'identity_wide',
    'build_lut',
    'invert_lut',
    'LutApplication',
    'apply_lut',
    'gamma_correct',
    'percentile_threshold',
    'monotonic',
    'statistical_diff',
    'tone_curve',
    'tone_build',
    'tone_curve_analyzed',
]
