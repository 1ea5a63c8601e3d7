# -*- coding: utf-8 -*-
"""
Processing Module - Configurable processor objects over the raster tools.

base.py
    ``ImageProcessor`` and the ``RasterTransform`` ABC.
params.py
    ``Range``, ``Options``, ``Desc`` markers and ``ParamSpec``.
versioning.py
    ``@processor_version`` and ``@processor_tags``.
pipeline.py
    ``Pipeline``, sequential composition of transforms.
transforms.py
    ``LutMapping``, ``GammaCorrection``, ``HistogramEqualization``,
    ``HistogramMatching``, ``LocalEqualization``,
    ``StatisticalDifferencing``, ``ToneAdjustment``.

Usage
-----
    >>> from rasterhist.processing import Pipeline, HistogramEqualization
    >>> from rasterhist.processing import GammaCorrection
    >>> pipe = Pipeline([HistogramEqualization(), GammaCorrection(exponent=0.8)])
    >>> result = pipe.apply(image)

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

from rasterhist.processing.base import ImageProcessor, RasterTransform
from rasterhist.processing.params import Desc, Options, ParamSpec, Range
from rasterhist.processing.versioning import processor_tags, processor_version
from rasterhist.processing.pipeline import Pipeline
from rasterhist.processing.transforms import (
    GammaCorrection,
    HistogramEqualization,
    HistogramMatching,
    LocalEqualization,
    LutMapping,
    StatisticalDifferencing,
    ToneAdjustment,
)

__all__ = [
    'ImageProcessor',
    'RasterTransform',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'processor_version',
    'processor_tags',
    'Pipeline',
    'LutMapping',
    'GammaCorrection',
    'HistogramEqualization',
    'HistogramMatching',
    'LocalEqualization',
    'StatisticalDifferencing',
    'ToneAdjustment',
]
