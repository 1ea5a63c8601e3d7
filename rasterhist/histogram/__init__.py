# -*- coding: utf-8 -*-
"""
Histogram Module - Computation and histogram-derived transforms.

compute.py
    ``histogram``, ``joint_histogram``, ``indexed_histogram``,
    ``projection``.
transforms.py
    ``normalize``, ``cumulative``, ``equalize``, ``match``, ``plot`` and
    the image-level ``histogram_plot``, ``equalize_image``,
    ``match_image``.
local.py
    ``local_equalize``: windowed equalisation.

Usage
-----
    >>> from rasterhist.histogram import histogram, cumulative
    >>> hist = histogram(image)
    >>> cdf = cumulative(hist)

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

from rasterhist.histogram.compute import (
    histogram,
    indexed_histogram,
    joint_histogram,
    projection,
)
from rasterhist.histogram.transforms import (
    cumulative,
    equalize,
    equalize_image,
    histogram_plot,
    match,
    match_image,
    normalize,
    plot,
)
from rasterhist.histogram.local import local_equalize

__all__ = [
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
]
