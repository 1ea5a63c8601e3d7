# -*- coding: utf-8 -*-
"""
LUT Module - Build lookup tables and map rasters through them.

build.py
    ``identity``, ``identity_wide``, ``build_lut``, ``invert_lut``.
apply.py
    ``apply_lut`` (returns ``LutApplication``), ``gamma_correct``.

Usage
-----
    >>> from rasterhist.lut import build_lut, apply_lut
    >>> lut = build_lut([[0, 0], [255, 100]])
    >>> mapped, overflow = apply_lut(image, lut)

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

from rasterhist.lut.build import (
    build_lut,
    identity,
    identity_wide,
    invert_lut,
)
from rasterhist.lut.apply import LutApplication, apply_lut, gamma_correct

__all__ = [
    'identity',
    'identity_wide',
    'build_lut',
    'invert_lut',
    'LutApplication',
    'apply_lut',
    'gamma_correct',
]
