# -*- coding: utf-8 -*-
"""
Raster Transforms - Processor wrappers around the histogram and LUT tools.

- ``LutMapping``: map through a fixed ``Lut``.
- ``GammaCorrection``: power-law table for 8/16-bit images.
- ``HistogramEqualization``: global equalisation.
- ``HistogramMatching``: match the histogram of a fixed reference image.
- ``LocalEqualization``: windowed equalisation.
- ``StatisticalDifferencing``: windowed mean/deviation contrast remap.
- ``ToneAdjustment``: tone curve fitted to the source's own histogram.

Every transform accepts its settings as keyword overrides on ``apply``.

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
from typing import Annotated, Any

# rasterhist internal
from rasterhist._validation import require_kind
from rasterhist.histogram.local import local_equalize
from rasterhist.histogram.transforms import equalize_image, match_image
from rasterhist.lut.apply import apply_lut, gamma_correct
from rasterhist.processing.base import RasterTransform
from rasterhist.processing.params import Desc, Range
from rasterhist.processing.versioning import processor_tags, processor_version
from rasterhist.raster import Lut, Raster
from rasterhist.statistics import statistical_diff
from rasterhist.tone import tone_curve_analyzed
from rasterhist.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.LUT,
                description='Map samples through a fixed lookup table')
class LutMapping(RasterTransform):
    """Map every sample through a fixed table.

    Parameters
    ----------
    lut : Lut
        Table applied by every call.  The output has its element type.

    Examples
    --------
    >>> invert = LutMapping(build_lut([[0, 255], [255, 0]]))
    >>> negative = invert.apply(image)
    """

    def __init__(self, lut: Lut) -> None:
        require_kind(lut, Lut, 'lut', 'LutMapping')
        self.lut = lut

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        result = apply_lut(source, self.lut)
        self._report_progress(kwargs, 1.0)
        return result.image


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Power-law intensity correction')
class GammaCorrection(RasterTransform):
    """Gamma-correct a ``uchar`` or ``ushort`` image.

    Parameters
    ----------
    exponent : float
        Output is ``range * (v / range) ** exponent``.  Values below 1
        brighten.  Default ``1.0``.
    """

    exponent: Annotated[float, Range(min=0.05, max=20.0),
                        Desc('Power-law exponent')] = 1.0

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        params = self._resolve_params(kwargs)
        result = gamma_correct(source, params['exponent'])
        self._report_progress(kwargs, 1.0)
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.HISTOGRAM,
                description='Global histogram equalisation')
class HistogramEqualization(RasterTransform):
    """Spread the tonal range of a ``uchar`` or ``ushort`` image.

    Parameters
    ----------
    band : int
        Band whose histogram drives the mapping of every band, or ``-1``
        to equalise each band by its own histogram.  Default ``-1``.
    """

    band: Annotated[int, Range(min=-1),
                    Desc('Driving band, -1 for each band separately')] = -1

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        band = self._resolve_params(kwargs)['band']
        result = equalize_image(source, None if band < 0 else band)
        self._report_progress(kwargs, 1.0)
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.HISTOGRAM,
                description='Match the histogram of a reference image')
class HistogramMatching(RasterTransform):
    """Remap images so their histograms resemble a reference's.

    Parameters
    ----------
    reference : Raster
        ``uchar``/``ushort`` image with as many bands as the sources
        this processor will see.
    """

    def __init__(self, reference: Raster) -> None:
        require_kind(reference, Raster, 'reference', 'HistogramMatching')
        self.reference = reference

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        result = match_image(source, self.reference)
        self._report_progress(kwargs, 1.0)
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Windowed histogram equalisation')
class LocalEqualization(RasterTransform):
    """Equalise each pixel against its own neighbourhood.

    Parameters
    ----------
    win_x, win_y : int
        Window width and height.  Default ``7`` x ``7``.
    """

    win_x: Annotated[int, Range(min=1), Desc('Window width')] = 7
    win_y: Annotated[int, Range(min=1), Desc('Window height')] = 7

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        params = self._resolve_params(kwargs)
        result = local_equalize(source, params['win_x'], params['win_y'])
        self._report_progress(kwargs, 1.0)
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.STATISTICS,
                description='Local mean and deviation contrast remap')
class StatisticalDifferencing(RasterTransform):
    """Statistical differencing of a single-band ``uchar`` image.

    Parameters
    ----------
    a : float
        Weight of the target mean.  Default ``0.5``.
    m0 : float
        Target mean.  Default ``128.0``.
    b : float
        Weight of the target deviation.  Default ``0.5``.
    s0 : float
        Target standard deviation.  Default ``50.0``.
    win_x, win_y : int
        Window size.  Default ``11`` x ``11``.
    """

    a: Annotated[float, Range(min=0.0, max=1.0), Desc('Mean weight')] = 0.5
    m0: Annotated[float, Range(min=0.0), Desc('Target mean')] = 128.0
    b: Annotated[float, Range(min=0.0, max=2.0),
                 Desc('Deviation weight')] = 0.5
    s0: Annotated[float, Range(min=0.0),
                  Desc('Target standard deviation')] = 50.0
    win_x: Annotated[int, Range(min=1), Desc('Window width')] = 11
    win_y: Annotated[int, Range(min=1), Desc('Window height')] = 11

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        p = self._resolve_params(kwargs)
        result = statistical_diff(source, p['a'], p['m0'], p['b'],
                                  p['s0'], p['win_x'], p['win_y'])
        self._report_progress(kwargs, 1.0)
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Tone curve fitted to the image histogram')
class ToneAdjustment(RasterTransform):
    """Fit a tone curve to the source and apply it.

    The black and white points come from the 0.1% and 99.9% points of
    the histogram of *band*; the curve is mapped through every band and
    the result keeps the source's element type.

    Parameters
    ----------
    ps, pm, ph : float
        Shadow, midtone and highlight positions, ``ps < pm < ph``.
    s, m, h : float
        Shadow, midtone and highlight adjustments on the 0-100 scale.
    band : int
        Band to analyse.
    """

    ps: Annotated[float, Range(min=0.0, max=1.0),
                  Desc('Shadow position')] = 0.2
    pm: Annotated[float, Range(min=0.0, max=1.0),
                  Desc('Midtone position')] = 0.5
    ph: Annotated[float, Range(min=0.0, max=1.0),
                  Desc('Highlight position')] = 0.8
    s: Annotated[float, Range(min=-30.0, max=30.0),
                 Desc('Shadow adjustment')] = 0.0
    m: Annotated[float, Range(min=-30.0, max=30.0),
                 Desc('Midtone adjustment')] = 0.0
    h: Annotated[float, Range(min=-30.0, max=30.0),
                 Desc('Highlight adjustment')] = 0.0
    band: Annotated[int, Range(min=0), Desc('Band to analyse')] = 0

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        p = self._resolve_params(kwargs)
        curve = tone_curve_analyzed(source, p['ps'], p['pm'], p['ph'],
                                    p['s'], p['m'], p['h'], band=p['band'])
        self._report_progress(kwargs, 0.5)

        # The curve tops out at the source range, so narrowing is exact.
        fmt = source.band_format
        curve = Lut(curve.data.astype(fmt.dtype), fmt)
        result = apply_lut(source, curve).image
        self._report_progress(kwargs, 1.0)
        return result
