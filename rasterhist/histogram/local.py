# -*- coding: utf-8 -*-
"""
Local Histogram Equalisation - Windowed equalisation of monochrome images.

Each output pixel is the rank of the input pixel within the window
centred on it, scaled to the bin count:
``count(window < centre) * bins // (win_x * win_y)``.  Border pixels see
the image edge replicated outwards, so the output has the input's size.

Windows are read through ``numpy.lib.stride_tricks.sliding_window_view``
over the edge-padded image and evaluated a block of rows at a time
(``EngineConfig.window_block_rows``) to bound temporary memory.

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
from numpy.lib.stride_tricks import sliding_window_view

# rasterhist internal
from rasterhist._validation import (
    HISTOGRAM_FORMATS,
    bin_count,
    require_bands,
    require_format,
    require_kind,
    require_positive_int,
)
from rasterhist.config import get_config
from rasterhist.raster import Raster

logger = logging.getLogger(__name__)


def edge_padding(size: int):
    """Samples to replicate before and after the centre of a window."""
    before = size // 2
    return before, size - 1 - before


def local_equalize(image: Raster, win_x: int, win_y: int) -> Raster:
    """Equalise every pixel against the histogram of its neighbourhood.

    Parameters
    ----------
    image : Raster
        Single-band ``uchar`` or ``ushort`` image.
    win_x, win_y : int
        Window width and height in pixels, both >= 1.

    Returns
    -------
    Raster
        Equalised image, same size and format as the input.

    Examples
    --------
    >>> out = local_equalize(image, 7, 7)
    """
    operation = 'local_equalize'
    require_kind(image, Raster, 'image', operation)
    require_format(image, HISTOGRAM_FORMATS, operation)
    require_bands(image, (1,), operation)
    require_positive_int(win_x, 'win_x', operation)
    require_positive_int(win_y, 'win_y', operation)

    plane = image.data[:, :, 0]
    nbins = bin_count(image.band_format)
    npels = win_x * win_y

    padded = np.pad(plane, (edge_padding(win_y), edge_padding(win_x)),
                    mode='edge')
    windows = sliding_window_view(padded, (win_y, win_x))

    out = np.empty(plane.shape, dtype=plane.dtype)
    block = get_config().window_block_rows
    for start in range(0, image.height, block):
        stop = min(start + block, image.height)
        centre = plane[start:stop, :, np.newaxis, np.newaxis]
        below = np.count_nonzero(windows[start:stop] < centre, axis=(2, 3))
        out[start:stop] = (below.astype(np.int64) * nbins) // npels

    logger.debug("local_equalize: %dx%d image, %dx%d window",
                 image.width, image.height, win_x, win_y)
    return image.same_size(out[:, :, np.newaxis], image.band_format)
