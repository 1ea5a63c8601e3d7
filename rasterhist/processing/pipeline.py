# -*- coding: utf-8 -*-
"""
Pipeline - Sequential composition of raster transforms.

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
from typing import Any, List, Sequence

# rasterhist internal
from rasterhist.exceptions import InvalidInputError
from rasterhist.processing.base import RasterTransform
from rasterhist.raster import Raster

logger = logging.getLogger(__name__)


class Pipeline(RasterTransform):
    """Apply a sequence of ``RasterTransform`` steps in order.

    Each step receives the previous step's output.  A pipeline is itself
    a ``RasterTransform`` and can be nested.

    Parameters
    ----------
    steps : Sequence[RasterTransform]
        At least one transform.

    Examples
    --------
    >>> pipe = Pipeline([HistogramEqualization(), GammaCorrection(exponent=0.8)])
    >>> result = pipe.apply(image, progress_callback=print)
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[RasterTransform]) -> None:
        if not steps:
            raise InvalidInputError("Pipeline requires at least one transform")
        for i, step in enumerate(steps):
            if not isinstance(step, RasterTransform):
                raise TypeError(
                    f"Step {i} is not a RasterTransform: "
                    f"{type(step).__name__}"
                )
        self._steps: List[RasterTransform] = list(steps)

    @property
    def steps(self) -> List[RasterTransform]:
        """Shallow copy of the step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"Pipeline({[type(s).__name__ for s in self._steps]})"

    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        """Run every step.

        ``progress_callback`` is rescaled so each step reports within its
        equal share of the overall range; the remaining keyword arguments
        are forwarded to every step.
        """
        n = len(self._steps)
        outer = kwargs.pop('progress_callback', None)

        result = source
        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)
            step_kwargs = dict(kwargs)
            if outer is not None:
                step_kwargs['progress_callback'] = (
                    lambda f, _base=i / n: outer(_base + f / n)
                )
            result = step.apply(result, **step_kwargs)
            if outer is not None:
                outer((i + 1) / n)
        return result
