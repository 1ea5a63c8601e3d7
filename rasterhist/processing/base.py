# -*- coding: utf-8 -*-
"""
Processor Base Classes - Configurable raster-to-raster operations.

``ImageProcessor`` is the common base of every processor.  It warns once
per class when no ``@processor_version`` was declared, collects the
``Annotated`` settings of subclasses into ``__param_specs__`` (generating
an ``__init__`` when the class has none) and resolves runtime overrides
passed as keyword arguments.

``RasterTransform`` is the ABC for processors mapping one ``Raster`` to
another.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# rasterhist internal
from rasterhist.processing.params import (
    ParamSpec,
    collect_param_specs,
    make_init,
)
from rasterhist.raster import Raster

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """Common base class for processors.

    Subclasses declare tunable settings as ``Annotated`` class attributes
    (see :mod:`rasterhist.processing.params`).  Settings given at
    construction become instance attributes; the same names passed to a
    processing call override them for that call only.
    """

    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        # Checked here rather than in __init_subclass__ so class
        # decorators have already run.
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (not getattr(cls, '__processor_version__', None)
                    and not getattr(cls, '__abstractmethods__', None)):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor "
                    f"version. Use @processor_version('x.y.z') to declare "
                    f"one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance settings with per-call overrides in *kwargs*.

        Keys that are not declared settings (``progress_callback`` for
        example) are ignored.  Every resolved value is validated.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        InvalidInputError
            If a value violates its range or choices.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs.get(spec.name, getattr(self, spec.name))
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(self, kwargs: Dict[str, Any],
                         fraction: float) -> None:
        """Call the optional ``progress_callback`` with *fraction*."""
        callback = kwargs.get('progress_callback')
        if callback is not None:
            callback(float(fraction))


class RasterTransform(ImageProcessor):
    """Abstract base class for raster-to-raster transforms."""

    @abstractmethod
    def apply(self, source: Raster, **kwargs: Any) -> Raster:
        """Transform *source* and return a new raster.

        Parameters
        ----------
        source : Raster
            Input raster; never modified.
        **kwargs
            Per-call setting overrides and an optional
            ``progress_callback`` taking a fraction in ``[0, 1]``.
        """
        ...
