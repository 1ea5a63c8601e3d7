# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability tags for processor classes.

``@processor_version`` stamps ``__processor_version__``; without an
explicit version the installed ``rasterhist`` distribution version is
used.  ``@processor_tags`` stamps ``__processor_tags__`` with a
``ProcessorCategory`` and a short description so tools can list
processors by purpose.

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
import importlib.metadata
from typing import Optional, Type, TypeVar

# rasterhist internal
from rasterhist.vocabulary import ProcessorCategory

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator setting ``__processor_version__``.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class Passthrough(RasterTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> Passthrough.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version(
                    'rasterhist'
                )
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(category: Optional[ProcessorCategory] = None,
                   description: Optional[str] = None):
    """Class decorator setting ``__processor_tags__``.

    Raises
    ------
    TypeError
        If *category* is not a ``ProcessorCategory`` member.
    """
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'category': category,
            'description': description,
        }
        return cls
    return decorator
