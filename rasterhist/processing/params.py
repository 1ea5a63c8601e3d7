# -*- coding: utf-8 -*-
"""
Tunable Parameters - Constraint markers for processor settings.

Processor classes declare their settings as ``typing.Annotated`` class
attributes carrying ``Range``, ``Options`` and ``Desc`` markers::

    class GammaCorrection(RasterTransform):
        exponent: Annotated[float, Range(min=0.05, max=20.0),
                            Desc('Power-law exponent')] = 1.0

``collect_param_specs`` turns those declarations into ``ParamSpec``
records and ``make_init`` builds a keyword-only ``__init__`` that
validates every value.

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
import inspect
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# Third-party
import numpy as np

# rasterhist internal
from rasterhist.exceptions import InvalidInputError

Number = Union[int, float]


class ParamMeta:
    """Base for metadata markers recognised inside ``Annotated``."""


class Range(ParamMeta):
    """Inclusive numeric bounds; either side may be omitted."""

    __slots__ = ('min', 'max')

    def __init__(self, min: Optional[Number] = None,
                 max: Optional[Number] = None) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        return f"Range(min={self.min!r}, max={self.max!r})"


class Options(ParamMeta):
    """Closed set of allowed values."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """One-line description of a setting."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


@dataclass(frozen=True)
class ParamSpec:
    """Resolved declaration of one tunable setting.

    Attributes
    ----------
    name : str
        Keyword name of the setting.
    param_type : type
        Expected type; ``int`` values are accepted for ``float``
        settings and ``object`` disables the type check.
    default : Any
        Value used when none is given (meaningless if ``required``).
    required : bool
        True when the declaration has no default.
    description : str
        Text from ``Desc``, or empty.
    min_value, max_value : int, float or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    name: str
    param_type: type
    default: Any = None
    required: bool = False
    description: str = ''
    min_value: Optional[Number] = None
    max_value: Optional[Number] = None
    choices: Optional[Tuple[Any, ...]] = None

    def _type_ok(self, value: Any) -> bool:
        if self.param_type is object:
            return True
        if self.param_type is float:
            return (isinstance(value, (int, float, np.integer, np.floating))
                    and not isinstance(value, bool))
        if self.param_type is int:
            return (isinstance(value, (int, np.integer))
                    and not isinstance(value, bool))
        return isinstance(value, self.param_type)

    def validate(self, value: Any) -> None:
        """Check *value* against the declared type and constraints.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        InvalidInputError
            If *value* is out of range or not one of the choices.
        """
        if not self._type_ok(value):
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )
        if self.min_value is not None and value < self.min_value:
            raise InvalidInputError(
                f"Parameter '{self.name}' value {value!r} is below "
                f"minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise InvalidInputError(
                f"Parameter '{self.name}' value {value!r} is above "
                f"maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise InvalidInputError(
                f"Parameter '{self.name}' value {value!r} is not one of "
                f"{self.choices!r}"
            )


_MISSING = object()


def _spec_from_hint(cls: type, name: str, hint: Any) -> Optional[ParamSpec]:
    markers = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
    if not markers:
        return None
    bounds = next((m for m in markers if isinstance(m, Range)), None)
    options = next((m for m in markers if isinstance(m, Options)), None)
    desc = next((m for m in markers if isinstance(m, Desc)), None)
    if bounds is not None and options is not None:
        raise TypeError(
            f"Parameter '{name}' on {cls.__qualname__}: Range and Options "
            f"are mutually exclusive"
        )
    default = getattr(cls, name, _MISSING)
    return ParamSpec(
        name=name,
        param_type=hint.__args__[0],
        default=None if default is _MISSING else default,
        required=default is _MISSING,
        description=desc.text if desc else '',
        min_value=bounds.min if bounds else None,
        max_value=bounds.max if bounds else None,
        choices=options.choices if options else None,
    )


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Gather the ``ParamSpec`` of every annotated setting on *cls*.

    Settings are ordered base class first, then in declaration order.
    """
    hints = get_type_hints(cls, include_extras=True)
    names = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in hints and name not in names:
                names.append(name)

    specs = []
    for name in names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        spec = _spec_from_hint(cls, name, hint)
        if spec is not None:
            specs.append(spec)
    return tuple(specs)


def make_init(specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only ``__init__`` that validates and stores *specs*.

    Unknown keywords and missing required settings raise ``TypeError``.
    ``__post_init__`` is called afterwards when the class defines one.
    """
    def __init__(self, **kwargs):
        unexpected = set(kwargs) - {spec.name for spec in specs}
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected keyword "
                f"arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif spec.required:
                raise TypeError(
                    f"{type(self).__name__}() missing required keyword "
                    f"argument: '{spec.name}'"
                )
            else:
                value = spec.default
            spec.validate(value)
            setattr(self, spec.name, value)
        if hasattr(self, '__post_init__'):
            self.__post_init__()

    parameters = [
        inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    for spec in specs:
        parameters.append(inspect.Parameter(
            spec.name,
            inspect.Parameter.KEYWORD_ONLY,
            default=(inspect.Parameter.empty if spec.required
                     else spec.default),
        ))
    __init__.__signature__ = inspect.Signature(parameters)
    __init__.__qualname__ = '__init__'
    return __init__
