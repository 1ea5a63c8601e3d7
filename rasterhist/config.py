# -*- coding: utf-8 -*-
"""
Engine Configuration - Capability flags and execution settings.

Optional operations (percentile lookup on a precomputed histogram,
histogram-driven tone analysis) are gated by capability flags resolved
once at configuration time instead of being branched on a library
version at every call.  Windowed operations read their row block size
from here as well.

The configuration is resolved lazily from the environment on first use:

- ``RASTERHIST_DISABLED_FEATURES``: comma-separated ``Feature`` values to
  switch off, e.g. ``"tone_analysis"``.
- ``RASTERHIST_WINDOW_BLOCK_ROWS``: output rows evaluated per block by
  ``local_equalize``.

Usage
-----
    >>> from rasterhist.config import Feature, configure, get_config
    >>> configure(features=frozenset({Feature.PERCENTILE_FROM_HISTOGRAM}))
    >>> get_config().enabled(Feature.TONE_ANALYSIS)
    False

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
import dataclasses
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional

# rasterhist internal
from rasterhist.exceptions import FeatureUnavailableError, InvalidInputError

logger = logging.getLogger(__name__)

ENV_DISABLED_FEATURES = 'RASTERHIST_DISABLED_FEATURES'
ENV_WINDOW_BLOCK_ROWS = 'RASTERHIST_WINDOW_BLOCK_ROWS'

DEFAULT_WINDOW_BLOCK_ROWS = 64


class Feature(Enum):
    """Optional capabilities that may be switched off."""

    PERCENTILE_FROM_HISTOGRAM = "percentile_from_histogram"
    TONE_ANALYSIS = "tone_analysis"


def _all_features() -> FrozenSet[Feature]:
    return frozenset(Feature)


@dataclass(frozen=True)
class EngineConfig:
    """Resolved engine settings.

    Attributes
    ----------
    features : FrozenSet[Feature]
        Capabilities available to callers.  All are enabled by default.
    window_block_rows : int
        Output rows evaluated per block by windowed operations.  Only
        bounds temporary memory; results do not depend on it.
    """

    features: FrozenSet[Feature] = field(default_factory=_all_features)
    window_block_rows: int = DEFAULT_WINDOW_BLOCK_ROWS

    def __post_init__(self) -> None:
        if not isinstance(self.window_block_rows, int) or self.window_block_rows < 1:
            raise InvalidInputError(
                f"window_block_rows must be a positive integer, "
                f"got {self.window_block_rows!r}"
            )
        for feature in self.features:
            if not isinstance(feature, Feature):
                raise InvalidInputError(
                    f"features must be Feature members, got {feature!r}"
                )

    def enabled(self, feature: Feature) -> bool:
        """Whether *feature* is available."""
        return feature in self.features

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> 'EngineConfig':
        """Build a configuration from environment variables.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Variables to read.  Defaults to ``os.environ``.

        Raises
        ------
        InvalidInputError
            If a disabled feature name is unknown or the block size is
            not a positive integer.
        """
        env = os.environ if environ is None else environ

        disabled = set()
        for name in env.get(ENV_DISABLED_FEATURES, '').split(','):
            name = name.strip().lower()
            if not name:
                continue
            try:
                disabled.add(Feature(name))
            except ValueError:
                valid = tuple(f.value for f in Feature)
                raise InvalidInputError(
                    f"{ENV_DISABLED_FEATURES} names unknown feature "
                    f"{name!r}; expected one of {valid}"
                ) from None

        raw_rows = env.get(ENV_WINDOW_BLOCK_ROWS, '').strip()
        if raw_rows:
            try:
                block_rows = int(raw_rows)
            except ValueError:
                raise InvalidInputError(
                    f"{ENV_WINDOW_BLOCK_ROWS} must be an integer, "
                    f"got {raw_rows!r}"
                ) from None
        else:
            block_rows = DEFAULT_WINDOW_BLOCK_ROWS

        return cls(
            features=_all_features() - disabled,
            window_block_rows=block_rows,
        )


_active: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Return the active configuration, resolving it on first use."""
    global _active
    if _active is None:
        _active = EngineConfig.from_environment()
        logger.debug("Resolved engine configuration from environment: %s",
                     _active)
    return _active


def configure(config: Optional[EngineConfig] = None,
              **overrides: Any) -> EngineConfig:
    """Install a configuration.

    Parameters
    ----------
    config : EngineConfig, optional
        Configuration to install.  Defaults to the active one.
    **overrides
        Field replacements applied on top of *config*.

    Returns
    -------
    EngineConfig
        The configuration now in effect.
    """
    global _active
    base = config if config is not None else get_config()
    if overrides:
        base = dataclasses.replace(base, **overrides)
    _active = base
    logger.debug("Installed engine configuration: %s", _active)
    return _active


def reset_config() -> None:
    """Forget the active configuration so the next read re-resolves it."""
    global _active
    _active = None


def require_feature(feature: Feature, operation: str) -> None:
    """Fail unless *feature* is enabled.

    Raises
    ------
    FeatureUnavailableError
        If the active configuration disables *feature*.
    """
    if not get_config().enabled(feature):
        raise FeatureUnavailableError(
            f"{operation} requires the '{feature.value}' capability, "
            f"which is disabled in the active configuration"
        )
