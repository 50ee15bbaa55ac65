# rational3d/domain/core/settings.py
"""Precision settings loaded from environment variables.

Defaults come from ``rational3d.domain.geometry.constants``. The
environment can override them:

- ``RATIONAL3D_DEFAULT_OOM``       default order of magnitude for rounded results
- ``RATIONAL3D_DEFAULT_ROUNDING``  default rounding mode (e.g. ``HALF_EVEN``)
- ``RATIONAL3D_MIN_OOM``           finest OOM a caller may request
- ``RATIONAL3D_MAX_OOM``           coarsest OOM a caller may request

``from_env()`` fails fast with ``ConfigurationError`` on any value that
cannot be parsed or is out of range.
"""
import logging
import os
from typing import Mapping, Optional, Tuple

from pydantic import Field, ValidationError, model_validator

from rational3d.domain.core.exceptions import ConfigurationError, UnsupportedPrecisionError
from rational3d.domain.core.numbers import RoundingMode
from rational3d.domain.geometry.constants import (
    DEFAULT_OOM,
    DEFAULT_ROUNDING,
    MAX_OOM,
    MIN_OOM,
)
from rational3d.utils.base_model import ImmutableModel

logger = logging.getLogger(__name__)

ENV_PREFIX = "RATIONAL3D_"


class PrecisionSettings(ImmutableModel):
    """Immutable precision configuration shared by every query."""
    default_oom: int = Field(default=DEFAULT_OOM, description="Default order of magnitude")
    default_rounding: RoundingMode = Field(default=DEFAULT_ROUNDING, description="Default rounding mode")
    min_oom: int = Field(default=MIN_OOM, description="Finest supported order of magnitude")
    max_oom: int = Field(default=MAX_OOM, description="Coarsest supported order of magnitude")

    @model_validator(mode="after")
    def validate_bounds(self) -> "PrecisionSettings":
        """Validate that the default OOM lies within the supported bounds."""
        if self.min_oom > self.max_oom:
            raise ConfigurationError(
                "min_oom", self.min_oom, f"must not exceed max_oom ({self.max_oom})"
            )
        if not self.min_oom <= self.default_oom <= self.max_oom:
            raise ConfigurationError(
                "default_oom", self.default_oom,
                f"must lie within [{self.min_oom}, {self.max_oom}]"
            )
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PrecisionSettings":
        """
        Load settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Validated settings

        Raises:
            ConfigurationError: If a value cannot be parsed or is out of range
        """
        if environ is None:
            environ = os.environ

        values = {}
        for name in ("default_oom", "min_oom", "max_oom"):
            key = ENV_PREFIX + name.upper()
            raw = environ.get(key)
            if raw is None:
                continue
            try:
                values[name] = int(raw)
            except ValueError as e:
                raise ConfigurationError(key, raw, "must be an integer") from e

        rounding_key = ENV_PREFIX + "DEFAULT_ROUNDING"
        raw_rounding = environ.get(rounding_key)
        if raw_rounding is not None:
            try:
                values["default_rounding"] = RoundingMode[raw_rounding.strip().upper()]
            except KeyError as e:
                allowed = ", ".join(mode.name for mode in RoundingMode)
                raise ConfigurationError(rounding_key, raw_rounding, f"must be one of {allowed}") from e

        try:
            settings = cls(**values)
        except ValidationError as e:
            raise ConfigurationError("settings", values, str(e)) from e
        logger.debug(f"Loaded precision settings: {settings}")
        return settings


_settings: Optional[PrecisionSettings] = None


def get_settings() -> PrecisionSettings:
    """Return the active settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = PrecisionSettings.from_env()
    return _settings


def configure(settings: PrecisionSettings) -> None:
    """Replace the active settings."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Forget the active settings so the next access reloads them."""
    global _settings
    _settings = None


def validate_oom(oom: int, settings: Optional[PrecisionSettings] = None) -> int:
    """
    Check that an order of magnitude is supported.

    Raises:
        UnsupportedPrecisionError: If oom is not an int or is out of bounds
    """
    if settings is None:
        settings = get_settings()
    if isinstance(oom, bool) or not isinstance(oom, int):
        raise UnsupportedPrecisionError(f"Order of magnitude must be an integer, got {oom!r}")
    if not settings.min_oom <= oom <= settings.max_oom:
        raise UnsupportedPrecisionError(
            f"Order of magnitude {oom} is outside the supported range "
            f"[{settings.min_oom}, {settings.max_oom}]"
        )
    return oom


def resolve_precision(oom: Optional[int] = None,
                      rounding: Optional[RoundingMode] = None) -> Tuple[int, RoundingMode]:
    """Fill in defaults for missing precision arguments and validate them."""
    settings = get_settings()
    if oom is None:
        oom = settings.default_oom
    if rounding is None:
        rounding = settings.default_rounding
    try:
        rounding = RoundingMode(rounding)
    except ValueError as e:
        raise UnsupportedPrecisionError(f"Unknown rounding mode {rounding!r}") from e
    return validate_oom(oom, settings), rounding
