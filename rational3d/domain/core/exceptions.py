# rational3d/domain/core/exceptions.py
"""Error taxonomy for the geometry kernel.

Every error raised by rational3d on purpose derives from ``GeometryError``
and carries a machine-readable code. None of these classes derive from
``ValueError``: pydantic only converts ``ValueError`` and ``AssertionError``
into ``ValidationError``, so a ``DegenerateInputError`` raised inside a model
validator reaches the caller with its own type.

Taxonomy
--------
- ``DegenerateInputError``       structural invariant violated at construction.
- ``PrecisionAmbiguousError``    a rounded result would contradict an exact predicate.
- ``UnsupportedPrecisionError``  requested OOM outside the configured bounds.
- ``ConfigurationError``         invalid precision settings.
"""

from __future__ import annotations


class GeometryError(Exception):
    """Base exception for all geometry-domain errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. ``"DEGENERATE_INPUT"``).
    """

    default_code: str = "GEOMETRY_ERROR"

    def __init__(self, message: str = "", *, code: str = "") -> None:
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, DegenerateInputError):
            return "degenerate"
        if isinstance(self, (PrecisionAmbiguousError, UnsupportedPrecisionError)):
            return "precision"
        if isinstance(self, ConfigurationError):
            return "configuration"
        return "geometry"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "message": self.message,
        }


class DegenerateInputError(GeometryError):
    """Raised when a primitive is constructed from degenerate input.

    Examples are a zero direction vector, coincident segment endpoints,
    collinear triangle points and coplanar tetrahedron points.
    """

    default_code = "DEGENERATE_INPUT"


class PrecisionAmbiguousError(GeometryError):
    """Raised when the requested OOM is too coarse for the geometry being measured."""

    default_code = "PRECISION_AMBIGUOUS"


class UnsupportedPrecisionError(GeometryError):
    """Raised when an OOM is not an integer or lies outside the configured bounds."""

    default_code = "UNSUPPORTED_PRECISION"


class ConfigurationError(GeometryError):
    """Raised when precision settings are invalid.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_code = "CONFIGURATION_INVALID"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")
