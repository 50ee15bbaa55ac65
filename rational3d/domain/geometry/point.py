# rational3d/domain/geometry/point.py
import logging
from decimal import Decimal
from fractions import Fraction
from functools import cached_property
from typing import TYPE_CHECKING, Optional, Tuple, Union

from pydantic import Field, model_validator

from rational3d.domain.core.numbers import (
    RationalLike,
    RoundingMode,
    decimal_cos,
    decimal_sin,
    round_rational,
    to_rational,
)
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.base import FiniteGeometry
from rational3d.domain.geometry.constants import ROTATION_GUARD_DIGITS
from rational3d.domain.geometry.vector import ZERO, Vector

if TYPE_CHECKING:
    from rational3d.domain.geometry.line import Line, Ray

logger = logging.getLogger(__name__)


class Point(FiniteGeometry):
    """
    Represents a 3D point as an offset plus a relative vector.

    The offset says where a shape sits and the relative vector says where
    the point is within it, so translating a shape only touches offsets.
    Two points are equal iff their absolute positions are equal, however
    the position is split between offset and rel.

    Construct from coordinates with Point(x=1, y=2, z=3).
    """
    offset: Vector = Field(default=ZERO, description="Offset of the owning shape")
    rel: Vector = Field(default=ZERO, description="Position relative to the offset")

    @model_validator(mode="before")
    @classmethod
    def from_coordinates(cls, data):
        """Accept x, y and z keywords as the relative vector."""
        if isinstance(data, dict) and any(key in data for key in ("x", "y", "z")):
            data = dict(data)
            if "rel" in data:
                raise ValueError("Give either x, y, z coordinates or rel, not both")
            data["rel"] = Vector(
                dx=data.pop("x", 0), dy=data.pop("y", 0), dz=data.pop("z", 0)
            )
        return data

    @classmethod
    def from_vector(cls, v: Vector, offset: Vector = ZERO) -> "Point":
        """Create the point at absolute position v, keeping the given offset."""
        return cls(offset=offset, rel=v - offset)

    @cached_property
    def vector(self) -> Vector:
        """Absolute position as a vector from the origin."""
        return self.offset + self.rel

    @property
    def x(self) -> Fraction:
        return self.vector.dx

    @property
    def y(self) -> Fraction:
        return self.vector.dy

    @property
    def z(self) -> Fraction:
        return self.vector.dz

    @property
    def coordinates(self) -> Tuple[Fraction, Fraction, Fraction]:
        return self.vector.components

    @property
    def dimension(self) -> int:
        return 0

    @property
    def vertices(self) -> Tuple["Point", ...]:
        return (self,)

    def contains(self, point: "Point") -> bool:
        return self == point

    def get_centroid(self) -> "Point":
        return self

    def __sub__(self, other: "Point") -> Vector:
        """The vector from other to this point."""
        if not isinstance(other, Point):
            return NotImplemented
        return self.vector - other.vector

    def __add__(self, v: Vector) -> "Point":
        """The point displaced by v (same as translate)."""
        if not isinstance(v, Vector):
            return NotImplemented
        return self.translate(v)

    def translate(self, v: Vector) -> "Point":
        """Translate the point by updating its offset."""
        return self.with_changes(offset=self.offset + v)

    def apply(self, v: Vector) -> "Point":
        """Move the point within its shape by updating the relative vector."""
        return self.with_changes(rel=self.rel + v)

    def midpoint(self, other: "Point") -> "Point":
        """Calculate the midpoint between this point and another point."""
        return Point.from_vector((self.vector + other.vector).scale(Fraction(1, 2)), self.offset)

    def get_distance_squared_to(self, other: "Point") -> Fraction:
        """Exact squared distance to another point."""
        return (self.vector - other.vector).magnitude_squared

    def rotate(self, axis: Union["Line", "Ray"], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Point":
        """
        Rotate the point about an axis using Rodrigues' rotation formula.

        Sine, cosine and the axis unit vector carry guard digits; the rotated
        coordinates are rounded to oom.

        Args:
            axis: Line or Ray giving the rotation axis
            angle: Angle in radians (right hand rule about the axis direction)
            oom: Order of magnitude of the rounded coordinates
            rounding: Rounding mode

        Returns:
            The rotated point; this point itself if angle is 0 or it lies on the axis
        """
        oom, rounding = resolve_precision(oom, rounding)
        theta = to_rational(angle)
        w = self.vector - axis.p.vector
        if theta == 0 or axis.v.is_scalar_multiple(w):
            return self

        magnitude_digits = len(str(int(max(abs(c) for c in w.components)) or 1))
        digits = max(0, -oom) + magnitude_digits + ROTATION_GUARD_DIGITS
        logger.debug(f"Rotating {self} by {float(theta):.6g} rad with {digits} working digits")
        u = axis.v.get_unit_vector(-digits, rounding)
        cos = to_rational(decimal_cos(theta, digits))
        sin = to_rational(decimal_sin(theta, digits))

        rotated = (w.scale(cos) + u.cross(w).scale(sin)
                   + u.scale(u.dot(w) * (1 - cos)) + axis.p.vector)
        position = Vector(**{
            name: round_rational(c, oom, rounding)
            for name, c in zip(("dx", "dy", "dz"), rotated.components)
        })
        return Point.from_vector(position, self.offset)

    def round_coordinates(self, oom: Optional[int] = None,
                          rounding: Optional[RoundingMode] = None) -> Tuple[Decimal, Decimal, Decimal]:
        """Get the coordinates as decimals rounded to oom."""
        oom, rounding = resolve_precision(oom, rounding)
        return tuple(round_rational(c, oom, rounding) for c in self.coordinates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.vector == other.vector

    def __hash__(self) -> int:
        return hash(self.coordinates)

    def format_as_tuple(self) -> str:
        """Format the point as a tuple string."""
        return f"({self.x}, {self.y}, {self.z})"

    def __str__(self) -> str:
        """String representation of the point."""
        return self.format_as_tuple()
