# rational3d/domain/geometry/vector.py
from decimal import Decimal, localcontext
from fractions import Fraction
from functools import cached_property
from typing import Optional, Tuple

from pydantic import Field, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import (
    Rational,
    RationalLike,
    RationalSqrt,
    RoundingMode,
    decimal_atan,
    decimal_pi,
    round_rational,
    round_sqrt,
    to_rational,
)
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.constants import ANGLE_GUARD_DIGITS
from rational3d.utils.base_model import ImmutableModel


class Vector(ImmutableModel):
    """
    Represents an exact 3D displacement.

    All algebra (add, subtract, negate, scale, dot, cross) is exact. The
    squared magnitude is an exact rational; the magnitude itself is a
    RationalSqrt that is only rounded when a decimal is requested.
    """
    dx: Rational = Field(default=Fraction(0), description="X component")
    dy: Rational = Field(default=Fraction(0), description="Y component")
    dz: Rational = Field(default=Fraction(0), description="Z component")

    @model_validator(mode="before")
    @classmethod
    def from_components(cls, data):
        """Allow construction from a (dx, dy, dz) sequence under 'components'."""
        if isinstance(data, dict) and "components" in data:
            data = dict(data)
            data["dx"], data["dy"], data["dz"] = data.pop("components")
        return data

    @classmethod
    def unchecked(cls, dx: Fraction, dy: Fraction, dz: Fraction) -> "Vector":
        """
        Create a vector from Fractions without validation.

        Only for components that are already Fractions, such as the results
        of exact arithmetic on other vectors.
        """
        return cls.model_construct(dx=dx, dy=dy, dz=dz)

    @property
    def components(self) -> Tuple[Fraction, Fraction, Fraction]:
        return self.dx, self.dy, self.dz

    def is_zero(self) -> bool:
        return self.dx == 0 and self.dy == 0 and self.dz == 0

    def __add__(self, other: "Vector") -> "Vector":
        """Vector addition."""
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.unchecked(self.dx + other.dx, self.dy + other.dy, self.dz + other.dz)

    def __sub__(self, other: "Vector") -> "Vector":
        """Vector subtraction."""
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector.unchecked(self.dx - other.dx, self.dy - other.dy, self.dz - other.dz)

    def __neg__(self) -> "Vector":
        return Vector.unchecked(-self.dx, -self.dy, -self.dz)

    def __mul__(self, factor: RationalLike) -> "Vector":
        return self.scale(factor)

    __rmul__ = __mul__

    def scale(self, factor: RationalLike) -> "Vector":
        """Scale the vector by a rational factor."""
        factor = to_rational(factor)
        return Vector.unchecked(self.dx * factor, self.dy * factor, self.dz * factor)

    def dot(self, other: "Vector") -> Fraction:
        """Calculate the dot product with another vector."""
        return self.dx * other.dx + self.dy * other.dy + self.dz * other.dz

    def cross(self, other: "Vector") -> "Vector":
        """Calculate the cross product (right hand rule) with another vector."""
        return Vector.unchecked(
            self.dy * other.dz - self.dz * other.dy,
            self.dz * other.dx - self.dx * other.dz,
            self.dx * other.dy - self.dy * other.dx,
        )

    def triple(self, b: "Vector", c: "Vector") -> Fraction:
        """Calculate the scalar triple product self . (b x c)."""
        return self.dot(b.cross(c))

    @cached_property
    def magnitude_squared(self) -> Fraction:
        return self.dot(self)

    @cached_property
    def magnitude(self) -> RationalSqrt:
        return RationalSqrt(square=self.magnitude_squared)

    def get_magnitude(self, oom: Optional[int] = None,
                      rounding: Optional[RoundingMode] = None) -> Decimal:
        """Get the magnitude rounded to oom (exact digits if the magnitude is rational)."""
        return self.magnitude.to_decimal(oom, rounding)

    def is_scalar_multiple(self, other: "Vector") -> bool:
        """Check if other is a scalar multiple of this vector (parallel or anti-parallel)."""
        return self.cross(other).is_zero()

    def is_orthogonal(self, other: "Vector") -> bool:
        return self.dot(other) == 0

    def is_reverse(self, other: "Vector") -> bool:
        return self == -other

    def get_unit_vector(self, oom: Optional[int] = None,
                        rounding: Optional[RoundingMode] = None) -> "Vector":
        """
        Get the vector scaled to length 1.

        The result is exact when the magnitude is rational; otherwise each
        component is rounded to oom.

        Raises:
            ZeroDivisionError: If this is the zero vector
        """
        if self.is_zero():
            raise ZeroDivisionError("The zero vector has no direction")
        root = self.magnitude.exact
        if root is not None:
            return self.scale(1 / root)
        oom, rounding = resolve_precision(oom, rounding)
        m2 = self.magnitude_squared
        return Vector(**{
            name: round_sqrt(c * c / m2, oom, rounding, negative=c < 0)
            for name, c in zip(("dx", "dy", "dz"), self.components)
        })

    def get_angle(self, other: "Vector", oom: Optional[int] = None,
                  rounding: Optional[RoundingMode] = None) -> Decimal:
        """
        Get the angle to another vector in radians, in [0, pi], rounded to oom.

        The angle is atan2(|a x b|, a . b); parallel and anti-parallel
        vectors give exactly 0 and pi rounded to oom.

        Raises:
            DegenerateInputError: If either vector is the zero vector
        """
        if self.is_zero() or other.is_zero():
            raise DegenerateInputError("The angle to a zero vector is undefined")
        oom, rounding = resolve_precision(oom, rounding)
        digits = max(0, -oom) + ANGLE_GUARD_DIGITS
        dot = self.dot(other)
        cross_squared = self.cross(other).magnitude_squared
        with localcontext() as ctx:
            ctx.prec = digits + 5
            if cross_squared == 0:
                angle = Decimal(0) if dot > 0 else decimal_pi(digits)
            elif dot == 0:
                angle = decimal_pi(digits + 1) / 2
            else:
                ratio = cross_squared / (dot * dot)
                tangent = (Decimal(ratio.numerator) / Decimal(ratio.denominator)).sqrt()
                angle = decimal_atan(tangent, digits)
                if dot < 0:
                    angle = decimal_pi(digits + 1) - angle
        return round_rational(angle, oom, rounding)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.components == other.components

    def __hash__(self) -> int:
        return hash(self.components)

    def __str__(self) -> str:
        return f"<{self.dx}, {self.dy}, {self.dz}>"


ZERO = Vector()
I = Vector(dx=1)
J = Vector(dy=1)
K = Vector(dz=1)
