# rational3d/domain/geometry/line.py
from abc import ABC, abstractmethod
from fractions import Fraction
from functools import cached_property
from typing import Optional, Tuple, Union

from pydantic import Field, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RationalLike, RoundingMode
from rational3d.domain.geometry.base import Geometry
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector


def intersect_intervals(lower: Optional[Fraction], upper: Optional[Fraction],
                        other_lower: Optional[Fraction],
                        other_upper: Optional[Fraction]) -> Tuple[Optional[Fraction], Optional[Fraction]]:
    """Intersect two parameter intervals where None stands for an infinite bound."""
    if other_lower is not None and (lower is None or other_lower > lower):
        lower = other_lower
    if other_upper is not None and (upper is None or other_upper < upper):
        upper = other_upper
    return lower, upper


class LinearMixin(ABC):
    """
    Shared parametric behaviour of Line, Ray and LineSegment.

    Each describes the points origin + t * direction for t in the parameter
    interval [lower, upper], where a bound of None is infinite. All tests on
    the parameter are exact rational comparisons.
    """

    @property
    @abstractmethod
    def origin(self) -> Point:
        pass

    @property
    @abstractmethod
    def direction(self) -> Vector:
        pass

    @property
    def lower(self) -> Optional[Fraction]:
        return None

    @property
    def upper(self) -> Optional[Fraction]:
        return None

    @property
    def endpoints(self) -> Tuple[Point, ...]:
        """The points at the finite parameter bounds."""
        return tuple(self.point_at(t) for t in (self.lower, self.upper) if t is not None)

    def admits(self, t: Fraction) -> bool:
        """Check if parameter t lies within the parameter interval."""
        return ((self.lower is None or t >= self.lower)
                and (self.upper is None or t <= self.upper))

    def clamp(self, t: Fraction) -> Fraction:
        """Clamp parameter t into the parameter interval."""
        if self.lower is not None and t < self.lower:
            return self.lower
        if self.upper is not None and t > self.upper:
            return self.upper
        return t

    def point_at(self, t: Fraction) -> Point:
        """Get the point origin + t * direction."""
        origin = self.origin
        return origin.with_changes(rel=origin.rel + self.direction.scale(t))

    def parameter_of(self, point: Point) -> Fraction:
        """
        Project a point onto the underlying line and return the parameter t.

        t is exact; the projection lies on the line even if the point does not.
        """
        direction = self.direction
        return (point - self.origin).dot(direction) / direction.magnitude_squared

    def is_parallel_to(self, other: "LinearMixin") -> bool:
        """Check if the directions are scalar multiples. Exact."""
        return self.direction.is_scalar_multiple(other.direction)

    def is_collinear_with(self, point: Point) -> bool:
        """Check if the point lies on the underlying infinite line."""
        return self.direction.cross(point - self.origin).is_zero()

    def contains(self, point: Point) -> bool:
        """Check if the point lies on this line, ray or segment. Exact."""
        return self.is_collinear_with(point) and self.admits(self.parameter_of(point))

    def sub_geometry(self, lower: Optional[Fraction], upper: Optional[Fraction]):
        """
        Get the part of the underlying line over a parameter interval.

        Returns:
            None if the interval is empty, a Point if it is a single value,
            otherwise a LineSegment, Ray or Line. This object itself if the
            interval is its own.
        """
        from rational3d.domain.geometry.line_segment import LineSegment

        if lower is not None and upper is not None:
            if lower > upper:
                return None
            if lower == upper:
                return self.point_at(lower)
        if lower == self.lower and upper == self.upper:
            return self
        if lower is None and upper is None:
            return Line(p=self.origin, v=self.direction)
        if lower is None:
            return Ray(p=self.point_at(upper), v=-self.direction)
        if upper is None:
            return Ray(p=self.point_at(lower), v=self.direction)
        return LineSegment(p=self.point_at(lower), q=self.point_at(upper))

    @property
    def line(self) -> "Line":
        """The underlying infinite line."""
        return Line(p=self.origin, v=self.direction)


class Line(LinearMixin, Geometry):
    """
    Represents an infinite line through point p with direction v.

    Construct with Line(p=..., v=...) or from two distinct points with
    Line(p=..., q=...).
    """
    p: Point = Field(description="A point on the line")
    v: Vector = Field(description="Direction vector (never zero)")

    @model_validator(mode="before")
    @classmethod
    def from_points(cls, data):
        """Derive v from a second point q."""
        if isinstance(data, dict) and "q" in data:
            data = dict(data)
            if "v" in data:
                raise ValueError("Give either a direction v or a second point q, not both")
            p = Point.model_validate(data["p"])
            q = Point.model_validate(data.pop("q"))
            data["p"] = p
            data["v"] = q - p
        return data

    @model_validator(mode="after")
    def validate_direction(self) -> "Line":
        """Validate that the direction is not the zero vector."""
        if self.v.is_zero():
            raise DegenerateInputError(
                f"{type(self).__name__} direction must not be the zero vector "
                f"(the defining points coincide at {self.p})"
            )
        return self

    @property
    def origin(self) -> Point:
        return self.p

    @property
    def direction(self) -> Vector:
        return self.v

    @cached_property
    def q(self) -> Point:
        """The second defining point p + v."""
        return self.p.apply(self.v)

    def translate(self, v: Vector) -> "Line":
        return self.with_changes(p=self.p.translate(v))

    def rotate(self, axis: Union["Line", "Ray"], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Line":
        p = self.p.rotate(axis, angle, oom, rounding)
        q = self.q.rotate(axis, angle, oom, rounding)
        return type(self)(p=p, v=q - p)

    def canonical_direction(self) -> Vector:
        """The direction scaled so its first non-zero component is 1."""
        lead = next(c for c in self.v.components if c != 0)
        return self.v.scale(1 / lead)

    def __eq__(self, other: object) -> bool:
        """Lines are equal if they are the same set of points."""
        if not isinstance(other, Line):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return self.is_parallel_to(other) and self.is_collinear_with(other.p)

    def __hash__(self) -> int:
        # The foot of the perpendicular from the origin is the same for equal lines
        foot = self.point_at(self.parameter_of(Point()))
        return hash((self.canonical_direction(), foot))

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.p} + t{self.v})"


class Ray(Line):
    """
    Represents the half line {p + t * v | t >= 0}.
    """

    @property
    def lower(self) -> Optional[Fraction]:
        return Fraction(0)

    def __eq__(self, other: object) -> bool:
        """Rays are equal if they share origin and point the same way."""
        if not isinstance(other, Line):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return (self.p == other.p and self.is_parallel_to(other)
                and self.v.dot(other.v) > 0)

    def __hash__(self) -> int:
        lead = next(c for c in self.v.components if c != 0)
        return hash((self.p, self.v.scale(1 / abs(lead))))
