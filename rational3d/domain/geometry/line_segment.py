# rational3d/domain/geometry/line_segment.py
from decimal import Decimal
from fractions import Fraction
from functools import cached_property
from typing import Optional, Tuple, Union

from pydantic import Field, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RationalLike, RationalSqrt, RoundingMode
from rational3d.domain.geometry.base import FiniteGeometry
from rational3d.domain.geometry.line import Line, LinearMixin, Ray
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector


class LineSegment(LinearMixin, FiniteGeometry):
    """
    Represents a line segment between two distinct points.

    The segment is the part of the line through p and q with parameter in
    [0, 1]. Equality ignores the order of the endpoints.
    """
    p: Point = Field(description="Starting point of the line segment")
    q: Point = Field(description="Ending point of the line segment")

    @model_validator(mode="after")
    def validate_line_length(self) -> "LineSegment":
        """Validate that the segment has non-zero length."""
        if self.p == self.q:
            raise DegenerateInputError(
                f"Line segment cannot have zero length (both endpoints are {self.p})"
            )
        return self

    @property
    def origin(self) -> Point:
        return self.p

    @cached_property
    def direction(self) -> Vector:
        """The vector from p to q."""
        return self.q - self.p

    @property
    def lower(self) -> Optional[Fraction]:
        return Fraction(0)

    @property
    def upper(self) -> Optional[Fraction]:
        return Fraction(1)

    @property
    def dimension(self) -> int:
        return 1

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self.p, self.q

    @property
    def edges(self) -> Tuple["LineSegment", ...]:
        return (self,)

    @cached_property
    def centroid(self) -> Point:
        """The midpoint of the segment."""
        return self.p.midpoint(self.q)

    def get_centroid(self) -> Point:
        return self.centroid

    @property
    def length_squared(self) -> Fraction:
        return self.direction.magnitude_squared

    @property
    def length(self) -> RationalSqrt:
        return self.direction.magnitude

    def get_length(self, oom: Optional[int] = None,
                   rounding: Optional[RoundingMode] = None) -> Decimal:
        """Get the length of the segment rounded to oom."""
        return self.length.to_decimal(oom, rounding)

    def closest_point_to(self, point: Point) -> Point:
        """
        Find the closest point on the line segment to a given point.

        The projection parameter is clamped to [0, 1], so the result is an
        endpoint when the projection falls outside the segment.
        """
        return self.point_at(self.clamp(self.parameter_of(point)))

    def reverse(self) -> "LineSegment":
        return LineSegment(p=self.q, q=self.p)

    def translate(self, v: Vector) -> "LineSegment":
        return self.with_changes(p=self.p.translate(v), q=self.q.translate(v))

    def rotate(self, axis: Union[Line, Ray], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "LineSegment":
        return LineSegment(
            p=self.p.rotate(axis, angle, oom, rounding),
            q=self.q.rotate(axis, angle, oom, rounding),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineSegment):
            return NotImplemented
        return ((self.p == other.p and self.q == other.q)
                or (self.p == other.q and self.q == other.p))

    def __hash__(self) -> int:
        return hash(frozenset((self.p, self.q)))

    def __str__(self) -> str:
        """String representation of the line segment."""
        return f"LineSegment({self.p} -> {self.q})"
