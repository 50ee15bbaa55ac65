# rational3d/domain/geometry/triangle.py
from decimal import Decimal
from fractions import Fraction
from functools import cached_property
from typing import List, Optional, Tuple, Union

from pydantic import Field, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RationalLike, RationalSqrt, RoundingMode, round_sqrt_sum
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.base import FiniteGeometry
from rational3d.domain.geometry.line import Line, Ray
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.plane import Plane
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector

# A half space {x : normal . (x - point) >= 0}
HalfSpace = Tuple[Point, Vector]


def edge_half_spaces(vertices: Tuple[Point, ...], normal: Vector) -> List[HalfSpace]:
    """
    Inward half spaces of the edges of a convex planar polygon.

    The vertices must wind counter-clockwise about normal; for an edge a->b the
    inward in-plane normal is normal x (b - a).
    """
    count = len(vertices)
    return [
        (vertices[i], normal.cross(vertices[(i + 1) % count] - vertices[i]))
        for i in range(count)
    ]


class Triangle(FiniteGeometry):
    """
    Represents a triangle defined by three non-collinear points.

    The winding p -> q -> r fixes the normal (q - p) x (r - p); point-in-triangle
    tests check the sign of each edge against that normal.
    """
    p: Point = Field(description="First vertex")
    q: Point = Field(description="Second vertex")
    r: Point = Field(description="Third vertex")

    @model_validator(mode="after")
    def validate_not_collinear(self) -> "Triangle":
        """Validate that the vertices are not collinear."""
        if self.normal.is_zero():
            raise DegenerateInputError(
                f"Triangle vertices {self.p}, {self.q} and {self.r} are collinear"
            )
        return self

    @cached_property
    def normal(self) -> Vector:
        """The normal (q - p) x (r - p); its length is twice the area."""
        return (self.q - self.p).cross(self.r - self.p)

    @cached_property
    def plane(self) -> Plane:
        return Plane(p=self.p, n=self.normal)

    @property
    def dimension(self) -> int:
        return 2

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self.p, self.q, self.r

    @cached_property
    def edges(self) -> Tuple[LineSegment, ...]:
        """The edges pq, qr and rp."""
        return (
            LineSegment(p=self.p, q=self.q),
            LineSegment(p=self.q, q=self.r),
            LineSegment(p=self.r, q=self.p),
        )

    @property
    def triangles(self) -> Tuple["Triangle", ...]:
        return (self,)

    @cached_property
    def half_spaces(self) -> List[HalfSpace]:
        """Inward in-plane half spaces of the three edges."""
        return edge_half_spaces(self.vertices, self.normal)

    def contains(self, point: Point) -> bool:
        """
        Check if the point lies in the closed triangle.

        The point must be on the plane and on the inner side of every edge.
        """
        if not self.plane.contains(point):
            return False
        return all(m.dot(point - a) >= 0 for a, m in self.half_spaces)

    @cached_property
    def centroid(self) -> Point:
        total = self.p.vector + self.q.vector + self.r.vector
        return Point.from_vector(total.scale(Fraction(1, 3)), self.p.offset)

    def get_centroid(self) -> Point:
        return self.centroid

    @property
    def area_squared(self) -> Fraction:
        """Exact square of the area."""
        return self.normal.magnitude_squared / 4

    @property
    def area(self) -> RationalSqrt:
        return RationalSqrt(square=self.area_squared)

    def get_area(self, oom: Optional[int] = None,
                 rounding: Optional[RoundingMode] = None) -> Decimal:
        """Get the area rounded to oom."""
        return self.area.to_decimal(oom, rounding)

    def get_perimeter(self, oom: Optional[int] = None,
                      rounding: Optional[RoundingMode] = None) -> Decimal:
        """Get the sum of the edge lengths rounded to oom."""
        oom, rounding = resolve_precision(oom, rounding)
        return round_sqrt_sum([edge.length_squared for edge in self.edges], oom, rounding)

    def translate(self, v: Vector) -> "Triangle":
        return self.with_changes(p=self.p.translate(v), q=self.q.translate(v),
                                 r=self.r.translate(v))

    def rotate(self, axis: Union[Line, Ray], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Triangle":
        return Triangle(
            p=self.p.rotate(axis, angle, oom, rounding),
            q=self.q.rotate(axis, angle, oom, rounding),
            r=self.r.rotate(axis, angle, oom, rounding),
        )

    def __eq__(self, other: object) -> bool:
        """Triangles are equal if they have the same vertices in any order."""
        if not isinstance(other, Triangle):
            return NotImplemented
        return frozenset(self.vertices) == frozenset(other.vertices)

    def __hash__(self) -> int:
        return hash(frozenset(self.vertices))

    def __str__(self) -> str:
        return f"Triangle({self.p}, {self.q}, {self.r})"
