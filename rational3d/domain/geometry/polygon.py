# rational3d/domain/geometry/polygon.py
from decimal import Decimal
from fractions import Fraction
from functools import cached_property
from typing import List, Optional, Tuple, Union

from pydantic import Field, field_validator, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RationalLike, RationalSqrt, RoundingMode, round_sqrt_sum
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.base import FiniteGeometry
from rational3d.domain.geometry.line import Line, Ray
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.plane import Plane
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.points import are_coplanar, unique_points
from rational3d.domain.geometry.triangle import HalfSpace, Triangle, edge_half_spaces
from rational3d.domain.geometry.vector import ZERO, Vector


def newell_normal(vertices: Tuple[Point, ...]) -> Vector:
    """Sum of v[i] x v[i+1] over a closed planar boundary; its length is twice the area."""
    total = ZERO
    for i, vertex in enumerate(vertices):
        total = total + vertex.vector.cross(vertices[(i + 1) % len(vertices)].vector)
    return total


class Polygon(FiniteGeometry):
    """
    Represents a planar, strictly convex polygon with at least four vertices.

    The points are given in boundary order (either direction). The winding
    fixes the normal, which is the sum of v[i] x v[i+1]; its length is
    twice the area. Three points are a Triangle, not a Polygon.
    """
    points: Tuple[Point, ...] = Field(description="Vertices in boundary order")

    @field_validator("points")
    @classmethod
    def validate_points(cls, points: Tuple[Point, ...]) -> Tuple[Point, ...]:
        """Validate that we have enough vertices and they're all unique."""
        if len(points) < 4:
            raise DegenerateInputError(
                f"Polygon must have at least 4 vertices, got {len(points)}"
            )
        if len(unique_points(points)) != len(points):
            raise DegenerateInputError("Polygon vertices must be distinct")
        if not are_coplanar(points):
            raise DegenerateInputError("Polygon vertices must be coplanar")
        return points

    @model_validator(mode="after")
    def validate_convex(self) -> "Polygon":
        """
        Validate that the polygon is strictly convex.

        Every vertex off an edge must lie strictly on the inner side of it,
        which also rules out self intersection and collinear runs.
        """
        vertices = self.points
        count = len(vertices)
        for i, (a, m) in enumerate(self.half_spaces):
            for j in range(count):
                if j in (i, (i + 1) % count):
                    continue
                if m.dot(vertices[j] - a) <= 0:
                    raise DegenerateInputError(
                        f"Polygon is not strictly convex at edge {i} (vertex {vertices[j]})"
                    )
        return self

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self.points

    @property
    def dimension(self) -> int:
        return 2

    @cached_property
    def normal(self) -> Vector:
        return newell_normal(self.points)

    @cached_property
    def plane(self) -> Plane:
        return Plane(p=self.points[0], n=self.normal)

    @cached_property
    def edges(self) -> Tuple[LineSegment, ...]:
        """Get all edges of the polygon as LineSegment objects."""
        vertices = self.points
        return tuple(
            LineSegment(p=vertices[i], q=vertices[(i + 1) % len(vertices)])
            for i in range(len(vertices))
        )

    @cached_property
    def triangles(self) -> Tuple[Triangle, ...]:
        """Fan triangulation from the first vertex; each triangle keeps the winding."""
        first = self.points[0]
        return tuple(
            Triangle(p=first, q=b, r=c)
            for b, c in zip(self.points[1:-1], self.points[2:])
        )

    @cached_property
    def half_spaces(self) -> List[HalfSpace]:
        """Inward in-plane half spaces of the edges."""
        return edge_half_spaces(self.points, self.normal)

    def contains(self, point: Point) -> bool:
        """Check if the point lies in the closed polygon."""
        if not self.plane.contains(point):
            return False
        return all(m.dot(point - a) >= 0 for a, m in self.half_spaces)

    @property
    def area_squared(self) -> Fraction:
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

    @cached_property
    def centroid(self) -> Point:
        """Calculate the centroid of the polygon."""
        # Fan triangle normals are parallel to the polygon normal, so the dot
        # product is a positive weight proportional to each triangle's area.
        total = ZERO
        total_weight = Fraction(0)
        for triangle in self.triangles:
            weight = triangle.normal.dot(self.normal)
            total = total + triangle.centroid.vector.scale(weight)
            total_weight += weight
        return Point.from_vector(total.scale(1 / total_weight), self.points[0].offset)

    def get_centroid(self) -> Point:
        return self.centroid

    def translate(self, v: Vector) -> "Polygon":
        return self.with_changes(points=tuple(p.translate(v) for p in self.points))

    def rotate(self, axis: Union[Line, Ray], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Polygon":
        """
        Rotate the polygon about an axis.

        Rounding the rotated vertices would in general break coplanarity, so
        each one is projected back onto the rotated plane.
        """
        plane = self.plane.rotate(axis, angle, oom, rounding)
        return Polygon(points=tuple(
            plane.project(p.rotate(axis, angle, oom, rounding)) for p in self.points
        ))

    def __eq__(self, other: object) -> bool:
        """Convex polygons are equal if they have the same vertex set."""
        if not isinstance(other, Polygon):
            return NotImplemented
        return frozenset(self.points) == frozenset(other.points)

    def __hash__(self) -> int:
        return hash(frozenset(self.points))

    def __str__(self) -> str:
        return f"Polygon({', '.join(str(p) for p in self.points)})"
