# rational3d/domain/geometry/polyhedron.py
from decimal import Decimal
from fractions import Fraction
from functools import cached_property
from itertools import combinations
from typing import List, Optional, Sequence, Tuple, Union

from pydantic import Field, field_validator, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RationalLike, RoundingMode, round_sqrt_sum
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.base import FiniteGeometry
from rational3d.domain.geometry.line import Line, Ray
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.polygon import newell_normal
from rational3d.domain.geometry.points import are_coplanar, planar_hull, unique_points
from rational3d.domain.geometry.triangle import HalfSpace, Triangle
from rational3d.domain.geometry.vector import ZERO, Vector


def hull_faces(points: Sequence[Point]) -> List[Tuple[Point, ...]]:
    """
    Faces of the convex hull of a non-coplanar point set.

    Every triple of points spanning a plane with all other points on one side
    is a supporting plane; the points on it form one face. Each face is
    returned as its corners, counter-clockwise seen from outside.
    """
    faces = {}
    for a, b, c in combinations(points, 3):
        n = (b - a).cross(c - a)
        if n.is_zero():
            continue
        sides = [n.dot(point - a) for point in points]
        if all(s <= 0 for s in sides):
            outward = n
        elif all(s >= 0 for s in sides):
            outward = -n
        else:
            continue
        key = frozenset(i for i, s in enumerate(sides) if s == 0)
        if key not in faces:
            faces[key] = tuple(planar_hull([points[i] for i in sorted(key)], outward))
    return list(faces.values())


class Polyhedron(FiniteGeometry):
    """
    Represents a convex polyhedron given by the vertices of its hull.

    Faces are derived from the vertices, each wound counter-clockwise seen
    from outside. Four vertices are a Tetrahedron, not a Polyhedron.
    """
    points: Tuple[Point, ...] = Field(description="Vertices of the convex hull")

    @field_validator("points")
    @classmethod
    def validate_points(cls, points: Tuple[Point, ...]) -> Tuple[Point, ...]:
        """Validate that the points are distinct and span a volume."""
        if len(points) < 5:
            raise DegenerateInputError(
                f"Polyhedron must have at least 5 vertices, got {len(points)}"
            )
        if len(unique_points(points)) != len(points):
            raise DegenerateInputError("Polyhedron vertices must be distinct")
        if are_coplanar(points):
            raise DegenerateInputError("Polyhedron vertices must not be coplanar")
        return points

    @model_validator(mode="after")
    def validate_extreme(self) -> "Polyhedron":
        """Validate that every point is a corner of the hull."""
        corners = {corner for face in self.faces for corner in face}
        for point in self.points:
            if point not in corners:
                raise DegenerateInputError(
                    f"Point {point} is not a vertex of the convex hull"
                )
        return self

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self.points

    @property
    def dimension(self) -> int:
        return 3

    @cached_property
    def faces(self) -> Tuple[Tuple[Point, ...], ...]:
        """Face corner lists, counter-clockwise seen from outside."""
        return tuple(hull_faces(self.points))

    @cached_property
    def triangles(self) -> Tuple[Triangle, ...]:
        """Fan triangulation of each face, normals pointing outwards."""
        return tuple(
            Triangle(p=face[0], q=b, r=c)
            for face in self.faces
            for b, c in zip(face[1:-1], face[2:])
        )

    @cached_property
    def edges(self) -> Tuple[LineSegment, ...]:
        edges = {}
        for face in self.faces:
            for i, a in enumerate(face):
                b = face[(i + 1) % len(face)]
                edges.setdefault(frozenset((a, b)), LineSegment(p=a, q=b))
        return tuple(edges.values())

    @cached_property
    def half_spaces(self) -> List[HalfSpace]:
        """Inward half spaces of the faces."""
        return [
            (face[0], -(face[1] - face[0]).cross(face[2] - face[0]))
            for face in self.faces
        ]

    def contains(self, point: Point) -> bool:
        """Check if the point lies in the closed polyhedron."""
        return all(m.dot(point - a) >= 0 for a, m in self.half_spaces)

    @cached_property
    def volume(self) -> Fraction:
        """Exact volume, summed over tetrahedra from the first vertex to each surface triangle."""
        apex = self.points[0]
        return sum(
            ((t.p - apex).triple(t.q - apex, t.r - apex) for t in self.triangles),
            Fraction(0),
        ) / 6

    def get_volume(self) -> Fraction:
        return self.volume

    def get_area(self, oom: Optional[int] = None,
                 rounding: Optional[RoundingMode] = None) -> Decimal:
        """Get the surface area rounded to oom; each face contributes one square root."""
        oom, rounding = resolve_precision(oom, rounding)
        return round_sqrt_sum(
            [newell_normal(face).magnitude_squared / 4 for face in self.faces], oom, rounding
        )

    @cached_property
    def centroid(self) -> Point:
        apex = self.points[0]
        total = ZERO
        total_weight = Fraction(0)
        for t in self.triangles:
            weight = (t.p - apex).triple(t.q - apex, t.r - apex)
            total = total + (apex.vector + t.p.vector + t.q.vector + t.r.vector).scale(weight / 4)
            total_weight += weight
        return Point.from_vector(total.scale(1 / total_weight), apex.offset)

    def get_centroid(self) -> Point:
        return self.centroid

    def translate(self, v: Vector) -> "Polyhedron":
        return self.with_changes(points=tuple(p.translate(v) for p in self.points))

    def rotate(self, axis: Union[Line, Ray], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Polyhedron":
        return Polyhedron(points=tuple(p.rotate(axis, angle, oom, rounding) for p in self.points))

    def __eq__(self, other: object) -> bool:
        """Convex polyhedra are equal if they have the same vertex set."""
        if not isinstance(other, Polyhedron):
            return NotImplemented
        return frozenset(self.points) == frozenset(other.points)

    def __hash__(self) -> int:
        return hash(frozenset(self.points))

    def __str__(self) -> str:
        return f"Polyhedron({', '.join(str(p) for p in self.points)})"
