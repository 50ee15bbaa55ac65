# rational3d/domain/geometry/tetrahedron.py
from decimal import Decimal
from fractions import Fraction
from functools import cached_property
from typing import List, Optional, Tuple, Union

from pydantic import Field, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RationalLike, RoundingMode, round_sqrt_sum
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.base import FiniteGeometry
from rational3d.domain.geometry.line import Line, Ray
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.triangle import HalfSpace, Triangle
from rational3d.domain.geometry.vector import Vector


class Tetrahedron(FiniteGeometry):
    """
    Represents a tetrahedron defined by four non-coplanar points.

    Each face is wound so that its normal points outwards; the orientation is
    fixed at construction and drives the point-in-tetrahedron test.
    """
    p: Point = Field(description="First vertex")
    q: Point = Field(description="Second vertex")
    r: Point = Field(description="Third vertex")
    s: Point = Field(description="Fourth vertex")

    @model_validator(mode="after")
    def validate_not_coplanar(self) -> "Tetrahedron":
        """Validate that s is not coplanar with p, q and r."""
        if self.signed_volume_6 == 0:
            raise DegenerateInputError(
                f"Tetrahedron vertices {self.p}, {self.q}, {self.r} and {self.s} are coplanar"
            )
        return self

    @cached_property
    def signed_volume_6(self) -> Fraction:
        """(q - p) . ((r - p) x (s - p)), six times the signed volume."""
        return (self.q - self.p).triple(self.r - self.p, self.s - self.p)

    @property
    def dimension(self) -> int:
        return 3

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self.p, self.q, self.r, self.s

    @cached_property
    def faces(self) -> Tuple[Triangle, ...]:
        """The four faces, each wound with an outward normal."""
        p, q, r, s = self.vertices
        if self.signed_volume_6 > 0:
            # s lies along (q - p) x (r - p) from pqr, so pqr must be reversed
            return (
                Triangle(p=p, q=r, r=q),
                Triangle(p=p, q=q, r=s),
                Triangle(p=q, q=r, r=s),
                Triangle(p=p, q=s, r=r),
            )
        return (
            Triangle(p=p, q=q, r=r),
            Triangle(p=p, q=s, r=q),
            Triangle(p=q, q=s, r=r),
            Triangle(p=p, q=r, r=s),
        )

    @property
    def triangles(self) -> Tuple[Triangle, ...]:
        return self.faces

    @cached_property
    def edges(self) -> Tuple[LineSegment, ...]:
        p, q, r, s = self.vertices
        return tuple(LineSegment(p=a, q=b) for a, b in
                     ((p, q), (p, r), (p, s), (q, r), (q, s), (r, s)))

    @cached_property
    def half_spaces(self) -> List[HalfSpace]:
        """Inward half spaces of the four faces."""
        return [(face.p, -face.normal) for face in self.faces]

    def contains(self, point: Point) -> bool:
        """Check if the point lies in the closed tetrahedron (inside every face plane)."""
        return all(m.dot(point - a) >= 0 for a, m in self.half_spaces)

    @cached_property
    def centroid(self) -> Point:
        total = self.p.vector + self.q.vector + self.r.vector + self.s.vector
        return Point.from_vector(total.scale(Fraction(1, 4)), self.p.offset)

    def get_centroid(self) -> Point:
        return self.centroid

    @property
    def volume(self) -> Fraction:
        """Exact volume |(q - p) . ((r - p) x (s - p))| / 6."""
        return abs(self.signed_volume_6) / 6

    def get_volume(self) -> Fraction:
        return self.volume

    def get_area(self, oom: Optional[int] = None,
                 rounding: Optional[RoundingMode] = None) -> Decimal:
        """Get the surface area, the sum of the four face areas, rounded to oom."""
        oom, rounding = resolve_precision(oom, rounding)
        return round_sqrt_sum([face.area_squared for face in self.faces], oom, rounding)

    def translate(self, v: Vector) -> "Tetrahedron":
        return self.with_changes(p=self.p.translate(v), q=self.q.translate(v),
                                 r=self.r.translate(v), s=self.s.translate(v))

    def rotate(self, axis: Union[Line, Ray], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Tetrahedron":
        return Tetrahedron(**{
            name: getattr(self, name).rotate(axis, angle, oom, rounding)
            for name in ("p", "q", "r", "s")
        })

    def __eq__(self, other: object) -> bool:
        """Tetrahedra are equal if they have the same vertices in any order."""
        if not isinstance(other, Tetrahedron):
            return NotImplemented
        return frozenset(self.vertices) == frozenset(other.vertices)

    def __hash__(self) -> int:
        return hash(frozenset(self.vertices))

    def __str__(self) -> str:
        return f"Tetrahedron({self.p}, {self.q}, {self.r}, {self.s})"
