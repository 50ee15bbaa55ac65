# rational3d/domain/geometry/base.py
from abc import abstractmethod
from decimal import Decimal
from fractions import Fraction
from functools import cached_property
from typing import TYPE_CHECKING, Optional, Tuple, Union

from rational3d.domain.core.numbers import RationalLike, RoundingMode
from rational3d.utils.base_model import ImmutableModel

if TYPE_CHECKING:
    from rational3d.domain.geometry.envelope import Envelope
    from rational3d.domain.geometry.line import Line, Ray
    from rational3d.domain.geometry.line_segment import LineSegment
    from rational3d.domain.geometry.point import Point
    from rational3d.domain.geometry.triangle import Triangle
    from rational3d.domain.geometry.vector import Vector


class Geometry(ImmutableModel):
    """
    Base class for every primitive.

    Provides the query capabilities shared by all primitives. The queries
    delegate to the intersection and distance engines, which dispatch over
    the closed set of primitive kinds.
    """

    @abstractmethod
    def translate(self, v: "Vector") -> "Geometry":
        """Return a copy moved by v."""
        pass

    @abstractmethod
    def rotate(self, axis: Union["Line", "Ray"], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Geometry":
        """Return a copy rotated by angle radians about axis, rounded to oom."""
        pass

    def intersects(self, other: "Geometry", oom: Optional[int] = None,
                   rounding: Optional[RoundingMode] = None) -> bool:
        """Check whether this and other share at least one point. Always exact."""
        from rational3d.domain.geometry import intersection
        return intersection.intersects(self, other, oom, rounding)

    def intersection(self, other: "Geometry", oom: Optional[int] = None,
                     rounding: Optional[RoundingMode] = None):
        """Return the geometry shared by this and other, or None."""
        from rational3d.domain.geometry import intersection
        return intersection.intersection(self, other, oom, rounding)

    def get_distance_squared(self, other: "Geometry", oom: Optional[int] = None,
                             rounding: Optional[RoundingMode] = None) -> Fraction:
        """Return the exact squared minimum distance to other."""
        from rational3d.domain.geometry import distance
        return distance.get_distance_squared(self, other, oom, rounding)

    def get_distance(self, other: "Geometry", oom: Optional[int] = None,
                     rounding: Optional[RoundingMode] = None) -> Decimal:
        """Return the minimum distance to other rounded to oom."""
        from rational3d.domain.geometry import distance
        return distance.get_distance(self, other, oom, rounding)


class FiniteGeometry(Geometry):
    """
    A bounded convex primitive.

    Finite primitives describe themselves as a vertex set with edges and a
    triangulated surface, which is all the intersection and distance engines
    need to treat them uniformly.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Dimension of the affine hull: 0 point, 1 segment, 2 planar, 3 solid."""
        pass

    @property
    @abstractmethod
    def vertices(self) -> Tuple["Point", ...]:
        pass

    @property
    def edges(self) -> Tuple["LineSegment", ...]:
        """Boundary edges (empty for a point)."""
        return ()

    @property
    def triangles(self) -> Tuple["Triangle", ...]:
        """Triangles covering the 2D pieces of the shape (its surface when solid)."""
        return ()

    @abstractmethod
    def contains(self, point: "Point") -> bool:
        """Check if the point lies in the closed shape. Exact."""
        pass

    @abstractmethod
    def get_centroid(self) -> "Point":
        pass

    @cached_property
    def envelope(self) -> "Envelope":
        """The axis-aligned bounding envelope of the vertices."""
        from rational3d.domain.geometry.envelope import Envelope
        return Envelope.from_points(self.vertices)

    def get_envelope(self) -> "Envelope":
        return self.envelope
