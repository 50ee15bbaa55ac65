# rational3d/domain/geometry/envelope.py
"""Axis-aligned bounding envelopes.

An envelope is six exact bounds. It collapses with its contents: a box when
every axis has width, a rectangle, segment or point when one, two or three
axes have zero width. Faces and edges are described by data (which axis,
which side) rather than by one class per face.
"""
import logging
from enum import Enum
from fractions import Fraction
from functools import cached_property
from itertools import product
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import Field, model_validator

from rational3d.domain.core.numbers import Rational
from rational3d.domain.geometry.base import FiniteGeometry
from rational3d.domain.geometry.line import LinearMixin, intersect_intervals
from rational3d.domain.geometry.plane import Plane
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector
from rational3d.utils.base_model import ImmutableModel

logger = logging.getLogger(__name__)

AXIS_NAMES = ("x", "y", "z")


class Axis(int, Enum):
    X = 0
    Y = 1
    Z = 2


class Side(int, Enum):
    LOW = 0
    HIGH = 1


class EnvelopeKind(str, Enum):
    BOX = "box"
    RECTANGLE = "rectangle"
    SEGMENT = "segment"
    POINT = "point"


class Envelope(ImmutableModel):
    """
    Represents an axis-aligned bounding envelope.

    Construct from bounds with Envelope(x_min=..., x_max=..., ...) or around
    points with Envelope(points=[...]).
    """
    x_min: Rational = Field(description="Lower x bound")
    x_max: Rational = Field(description="Upper x bound")
    y_min: Rational = Field(description="Lower y bound")
    y_max: Rational = Field(description="Upper y bound")
    z_min: Rational = Field(description="Lower z bound")
    z_max: Rational = Field(description="Upper z bound")

    @model_validator(mode="before")
    @classmethod
    def from_points_data(cls, data):
        """Derive the bounds from a 'points' list."""
        if isinstance(data, dict) and "points" in data:
            data = dict(data)
            points = [Point.model_validate(p) for p in data.pop("points")]
            if not points:
                raise ValueError("An envelope needs at least one point")
            for i, name in enumerate(AXIS_NAMES):
                values = [p.coordinates[i] for p in points]
                data[f"{name}_min"] = min(values)
                data[f"{name}_max"] = max(values)
        return data

    @model_validator(mode="after")
    def validate_bounds(self) -> "Envelope":
        """Validate that no axis range is inverted."""
        for name in AXIS_NAMES:
            low, high = getattr(self, f"{name}_min"), getattr(self, f"{name}_max")
            if low > high:
                raise ValueError(f"{name}_min ({low}) must not exceed {name}_max ({high})")
        return self

    @classmethod
    def unchecked(cls, x_min: Fraction, x_max: Fraction, y_min: Fraction,
                  y_max: Fraction, z_min: Fraction, z_max: Fraction) -> "Envelope":
        """
        Create an envelope without validation.

        Only for bounds already known to be ordered Fractions, such as the
        union or intersection of valid envelopes.
        """
        return cls.model_construct(x_min=x_min, x_max=x_max, y_min=y_min,
                                   y_max=y_max, z_min=z_min, z_max=z_max)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "Envelope":
        """Create the smallest envelope around the points."""
        points = list(points)
        if not points:
            raise ValueError("An envelope needs at least one point")
        coordinates = [p.coordinates for p in points]
        bounds = []
        for i in range(3):
            values = [c[i] for c in coordinates]
            bounds.extend((min(values), max(values)))
        return cls.unchecked(*bounds)

    @property
    def ranges(self) -> Tuple[Tuple[Fraction, Fraction], ...]:
        """(min, max) per axis."""
        return (self.x_min, self.x_max), (self.y_min, self.y_max), (self.z_min, self.z_max)

    def bound(self, axis: Axis, side: Side) -> Fraction:
        return self.ranges[axis][side]

    @property
    def flat_axes(self) -> Tuple[Axis, ...]:
        """Axes with zero width."""
        return tuple(axis for axis in Axis if self.bound(axis, Side.LOW) == self.bound(axis, Side.HIGH))

    @property
    def kind(self) -> EnvelopeKind:
        return (EnvelopeKind.BOX, EnvelopeKind.RECTANGLE,
                EnvelopeKind.SEGMENT, EnvelopeKind.POINT)[len(self.flat_axes)]

    def union(self, other: "Envelope") -> "Envelope":
        """The smallest envelope containing both."""
        bounds = []
        for (low, high), (other_low, other_high) in zip(self.ranges, other.ranges):
            bounds.extend((min(low, other_low), max(high, other_high)))
        return Envelope.unchecked(*bounds)

    def intersect(self, other: "Envelope") -> Optional["Envelope"]:
        """The envelope shared by both, or None if they are disjoint."""
        bounds = []
        for (low, high), (other_low, other_high) in zip(self.ranges, other.ranges):
            low, high = max(low, other_low), min(high, other_high)
            if low > high:
                return None
            bounds.extend((low, high))
        return Envelope.unchecked(*bounds)

    def contains(self, other: Union["Envelope", Point]) -> bool:
        """Check if another envelope or a point lies inside this one."""
        if isinstance(other, Point):
            return all(low <= c <= high for (low, high), c in zip(self.ranges, other.coordinates))
        return all(
            low <= other_low and other_high <= high
            for (low, high), (other_low, other_high) in zip(self.ranges, other.ranges)
        )

    def intersects(self, other) -> bool:
        """
        Check if the envelope meets an envelope, point, linear shape, plane
        or finite geometry (through its envelope). Exact.
        """
        if isinstance(other, Envelope):
            return all(
                low <= other_high and other_low <= high
                for (low, high), (other_low, other_high) in zip(self.ranges, other.ranges)
            )
        if isinstance(other, Point):
            return self.contains(other)
        if isinstance(other, LinearMixin):
            return self._clip(other) is not None
        if isinstance(other, Plane):
            sides = {other.side_of(corner) for corner in self.corners}
            return 0 in sides or len(sides) > 1
        if isinstance(other, FiniteGeometry):
            return self.intersects(other.envelope)
        raise TypeError(f"Cannot test an envelope against {type(other).__name__}")

    def _clip(self, linear: LinearMixin) -> Optional[Tuple[Optional[Fraction], Optional[Fraction]]]:
        """
        Clip the parameter interval of a line, ray or segment to the envelope.

        Each axis is a slab; a direction with no component along an axis must
        start inside that slab.
        """
        origin = linear.origin.coordinates
        direction = linear.direction.components
        lower, upper = linear.lower, linear.upper
        for (low, high), o, d in zip(self.ranges, origin, direction):
            if d == 0:
                if not low <= o <= high:
                    return None
                continue
            first, second = (low - o) / d, (high - o) / d
            if first > second:
                first, second = second, first
            lower, upper = intersect_intervals(lower, upper, first, second)
            if lower > upper:
                return None
        return lower, upper

    @cached_property
    def corners(self) -> Tuple[Point, ...]:
        """Distinct corner points (fewer than 8 when the envelope is flat)."""
        corners = {}
        for x, y, z in product(*self.ranges):
            corners.setdefault((x, y, z), Point(x=x, y=y, z=z))
        return tuple(corners.values())

    @cached_property
    def faces(self) -> Tuple["EnvelopeFace", ...]:
        """Distinct two-dimensional faces: six for a box, one for a rectangle."""
        faces = {}
        for axis, side in product(Axis, Side):
            face = EnvelopeFace(envelope=self, axis=axis, side=side)
            if face.dimension == 2:
                faces.setdefault(frozenset(face.corners), face)
        return tuple(faces.values())

    @cached_property
    def edges(self) -> Tuple["EnvelopeEdge", ...]:
        """Distinct one-dimensional edges: twelve for a box, four for a rectangle, one for a segment."""
        edges = {}
        for axis, first_side, second_side in product(Axis, Side, Side):
            edge = EnvelopeEdge(envelope=self, axis=axis, first_side=first_side,
                                second_side=second_side)
            if edge.dimension == 1:
                edges.setdefault(frozenset(edge.corners), edge)
        return tuple(edges.values())

    def get_centroid(self) -> Point:
        x, y, z = ((low + high) / 2 for low, high in self.ranges)
        return Point(x=x, y=y, z=z)

    def translate(self, v: Vector) -> "Envelope":
        bounds = []
        for (low, high), d in zip(self.ranges, v.components):
            bounds.extend((low + d, high + d))
        return Envelope.unchecked(*bounds)

    def get_distance_squared(self, point: Point) -> Fraction:
        """Exact squared distance from a point to the envelope (0 inside)."""
        total = Fraction(0)
        for (low, high), c in zip(self.ranges, point.coordinates):
            if c < low:
                total += (low - c) ** 2
            elif c > high:
                total += (c - high) ** 2
        return total

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.ranges == other.ranges

    def __hash__(self) -> int:
        return hash(self.ranges)

    def __str__(self) -> str:
        return "Envelope(" + ", ".join(
            f"{name}=[{low}, {high}]" for name, (low, high) in zip(AXIS_NAMES, self.ranges)
        ) + ")"


class EnvelopeFace(ImmutableModel):
    """The side of an envelope where one axis is at its low or high bound."""
    envelope: Envelope = Field(description="The bounded envelope")
    axis: Axis = Field(description="Axis the face is normal to")
    side: Side = Field(description="Which bound of that axis the face lies on")

    @property
    def corners(self) -> List[Point]:
        value = self.envelope.bound(self.axis, self.side)
        return [c for c in self.envelope.corners if c.coordinates[self.axis] == value]

    @property
    def dimension(self) -> int:
        return 2 - sum(1 for axis in self.envelope.flat_axes if axis != self.axis)

    @property
    def geometry(self):
        """The face as a Polygon, or a LineSegment or Point on a flat envelope."""
        from rational3d.domain.geometry.hull import convex_hull
        return convex_hull(self.corners)


class EnvelopeEdge(ImmutableModel):
    """
    An edge of an envelope, parallel to one axis.

    The other two axes, taken in cyclic order after the edge axis, sit at
    first_side and second_side.
    """
    envelope: Envelope = Field(description="The bounded envelope")
    axis: Axis = Field(description="Axis the edge runs along")
    first_side: Side = Field(description="Bound of the next axis in cyclic order")
    second_side: Side = Field(description="Bound of the axis after that")

    @property
    def fixed(self) -> Tuple[Tuple[Axis, Side], Tuple[Axis, Side]]:
        return ((Axis((self.axis + 1) % 3), self.first_side),
                (Axis((self.axis + 2) % 3), self.second_side))

    @property
    def corners(self) -> List[Point]:
        bounds = [(a, self.envelope.bound(a, s)) for a, s in self.fixed]
        return [c for c in self.envelope.corners
                if all(c.coordinates[a] == value for a, value in bounds)]

    @property
    def dimension(self) -> int:
        return 0 if self.axis in self.envelope.flat_axes else 1

    @property
    def geometry(self):
        """The edge as a LineSegment, or a Point when the axis is flat."""
        from rational3d.domain.geometry.hull import convex_hull
        return convex_hull(self.corners)
