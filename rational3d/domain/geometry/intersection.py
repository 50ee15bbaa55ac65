# rational3d/domain/geometry/intersection.py
"""Exact pairwise intersection.

Every primitive falls into one of four categories, and each unordered pair
of categories has one handler. Handlers take their arguments in category
order, so a query and its mirror run the same code and agree exactly.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from rational3d.domain.core.numbers import RoundingMode
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.base import FiniteGeometry, Geometry
from rational3d.domain.geometry.hull import convex_hull
from rational3d.domain.geometry.line import Line, LinearMixin, Ray, intersect_intervals
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.plane import Plane
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.polygon import Polygon
from rational3d.domain.geometry.polyhedron import Polyhedron
from rational3d.domain.geometry.tetrahedron import Tetrahedron
from rational3d.domain.geometry.triangle import Triangle

logger = logging.getLogger(__name__)

Intersection = Optional[Union[Point, Line, Ray, LineSegment, Plane, Triangle, Polygon,
                              Tetrahedron, Polyhedron]]

Convex = Union[Triangle, Polygon, Tetrahedron, Polyhedron]


class Category(int, Enum):
    POINT = 0
    LINEAR = 1
    PLANE = 2
    CONVEX = 3


def categorize(geometry: Geometry) -> Category:
    """
    Find the category of a primitive.

    Raises:
        TypeError: If the object is not one of the supported primitives
    """
    if isinstance(geometry, Point):
        return Category.POINT
    if isinstance(geometry, (Line, LineSegment)):
        return Category.LINEAR
    if isinstance(geometry, Plane):
        return Category.PLANE
    if isinstance(geometry, (Triangle, Polygon, Tetrahedron, Polyhedron)):
        return Category.CONVEX
    raise TypeError(f"Unsupported geometry type: {type(geometry).__name__}")


def ordered(a: Geometry, b: Geometry) -> Tuple[Category, Category, Geometry, Geometry]:
    """Categorize both arguments and put them in category order."""
    first, second = categorize(a), categorize(b)
    if second < first:
        return second, first, b, a
    return first, second, a, b


def envelopes_disjoint(a: Geometry, b: Geometry) -> bool:
    """Check if a bounding envelope proves the two cannot meet."""
    if isinstance(a, FiniteGeometry):
        if isinstance(b, FiniteGeometry):
            return not a.envelope.intersects(b.envelope)
        return not a.envelope.intersects(b)
    if isinstance(b, FiniteGeometry):
        return not b.envelope.intersects(a)
    return False


def point_point(a: Point, b: Point) -> Intersection:
    return a if a == b else None


def point_linear(point: Point, linear: LinearMixin) -> Intersection:
    return point if linear.contains(point) else None


def point_plane(point: Point, plane: Plane) -> Intersection:
    return point if plane.contains(point) else None


def point_convex(point: Point, shape: Convex) -> Intersection:
    return point if shape.contains(point) else None


def linear_linear(a: LinearMixin, b: LinearMixin) -> Intersection:
    """
    Intersect two lines, rays or segments.

    Non-parallel: solve origin_a + t*u = origin_b + s*w with cross products,
    which is exact and has no zero-component special cases. Collinear: map
    b's parameter interval onto a's and clip.
    """
    u, w = a.direction, b.direction
    d = b.origin - a.origin
    uxw = u.cross(w)
    if uxw.is_zero():
        if not a.is_collinear_with(b.origin):
            return None
        # b's parameter s corresponds to start + k*s on a
        start = a.parameter_of(b.origin)
        k = w.dot(u) / u.magnitude_squared
        low = None if b.lower is None else start + k * b.lower
        high = None if b.upper is None else start + k * b.upper
        if k < 0:
            low, high = high, low
        return a.sub_geometry(*intersect_intervals(a.lower, a.upper, low, high))

    if d.dot(uxw) != 0:
        return None  # skew
    denominator = uxw.magnitude_squared
    t = d.cross(w).dot(uxw) / denominator
    s = d.cross(u).dot(uxw) / denominator
    if a.admits(t) and b.admits(s):
        return a.point_at(t)
    return None


def linear_plane(linear: LinearMixin, plane: Plane) -> Intersection:
    """Intersect a line, ray or segment with a plane; a contained linear is returned whole."""
    rate = plane.n.dot(linear.direction)
    value = plane.evaluate(linear.origin)
    if rate == 0:
        return linear if value == 0 else None
    t = -value / rate
    return linear.point_at(t) if linear.admits(t) else None


def clip_to_half_spaces(linear: LinearMixin, shape: Convex) -> Intersection:
    """
    Clip the parameter interval of a linear shape by the shape's inward half spaces.

    For a half space (a, m) the condition m . (origin + t*direction - a) >= 0
    is linear in t, so each half space bounds t from one side.
    """
    lower, upper = linear.lower, linear.upper
    for a, m in shape.half_spaces:
        value = m.dot(linear.origin - a)
        rate = m.dot(linear.direction)
        if rate == 0:
            if value < 0:
                return None
            continue
        bound = -value / rate
        if rate > 0:
            lower, upper = intersect_intervals(lower, upper, bound, None)
        else:
            lower, upper = intersect_intervals(lower, upper, None, bound)
        if lower is not None and upper is not None and lower > upper:
            return None
    return linear.sub_geometry(lower, upper)


def linear_convex(linear: LinearMixin, shape: Convex) -> Intersection:
    """
    Intersect a line, ray or segment with a triangle, polygon or solid.

    A planar shape crossed by the linear meets it in at most the crossing
    point; a coplanar linear is clipped by the in-plane edge half spaces.
    """
    if shape.dimension == 2:
        crossing = linear_plane(linear, shape.plane)
        if crossing is None:
            return None
        if isinstance(crossing, Point):
            return crossing if shape.contains(crossing) else None
    return clip_to_half_spaces(linear, shape)


def plane_plane(a: Plane, b: Plane) -> Intersection:
    """
    Intersect two planes.

    With u = n1 x n2 the line passes through
    (d1 (n2 x u) + d2 (u x n1)) / |u|^2, where di = ni . pi.
    """
    u = a.n.cross(b.n)
    if u.is_zero():
        return a if a.contains(b.p) else None
    d1 = a.n.dot(a.p.vector)
    d2 = b.n.dot(b.p.vector)
    x = (b.n.cross(u).scale(d1) + u.cross(a.n).scale(d2)).scale(1 / u.magnitude_squared)
    return Line(p=Point.from_vector(x), v=u)


def plane_convex(plane: Plane, shape: Convex) -> Intersection:
    """Cut a shape by a plane: the hull of the vertices on it and the edge crossings."""
    values = [plane.evaluate(v) for v in shape.vertices]
    if all(value > 0 for value in values) or all(value < 0 for value in values):
        return None
    if shape.dimension == 2 and all(value == 0 for value in values):
        return shape
    points = [v for v, value in zip(shape.vertices, values) if value == 0]
    for edge in shape.edges:
        start, end = plane.evaluate(edge.p), plane.evaluate(edge.q)
        if start * end < 0:
            points.append(edge.point_at(start / (start - end)))
    return convex_hull(points)


def convex_convex(a: Convex, b: Convex) -> Intersection:
    """
    Intersect two convex shapes.

    Every corner of the intersection is a vertex of one shape inside the
    other, or where an edge of one meets the surface or an edge of the
    other. The result is the hull of all of these.
    """
    points = [v for v in a.vertices if b.contains(v)]
    points.extend(v for v in b.vertices if a.contains(v))
    for first, second in ((a, b), (b, a)):
        for edge in first.edges:
            for triangle in second.triangles:
                hit = linear_convex(edge, triangle)
                if hit is not None:
                    points.extend(hit.vertices)
    for edge in a.edges:
        for other in b.edges:
            hit = linear_linear(edge, other)
            if hit is not None:
                points.extend(hit.vertices)
    return convex_hull(points)


_HANDLERS: Dict[Tuple[Category, Category], Callable[[Geometry, Geometry], Intersection]] = {
    (Category.POINT, Category.POINT): point_point,
    (Category.POINT, Category.LINEAR): point_linear,
    (Category.POINT, Category.PLANE): point_plane,
    (Category.POINT, Category.CONVEX): point_convex,
    (Category.LINEAR, Category.LINEAR): linear_linear,
    (Category.LINEAR, Category.PLANE): linear_plane,
    (Category.LINEAR, Category.CONVEX): linear_convex,
    (Category.PLANE, Category.PLANE): plane_plane,
    (Category.PLANE, Category.CONVEX): plane_convex,
    (Category.CONVEX, Category.CONVEX): convex_convex,
}


def intersection(a: Geometry, b: Geometry, oom: Optional[int] = None,
                 rounding: Optional[RoundingMode] = None) -> Intersection:
    """
    Compute the geometry shared by a and b.

    The result is exact; oom and rounding are validated for consistency with
    the other queries but never needed.

    Returns:
        None if they do not meet, otherwise a Point, Line, Ray, LineSegment,
        Plane, Triangle, Polygon, Tetrahedron or Polyhedron

    Raises:
        TypeError: If either argument is not a supported primitive
    """
    resolve_precision(oom, rounding)
    first, second, a, b = ordered(a, b)
    if envelopes_disjoint(a, b):
        logger.debug(f"Envelope pre-filter rejected {type(a).__name__} and {type(b).__name__}")
        return None
    return _HANDLERS[(first, second)](a, b)


def intersects(a: Geometry, b: Geometry, oom: Optional[int] = None,
               rounding: Optional[RoundingMode] = None) -> bool:
    """Check whether a and b share at least one point. Always exact."""
    return intersection(a, b, oom, rounding) is not None
