# rational3d/domain/geometry/distance.py
"""Exact minimum distances.

Squared distances are exact rationals: every one is reached through dot and
cross products of rational vectors. Only get_distance takes a square root,
and it does so at the requested order of magnitude.
"""
import logging
from decimal import Decimal
from fractions import Fraction
from typing import Callable, Dict, Optional, Tuple

from rational3d.domain.core.exceptions import PrecisionAmbiguousError
from rational3d.domain.core.numbers import RoundingMode, round_sqrt
from rational3d.domain.core.settings import resolve_precision
from rational3d.domain.geometry.base import Geometry
from rational3d.domain.geometry.intersection import (
    Category,
    Convex,
    intersects,
    ordered,
)
from rational3d.domain.geometry.line import LinearMixin
from rational3d.domain.geometry.plane import Plane
from rational3d.domain.geometry.point import Point

logger = logging.getLogger(__name__)

ZERO_DISTANCE = Fraction(0)


def point_point(a: Point, b: Point) -> Fraction:
    return a.get_distance_squared_to(b)


def point_linear(point: Point, linear: LinearMixin) -> Fraction:
    """Distance to the projection, clamped to the parameter interval."""
    closest = linear.point_at(linear.clamp(linear.parameter_of(point)))
    return point.get_distance_squared_to(closest)


def point_plane(point: Point, plane: Plane) -> Fraction:
    return plane.evaluate(point) ** 2 / plane.n.magnitude_squared


def point_convex(point: Point, shape: Convex) -> Fraction:
    if shape.contains(point):
        return ZERO_DISTANCE
    if shape.dimension == 2:
        foot = shape.plane.project(point)
        if shape.contains(foot):
            return point.get_distance_squared_to(foot)
        return min(point_linear(point, edge) for edge in shape.edges)
    return min(point_convex(point, triangle) for triangle in shape.triangles)


def linear_linear(a: LinearMixin, b: LinearMixin) -> Fraction:
    """
    Distance between two lines, rays or segments.

    If the closest points of the underlying lines are admitted by both
    parameter intervals they give the answer. Otherwise the minimum is at a
    bound of one of the intervals, that is from an endpoint to the other.
    """
    u, w = a.direction, b.direction
    uxw = u.cross(w)
    if not uxw.is_zero():
        d = b.origin - a.origin
        denominator = uxw.magnitude_squared
        t = d.cross(w).dot(uxw) / denominator
        s = d.cross(u).dot(uxw) / denominator
        if a.admits(t) and b.admits(s):
            return a.point_at(t).get_distance_squared_to(b.point_at(s))
    candidates = [point_linear(p, b) for p in a.endpoints]
    candidates.extend(point_linear(p, a) for p in b.endpoints)
    if not candidates:
        # Two parallel infinite lines
        return point_linear(a.origin, b)
    return min(candidates)


def linear_plane(linear: LinearMixin, plane: Plane) -> Fraction:
    if intersects(linear, plane):
        return ZERO_DISTANCE
    return min(point_plane(p, plane) for p in linear.endpoints or (linear.origin,))


def linear_convex(linear: LinearMixin, shape: Convex) -> Fraction:
    if intersects(linear, shape):
        return ZERO_DISTANCE
    if shape.dimension == 3:
        return min(linear_convex(linear, triangle) for triangle in shape.triangles)
    candidates = [linear_linear(linear, edge) for edge in shape.edges]
    candidates.extend(point_convex(p, shape) for p in linear.endpoints)
    return min(candidates)


def plane_plane(a: Plane, b: Plane) -> Fraction:
    if a.is_parallel_to(b):
        return point_plane(b.p, a)
    return ZERO_DISTANCE


def plane_convex(plane: Plane, shape: Convex) -> Fraction:
    if intersects(plane, shape):
        return ZERO_DISTANCE
    return min(point_plane(v, plane) for v in shape.vertices)


def convex_convex(a: Convex, b: Convex) -> Fraction:
    """
    Distance between two convex shapes.

    Disjoint polytopes are closest between a vertex and the other shape or
    between two edges.
    """
    if intersects(a, b):
        return ZERO_DISTANCE
    candidates = [point_convex(v, b) for v in a.vertices]
    candidates.extend(point_convex(v, a) for v in b.vertices)
    candidates.extend(linear_linear(e, f) for e in a.edges for f in b.edges)
    return min(candidates)


_HANDLERS: Dict[Tuple[Category, Category], Callable[[Geometry, Geometry], Fraction]] = {
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


def get_distance_squared(a: Geometry, b: Geometry, oom: Optional[int] = None,
                         rounding: Optional[RoundingMode] = None) -> Fraction:
    """
    Compute the exact squared minimum distance between a and b.

    Raises:
        TypeError: If either argument is not a supported primitive
    """
    resolve_precision(oom, rounding)
    first, second, a, b = ordered(a, b)
    return _HANDLERS[(first, second)](a, b)


def get_distance(a: Geometry, b: Geometry, oom: Optional[int] = None,
                 rounding: Optional[RoundingMode] = None) -> Decimal:
    """
    Compute the minimum distance between a and b rounded to oom.

    Raises:
        PrecisionAmbiguousError: If a non-zero distance rounds to zero, which
            would contradict intersects(a, b) being False
        TypeError: If either argument is not a supported primitive
    """
    oom, rounding = resolve_precision(oom, rounding)
    squared = get_distance_squared(a, b, oom, rounding)
    distance = round_sqrt(squared, oom, rounding)
    if squared != 0 and distance == 0:
        logger.warning(
            f"Distance between {type(a).__name__} and {type(b).__name__} "
            f"rounds to zero at oom {oom}"
        )
        raise PrecisionAmbiguousError(
            f"Distance sqrt({squared}) is not zero but rounds to zero at oom {oom}; "
            f"request a finer order of magnitude"
        )
    return distance
