# rational3d/domain/geometry/points.py
"""Predicates over sets of points."""
from typing import Iterable, List, Optional, Sequence, Tuple

from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector


def unique_points(points: Iterable[Point]) -> List[Point]:
    """Drop repeated points, keeping the first of each in order."""
    seen = {}
    for point in points:
        seen.setdefault(point.coordinates, point)
    return list(seen.values())


def find_normal(points: Sequence[Point]) -> Optional[Vector]:
    """
    Find the normal of a plane through the first point and two others.

    Returns:
        A non-zero normal, or None if all points are collinear
    """
    if len(points) < 3:
        return None
    origin = points[0]
    direction = None
    for point in points[1:]:
        v = point - origin
        if v.is_zero():
            continue
        if direction is None:
            direction = v
            continue
        normal = direction.cross(v)
        if not normal.is_zero():
            return normal
    return None


def are_collinear(points: Sequence[Point]) -> bool:
    """Check if all the points lie on one line (trivially true for fewer than 3)."""
    return find_normal(points) is None


def are_coplanar(points: Sequence[Point]) -> bool:
    """Check if all the points lie on one plane (trivially true for fewer than 4)."""
    normal = find_normal(points)
    if normal is None:
        return True
    origin = points[0]
    return all(normal.dot(point - origin) == 0 for point in points)


def extreme_pair(points: Sequence[Point]) -> Tuple[Point, Point]:
    """For collinear points, the two furthest apart."""
    origin = points[0]
    direction = next((p - origin for p in points if p != origin), None)
    if direction is None:
        return origin, origin
    ordered = sorted(points, key=lambda p: (p - origin).dot(direction))
    return ordered[0], ordered[-1]


def dominant_axis(normal: Vector) -> int:
    """Index of the largest absolute component of a normal."""
    magnitudes = [abs(c) for c in normal.components]
    return magnitudes.index(max(magnitudes))


def planar_hull(points: Sequence[Point], normal: Vector) -> List[Point]:
    """
    Convex hull of coplanar points, counter-clockwise about normal.

    Andrew's monotone chain on the projection that drops the dominant axis
    of the normal. The projection keeps the cyclic axis order, so a 2D turn
    has the sign of the normal's dominant component. Points on a hull edge
    are dropped; only the corners are returned.
    """
    axis = dominant_axis(normal)
    first, second = (axis + 1) % 3, (axis + 2) % 3

    def key(point: Point):
        coordinates = point.coordinates
        return coordinates[first], coordinates[second]

    def turn(o: Point, a: Point, b: Point):
        (ox, oy), (ax, ay), (bx, by) = key(o), key(a), key(b)
        return (ax - ox) * (by - oy) - (ay - oy) * (bx - ox)

    ordered = sorted(unique_points(points), key=key)
    if len(ordered) < 3:
        return ordered

    lower: List[Point] = []
    for point in ordered:
        while len(lower) >= 2 and turn(lower[-2], lower[-1], point) <= 0:
            lower.pop()
        lower.append(point)
    upper: List[Point] = []
    for point in reversed(ordered):
        while len(upper) >= 2 and turn(upper[-2], upper[-1], point) <= 0:
            upper.pop()
        upper.append(point)
    hull = lower[:-1] + upper[:-1]

    if normal.components[axis] < 0:
        hull.reverse()
    return hull
