# rational3d/domain/geometry/hull.py
"""Convex hull of a point set as the lowest-dimensional primitive."""
import logging
from typing import Iterable, Optional, Union

from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.points import (
    are_collinear,
    extreme_pair,
    find_normal,
    planar_hull,
    unique_points,
)
from rational3d.domain.geometry.polygon import Polygon
from rational3d.domain.geometry.polyhedron import Polyhedron, hull_faces
from rational3d.domain.geometry.tetrahedron import Tetrahedron
from rational3d.domain.geometry.triangle import Triangle

logger = logging.getLogger(__name__)

Hull = Optional[Union[Point, LineSegment, Triangle, Polygon, Tetrahedron, Polyhedron]]


def convex_hull(points: Iterable[Point]) -> Hull:
    """
    Build the convex hull of a set of points.

    Args:
        points: Any number of points; repeats are ignored

    Returns:
        None for no points, otherwise a Point, LineSegment, Triangle,
        Polygon, Tetrahedron or Polyhedron depending on the dimension and
        corner count of the hull
    """
    points = unique_points(points)
    if not points:
        return None
    if len(points) == 1:
        return points[0]
    if are_collinear(points):
        p, q = extreme_pair(points)
        return LineSegment(p=p, q=q)

    normal = find_normal(points)
    origin = points[0]
    if all(normal.dot(point - origin) == 0 for point in points):
        corners = planar_hull(points, normal)
        if len(corners) == 3:
            return Triangle(p=corners[0], q=corners[1], r=corners[2])
        return Polygon(points=tuple(corners))

    corners = unique_points(corner for face in hull_faces(points) for corner in face)
    logger.debug(f"Convex hull of {len(points)} points has {len(corners)} corners")
    if len(corners) == 4:
        return Tetrahedron(p=corners[0], q=corners[1], r=corners[2], s=corners[3])
    return Polyhedron(points=tuple(corners))
