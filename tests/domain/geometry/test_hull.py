# tests/domain/geometry/test_hull.py
from fractions import Fraction

from rational3d.domain.geometry.hull import convex_hull
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.points import (
    are_collinear,
    are_coplanar,
    extreme_pair,
    planar_hull,
    unique_points,
)
from rational3d.domain.geometry.polygon import Polygon
from rational3d.domain.geometry.polyhedron import Polyhedron
from rational3d.domain.geometry.tetrahedron import Tetrahedron
from rational3d.domain.geometry.triangle import Triangle
from rational3d.domain.geometry.vector import Vector


class TestPointPredicates:
    def test_unique_points(self):
        points = [Point(x=1), Point(), Point(offset=Vector(dx=1))]
        assert unique_points(points) == [Point(x=1), Point()]

    def test_collinear(self):
        assert are_collinear([Point(), Point(x=1, y=1), Point(x=-2, y=-2)])
        assert are_collinear([Point(), Point(x=1)])
        assert not are_collinear([Point(), Point(x=1), Point(y=1)])

    def test_coplanar(self):
        assert are_coplanar([Point(), Point(x=1), Point(y=1), Point(x=5, y=-7)])
        assert not are_coplanar([Point(), Point(x=1), Point(y=1), Point(z=1)])
        assert are_coplanar([Point(), Point(x=1), Point(x=2)])

    def test_extreme_pair(self):
        points = [Point(x=1), Point(x=-3), Point(x=2), Point()]
        assert set(extreme_pair(points)) == {Point(x=-3), Point(x=2)}

    def test_planar_hull_orientation(self):
        points = [Point(x=1, y=1), Point(), Point(x=1), Point(y=1), Point(x="1/2", y="1/2")]

        up = planar_hull(points, Vector(dz=1))
        down = planar_hull(points, Vector(dz=-1))

        assert len(up) == 4
        assert down == list(reversed(up))
        a, b, c = up[:3]
        assert (b - a).cross(c - b).dz > 0


class TestConvexHull:
    def test_empty(self):
        assert convex_hull([]) is None

    def test_single_point(self):
        assert convex_hull([Point(x=1), Point(x=1)]) == Point(x=1)

    def test_collinear_points(self):
        hull = convex_hull([Point(x=1), Point(x=3), Point(x=2)])
        assert hull == LineSegment(p=Point(x=1), q=Point(x=3))

    def test_triangle(self):
        hull = convex_hull([Point(), Point(x=2), Point(y=2), Point(x="1/2", y="1/2"), Point(x=1)])
        assert hull == Triangle(p=Point(), q=Point(x=2), r=Point(y=2))

    def test_polygon(self):
        hull = convex_hull([Point(x=1, y=1), Point(), Point(x=1), Point(y=1)])
        assert isinstance(hull, Polygon)
        assert hull.area_squared == 1

    def test_polygon_in_tilted_plane(self):
        points = [Point(), Point(x=1, z=1), Point(x=1, y=1, z=1), Point(y=1)]
        hull = convex_hull(points)
        assert isinstance(hull, Polygon)
        assert hull.area_squared == 2

    def test_tetrahedron(self):
        hull = convex_hull([Point(), Point(x=1), Point(y=1), Point(z=1),
                            Point(x="1/10", y="1/10", z="1/10")])
        assert hull == Tetrahedron(p=Point(), q=Point(x=1), r=Point(y=1), s=Point(z=1))

    def test_polyhedron(self):
        points = [Point(x=x, y=y, z=z) for x in (0, 2) for y in (0, 2) for z in (0, 2)]
        points.append(Point(x=1, y=1, z=1))
        points.append(Point(x=1, y=0, z=1))
        hull = convex_hull(points)

        assert isinstance(hull, Polyhedron)
        assert len(hull.vertices) == 8
        assert hull.volume == 8

    def test_octahedron(self):
        points = [Point(x=1), Point(x=-1), Point(y=1), Point(y=-1), Point(z=1), Point(z=-1)]
        hull = convex_hull(points)

        assert isinstance(hull, Polyhedron)
        assert hull.volume == Fraction(4, 3)
        assert len(hull.faces) == 8
