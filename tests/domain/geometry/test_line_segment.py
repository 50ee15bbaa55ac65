# tests/domain/geometry/test_line_segment.py
import pytest
from decimal import Decimal
from fractions import Fraction

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RoundingMode
from rational3d.domain.geometry.envelope import Envelope
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector


class TestLineSegment:
    def test_create_segment(self):
        segment = LineSegment(p=Point(), q=Point(x=3, y=4))
        assert segment.direction == Vector(dx=3, dy=4)
        assert segment.vertices == (Point(), Point(x=3, y=4))
        assert segment.dimension == 1

    def test_zero_length(self):
        with pytest.raises(DegenerateInputError):
            LineSegment(p=Point(x=1, y=1), q=Point(x=1, y=1))

    def test_length(self):
        segment = LineSegment(p=Point(), q=Point(x=3, y=4))
        assert segment.length_squared == 25
        assert segment.get_length(-2) == Decimal("5.00")

    def test_irrational_length(self):
        segment = LineSegment(p=Point(), q=Point(x=1, y=1, z=1))
        assert segment.length.exact is None
        assert segment.get_length(-4, RoundingMode.HALF_UP) == Decimal("1.7321")

    def test_centroid_is_cached_midpoint(self):
        segment = LineSegment(p=Point(x=1, y=2), q=Point(x=5, y=6))
        assert segment.get_centroid() == Point(x=3, y=4)
        assert segment.get_centroid() is segment.get_centroid()

    def test_equality_ignores_direction(self):
        a = LineSegment(p=Point(), q=Point(x=1))
        b = LineSegment(p=Point(x=1), q=Point())

        assert a == b
        assert hash(a) == hash(b)
        assert a == a.reverse()
        assert a != LineSegment(p=Point(), q=Point(x=2))

    def test_contains(self):
        segment = LineSegment(p=Point(), q=Point(x=2, y=2))
        assert segment.contains(Point(x=1, y=1))
        assert segment.contains(Point(x=2, y=2))
        assert not segment.contains(Point(x=3, y=3))
        assert not segment.contains(Point(x=1))

    def test_closest_point(self):
        segment = LineSegment(p=Point(), q=Point(x=4))
        assert segment.closest_point_to(Point(x=1, y=5)) == Point(x=1)
        assert segment.closest_point_to(Point(x=-3, y=1)) == Point()
        assert segment.closest_point_to(Point(x=9)) == Point(x=4)

    def test_parameter_range(self):
        segment = LineSegment(p=Point(), q=Point(x=4))
        assert segment.admits(Fraction(1, 2))
        assert not segment.admits(Fraction(5, 4))
        assert segment.endpoints == (Point(), Point(x=4))

    def test_envelope(self):
        segment = LineSegment(p=Point(x=1, y=5, z=-1), q=Point(x=-2, y=3, z=0))
        assert segment.get_envelope() == Envelope(x_min=-2, x_max=1, y_min=3, y_max=5, z_min=-1, z_max=0)

    def test_translate(self):
        segment = LineSegment(p=Point(), q=Point(x=1)).translate(Vector(dz=1))
        assert segment == LineSegment(p=Point(z=1), q=Point(x=1, z=1))
        assert segment.p.offset == Vector(dz=1)

    def test_str(self):
        segment = LineSegment(p=Point(), q=Point(x=1))
        assert str(segment) == "LineSegment((0, 0, 0) -> (1, 0, 0))"
