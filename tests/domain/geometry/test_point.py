# tests/domain/geometry/test_point.py
import pytest
from decimal import Decimal
from fractions import Fraction

from pydantic import ValidationError

from rational3d.domain.core.numbers import RoundingMode
from rational3d.domain.geometry.envelope import Envelope
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector


class TestPoint:
    def test_create_point(self):
        p = Point(x=1, y="2/3", z="-0.5")
        assert p.x == 1
        assert p.y == Fraction(2, 3)
        assert p.z == Fraction(-1, 2)

    def test_default_is_origin(self):
        assert Point().coordinates == (0, 0, 0)

    def test_invalid_coordinates(self):
        with pytest.raises(ValidationError):
            Point(x=float('nan'), y=1)
        with pytest.raises(ValidationError):
            Point(x=1, y=float('inf'))

    def test_coordinates_and_rel_together(self):
        with pytest.raises(ValidationError):
            Point(x=1, rel=Vector(dx=1))

    def test_equality_ignores_offset_split(self):
        a = Point(offset=Vector(dx=1), rel=Vector(dx=2))
        b = Point(offset=Vector(dx=3))
        c = Point(x=3)

        assert a == b == c
        assert hash(a) == hash(b) == hash(c)

    def test_translate_updates_offset(self):
        p = Point(x=1, y=2, z=3)
        moved = p.translate(Vector(dx=10))

        assert moved == Point(x=11, y=2, z=3)
        assert moved.rel == p.rel
        assert moved.offset == Vector(dx=10)
        assert p == Point(x=1, y=2, z=3)

    def test_add_vector(self):
        assert Point(x=1) + Vector(dy=1) == Point(x=1, y=1)

    def test_subtraction_gives_vector(self):
        assert Point(x=3, y=5) - Point(x=1, y=2) == Vector(dx=2, dy=3)

    def test_apply_updates_rel(self):
        p = Point(offset=Vector(dx=1), rel=Vector(dy=1))
        moved = p.apply(Vector(dz=1))

        assert moved.offset == p.offset
        assert moved == Point(x=1, y=1, z=1)

    def test_midpoint(self):
        assert Point(x=1, y=2).midpoint(Point(x=2, y=4, z=1)) == Point(x="3/2", y=3, z="1/2")

    def test_distance_squared(self):
        assert Point().get_distance_squared_to(Point(x=1, y=1, z=1)) == 3

    def test_finite_geometry_accessors(self):
        p = Point(x=1, y=2, z=3)

        assert p.dimension == 0
        assert p.vertices == (p,)
        assert p.get_centroid() is p
        assert p.contains(Point(x=1, y=2, z=3))
        assert p.get_envelope() == Envelope(x_min=1, x_max=1, y_min=2, y_max=2, z_min=3, z_max=3)

    def test_round_coordinates(self):
        p = Point(x="1/3", y="2/3", z=-1)
        assert p.round_coordinates(-2, RoundingMode.HALF_UP) == (
            Decimal("0.33"), Decimal("0.67"), Decimal("-1.00")
        )

    def test_str(self):
        assert str(Point(x=1, y="1/2", z=0)) == "(1, 1/2, 0)"
