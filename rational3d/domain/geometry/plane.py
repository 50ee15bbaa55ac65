# rational3d/domain/geometry/plane.py
from fractions import Fraction
from typing import Optional, Union

from pydantic import Field, model_validator

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import RationalLike, RoundingMode, sign
from rational3d.domain.geometry.base import Geometry
from rational3d.domain.geometry.line import Line, Ray
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.vector import Vector


class Plane(Geometry):
    """
    Represents an infinite plane through point p with normal n.

    Construct with Plane(p=..., n=...) or from three non-collinear points
    with Plane(p=..., q=..., r=...), in which case n = (q - p) x (r - p).
    """
    p: Point = Field(description="A point on the plane")
    n: Vector = Field(description="Normal vector (never zero)")

    @model_validator(mode="before")
    @classmethod
    def from_points(cls, data):
        """Derive n from two further points q and r."""
        if isinstance(data, dict) and ("q" in data or "r" in data):
            data = dict(data)
            if "n" in data:
                raise ValueError("Give either a normal n or points q and r, not both")
            if "q" not in data or "r" not in data:
                raise ValueError("Both q and r are needed to define a plane from points")
            p = Point.model_validate(data["p"])
            q = Point.model_validate(data.pop("q"))
            r = Point.model_validate(data.pop("r"))
            n = (q - p).cross(r - p)
            if n.is_zero():
                raise DegenerateInputError(f"Points {p}, {q} and {r} are collinear")
            data["p"] = p
            data["n"] = n
        return data

    @model_validator(mode="after")
    def validate_normal(self) -> "Plane":
        """Validate that the normal is not the zero vector."""
        if self.n.is_zero():
            raise DegenerateInputError("Plane normal must not be the zero vector")
        return self

    def evaluate(self, point: Point) -> Fraction:
        """The signed value n . (point - p); zero on the plane."""
        return self.n.dot(point - self.p)

    def side_of(self, point: Point) -> int:
        """Which side of the plane the point is on: 1 (along n), -1 or 0 (on it)."""
        return sign(self.evaluate(point))

    def contains(self, point: Point) -> bool:
        """Check if the point lies on the plane. Exact."""
        return self.evaluate(point) == 0

    def is_parallel_to(self, other: "Plane") -> bool:
        return self.n.is_scalar_multiple(other.n)

    def project(self, point: Point) -> Point:
        """The foot of the perpendicular from point onto the plane."""
        t = self.evaluate(point) / self.n.magnitude_squared
        return point.apply(-self.n.scale(t))

    def translate(self, v: Vector) -> "Plane":
        return self.with_changes(p=self.p.translate(v))

    def rotate(self, axis: Union[Line, Ray], angle: RationalLike,
               oom: Optional[int] = None, rounding: Optional[RoundingMode] = None) -> "Plane":
        p = self.p.rotate(axis, angle, oom, rounding)
        tip = self.p.apply(self.n).rotate(axis, angle, oom, rounding)
        return Plane(p=p, n=tip - p)

    def __eq__(self, other: object) -> bool:
        """Planes are equal if they are the same set of points."""
        if not isinstance(other, Plane):
            return NotImplemented
        return self.is_parallel_to(other) and self.contains(other.p)

    def __hash__(self) -> int:
        lead = next(c for c in self.n.components if c != 0)
        normal = self.n.scale(1 / lead)
        return hash((normal, normal.dot(self.p.vector)))

    def __str__(self) -> str:
        return f"Plane({self.p}, n={self.n})"
