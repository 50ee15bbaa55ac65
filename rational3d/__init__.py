# rational3d/__init__.py
"""
rational3d - exact rational 3D geometry kernel
"""
import logging

from rational3d.domain.core.exceptions import (
    ConfigurationError,
    DegenerateInputError,
    GeometryError,
    PrecisionAmbiguousError,
    UnsupportedPrecisionError,
)
from rational3d.domain.core.numbers import RationalSqrt, RoundingMode
from rational3d.domain.core.settings import PrecisionSettings, configure, get_settings
from rational3d.domain.geometry.vector import Vector
from rational3d.domain.geometry.point import Point
from rational3d.domain.geometry.line import Line, Ray
from rational3d.domain.geometry.plane import Plane
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.triangle import Triangle
from rational3d.domain.geometry.tetrahedron import Tetrahedron
from rational3d.domain.geometry.polygon import Polygon
from rational3d.domain.geometry.polyhedron import Polyhedron
from rational3d.domain.geometry.envelope import Envelope, EnvelopeKind
from rational3d.domain.geometry.hull import convex_hull
from rational3d.domain.geometry.points import are_collinear, are_coplanar
from rational3d.domain.geometry.intersection import Intersection, intersection, intersects
from rational3d.domain.geometry.distance import get_distance, get_distance_squared
from rational3d.utils.registry import ShapeArena, ShapeHandle

__version__ = "0.1.0"

# Library logging stays silent until the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "DegenerateInputError",
    "Envelope",
    "EnvelopeKind",
    "GeometryError",
    "Intersection",
    "Line",
    "LineSegment",
    "Plane",
    "Point",
    "Polygon",
    "Polyhedron",
    "PrecisionAmbiguousError",
    "PrecisionSettings",
    "RationalSqrt",
    "Ray",
    "RoundingMode",
    "ShapeArena",
    "ShapeHandle",
    "Tetrahedron",
    "Triangle",
    "UnsupportedPrecisionError",
    "Vector",
    "are_collinear",
    "are_coplanar",
    "configure",
    "convex_hull",
    "get_distance",
    "get_distance_squared",
    "get_settings",
    "intersection",
    "intersects",
]
