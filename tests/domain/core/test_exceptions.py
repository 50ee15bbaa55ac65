# tests/domain/core/test_exceptions.py
import pytest
from pydantic import ValidationError

from rational3d.domain.core.exceptions import (
    ConfigurationError,
    DegenerateInputError,
    GeometryError,
    PrecisionAmbiguousError,
    UnsupportedPrecisionError,
)
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.point import Point


class TestErrorTaxonomy:
    """Test cases for the geometry error classes."""

    @pytest.mark.parametrize("error_class, code, category", [
        (DegenerateInputError, "DEGENERATE_INPUT", "degenerate"),
        (PrecisionAmbiguousError, "PRECISION_AMBIGUOUS", "precision"),
        (UnsupportedPrecisionError, "UNSUPPORTED_PRECISION", "precision"),
    ])
    def test_codes_and_categories(self, error_class, code, category):
        error = error_class("something went wrong")

        assert isinstance(error, GeometryError)
        assert not isinstance(error, ValueError)
        assert error.to_error_dict() == {
            "category": category,
            "code": code,
            "message": "something went wrong",
        }

    def test_code_override(self):
        assert GeometryError("x", code="CUSTOM").code == "CUSTOM"
        assert GeometryError("x").category == "geometry"

    def test_configuration_error(self):
        error = ConfigurationError("RATIONAL3D_MAX_OOM", "big", "must be an integer")

        assert error.key == "RATIONAL3D_MAX_OOM"
        assert error.value == "big"
        assert error.code == "CONFIGURATION_INVALID"
        assert error.category == "configuration"
        assert "RATIONAL3D_MAX_OOM='big'" in error.message


class TestValidationPassThrough:
    """Geometry errors reach the caller unwrapped by pydantic."""

    def test_degenerate_input_is_not_wrapped(self):
        with pytest.raises(DegenerateInputError) as exc_info:
            LineSegment(p=Point(x=1), q=Point(x=1))
        assert not isinstance(exc_info.value, ValidationError)

    def test_malformed_coordinate_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Point(x=float("inf"))
