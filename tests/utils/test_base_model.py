# tests/utils/test_base_model.py
import pytest
from fractions import Fraction
from typing import Optional

from rational3d.domain.core.exceptions import DegenerateInputError
from rational3d.domain.core.numbers import Rational
from rational3d.domain.geometry.line_segment import LineSegment
from rational3d.domain.geometry.point import Point
from rational3d.utils.base_model import ImmutableModel


class SimpleModel(ImmutableModel):
    """Simple test model with basic attributes."""
    name: str
    value: Rational


class NestedModel(ImmutableModel):
    """More complex model with nested attributes."""
    title: str
    simple: Optional[SimpleModel] = None


class TestImmutableModel:
    """Test suite for ImmutableModel base class."""

    def test_basic_creation(self):
        """Test creating a simple immutable model."""
        model = SimpleModel(name="test", value="1/3")
        assert model.name == "test"
        assert model.value == Fraction(1, 3)

    def test_immutability(self):
        """Test that models are immutable after creation."""
        model = SimpleModel(name="test", value=42)

        with pytest.raises(Exception):
            model.name = "changed"

        with pytest.raises(Exception):
            model.value = 100

    def test_with_changes_basic(self):
        """Test creating modified copies with with_changes() method."""
        original = SimpleModel(name="test", value=42)

        modified = original.with_changes(name="updated")

        assert original.name == "test"
        assert modified.name == "updated"
        assert modified.value == 42
        assert original is not modified

    def test_with_changes_invalid_field(self):
        """Test that with_changes() raises error for invalid field names."""
        model = SimpleModel(name="test", value=42)

        with pytest.raises(ValueError) as exc_info:
            model.with_changes(nonexistent="value")

        assert "Invalid field: nonexistent" in str(exc_info.value)

    def test_with_changes_revalidates(self):
        """Changes go through validation, so invariants hold for the copy."""
        segment = LineSegment(p=Point(x=0), q=Point(x=1))

        with pytest.raises(DegenerateInputError):
            segment.with_changes(q=Point(x=0))

    def test_with_changes_converts_values(self):
        model = SimpleModel(name="test", value=1)
        assert model.with_changes(value="0.25").value == Fraction(1, 4)

    def test_nested_model_with_changes(self):
        """Test with_changes on models with nested structures."""
        original = NestedModel(title="Example", simple=SimpleModel(name="nested", value=10))

        modified = original.with_changes(title="Updated", simple=SimpleModel(name="changed", value=20))

        assert modified.simple.name == "changed"
        assert original.simple.name == "nested"

    def test_with_changes_preserves_optional_none(self):
        """Test that with_changes preserves None for optional fields."""
        original = NestedModel(title="Example")
        assert original.with_changes(title="Changed").simple is None

    def test_cached_property_on_frozen_model(self):
        """Memoised values are stored without tripping the frozen check."""
        segment = LineSegment(p=Point(x=0), q=Point(x=2))
        assert segment.centroid is segment.centroid
        assert segment.centroid == Point(x=1)
