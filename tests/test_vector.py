"""Unit tests for vector algebra and colors.

Tests cover:
- Vector construction from sequences
- Basic arithmetic, dot and cross products
- Normalization, including the zero-length error
- Reflection about a normal
- Channel clamping for display output
"""

import math

import pytest


class TestVectorConstruction:
    """Tests for Vector3 construction helpers."""

    def test_from_sequence(self):
        """Test building a vector from a tuple."""
        from orbitrace.core.vector import Vector3

        assert Vector3.from_sequence((1, 2, 3)) == Vector3(1.0, 2.0, 3.0)

    def test_from_sequence_wrong_length(self):
        """Test that sequences without exactly 3 components are rejected."""
        from orbitrace.core.vector import Vector3

        with pytest.raises(ValueError, match="3 components"):
            Vector3.from_sequence((1.0, 2.0))

    def test_as_vector_passthrough(self):
        """Test that as_vector returns Vector3 inputs unchanged."""
        from orbitrace.core.vector import Vector3, as_vector

        v = Vector3(1.0, 2.0, 3.0)
        assert as_vector(v) is v
        assert as_vector([4, 5, 6]) == Vector3(4.0, 5.0, 6.0)

    def test_vectors_are_immutable(self):
        """Test that vector components cannot be reassigned."""
        import dataclasses

        from orbitrace.core.vector import Vector3

        v = Vector3(1.0, 2.0, 3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            v.x = 5.0


class TestVectorOperations:
    """Tests for the free vector functions."""

    def test_add_and_sub(self):
        """Test component-wise addition and subtraction."""
        from orbitrace.core.vector import Vector3, add, add3, sub

        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(4.0, 5.0, 6.0)
        assert add(a, b) == Vector3(5.0, 7.0, 9.0)
        assert sub(b, a) == Vector3(3.0, 3.0, 3.0)
        assert add3(a, b, a) == Vector3(6.0, 9.0, 12.0)

    def test_dot(self):
        """Test the dot product."""
        from orbitrace.core.vector import Vector3, dot

        assert dot(Vector3(1.0, 2.0, 3.0), Vector3(4.0, -5.0, 6.0)) == 12.0

    def test_cross_right_handed(self):
        """Test that x cross y is z."""
        from orbitrace.core.vector import Vector3, cross

        assert cross(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0)) == Vector3(0.0, 0.0, 1.0)

    def test_scale_and_magnitude(self):
        """Test scalar multiplication and length."""
        from orbitrace.core.vector import Vector3, magnitude, scale

        v = Vector3(1.0, 2.0, 2.0)
        assert scale(v, 2.0) == Vector3(2.0, 4.0, 4.0)
        assert magnitude(v) == 3.0

    def test_unit_has_length_one(self):
        """Test that normalization produces a unit vector."""
        from orbitrace.core.vector import Vector3, magnitude, unit

        v = unit(Vector3(3.0, -4.0, 12.0))
        assert math.isclose(magnitude(v), 1.0)
        assert math.isclose(v.x, 3.0 / 13.0)

    def test_unit_zero_vector_raises(self):
        """Test that normalizing a zero vector raises a typed error."""
        from orbitrace.core.vector import ZERO, unit
        from orbitrace.errors import DegenerateGeometryError, DegenerateVectorError

        with pytest.raises(DegenerateVectorError):
            unit(ZERO)
        assert issubclass(DegenerateVectorError, DegenerateGeometryError)

    def test_reflect_mirrors_across_normal(self):
        """Test reflect() computes 2 (v . n) n - v."""
        from orbitrace.core.vector import Vector3, reflect

        # A vector along the normal is unchanged
        assert reflect(Vector3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, 1.0)) == Vector3(0.0, 0.0, 1.0)
        # The tangential part is flipped
        assert reflect(Vector3(1.0, 1.0, 0.0), Vector3(0.0, 1.0, 0.0)) == Vector3(-1.0, 1.0, 0.0)


class TestColor:
    """Tests for colors and display clamping."""

    def test_constants(self):
        """Test the white and black constants."""
        from orbitrace.core.color import BLACK, WHITE

        assert WHITE.as_tuple() == (255.0, 255.0, 255.0)
        assert BLACK.as_tuple() == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, 0),
            (127.9, 127),
            (255.0, 255),
            (262.5, 255),
            (-0.5, 0),
            (-12.0, 0),
        ],
    )
    def test_clamp_channel_floors_then_clamps(self, value, expected):
        """Test that channels are floored and clamped to [0, 255]."""
        from orbitrace.core.color import clamp_channel

        assert clamp_channel(value) == expected

    def test_to_display(self):
        """Test converting an unclamped color to integers."""
        from orbitrace.core.color import make_color, to_display

        assert to_display(make_color(262.5, 131.25, -3.0)) == (255, 131, 0)
