"""Immutable 3-component vectors and the algebra the renderer needs.

Vectors are plain frozen dataclasses and every operation is a free function
returning a new value, so scenes built from them can be shared freely across
threads and processes.

Example:
    >>> from orbitrace.core.vector import Vector3, add, scale, unit
    >>> a = Vector3(1.0, 2.0, 2.0)
    >>> unit(a)
    Vector3(x=0.3333333333333333, y=0.6666666666666666, z=0.6666666666666666)
    >>> add(a, scale(a, 2.0))
    Vector3(x=3.0, y=6.0, z=6.0)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from orbitrace.errors import DegenerateVectorError


@dataclass(frozen=True)
class Vector3:
    """A 3D vector with float components.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> Vector3:
        """Build a vector from any 3-element sequence such as a tuple."""
        if len(values) != 3:
            raise ValueError(f"Expected 3 components, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the components as an (x, y, z) tuple."""
        return (self.x, self.y, self.z)


ZERO = Vector3(0.0, 0.0, 0.0)


def as_vector(value: Vector3 | Sequence[float]) -> Vector3:
    """Return value unchanged if it is a Vector3, else build one from a sequence."""
    if isinstance(value, Vector3):
        return value
    return Vector3.from_sequence(value)


# =============================================================================
# Vector Operations
# =============================================================================


def add(a: Vector3, b: Vector3) -> Vector3:
    """Component-wise sum a + b."""
    return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)


def add3(a: Vector3, b: Vector3, c: Vector3) -> Vector3:
    """Component-wise sum of three vectors."""
    return Vector3(a.x + b.x + c.x, a.y + b.y + c.y, a.z + b.z + c.z)


def sub(a: Vector3, b: Vector3) -> Vector3:
    """Component-wise difference a - b."""
    return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)


def dot(a: Vector3, b: Vector3) -> float:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Compute the cross product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The cross product a x b.
    """
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def scale(v: Vector3, s: float) -> Vector3:
    """Multiply every component of v by the scalar s."""
    return Vector3(v.x * s, v.y * s, v.z * s)


def magnitude(v: Vector3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def unit(v: Vector3) -> Vector3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        DegenerateVectorError: If v has zero length.
    """
    length = magnitude(v)
    if length == 0.0:
        raise DegenerateVectorError(f"Cannot normalize zero-length vector {v}")
    return scale(v, 1.0 / length)


def reflect(v: Vector3, normal: Vector3) -> Vector3:
    """Reflect a direction about a surface normal.

    Computes 2 * (v . n) * n - v, i.e. the mirror image of v across the axis
    defined by the normal. The normal should be unit length.

    Args:
        v: The direction to reflect.
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction.
    """
    return sub(scale(scale(normal, dot(v, normal)), 2.0), v)
