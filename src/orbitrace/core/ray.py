"""Ray data structure.

Example:
    >>> from orbitrace.core.ray import Ray, ray_at
    >>> from orbitrace.core.vector import Vector3
    >>> ray = Ray(origin=Vector3(0.0, 0.0, 0.0), direction=Vector3(0.0, 0.0, -1.0))
    >>> ray_at(ray, 5.0)  # Point 5 units along the ray
    Vector3(x=0.0, y=0.0, z=-5.0)
"""

from dataclasses import dataclass

from orbitrace.core.vector import Vector3, add, scale


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Should be normalized
            by the caller; this is not enforced.
    """

    origin: Vector3
    direction: Vector3


def ray_at(ray: Ray, t: float) -> Vector3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Negative values lie behind the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return add(ray.origin, scale(ray.direction, t))
