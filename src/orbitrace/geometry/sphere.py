"""Sphere primitive with closed-form ray-sphere intersection.

The intersection test projects the eye-to-center vector onto the ray
direction and solves for the nearer root directly:

    eye_to_center = center - origin
    v = eye_to_center . direction
    discriminant = radius^2 - |eye_to_center|^2 + v^2
    t = v - sqrt(discriminant)

The ray direction must be unit length for t to be a distance. The nearer
root is returned even when it is negative (behind the ray origin); the
shadow probe relies on those negative distances to detect occluders lying
between a surface and its light.

Example:
    >>> from orbitrace.core.ray import Ray
    >>> from orbitrace.core.vector import Vector3
    >>> from orbitrace.geometry.sphere import Sphere, detect_collision
    >>> sphere = Sphere(center=Vector3(0.0, 0.0, -5.0), radius=1.0)
    >>> ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))
    >>> detect_collision(sphere, ray)
    4.0
"""

import math
import numbers
from dataclasses import dataclass

from orbitrace.core.color import WHITE, Color
from orbitrace.core.ray import Ray
from orbitrace.core.vector import Vector3, as_vector, dot, sub, unit
from orbitrace.errors import InvalidSceneParameterError


@dataclass(frozen=True)
class Sphere:
    """A shaded sphere.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        color: The surface color in the unclamped 0-255 channel range.
        specular: Weight of the recursively traced reflection, in [0, 1].
        diffuse: Weight of the Lambertian light term, in [0, 1].
        ambient: Weight of the unconditional ambient term, in [0, 1].

    The three coefficients are independent and need not sum to 1.
    Tuples are accepted for center and color and converted to vectors.
    """

    center: Vector3
    radius: float
    color: Color = WHITE
    specular: float = 0.0
    diffuse: float = 1.0
    ambient: float = 0.0

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "center", as_vector(self.center))
            object.__setattr__(self, "color", as_vector(self.color))
        except (TypeError, ValueError) as e:
            raise InvalidSceneParameterError(f"Invalid sphere vector: {e}") from e

        if (
            not isinstance(self.radius, numbers.Real)
            or not math.isfinite(self.radius)
            or self.radius <= 0.0
        ):
            raise InvalidSceneParameterError(f"Sphere radius must be positive, got {self.radius!r}")
        for name in ("specular", "diffuse", "ambient"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or not 0.0 <= value <= 1.0:
                raise InvalidSceneParameterError(
                    f"Sphere {name} coefficient must be in [0, 1], got {value!r}"
                )


def detect_collision(sphere: Sphere, ray: Ray) -> float | None:
    """Test a ray against a sphere.

    Args:
        sphere: The sphere to test.
        ray: The ray to test, with a unit-length direction.

    Returns:
        The distance along the ray to the nearer intersection, or None if
        the ray's line misses the sphere. The distance is negative when the
        nearer intersection lies behind the ray origin.
    """
    eye_to_center = sub(sphere.center, ray.origin)
    v = dot(eye_to_center, ray.direction)
    discriminant = sphere.radius * sphere.radius - dot(eye_to_center, eye_to_center) + v * v
    if discriminant < 0.0:
        return None
    return v - math.sqrt(discriminant)


def sphere_normal(sphere: Sphere, point: Vector3) -> Vector3:
    """Compute the outward unit normal at a point on the sphere surface.

    Args:
        sphere: The sphere.
        point: A point on the sphere surface.

    Returns:
        The unit vector from the center toward the point.
    """
    return unit(sub(point, sphere.center))
