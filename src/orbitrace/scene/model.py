"""Scene model and scene-level intersection testing.

A Scene is an immutable aggregate of camera, lights, spheres and output
dimensions. Moving an object means building a new Scene (for example with
dataclasses.replace), never mutating one, so a Scene can be handed to worker
threads or processes without locking.

Example:
    >>> from orbitrace.camera.pinhole import Camera
    >>> from orbitrace.geometry.sphere import Sphere
    >>> from orbitrace.scene.model import Light, Scene
    >>> scene = Scene(
    ...     camera=Camera(origin=(0, 0, 0), field_of_view=90.0, look_at=(0, 0, -1)),
    ...     lights=[Light(point=(0, 0, 100))],
    ...     objects=[Sphere(center=(0, 0, -5), radius=1.0)],
    ...     width=64,
    ...     height=48,
    ... )
"""

import math
import numbers
from dataclasses import dataclass

from orbitrace.camera.pinhole import Camera
from orbitrace.core.ray import Ray
from orbitrace.core.vector import Vector3, as_vector
from orbitrace.errors import InvalidSceneParameterError
from orbitrace.geometry.sphere import Sphere, detect_collision


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        point: The light position in world space.
    """

    point: Vector3

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "point", as_vector(self.point))
        except (TypeError, ValueError) as e:
            raise InvalidSceneParameterError(f"Invalid light position: {e}") from e


@dataclass(frozen=True)
class Scene:
    """Everything needed to render one frame.

    Attributes:
        camera: The camera the frame is rendered from.
        lights: Point lights, in order.
        objects: Spheres, in order. Order decides ties in intersect().
        width: Image width in pixels (positive whole number).
        height: Nominal image height in pixels (positive whole number).

    Lists passed for lights and objects are frozen into tuples.
    """

    camera: Camera
    lights: tuple[Light, ...]
    objects: tuple[Sphere, ...]
    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("lights", "objects"):
            try:
                object.__setattr__(self, name, tuple(getattr(self, name)))
            except TypeError as e:
                raise InvalidSceneParameterError(f"Scene {name} must be a sequence: {e}") from e

        if not isinstance(self.camera, Camera):
            raise InvalidSceneParameterError(f"Scene camera must be a Camera, got {self.camera!r}")
        for light in self.lights:
            if not isinstance(light, Light):
                raise InvalidSceneParameterError(f"Scene lights must be Light values, got {light!r}")
        for obj in self.objects:
            if not isinstance(obj, Sphere):
                raise InvalidSceneParameterError(f"Scene objects must be Sphere values, got {obj!r}")

        for name in ("width", "height"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, numbers.Real)
                or not math.isfinite(value)
                or value <= 0
                or value != int(value)
            ):
                raise InvalidSceneParameterError(
                    f"Scene {name} must be a positive whole number, got {value!r}"
                )
            object.__setattr__(self, name, int(value))


@dataclass(frozen=True)
class SceneHit:
    """Record of the nearest ray-scene intersection.

    Attributes:
        distance: Distance along the ray to the hit. May be negative, since
            collisions behind the ray origin are not filtered.
        sphere: The sphere that was hit.
    """

    distance: float
    sphere: Sphere


def intersect(ray: Ray, scene: Scene) -> SceneHit | None:
    """Test a ray against every sphere in the scene.

    Scans the objects in order and keeps the smallest distance seen so far.
    The comparison is strict, so the earliest object wins ties.

    Args:
        ray: The ray to test, with a unit-length direction.
        scene: The scene to test against.

    Returns:
        A SceneHit for the nearest collision, or None if nothing was hit.
    """
    closest: SceneHit | None = None
    for sphere in scene.objects:
        distance = detect_collision(sphere, ray)
        if distance is None:
            continue
        if closest is None or distance < closest.distance:
            closest = SceneHit(distance=distance, sphere=sphere)
    return closest
