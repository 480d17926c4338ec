"""Reference scene with two small moons orbiting a large sphere.

This module provides factory functions for the reference scene and its
animation. Animation never mutates a Scene: every frame is a new Scene value
built with dataclasses.replace(), with only the two orbiting spheres moved.

The reference scene consists of:
- A camera at (0, 1.8, 10) looking at (0, 3, 0) with a 45 degree FOV
- One point light at (-30, -10, 20)
- A large green-grey sphere at (0, 3.5, -3)
- Two small spheres circling the vertical axis through z = -3

Example:
    >>> from orbitrace.scene.presets import create_orbit_scene, animate
    >>> from orbitrace.core.frame import render
    >>>
    >>> scene = create_orbit_scene(320, 240)
    >>> frames = [render(animate(scene, i)) for i in range(3)]
"""

import math
from dataclasses import dataclass, replace

from orbitrace.camera.pinhole import Camera
from orbitrace.core.color import make_color
from orbitrace.core.vector import Vector3
from orbitrace.geometry.sphere import Sphere
from orbitrace.scene.model import Light, Scene

# Indices of the orbiting spheres in Scene.objects
INNER_MOON_INDEX = 1
OUTER_MOON_INDEX = 2


@dataclass(frozen=True)
class OrbitParams:
    """Parameters for the orbit animation.

    Attributes:
        orbit_center_z: z coordinate of the vertical orbit axis.
        inner_radius: Orbit radius of the first moon.
        outer_radius: Orbit radius of the second moon.
        inner_step: Phase advance of the first moon per frame, in radians.
        outer_step: Phase advance of the second moon per frame, in radians.
    """

    orbit_center_z: float = -3.0
    inner_radius: float = 3.5
    outer_radius: float = 4.0
    inner_step: float = 0.1
    outer_step: float = 0.2


def create_orbit_scene(width: int = 320, height: int = 240) -> Scene:
    """Create the reference scene at its starting position.

    Args:
        width: Image width in pixels.
        height: Nominal image height in pixels.

    Returns:
        The reference Scene.
    """
    camera = Camera(
        origin=Vector3(0.0, 1.8, 10.0),
        field_of_view=45.0,
        look_at=Vector3(0.0, 3.0, 0.0),
    )
    lights = (Light(point=Vector3(-30.0, -10.0, 20.0)),)
    objects = (
        Sphere(
            center=Vector3(0.0, 3.5, -3.0),
            radius=3.0,
            color=make_color(155, 200, 155),
            specular=0.2,
            diffuse=0.7,
            ambient=0.1,
        ),
        Sphere(
            center=Vector3(-4.0, 2.0, -1.0),
            radius=0.2,
            color=make_color(155, 155, 155),
            specular=0.1,
            diffuse=0.9,
            ambient=0.0,
        ),
        Sphere(
            center=Vector3(-4.0, 3.0, -1.0),
            radius=0.1,
            color=make_color(255, 255, 255),
            specular=0.2,
            diffuse=0.7,
            ambient=0.1,
        ),
    )
    return Scene(camera=camera, lights=lights, objects=objects, width=width, height=height)


def orbit_position(phase: float, radius: float, y: float, params: OrbitParams) -> Vector3:
    """Position on a horizontal circle around the orbit axis.

    Args:
        phase: Angle along the orbit, in radians.
        radius: Orbit radius.
        y: Height of the orbit plane.
        params: Orbit parameters (for the axis position).

    Returns:
        The point (sin(phase) * radius, y, center_z + cos(phase) * radius).
    """
    return Vector3(
        math.sin(phase) * radius,
        y,
        params.orbit_center_z + math.cos(phase) * radius,
    )


def animate(scene: Scene, frame_index: int, params: OrbitParams | None = None) -> Scene:
    """Build the scene for a given animation frame.

    Frame n places the moons at phases (n + 1) * inner_step and
    (n + 1) * outer_step, matching a scene advanced n + 1 ticks from its
    starting layout. Only the x and z coordinates change.

    Args:
        scene: A scene built by create_orbit_scene().
        frame_index: Zero-based frame number.
        params: Orbit parameters. Defaults to OrbitParams().

    Returns:
        A new Scene with the orbiting spheres moved. The input is unchanged.

    Raises:
        ValueError: If the scene does not have the reference object layout.
    """
    if params is None:
        params = OrbitParams()
    if len(scene.objects) <= OUTER_MOON_INDEX:
        raise ValueError(
            f"Scene has {len(scene.objects)} objects; the orbit animation needs "
            f"at least {OUTER_MOON_INDEX + 1}"
        )

    ticks = frame_index + 1
    inner = scene.objects[INNER_MOON_INDEX]
    outer = scene.objects[OUTER_MOON_INDEX]

    objects = list(scene.objects)
    objects[INNER_MOON_INDEX] = replace(
        inner,
        center=orbit_position(ticks * params.inner_step, params.inner_radius, inner.center.y, params),
    )
    objects[OUTER_MOON_INDEX] = replace(
        outer,
        center=orbit_position(ticks * params.outer_step, params.outer_radius, outer.center.y, params),
    )
    return replace(scene, objects=tuple(objects))
