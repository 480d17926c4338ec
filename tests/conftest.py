"""Pytest configuration for renderer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session, and small scenes
whose rendered colors can be worked out by hand.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def head_on_camera():
    """Camera at the origin looking down -z with a 90 degree FOV."""
    from orbitrace.camera.pinhole import Camera

    return Camera(origin=(0.0, 0.0, 0.0), field_of_view=90.0, look_at=(0.0, 0.0, -1.0))


@pytest.fixture
def single_sphere_scene(head_on_camera):
    """One sphere straight ahead of the camera, lit from behind the camera.

    The center ray hits the sphere at distance 4. The reflected ray points
    back into the sphere and hits it again at distance 0 on every bounce,
    so the center pixel is color * (diffuse + ambient) * (1 + s + s^2 + s^3).
    """
    from orbitrace.geometry.sphere import Sphere
    from orbitrace.scene.model import Light, Scene

    sphere = Sphere(
        center=(0.0, 0.0, -5.0),
        radius=1.0,
        color=(200.0, 100.0, 50.0),
        specular=0.5,
        diffuse=0.6,
        ambient=0.1,
    )
    return Scene(
        camera=head_on_camera,
        lights=[Light(point=(0.0, 0.0, 100.0))],
        objects=[sphere],
        width=3,
        height=3,
    )


# Expected center pixel of single_sphere_scene
SINGLE_SPHERE_CENTER = (262.5, 131.25, 65.625)


@pytest.fixture
def single_sphere_center():
    """Closed-form center pixel color of single_sphere_scene."""
    return SINGLE_SPHERE_CENTER


@pytest.fixture
def small_orbit_scene():
    """The reference orbit scene at a test-friendly resolution."""
    from orbitrace.scene.presets import create_orbit_scene

    return create_orbit_scene(24, 18)
