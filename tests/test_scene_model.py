"""Unit tests for the scene model and scene-level intersection.

Tests cover:
- Scene validation (dimensions, element types)
- Immutability and list freezing
- Nearest-hit selection across multiple spheres
- Tie-breaking by object order
- Negative distances taking part in the nearest-hit search
"""

import dataclasses
import math

import pytest


def _make_scene(objects, width=4, height=3, lights=()):
    from orbitrace.camera.pinhole import Camera
    from orbitrace.scene.model import Scene

    camera = Camera(origin=(0, 0, 0), field_of_view=90.0, look_at=(0, 0, -1))
    return Scene(camera=camera, lights=list(lights), objects=list(objects), width=width, height=height)


class TestSceneValidation:
    """Tests for Scene construction."""

    def test_lists_are_frozen_into_tuples(self):
        """Test that lights and objects are stored as tuples."""
        from orbitrace.geometry.sphere import Sphere
        from orbitrace.scene.model import Light

        scene = _make_scene([Sphere(center=(0, 0, -5), radius=1.0)], lights=[Light(point=(1, 2, 3))])
        assert isinstance(scene.objects, tuple)
        assert isinstance(scene.lights, tuple)
        assert scene.lights[0].point.as_tuple() == (1.0, 2.0, 3.0)

    def test_scene_is_immutable(self):
        """Test that scene fields cannot be reassigned."""
        scene = _make_scene([])
        with pytest.raises(dataclasses.FrozenInstanceError):
            scene.width = 10

    def test_whole_float_dimensions_are_accepted(self):
        """Test that 64.0 is accepted as a width and stored as an int."""
        scene = _make_scene([], width=64.0, height=48)
        assert scene.width == 64
        assert isinstance(scene.width, int)

    @pytest.mark.parametrize("width", [0, -3, 2.5, math.inf, math.nan, "64", True])
    def test_invalid_width(self, width):
        """Test that widths other than positive whole numbers are rejected."""
        from orbitrace.errors import InvalidSceneParameterError

        with pytest.raises(InvalidSceneParameterError, match="width"):
            _make_scene([], width=width)

    @pytest.mark.parametrize("height", [0, -1, 0.5])
    def test_invalid_height(self, height):
        """Test that heights other than positive whole numbers are rejected."""
        from orbitrace.errors import InvalidSceneParameterError

        with pytest.raises(InvalidSceneParameterError, match="height"):
            _make_scene([], height=height)

    def test_wrong_object_type(self):
        """Test that non-sphere objects are rejected."""
        from orbitrace.errors import InvalidSceneParameterError

        with pytest.raises(InvalidSceneParameterError, match="Sphere"):
            _make_scene([(0, 0, -5)])

    @pytest.mark.parametrize("name", ["lights", "objects"])
    def test_missing_sequence(self, name):
        """Test that None in place of the light or object list is rejected."""
        from orbitrace.camera.pinhole import Camera
        from orbitrace.errors import InvalidSceneParameterError
        from orbitrace.scene.model import Scene

        camera = Camera(origin=(0, 0, 0), field_of_view=90.0, look_at=(0, 0, -1))
        kwargs = {"lights": [], "objects": [], name: None}
        with pytest.raises(InvalidSceneParameterError, match=name):
            Scene(camera=camera, width=4, height=3, **kwargs)

    def test_wrong_light_type(self):
        """Test that lights must be Light values."""
        from orbitrace.errors import InvalidSceneParameterError

        with pytest.raises(InvalidSceneParameterError, match="Light"):
            _make_scene([], lights=[(0, 0, 10)])


class TestIntersect:
    """Tests for intersect()."""

    def test_empty_scene_misses(self):
        """Test that a scene without objects never reports a hit."""
        from orbitrace.core.ray import Ray
        from orbitrace.core.vector import Vector3
        from orbitrace.scene.model import intersect

        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))
        assert intersect(ray, _make_scene([])) is None

    def test_nearest_sphere_wins(self):
        """Test that the closest of several spheres is returned."""
        from orbitrace.core.ray import Ray
        from orbitrace.core.vector import Vector3
        from orbitrace.geometry.sphere import Sphere
        from orbitrace.scene.model import intersect

        far = Sphere(center=(0, 0, -10), radius=1.0)
        near = Sphere(center=(0, 0, -5), radius=1.0)
        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))

        hit = intersect(ray, _make_scene([far, near]))
        assert hit is not None
        assert hit.sphere is near
        assert hit.distance == 4.0

    def test_first_object_wins_ties(self):
        """Test that equal distances resolve to the earlier object."""
        from orbitrace.core.ray import Ray
        from orbitrace.core.vector import Vector3
        from orbitrace.geometry.sphere import Sphere
        from orbitrace.scene.model import intersect

        first = Sphere(center=(0, 0, -5), radius=1.0, color=(255, 0, 0))
        second = Sphere(center=(0, 0, -5), radius=1.0, color=(0, 0, 255))
        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))

        assert intersect(ray, _make_scene([first, second])).sphere is first
        assert intersect(ray, _make_scene([second, first])).sphere is second

    def test_sphere_behind_origin_is_nearest(self):
        """Test that a negative distance beats a positive one."""
        from orbitrace.core.ray import Ray
        from orbitrace.core.vector import Vector3
        from orbitrace.geometry.sphere import Sphere
        from orbitrace.scene.model import intersect

        ahead = Sphere(center=(0, 0, -5), radius=1.0)
        behind = Sphere(center=(0, 0, 5), radius=1.0)
        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0))

        hit = intersect(ray, _make_scene([ahead, behind]))
        assert hit.sphere is behind
        assert hit.distance == -6.0
