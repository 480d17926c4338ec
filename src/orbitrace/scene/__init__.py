"""Scene module for scene values and ray-scene queries.

Components:
    model: Light and Scene values, nearest-hit intersection
    presets: Reference scene with two orbiting spheres and its animation

Scenes are immutable. Animating a scene builds a new Scene value per frame.
"""

from .model import Light, Scene, SceneHit, intersect
from .presets import OrbitParams, animate, create_orbit_scene, orbit_position

__all__ = [
    # Model
    "Light",
    "Scene",
    "SceneHit",
    "intersect",
    # Presets
    "OrbitParams",
    "animate",
    "create_orbit_scene",
    "orbit_position",
]
