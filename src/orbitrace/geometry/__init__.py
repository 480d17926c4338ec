"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with closed-form ray-sphere intersection

Ray-object intersection follows the pattern:
    distance = detect_collision(sphere, ray)  # None on a miss
"""

from .sphere import Sphere, detect_collision, sphere_normal

__all__ = [
    "Sphere",
    "detect_collision",
    "sphere_normal",
]
