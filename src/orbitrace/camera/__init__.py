"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera with look-at orientation and field of view

Example:
    >>> from orbitrace.camera import Camera, setup_view_plane, primary_ray
    >>> camera = Camera(origin=(0, 0, 0), field_of_view=90.0, look_at=(0, 0, -1))
    >>> view = setup_view_plane(camera, width=64, height=48)
    >>> ray = primary_ray(view, 32, 24)
"""

from .pinhole import WORLD_UP, Camera, ViewPlane, get_camera_info, primary_ray, setup_view_plane

__all__ = [
    "Camera",
    "ViewPlane",
    "WORLD_UP",
    "setup_view_plane",
    "primary_ray",
    "get_camera_info",
]
