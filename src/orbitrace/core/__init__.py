"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Immutable Vector3 values and vector algebra
    color: RGB colors and output clamping
    ray: Ray data structure
    shading: Recursive trace/shade engine with shadow probes
    frame: Frame generation over every pixel, with optional executors
    kernel: Taichi kernel backend for accelerated frames
"""

from .color import BLACK, WHITE, Color, clamp_channel, make_color, to_display
from .ray import Ray, ray_at
from .vector import (
    ZERO,
    Vector3,
    add,
    add3,
    as_vector,
    cross,
    dot,
    magnitude,
    reflect,
    scale,
    sub,
    unit,
)

# Note: shading, frame and kernel are NOT imported here to avoid circular imports
# (they depend on the geometry, camera and scene packages, which import this one).
# Import directly from orbitrace.core.frame or orbitrace.core.kernel when needed.

__all__ = [
    "Vector3",
    "ZERO",
    "as_vector",
    "add",
    "add3",
    "sub",
    "dot",
    "cross",
    "scale",
    "magnitude",
    "unit",
    "reflect",
    "Color",
    "WHITE",
    "BLACK",
    "make_color",
    "clamp_channel",
    "to_display",
    "Ray",
    "ray_at",
]
