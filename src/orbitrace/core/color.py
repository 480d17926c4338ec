"""RGB colors and output clamping.

Colors share the Vector3 shape and algebra. Channels are kept unclamped
while light is accumulated during shading, so over- and under-saturated
values add up naturally; clamping to the [0, 255] display range happens
only in to_display().
"""

import math

from orbitrace.core.vector import Vector3

# Colors are vectors whose components are the R, G, B channels
Color = Vector3

WHITE = Color(255.0, 255.0, 255.0)
BLACK = Color(0.0, 0.0, 0.0)

CHANNEL_MIN = 0
CHANNEL_MAX = 255


def make_color(r: float, g: float, b: float) -> Color:
    """Create a color from red, green and blue channel values."""
    return Color(float(r), float(g), float(b))


def clamp_channel(value: float) -> int:
    """Convert a single internal channel value to a display integer.

    The value is floored to an integer and then clamped to [0, 255].

    Args:
        value: The unclamped channel value.

    Returns:
        An integer in [0, 255].
    """
    return min(CHANNEL_MAX, max(CHANNEL_MIN, math.floor(value)))


def to_display(color: Color) -> tuple[int, int, int]:
    """Convert an internal color to a clamped (R, G, B) integer triple.

    Args:
        color: The unclamped color produced by shading.

    Returns:
        Tuple of (R, G, B) integers, each in [0, 255].
    """
    return (clamp_channel(color.x), clamp_channel(color.y), clamp_channel(color.z))
