"""Exception types raised by the renderer.

Every error aborts the frame being rendered and propagates to the caller;
nothing is retried internally.
"""


class RayTracerError(Exception):
    """Base class for all renderer errors."""


class InvalidSceneParameterError(RayTracerError, ValueError):
    """A scene value was constructed with an out-of-range parameter.

    Raised eagerly at construction (non-positive radius, non-positive image
    dimensions, field of view outside (0, 180)) so that bad input never
    reaches the shading recursion.
    """


class DegenerateGeometryError(RayTracerError, ArithmeticError):
    """Geometry produced a result with no defined direction or a non-finite value."""


class DegenerateVectorError(DegenerateGeometryError):
    """A zero-length vector was normalized.

    Typical causes are a light placed exactly at a surface point or a camera
    whose view direction is parallel to the world up vector.
    """


class RenderCancelledError(RayTracerError):
    """The render was cancelled at a row boundary."""
