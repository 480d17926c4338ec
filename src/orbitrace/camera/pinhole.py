"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (origin, look_at, fixed world up)
- Field of view given in degrees
- Arbitrary aspect ratios derived from the image dimensions

The camera builds an orthonormal basis from the view parameters:
- forward: points from the origin toward look_at
- right: points right in the image plane
- up: points up in the image plane

The view plane sits at unit distance along forward. Pixel offsets on it are
spaced so that the first and last column (and the first and last row of the
nominal image height) land exactly on the plane edges.

Example:
    >>> from orbitrace.camera.pinhole import Camera, setup_view_plane, primary_ray
    >>> from orbitrace.core.vector import Vector3
    >>> camera = Camera(
    ...     origin=Vector3(0.0, 0.0, 0.0),
    ...     field_of_view=90.0,
    ...     look_at=Vector3(0.0, 0.0, -1.0),
    ... )
    >>> view = setup_view_plane(camera, width=3, height=3)
    >>> primary_ray(view, 1, 1).direction  # Ray through image center
    Vector3(x=0.0, y=0.0, z=-1.0)
"""

import math
import numbers
from dataclasses import dataclass

from orbitrace.core.ray import Ray
from orbitrace.core.vector import Vector3, add3, as_vector, cross, scale, sub, unit
from orbitrace.errors import InvalidSceneParameterError

# World up direction used to orient every camera
WORLD_UP = Vector3(0.0, 1.0, 0.0)


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        origin: Camera position in world space.
        field_of_view: Horizontal field of view in degrees, strictly between
            0 and 180.
        look_at: Point the camera is looking at in world space.
    """

    origin: Vector3
    field_of_view: float
    look_at: Vector3

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "origin", as_vector(self.origin))
            object.__setattr__(self, "look_at", as_vector(self.look_at))
        except (TypeError, ValueError) as e:
            raise InvalidSceneParameterError(f"Invalid camera vector: {e}") from e

        fov = self.field_of_view
        if not isinstance(fov, numbers.Real) or not 0.0 < fov < 180.0:
            raise InvalidSceneParameterError(
                f"Field of view must be strictly between 0 and 180 degrees, "
                f"got {self.field_of_view!r}"
            )


@dataclass(frozen=True)
class ViewPlane:
    """Precomputed camera basis and view-plane geometry for one image size.

    Attributes:
        origin: Camera position shared by every primary ray.
        forward: Unit view direction.
        right: Unit vector pointing right in the image plane.
        up: Unit vector pointing up in the image plane.
        half_width: Half the view-plane width at unit distance.
        half_height: Half the view-plane height at unit distance.
        pixel_width: Horizontal view-plane distance between adjacent columns.
        pixel_height: Vertical view-plane distance between adjacent rows.
    """

    origin: Vector3
    forward: Vector3
    right: Vector3
    up: Vector3
    half_width: float
    half_height: float
    pixel_width: float
    pixel_height: float

    @property
    def x_start(self) -> float:
        """Horizontal offset of column 0 (centered when there is one column)."""
        return -self.half_width if self.pixel_width else 0.0

    @property
    def y_start(self) -> float:
        """Vertical offset of row 0 (centered when there is one row)."""
        return self.half_height if self.pixel_height else 0.0


# =============================================================================
# Camera Setup
# =============================================================================


def setup_view_plane(camera: Camera, width: int, height: int) -> ViewPlane:
    """Derive the camera basis and view-plane geometry.

    Args:
        camera: Camera configuration with position, target and FOV.
        width: Image width in pixels.
        height: Nominal image height in pixels (without overscan rows).

    Returns:
        The ViewPlane used to generate primary rays.

    Raises:
        DegenerateVectorError: If look_at equals the origin, or the view
            direction is parallel to WORLD_UP.
    """
    forward = unit(sub(camera.look_at, camera.origin))
    right = unit(cross(forward, WORLD_UP))
    up = unit(cross(right, forward))

    # Convert FOV from degrees to radians
    fov_radians = math.radians(camera.field_of_view)
    half_width = math.tan(fov_radians / 2.0)
    half_height = (height / width) * half_width

    # A single column or row has no spacing; its ray goes through the center
    pixel_width = (2.0 * half_width) / (width - 1) if width > 1 else 0.0
    pixel_height = (2.0 * half_height) / (height - 1) if height > 1 else 0.0

    return ViewPlane(
        origin=camera.origin,
        forward=forward,
        right=right,
        up=up,
        half_width=half_width,
        half_height=half_height,
        pixel_width=pixel_width,
        pixel_height=pixel_height,
    )


# =============================================================================
# Ray Generation
# =============================================================================


def primary_ray(view: ViewPlane, x: float, y: float) -> Ray:
    """Generate the primary ray through pixel coordinates (x, y).

    Column x = 0 is the left edge of the view plane and row y = 0 the top
    edge; increasing y moves down. Rows past the nominal height continue
    below the bottom edge with the same spacing. Fractional coordinates are
    allowed and interpolate between pixel centers.

    Args:
        view: The view plane from setup_view_plane().
        x: Column coordinate.
        y: Row coordinate.

    Returns:
        A Ray from the camera origin with a normalized direction.
    """
    x_offset = view.x_start + x * view.pixel_width
    y_offset = view.y_start - y * view.pixel_height
    direction = add3(view.forward, scale(view.right, x_offset), scale(view.up, y_offset))
    return Ray(origin=view.origin, direction=unit(direction))


def get_camera_info(view: ViewPlane) -> dict[str, tuple[float, float, float]]:
    """Get the camera basis for debugging.

    Returns:
        Dictionary with origin, forward, right and up as tuples.
    """
    return {
        "origin": view.origin.as_tuple(),
        "forward": view.forward.as_tuple(),
        "right": view.right.as_tuple(),
        "up": view.up.as_tuple(),
    }
