"""Recursive Whitted-style shading engine.

This module resolves the color seen along a ray with two mutually recursive
functions:

    trace(ray, scene, depth)
        Finds the nearest sphere. Misses return the background (white);
        hits are handed to shade() with depth + 1.

    shade(ray, scene, sphere, point, normal, depth)
        Sums three terms:
        - specular: the reflected ray traced recursively, scaled by the
          sphere's specular coefficient
        - diffuse: Lambertian light from every visible point light, capped
          at 1.0 and scaled by the diffuse coefficient and sphere color
        - ambient: the sphere color scaled by the ambient coefficient

Recursion stops once depth exceeds MAX_DEPTH; that bounce contributes black.
Colors are never clamped here.

Light visibility:
    The shadow probe starts at the surface point and runs along the axis
    from the light through the point. Because collision distances are not
    filtered for sign, a sphere lying between the point and the light shows
    up as a hit at a large negative distance, while the surface the point
    sits on shows up at a distance of about zero. The light is visible only
    when the nearest hit lies beyond SHADOW_EPSILON. A probe that hits
    nothing at all reports the light as not visible.

Example:
    >>> from orbitrace.core.shading import trace
    >>> from orbitrace.camera.pinhole import setup_view_plane, primary_ray
    >>> view = setup_view_plane(scene.camera, scene.width, scene.height)
    >>> color = trace(primary_ray(view, 10, 10), scene, 0)
"""

from orbitrace.core.color import BLACK, WHITE, Color
from orbitrace.core.ray import Ray, ray_at
from orbitrace.core.vector import Vector3, add3, dot, reflect, scale, sub, unit
from orbitrace.geometry.sphere import Sphere, sphere_normal
from orbitrace.scene.model import Light, Scene, intersect

# =============================================================================
# Shading Constants
# =============================================================================

# Deepest recursion level that still shades; deeper calls return black
MAX_DEPTH = 3

# Shadow probe hits must lie beyond this distance for the light to count
SHADOW_EPSILON = -0.005

# Color returned for rays that leave the scene
BACKGROUND_COLOR = WHITE

# Maximum accumulated Lambertian amount
MAX_LAMBERT = 1.0


# =============================================================================
# Light Visibility
# =============================================================================


def is_light_visible(point: Vector3, scene: Scene, light: Light) -> bool:
    """Test whether a light illuminates a surface point.

    Args:
        point: The surface point.
        scene: The scene holding potential occluders.
        light: The light to test.

    Returns:
        True if the nearest probe hit lies beyond SHADOW_EPSILON. False if
        an occluder sits between the point and the light, and also False
        when the probe hits nothing.

    Raises:
        DegenerateVectorError: If the light coincides with the point.
    """
    probe = Ray(origin=point, direction=unit(sub(point, light.point)))
    hit = intersect(probe, scene)
    if hit is None:
        return False
    return hit.distance > SHADOW_EPSILON


def lambert_amount(point: Vector3, normal: Vector3, scene: Scene) -> float:
    """Accumulate the Lambertian cosine term over all visible lights.

    Args:
        point: The surface point.
        normal: The unit surface normal at the point.
        scene: The scene holding the lights.

    Returns:
        The summed positive cosines, capped at MAX_LAMBERT.
    """
    amount = 0.0
    for light in scene.lights:
        if not is_light_visible(point, scene, light):
            continue
        contribution = dot(unit(sub(light.point, point)), normal)
        if contribution > 0.0:
            amount += contribution
    return min(MAX_LAMBERT, amount)


# =============================================================================
# Recursive Tracing
# =============================================================================


def trace(ray: Ray, scene: Scene, depth: int) -> Color:
    """Compute the color seen along a ray.

    Args:
        ray: The ray to trace, with a unit-length direction.
        scene: The scene to render.
        depth: Current recursion depth; primary rays start at 0.

    Returns:
        The unclamped color. BLACK when depth exceeds MAX_DEPTH,
        BACKGROUND_COLOR when the ray hits nothing.
    """
    if depth > MAX_DEPTH:
        return BLACK

    hit = intersect(ray, scene)
    if hit is None:
        return BACKGROUND_COLOR

    point = ray_at(ray, hit.distance)
    normal = sphere_normal(hit.sphere, point)
    return shade(ray, scene, hit.sphere, point, normal, depth + 1)


def shade(
    ray: Ray,
    scene: Scene,
    sphere: Sphere,
    point: Vector3,
    normal: Vector3,
    depth: int,
) -> Color:
    """Compute the color of a surface point hit by a ray.

    Args:
        ray: The incoming ray.
        scene: The scene to render.
        sphere: The sphere that was hit.
        point: The hit point on the sphere surface.
        normal: The unit surface normal at the hit point.
        depth: Recursion depth for the reflected ray (already incremented
            by trace()).

    Returns:
        The unclamped sum of the specular, diffuse and ambient terms.

    Raises:
        DegenerateGeometryError: If a reflection or shadow direction has
            zero length.
    """
    reflected_color = BLACK
    # Zero coefficients contribute nothing; skip their rays
    if sphere.specular:
        reflected_ray = Ray(origin=point, direction=unit(reflect(ray.direction, normal)))
        reflected_color = scale(trace(reflected_ray, scene, depth), sphere.specular)

    diffuse_color = BLACK
    if sphere.diffuse:
        diffuse_color = scale(sphere.color, lambert_amount(point, normal, scene) * sphere.diffuse)

    ambient_color = scale(sphere.color, sphere.ambient)
    return add3(reflected_color, diffuse_color, ambient_color)
