"""Taichi kernel backend for accelerated frame rendering.

This module evaluates the same shading model as orbitrace.core.shading, but
inside a Taichi kernel with one parallel thread per pixel. Taichi functions
cannot recurse, so the bounded trace/shade recursion is unrolled into a loop
of MAX_DEPTH + 1 bounces:

    color  = sum over bounces k of weight_k * (diffuse_k + ambient_k)
             + weight_m * BACKGROUND_COLOR   if bounce m escapes the scene
    weight_0 = 1, weight_{k+1} = weight_k * specular_k

which is exactly the expansion of the recursive definition, with the depth
cutoff contributing black.

Scene data is uploaded into preallocated Taichi fields (Structure of Arrays
layout), sized by MAX_SPHERES, MAX_LIGHTS, MAX_IMAGE_WIDTH and
MAX_IMAGE_HEIGHT. Fields are allocated on the first render, so ti.init()
must be called before that.

Results match orbitrace.core.frame.render() within float32 precision. One
difference: a light sitting exactly on a surface point gives a NaN shadow
direction, which hits nothing and so counts as shadowed instead of raising
DegenerateVectorError.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from orbitrace.core.kernel import render_accelerated
    >>> from orbitrace.scene.presets import create_orbit_scene
    >>>
    >>> frame = render_accelerated(create_orbit_scene(320, 240))
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from orbitrace.camera.pinhole import setup_view_plane
from orbitrace.core.color import Color
from orbitrace.core.frame import OVERSCAN_ROWS, Frame, total_rows
from orbitrace.core.shading import BACKGROUND_COLOR, MAX_DEPTH, MAX_LAMBERT, SHADOW_EPSILON
from orbitrace.errors import DegenerateGeometryError
from orbitrace.scene.model import Scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# =============================================================================
# Buffer Limits
# =============================================================================

MAX_SPHERES = 256
MAX_LIGHTS = 64

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 1024
MAX_IMAGE_HEIGHT = 1024

# Background color as a Taichi constant
_BACKGROUND = vec3(BACKGROUND_COLOR.x, BACKGROUND_COLOR.y, BACKGROUND_COLOR.z)

# =============================================================================
# Taichi Fields (allocated on first use)
# =============================================================================

_fields_allocated = False

_sphere_centers = None
_sphere_radii = None
_sphere_colors = None
_sphere_specular = None
_sphere_diffuse = None
_sphere_ambient = None
_num_spheres = None

_light_points = None
_num_lights = None

_camera_origin = None
_camera_forward = None
_camera_right = None
_camera_up = None
_view_start = None
_pixel_size = None

_color_buffer = None


def _allocate_fields() -> None:
    """Allocate all Taichi fields once per process."""
    global _fields_allocated
    global _sphere_centers, _sphere_radii, _sphere_colors
    global _sphere_specular, _sphere_diffuse, _sphere_ambient, _num_spheres
    global _light_points, _num_lights
    global _camera_origin, _camera_forward, _camera_right, _camera_up
    global _view_start, _pixel_size, _color_buffer

    if _fields_allocated:
        return

    _sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
    _sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
    _sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
    _sphere_specular = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
    _sphere_diffuse = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
    _sphere_ambient = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
    _num_spheres = ti.field(dtype=ti.i32, shape=())

    _light_points = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
    _num_lights = ti.field(dtype=ti.i32, shape=())

    _camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
    _camera_forward = ti.Vector.field(3, dtype=ti.f32, shape=())
    _camera_right = ti.Vector.field(3, dtype=ti.f32, shape=())
    _camera_up = ti.Vector.field(3, dtype=ti.f32, shape=())
    # (x, y) view-plane offsets of pixel (0, 0) and the spacing between pixels
    _view_start = ti.Vector.field(2, dtype=ti.f32, shape=())
    _pixel_size = ti.Vector.field(2, dtype=ti.f32, shape=())

    # Indexed [row, column], including overscan rows
    _color_buffer = ti.Vector.field(
        3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT + OVERSCAN_ROWS, MAX_IMAGE_WIDTH)
    )

    _fields_allocated = True


# =============================================================================
# Scene Upload (Python-side, called once per frame)
# =============================================================================


def upload_scene(scene: Scene) -> None:
    """Copy a scene and its camera geometry into the Taichi fields.

    Args:
        scene: The scene to upload.

    Raises:
        ValueError: If the scene exceeds the preallocated buffer limits.
    """
    if len(scene.objects) > MAX_SPHERES:
        raise ValueError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    if len(scene.lights) > MAX_LIGHTS:
        raise ValueError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    if scene.width > MAX_IMAGE_WIDTH or scene.height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({scene.width}x{scene.height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _allocate_fields()

    for i, sphere in enumerate(scene.objects):
        _sphere_centers[i] = list(sphere.center.as_tuple())
        _sphere_radii[i] = sphere.radius
        _sphere_colors[i] = list(sphere.color.as_tuple())
        _sphere_specular[i] = sphere.specular
        _sphere_diffuse[i] = sphere.diffuse
        _sphere_ambient[i] = sphere.ambient
    _num_spheres[None] = len(scene.objects)

    for i, light in enumerate(scene.lights):
        _light_points[i] = list(light.point.as_tuple())
    _num_lights[None] = len(scene.lights)

    view = setup_view_plane(scene.camera, scene.width, scene.height)
    _camera_origin[None] = list(view.origin.as_tuple())
    _camera_forward[None] = list(view.forward.as_tuple())
    _camera_right[None] = list(view.right.as_tuple())
    _camera_up[None] = list(view.up.as_tuple())
    _view_start[None] = [view.x_start, view.y_start]
    _pixel_size[None] = [view.pixel_width, view.pixel_height]


# =============================================================================
# Intersection and Shading (Taichi functions)
# =============================================================================


@ti.func
def _detect_collision(index: ti.i32, origin: vec3, direction: vec3):
    """Nearer-root ray-sphere test; see orbitrace.geometry.sphere.

    Returns:
        A tuple (hit, distance) where hit is 1 if the ray's line meets the
        sphere. The distance is not filtered for sign.
    """
    eye_to_center = _sphere_centers[index] - origin
    v = tm.dot(eye_to_center, direction)
    radius = _sphere_radii[index]
    discriminant = radius * radius - tm.dot(eye_to_center, eye_to_center) + v * v

    hit = 0
    distance = 0.0
    if discriminant >= 0.0:
        hit = 1
        distance = v - ti.sqrt(discriminant)
    return hit, distance


@ti.func
def _intersect(origin: vec3, direction: vec3):
    """Find the nearest sphere along a ray (first sphere wins ties).

    Returns:
        A tuple (index, distance); index is -1 when nothing was hit.
    """
    hit_index = -1
    closest = 0.0
    for i in range(_num_spheres[None]):
        hit, distance = _detect_collision(i, origin, direction)
        if hit == 1:
            if hit_index < 0:
                hit_index = i
                closest = distance
            elif distance < closest:
                hit_index = i
                closest = distance
    return hit_index, closest


@ti.func
def _is_light_visible(point: vec3, light: vec3) -> ti.i32:
    """Shadow probe along the light-to-point axis; no hit means not visible."""
    direction = tm.normalize(point - light)
    hit_index, distance = _intersect(point, direction)
    visible = 0
    if hit_index >= 0:
        if distance > SHADOW_EPSILON:
            visible = 1
    return visible


@ti.func
def _lambert_amount(point: vec3, normal: vec3) -> ti.f32:
    """Summed positive cosines over visible lights, capped at MAX_LAMBERT."""
    amount = 0.0
    for i in range(_num_lights[None]):
        light = _light_points[i]
        if _is_light_visible(point, light) == 1:
            contribution = tm.dot(tm.normalize(light - point), normal)
            if contribution > 0.0:
                amount += contribution
    return tm.min(MAX_LAMBERT, amount)


@ti.func
def _trace(origin: vec3, direction: vec3) -> vec3:
    """Iterative form of the bounded trace/shade recursion."""
    ray_origin = origin
    ray_direction = direction
    color = vec3(0.0, 0.0, 0.0)
    weight = 1.0
    active = 1

    for _bounce in range(MAX_DEPTH + 1):
        if active == 1:
            hit_index, distance = _intersect(ray_origin, ray_direction)
            if hit_index < 0:
                color += weight * _BACKGROUND
                active = 0
            else:
                point = ray_origin + ray_direction * distance
                normal = tm.normalize(point - _sphere_centers[hit_index])
                sphere_color = _sphere_colors[hit_index]

                local = sphere_color * _sphere_ambient[hit_index]
                diffuse = _sphere_diffuse[hit_index]
                if diffuse != 0.0:
                    local += sphere_color * (_lambert_amount(point, normal) * diffuse)
                color += weight * local

                specular = _sphere_specular[hit_index]
                if specular == 0.0:
                    active = 0
                else:
                    weight *= specular
                    # 2 * (d . n) * n - d, matching orbitrace.core.vector.reflect
                    reflected = 2.0 * tm.dot(ray_direction, normal) * normal - ray_direction
                    ray_origin = point
                    ray_direction = tm.normalize(reflected)

    return color


# =============================================================================
# Rendering Kernel
# =============================================================================


@ti.kernel
def _render_kernel(width: ti.i32, rows: ti.i32):
    """Trace one primary ray per pixel into the color buffer.

    Args:
        width: Image width in pixels.
        rows: Number of rows including overscan.
    """
    for y, x in ti.ndrange(rows, width):
        x_offset = _view_start[None][0] + ti.cast(x, ti.f32) * _pixel_size[None][0]
        y_offset = _view_start[None][1] - ti.cast(y, ti.f32) * _pixel_size[None][1]
        direction = tm.normalize(
            _camera_forward[None] + x_offset * _camera_right[None] + y_offset * _camera_up[None]
        )
        _color_buffer[y, x] = _trace(_camera_origin[None], direction)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_accelerated_array(scene: Scene) -> npt.NDArray[np.float32]:
    """Render a scene with the Taichi kernel.

    Args:
        scene: The scene to render.

    Returns:
        Unclamped float32 array of shape (height + OVERSCAN_ROWS, width, 3),
        row 0 first.

    Raises:
        ValueError: If the scene exceeds the buffer limits.
        DegenerateGeometryError: If any pixel is not finite.
    """
    row_count = total_rows(scene)
    upload_scene(scene)

    logger.debug("Rendering %dx%d frame with Taichi kernel", scene.width, row_count)
    start_time = time.perf_counter()
    _render_kernel(scene.width, row_count)

    image = _color_buffer.to_numpy()[:row_count, : scene.width, :]
    logger.debug("Kernel frame finished in %.3fs", time.perf_counter() - start_time)

    if not np.all(np.isfinite(image)):
        bad = int(np.count_nonzero(~np.all(np.isfinite(image), axis=-1)))
        raise DegenerateGeometryError(f"Kernel produced {bad} non-finite pixels")

    return image.astype(np.float32)


def render_accelerated(scene: Scene) -> Frame:
    """Render a scene with the Taichi kernel and wrap the result as a Frame.

    Args:
        scene: The scene to render.

    Returns:
        A Frame with the same layout as orbitrace.core.frame.render().
    """
    image = render_accelerated_array(scene).astype(np.float64)
    rows = tuple(
        tuple(Color(float(r), float(g), float(b)) for r, g, b in row) for row in image.tolist()
    )
    return Frame(rows=rows, width=scene.width)
