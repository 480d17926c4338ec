"""Frame generation: drive the shading engine over every pixel.

render() is the single entry point the rest of a program needs. It takes a
Scene and returns an immutable Frame of unclamped colors laid out row-major,
top row first, with OVERSCAN_ROWS extra rows below the nominal image height.

Rows are independent, so they can be computed by any concurrent.futures
executor. Each row is written back to its own index, which keeps the output
identical no matter which worker finishes first. Cancellation is checked at
every row boundary.

Example:
    >>> from concurrent.futures import ThreadPoolExecutor
    >>> from orbitrace.core.frame import render
    >>> from orbitrace.scene.presets import create_orbit_scene
    >>>
    >>> scene = create_orbit_scene(64, 48)
    >>> frame = render(scene)
    >>> frame.shape
    (68, 64)
    >>> with ThreadPoolExecutor(max_workers=4) as pool:
    ...     assert render(scene, executor=pool) == frame
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import Executor, Future, as_completed
from dataclasses import dataclass
from typing import Protocol

from orbitrace.camera.pinhole import ViewPlane, primary_ray, setup_view_plane
from orbitrace.core.color import Color, to_display
from orbitrace.core.shading import trace
from orbitrace.errors import RenderCancelledError
from orbitrace.scene.model import Scene

logger = logging.getLogger(__name__)

# Extra rows rendered below the nominal image height
OVERSCAN_ROWS = 20

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class CancelToken(Protocol):
    """Anything with an is_set() method, such as threading.Event."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True)
class Frame:
    """An immutable row-major grid of unclamped colors.

    Attributes:
        rows: One tuple of colors per row, top row first.
        width: Number of columns in every row.
    """

    rows: tuple[tuple[Color, ...], ...]
    width: int

    @property
    def shape(self) -> tuple[int, int]:
        """Get (row_count, column_count)."""
        return (len(self.rows), self.width)

    def pixel(self, row: int, column: int) -> Color:
        """Get the color at (row, column)."""
        return self.rows[row][column]

    def to_display(self) -> tuple[tuple[tuple[int, int, int], ...], ...]:
        """Convert every pixel to a clamped (R, G, B) integer triple."""
        return tuple(tuple(to_display(color) for color in row) for row in self.rows)


def total_rows(scene: Scene) -> int:
    """Number of rows render() produces for a scene."""
    return scene.height + OVERSCAN_ROWS


def render_row(scene: Scene, view: ViewPlane, y: int) -> tuple[Color, ...]:
    """Trace every primary ray of one row.

    This is a module-level function so that process pools can pickle it.

    Args:
        scene: The scene to render.
        view: View plane derived from the scene camera.
        y: Row index, 0 being the top row.

    Returns:
        The unclamped colors of the row, left to right.
    """
    return tuple(trace(primary_ray(view, x, y), scene, 0) for x in range(scene.width))


def render_pixel(scene: Scene, x: float, y: float) -> Color:
    """Render a single pixel.

    Useful for testing and debugging. Fractional coordinates are allowed.

    Args:
        scene: The scene to render.
        x: Column coordinate (0 = left).
        y: Row coordinate (0 = top).

    Returns:
        The unclamped color for the pixel.
    """
    view = setup_view_plane(scene.camera, scene.width, scene.height)
    return trace(primary_ray(view, x, y), scene, 0)


def _check_cancelled(cancel: CancelToken | None) -> None:
    if cancel is not None and cancel.is_set():
        raise RenderCancelledError("Render cancelled")


def render(
    scene: Scene,
    *,
    executor: Executor | None = None,
    cancel: CancelToken | None = None,
    callback: ProgressCallback | None = None,
) -> Frame:
    """Render a scene into a frame of unclamped colors.

    Args:
        scene: The scene to render.
        executor: Optional executor used to render rows concurrently.
            Thread and process pools both work. The executor is not shut
            down by this function.
        cancel: Optional cancellation token checked at every row boundary.
        callback: Optional callback called after each completed row.
            Receives (rows_completed, total_rows).

    Returns:
        A Frame with (scene.height + OVERSCAN_ROWS) rows of scene.width
        colors.

    Raises:
        RenderCancelledError: If the cancel token is set during the render.
        DegenerateGeometryError: If the camera or scene geometry produces a
            zero-length direction.
    """
    view = setup_view_plane(scene.camera, scene.width, scene.height)
    row_count = total_rows(scene)
    rows: list[tuple[Color, ...] | None] = [None] * row_count

    logger.debug(
        "Rendering %dx%d frame (%d objects, %d lights)",
        scene.width,
        row_count,
        len(scene.objects),
        len(scene.lights),
    )
    start_time = time.perf_counter()

    if executor is None:
        for y in range(row_count):
            _check_cancelled(cancel)
            rows[y] = render_row(scene, view, y)
            if callback is not None:
                callback(y + 1, row_count)
    else:
        _check_cancelled(cancel)
        futures: dict[Future[tuple[Color, ...]], int] = {
            executor.submit(render_row, scene, view, y): y for y in range(row_count)
        }
        try:
            for completed, future in enumerate(as_completed(futures), start=1):
                _check_cancelled(cancel)
                rows[futures[future]] = future.result()
                if callback is not None:
                    callback(completed, row_count)
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    logger.debug("Rendered frame in %.3fs", time.perf_counter() - start_time)
    return Frame(rows=tuple(rows), width=scene.width)
