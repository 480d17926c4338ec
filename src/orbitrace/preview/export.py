"""Image export utilities for rendered frames.

This module converts frames to NumPy arrays and saves them to files. The
8-bit conversion applies the same rule as orbitrace.core.color.to_display():
floor each channel, then clamp to [0, 255]. No tone mapping or gamma is
applied; channel values are already in the 0-255 display scale.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from orbitrace.core.frame import render
    >>> from orbitrace.preview.export import save_png
    >>> from orbitrace.scene.presets import create_orbit_scene
    >>>
    >>> frame = render(create_orbit_scene(160, 120))
    >>> save_png(frame, "orbit.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from orbitrace.core.color import CHANNEL_MAX, CHANNEL_MIN
from orbitrace.core.frame import Frame

# Frames or the float arrays the accelerated backend returns
FrameLike = Frame | npt.NDArray[np.floating]


def _as_float64(frame: FrameLike) -> npt.NDArray[np.float64]:
    if isinstance(frame, Frame):
        data = [[color.as_tuple() for color in row] for row in frame.rows]
        return np.asarray(data, dtype=np.float64).reshape(*frame.shape, 3)

    image = np.asarray(frame, dtype=np.float64)
    if image.ndim != 3 or image.shape[-1] != 3:
        raise ValueError(f"Expected an image of shape (rows, width, 3), got {image.shape}")
    return image


def frame_to_array(frame: FrameLike) -> npt.NDArray[np.float32]:
    """Convert a frame to an unclamped float32 array.

    Args:
        frame: A Frame, or an array of shape (rows, width, 3).

    Returns:
        Array of shape (rows, width, 3), row 0 first.

    Raises:
        ValueError: If an array input does not have shape (rows, width, 3).
    """
    return _as_float64(frame).astype(np.float32)


def frame_to_uint8(frame: FrameLike) -> npt.NDArray[np.uint8]:
    """Convert a frame to 8-bit display values.

    Each channel is floored and clamped to [0, 255], matching to_display().

    Args:
        frame: A Frame or an unclamped float array of shape (rows, width, 3).

    Returns:
        Array of shape (rows, width, 3) with dtype uint8.
    """
    # Floor in float64 so values just below an integer are not rounded up
    image = _as_float64(frame)
    return np.clip(np.floor(image), CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)


def save_png(frame: FrameLike, filepath: str | Path) -> Path:
    """Save a frame as an 8-bit RGB PNG file.

    Args:
        frame: A Frame or an unclamped float array of shape (rows, width, 3).
        filepath: Output file path (should end in .png).

    Returns:
        The path the image was written to.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(frame_to_uint8(frame))
    pil_image.save(path)
    return path


def compute_rmse(frame_a: FrameLike, frame_b: FrameLike) -> float:
    """Compute root mean squared error between two frames.

    Args:
        frame_a: First frame or image array.
        frame_b: Second frame or image array (must have the same shape).

    Returns:
        RMSE value in channel units (lower is more similar).

    Raises:
        ValueError: If the shapes don't match.
    """
    image_a = _as_float64(frame_a)
    image_b = _as_float64(frame_b)
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a - image_b
    return float(np.sqrt(np.mean(diff**2)))
