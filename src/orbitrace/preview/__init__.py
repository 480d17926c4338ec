"""Preview module for frame output.

Components:
    export: NumPy conversion and PNG export

Example:
    >>> from orbitrace.preview import save_png
    >>> save_png(frame, "output.png")
"""

from orbitrace.preview.export import compute_rmse, frame_to_array, frame_to_uint8, save_png

__all__ = [
    "frame_to_array",
    "frame_to_uint8",
    "save_png",
    "compute_rmse",
]
