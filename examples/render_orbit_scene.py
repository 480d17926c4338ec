#!/usr/bin/env python3
"""Render frames of the orbiting-spheres scene.

This script renders the reference scene (a large sphere with two small
spheres circling it) for a number of animation frames and writes each frame
as a PNG file. Frames can be rendered by the pure Python engine, optionally
spread over a thread pool, or by the Taichi kernel backend.

Usage:
    python -m examples.render_orbit_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 160)
    --height HEIGHT     Nominal image height in pixels (default: 120)
    --frames FRAMES     Number of animation frames (default: 1)
    --output OUTPUT     Output path; "{frame}" is replaced by the frame number
                        (default: orbit_{frame:03d}.png)
    --backend BACKEND   "python" or "taichi" (default: python)
    --workers WORKERS   Worker threads for the python backend (default: 1)
    --quiet             Suppress progress output

Example:
    python -m examples.render_orbit_scene --width 320 --height 240 --frames 10 --backend taichi
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render frames of the orbiting-spheres scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=160,
        help="Image width in pixels (default: 160)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=120,
        help="Nominal image height in pixels (default: 120)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of animation frames (default: 1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="orbit_{frame:03d}.png",
        help='Output path, "{frame}" is replaced by the frame number (default: orbit_{frame:03d}.png)',
    )
    parser.add_argument(
        "--backend",
        choices=("python", "taichi"),
        default="python",
        help="Rendering backend (default: python)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker threads for the python backend (default: 1)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def render_orbit_frames(
    width: int = 160,
    height: int = 120,
    num_frames: int = 1,
    output_pattern: str = "orbit_{frame:03d}.png",
    backend: str = "python",
    workers: int = 1,
    quiet: bool = False,
) -> list[Path]:
    """Render the animation and save every frame.

    Args:
        width: Image width in pixels.
        height: Nominal image height in pixels.
        num_frames: Number of frames to render.
        output_pattern: Output path pattern with an optional {frame} field.
        backend: "python" for the recursive engine, "taichi" for the kernel.
        workers: Number of worker threads for the python backend.
        quiet: If True, suppress progress output.

    Returns:
        Paths of the saved image files.
    """
    # Lazy imports to allow Taichi initialization first
    from orbitrace.core.frame import render
    from orbitrace.core.kernel import render_accelerated_array
    from orbitrace.preview.export import save_png
    from orbitrace.scene.presets import animate, create_orbit_scene

    if num_frames < 1:
        raise ValueError(f"Frame count must be at least 1, got {num_frames}")

    if not quiet:
        print(f"Creating orbit scene ({width}x{height}, {backend} backend)...")

    base_scene = create_orbit_scene(width, height)
    executor = ThreadPoolExecutor(max_workers=workers) if workers > 1 else None
    saved: list[Path] = []
    start_time = time.time()

    try:
        for frame_index in range(num_frames):
            scene = animate(base_scene, frame_index)

            def progress_callback(current: int, target: int) -> None:
                if not quiet:
                    progress_pct = (current / target) * 100 if target > 0 else 0
                    print(
                        f"\r  Frame {frame_index + 1}/{num_frames}: "
                        f"{current}/{target} rows ({progress_pct:.1f}%)",
                        end="",
                        flush=True,
                    )

            if backend == "taichi":
                image = render_accelerated_array(scene)
            else:
                image = render(scene, executor=executor, callback=progress_callback)

            output_file = Path(output_pattern.format(frame=frame_index))
            saved.append(save_png(image, output_file))

            if not quiet:
                print(f"\r  Frame {frame_index + 1}/{num_frames} saved to {output_file}")
    finally:
        if executor is not None:
            executor.shutdown(cancel_futures=True)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Total time: {total_time:.2f}s ({total_time / num_frames:.2f}s per frame)")

    return saved


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.backend == "taichi":
        # Use GPU if available, fall back to CPU
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_orbit_frames(
            width=args.width,
            height=args.height,
            num_frames=args.frames,
            output_pattern=args.output,
            backend=args.backend,
            workers=args.workers,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
