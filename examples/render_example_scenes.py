#!/usr/bin/env python3
"""Render the example scenes.

This script demonstrates end-to-end rendering of the two example scenes: it
builds the scene, picks the matching ray tracer settings, renders on a pool
of worker threads and writes a PNG.

Usage:
    python -m examples.render_example_scenes [options]

Options:
    --scene INDEX       Example scene to render, 0 or 1 (default: 0)
    --width WIDTH       Image width in pixels (default: 640)
    --height HEIGHT     Image height in pixels (default: 360)
    --workers COUNT     Number of worker threads (default: 16)
    --output OUTPUT     Output file path (default: sceneINDEX.png)
    --preview           Show the image in a Matplotlib window afterwards
    --quiet             Suppress progress output

Example:
    python -m examples.render_example_scenes --scene 1 --width 320 --height 180
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render one of the example scenes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=int,
        choices=(0, 1),
        default=0,
        help="Example scene to render (default: 0)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Image width in pixels (default: 640)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=360,
        help="Image height in pixels (default: 360)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=16,
        help="Number of worker threads (default: 16)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path (default: sceneINDEX.png)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_example_scene(
    index: int = 0,
    width: int = 640,
    height: int = 360,
    workers: int = 16,
    output_path: str | None = None,
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render an example scene and save it to file.

    Args:
        index: Example scene index (0 or 1).
        width: Image width in pixels.
        height: Image height in pixels.
        workers: Number of worker threads.
        output_path: Output file path (PNG). Defaults to ``scene<index>.png``.
        preview: If True, show the image after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from src.whitted.core.renderer import TiledRenderer
    from src.whitted.preview.display import show_preview
    from src.whitted.preview.export import save_png
    from src.whitted.scene.presets import create_example_scene, example_tracer

    if not quiet:
        print(f"Creating example scene {index} ({width}x{height})...")

    scene = create_example_scene(index)
    renderer = TiledRenderer(example_tracer(index), worker_count=workers)

    def progress_callback(completed: int, total: int) -> None:
        if not quiet:
            print(
                f"\r  Progress: {completed}/{total} column chunks "
                f"({completed / total * 100:.1f}%)",
                end="",
                flush=True,
            )

    framebuffer = renderer.render_framebuffer(scene, width, height, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress
        print(f"Rendering took {renderer.last_render_seconds:.2f} seconds.")

    output_file = Path(output_path if output_path is not None else f"scene{index}.png")
    image = framebuffer.to_numpy()
    save_png(image, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    if preview:
        show_preview(
            image,
            title=f"Example scene {index}",
            render_seconds=renderer.last_render_seconds,
        )

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    try:
        render_example_scene(
            index=args.scene,
            width=args.width,
            height=args.height,
            workers=args.workers,
            output_path=args.output,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
