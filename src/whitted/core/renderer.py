"""Tiled multi-worker renderer writing into a shared framebuffer.

The image is split into contiguous column chunks of
``ceil(width / worker_count)`` columns. Each chunk is rendered by one task
on a fixed-size thread pool; tasks share the scene and the ray tracer
read-only and write finished pixels into a lock-guarded framebuffer. The
render call blocks until every task has finished and only then hands the
framebuffer to the PNG writer, exactly once.

Work partitioning never changes pixel values: each pixel is computed from
its own primary ray, so renders with 1 or N workers are byte-identical.

Example:
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.scene.presets import create_example_scene
    >>> scene = create_example_scene(0)
    >>> render(scene, 160, 90, "scene0.png", worker_count=4)
"""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.whitted.camera.pinhole import ScreenBounds
from src.whitted.core.raytracer import RayTracer
from src.whitted.core.vector import Vector3
from src.whitted.preview.export import save_png
from src.whitted.scene.scene import Scene

# Type alias for progress callback
# Callback receives (completed_chunks, total_chunks)
ProgressCallback = Callable[[int, int], None]


def _check_positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} = {value} must be positive.")
    return int(value)


def color_to_bytes(color: Vector3) -> npt.NDArray[np.uint8]:
    """Scale a linear color to 8-bit channels.

    Channels are multiplied by 255, clamped to [0, 255] and truncated
    toward zero.
    """
    return np.clip(color * 255.0, 0.0, 255.0).astype(np.uint8)


def column_chunks(width: int, worker_count: int) -> list[range]:
    """Partition image columns into contiguous chunks, one per task.

    Args:
        width: Number of image columns.
        worker_count: Number of workers.

    Returns:
        Column ranges of ``ceil(width / worker_count)`` columns each; the last
        one may be shorter. There may be fewer chunks than workers.
    """
    width = _check_positive("width", width)
    worker_count = _check_positive("worker_count", worker_count)
    chunk_size = math.ceil(width / worker_count)
    return [
        range(start, min(start + chunk_size, width))
        for start in range(0, width, chunk_size)
    ]


class Framebuffer:
    """A width x height RGB byte image shared by render workers.

    Pixel writes are serialized by a single lock. Row 0 of the stored array
    is the top of the image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = _check_positive("width", width)
        self.height = _check_positive("height", height)
        self._pixels = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self._lock = threading.Lock()

    def put_pixel(self, x: int, y: int, rgb: npt.NDArray[np.uint8]) -> None:
        """Write one pixel. ``y`` counts down from the top row."""
        with self._lock:
            self._pixels[y, x] = rgb

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        with self._lock:
            r, g, b = self._pixels[y, x]
        return int(r), int(g), int(b)

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Return a copy of the image as a (height, width, 3) uint8 array."""
        with self._lock:
            return self._pixels.copy()

    def __repr__(self) -> str:
        return f"Framebuffer(width={self.width}, height={self.height})"


class TiledRenderer:
    """Renders scenes with a fixed pool of column-chunk workers.

    Attributes:
        tracer: The shading configuration and tracing algorithm.
        worker_count: Number of worker threads.
        last_render_seconds: Wall time of the most recent render, or None.
    """

    def __init__(self, tracer: RayTracer | None = None, worker_count: int = 1) -> None:
        self.tracer = tracer if tracer is not None else RayTracer()
        self.worker_count = _check_positive("worker_count", worker_count)
        self.last_render_seconds: float | None = None

    def _render_chunk(
        self,
        scene: Scene,
        framebuffer: Framebuffer,
        columns: range,
        xs: npt.NDArray[np.float64],
        ys: npt.NDArray[np.float64],
    ) -> None:
        height = framebuffer.height
        for column in columns:
            x = xs[column]
            for row, y in enumerate(ys):
                color = self.tracer.shade_pixel(scene, x, y)
                framebuffer.put_pixel(column, height - row - 1, color_to_bytes(color))

    def render_framebuffer(
        self,
        scene: Scene,
        width: int,
        height: int,
        callback: ProgressCallback | None = None,
    ) -> Framebuffer:
        """Render a scene into a new framebuffer without writing any file.

        Args:
            scene: The scene to render. Must not be modified during the call.
            width: Image width in pixels.
            height: Image height in pixels.
            callback: Optional callback called after each finished chunk with
                (completed_chunks, total_chunks).

        Returns:
            The finished framebuffer.

        Raises:
            ValueError: If width or height is not a positive integer.
        """
        framebuffer = Framebuffer(width, height)
        xs, ys = ScreenBounds.from_ratio(width / height).grid(width, height)
        chunks = column_chunks(width, self.worker_count)

        start_time = time.perf_counter()
        with ThreadPoolExecutor(max_workers=self.worker_count) as executor:
            futures = [
                executor.submit(self._render_chunk, scene, framebuffer, columns, xs, ys)
                for columns in chunks
            ]
            for completed, future in enumerate(as_completed(futures), start=1):
                # Re-raise worker errors in the calling thread
                future.result()
                if callback is not None:
                    callback(completed, len(chunks))
        self.last_render_seconds = time.perf_counter() - start_time

        return framebuffer

    def render(
        self,
        scene: Scene,
        width: int,
        height: int,
        output_path: str | Path,
        callback: ProgressCallback | None = None,
    ) -> Path:
        """Render a scene and save it as a PNG file.

        The file is written once, after every worker has finished.

        Returns:
            Path to the saved image file.

        Raises:
            ValueError: If width or height is not a positive integer.
            OSError: If the image cannot be written.
        """
        framebuffer = self.render_framebuffer(scene, width, height, callback=callback)
        output_file = Path(output_path)
        save_png(framebuffer.to_numpy(), output_file)
        return output_file

    def __repr__(self) -> str:
        return f"TiledRenderer(worker_count={self.worker_count}, tracer={self.tracer!r})"


def render(
    scene: Scene,
    width: int,
    height: int,
    output_path: str | Path,
    worker_count: int,
    tracer: RayTracer | None = None,
    callback: ProgressCallback | None = None,
) -> Path:
    """Render a scene to a PNG file using ``worker_count`` workers.

    Args:
        scene: The scene to render.
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
        output_path: Destination PNG path.
        worker_count: Number of worker threads (positive).
        tracer: Shading configuration. Defaults to ``RayTracer()``.
        callback: Optional progress callback (completed_chunks, total_chunks).

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If width, height or worker_count is not a positive integer.
        OSError: If the image cannot be written.
    """
    _check_positive("width", width)
    _check_positive("height", height)
    renderer = TiledRenderer(tracer, worker_count)
    return renderer.render(scene, width, height, output_path, callback=callback)
