"""Tests for the tiled multi-worker renderer.

This module tests:
- Column chunk partitioning
- Framebuffer pixel access
- Pixel placement (row flip) against direct per-pixel shading
- Determinism across runs and worker counts
- Progress reporting and timing
- Argument validation and error propagation
- PNG output through render()
"""

import math

import numpy as np
import pytest

from src.whitted.camera.pinhole import ScreenBounds
from src.whitted.core.renderer import (
    Framebuffer,
    TiledRenderer,
    color_to_bytes,
    column_chunks,
    render,
)
from src.whitted.core.vector import vec3
from src.whitted.geometry import Primitive
from src.whitted.preview.export import load_png
from src.whitted.scene.presets import create_example_scene
from src.whitted.scene.scene import Scene


class ExplodingPrimitive(Primitive):
    """A primitive whose intersection test always fails."""

    reflection = 0.0
    diffuse_c = 1.0
    specular_c = 1.0

    def intersect(self, origin, direction):
        raise RuntimeError("intersection failed")

    def normal(self, point):
        return vec3(0.0, 1.0, 0.0)

    def color(self, point):
        return vec3(1.0, 1.0, 1.0)

    def to_dict(self):
        return {"type": "exploding"}


class TestColumnChunks:
    """Test the partitioning of columns into tasks."""

    def test_even_split(self):
        assert column_chunks(8, 4) == [range(0, 2), range(2, 4), range(4, 6), range(6, 8)]

    def test_last_chunk_is_shorter(self):
        assert column_chunks(10, 4) == [range(0, 3), range(3, 6), range(6, 9), range(9, 10)]

    def test_fewer_chunks_than_workers(self):
        """ceil(5 / 4) = 2 columns per chunk gives only 3 chunks."""
        chunks = column_chunks(5, 4)
        assert chunks == [range(0, 2), range(2, 4), range(4, 5)]

    def test_more_workers_than_columns(self):
        assert column_chunks(3, 16) == [range(0, 1), range(1, 2), range(2, 3)]

    @pytest.mark.parametrize("width,workers", [(1, 1), (7, 3), (640, 16), (641, 16)])
    def test_chunks_cover_every_column_once(self, width, workers):
        chunks = column_chunks(width, workers)
        columns = [column for chunk in chunks for column in chunk]
        assert columns == list(range(width))
        assert all(len(chunk) <= math.ceil(width / workers) for chunk in chunks)

    @pytest.mark.parametrize("width,workers", [(0, 1), (4, 0), (-2, 1), (4, 1.5), (True, 1)])
    def test_rejects_invalid_arguments(self, width, workers):
        with pytest.raises(ValueError):
            column_chunks(width, workers)


class TestColorToBytes:
    """Test conversion of linear colors to 8-bit channels."""

    def test_scales_and_truncates(self):
        result = color_to_bytes(np.array([0.5, 1.0, 0.0]))
        assert result.dtype == np.uint8
        assert result.tolist() == [127, 255, 0]

    def test_clamps_out_of_range(self):
        result = color_to_bytes(np.array([1.7, -0.2, 0.999]))
        assert result.tolist() == [255, 0, 254]


class TestFramebuffer:
    """Test framebuffer storage."""

    def test_starts_black(self):
        framebuffer = Framebuffer(3, 2)
        image = framebuffer.to_numpy()
        assert image.shape == (2, 3, 3)
        assert image.dtype == np.uint8
        assert not image.any()

    def test_put_and_get_pixel(self):
        framebuffer = Framebuffer(3, 2)
        framebuffer.put_pixel(2, 1, np.array([10, 20, 30], dtype=np.uint8))
        assert framebuffer.get_pixel(2, 1) == (10, 20, 30)
        assert framebuffer.to_numpy()[1, 2].tolist() == [10, 20, 30]

    def test_to_numpy_returns_copy(self):
        framebuffer = Framebuffer(2, 2)
        image = framebuffer.to_numpy()
        image[0, 0] = 255
        assert framebuffer.get_pixel(0, 0) == (0, 0, 0)

    def test_rejects_empty_size(self):
        with pytest.raises(ValueError):
            Framebuffer(0, 4)


class TestTiledRenderer:
    """Test rendering into a framebuffer."""

    def test_pixels_match_direct_shading(self, tracer, single_sphere_scene):
        """Each pixel is the shaded primary ray, with screen row 0 at the bottom."""
        width, height = 4, 4
        image = TiledRenderer(tracer).render_framebuffer(
            single_sphere_scene, width, height
        ).to_numpy()

        xs, ys = ScreenBounds.from_ratio(width / height).grid(width, height)
        for column, x in enumerate(xs):
            for row, y in enumerate(ys):
                expected = color_to_bytes(tracer.shade_pixel(single_sphere_scene, x, y))
                np.testing.assert_array_equal(image[height - row - 1, column], expected)

    def test_four_by_four_matches_closed_form(self, tracer, single_sphere_scene):
        """Single non-reflective sphere: Blinn-Phong of the first hit, else black."""
        eye = np.array([0.0, 0.35, -1.0])
        light = np.array([5.0, 5.0, -10.0])
        base = np.array([0.8, 0.2, 0.1])

        def unit(v):
            return v / np.sqrt(v @ v)

        def reference_pixel(x, y):
            d = unit(np.array([x, y, 0.0]) - eye)
            b = 2.0 * (d @ eye)
            c = eye @ eye - 0.6**2
            disc = b * b - 4.0 * c
            if disc <= 0.0:
                return np.zeros(3, dtype=np.uint8)
            t = (-b - np.sqrt(disc)) / 2.0
            if t < 0.0:
                return np.zeros(3, dtype=np.uint8)
            m = eye + d * t
            n = unit(m)
            to_light = unit(light - m)
            h = unit(to_light + unit(eye - m))
            color = (
                0.05 * base
                + 0.9 * max(n @ to_light, 0.0) * base
                + 0.5 * max(n @ h, 0.0) ** 50
            )
            return np.clip(color * 255.0, 0.0, 255.0).astype(np.uint8)

        image = TiledRenderer(tracer, worker_count=2).render_framebuffer(
            single_sphere_scene, 4, 4
        ).to_numpy()

        xs = np.linspace(-1.0, 1.0, 4)
        ys = np.linspace(-0.75, 1.25, 4)
        hits = 0
        for column, x in enumerate(xs):
            for row, y in enumerate(ys):
                expected = reference_pixel(x, y).astype(int)
                actual = image[3 - row, column].astype(int)
                assert np.abs(actual - expected).max() <= 1
                hits += int(expected.any())
        assert hits > 0

    def test_sphere_in_center_background_black(self, tracer, single_sphere_scene):
        image = TiledRenderer(tracer).render_framebuffer(single_sphere_scene, 9, 9).to_numpy()
        # Top-left corner looks up past the sphere
        assert image[0, 0].tolist() == [0, 0, 0]
        # Screen point (0, 0) lies on the line from the camera to the center
        assert image[9 - 3 - 1, 4].any()

    def test_empty_scene_is_black(self, tracer):
        image = TiledRenderer(tracer, worker_count=2).render_framebuffer(Scene(), 5, 3).to_numpy()
        assert image.shape == (3, 5, 3)
        assert not image.any()

    def test_repeated_renders_are_identical(self, tracer):
        scene = create_example_scene(0)
        renderer = TiledRenderer(tracer, worker_count=4)
        first = renderer.render_framebuffer(scene, 24, 14).to_numpy()
        second = renderer.render_framebuffer(scene, 24, 14).to_numpy()
        np.testing.assert_array_equal(first, second)

    def test_worker_count_does_not_change_pixels(self, tracer):
        scene = create_example_scene(1)
        images = [
            TiledRenderer(tracer, worker_count=workers).render_framebuffer(scene, 20, 12).to_numpy()
            for workers in (1, 3, 16)
        ]
        np.testing.assert_array_equal(images[0], images[1])
        np.testing.assert_array_equal(images[0], images[2])

    def test_progress_callback(self, tracer, single_sphere_scene):
        calls = []
        renderer = TiledRenderer(tracer, worker_count=3)
        renderer.render_framebuffer(
            single_sphere_scene, 7, 2, callback=lambda done, total: calls.append((done, total))
        )
        # ceil(7 / 3) = 3 columns per chunk: 3 chunks
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_records_render_time(self, tracer, single_sphere_scene):
        renderer = TiledRenderer(tracer)
        assert renderer.last_render_seconds is None
        renderer.render_framebuffer(single_sphere_scene, 2, 2)
        assert renderer.last_render_seconds >= 0.0

    def test_rejects_invalid_worker_count(self, tracer):
        with pytest.raises(ValueError):
            TiledRenderer(tracer, worker_count=0)

    def test_worker_error_propagates(self, tracer):
        scene = Scene([ExplodingPrimitive()])
        with pytest.raises(RuntimeError, match="intersection failed"):
            TiledRenderer(tracer, worker_count=2).render_framebuffer(scene, 4, 2)


class TestRenderToFile:
    """Test the render() entry point."""

    def test_writes_png(self, tracer, single_sphere_scene, tmp_path):
        output = tmp_path / "sphere.png"
        result = render(single_sphere_scene, 6, 4, output, worker_count=2, tracer=tracer)

        assert result == output
        image = load_png(output)
        assert image.shape == (4, 6, 3)
        expected = TiledRenderer(tracer).render_framebuffer(single_sphere_scene, 6, 4).to_numpy()
        np.testing.assert_array_equal(image, expected)

    def test_default_tracer(self, single_sphere_scene, tmp_path):
        output = render(single_sphere_scene, 3, 3, tmp_path / "default.png", worker_count=1)
        assert output.exists()

    @pytest.mark.parametrize(
        "width,height,workers", [(0, 4, 1), (4, 0, 1), (4, 4, 0), (-1, 4, 1)]
    )
    def test_invalid_arguments_write_nothing(
        self, single_sphere_scene, tmp_path, width, height, workers
    ):
        output = tmp_path / "never.png"
        with pytest.raises(ValueError):
            render(single_sphere_scene, width, height, output, worker_count=workers)
        assert list(tmp_path.iterdir()) == []

    def test_unwritable_destination(self, single_sphere_scene, tmp_path):
        output = tmp_path / "missing" / "out.png"
        with pytest.raises(OSError):
            render(single_sphere_scene, 3, 3, output, worker_count=1)
        assert not output.exists()

    def test_worker_error_writes_nothing(self, tmp_path):
        output = tmp_path / "broken.png"
        with pytest.raises(RuntimeError):
            render(Scene([ExplodingPrimitive()]), 3, 3, output, worker_count=2)
        assert list(tmp_path.iterdir()) == []
