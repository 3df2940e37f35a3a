"""Example scene configurations.

Two ready-made scenes: four spheres standing on a checkerboard floor.

- Scene 0: dark and purple spheres on a black and white floor, rendered with
  the default ray tracer settings.
- Scene 1: the same layout in bright colors on a purple and blue floor, lit
  by a warm yellow light with a stronger ambient term.

The coordinate system has y up and the camera looking toward +z from just
above the floor:
- X-axis: left to right
- Y-axis: floor (y = -0.5) to sky
- Z-axis: depth, away from the camera

Example:
    >>> from src.whitted.scene.presets import create_example_scene, example_tracer
    >>> scene = create_example_scene(1)
    >>> tracer = example_tracer(1)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.camera.pinhole import Camera
from src.whitted.core.raytracer import Light, RayTracer
from src.whitted.core.vector import Vector3, rgb
from src.whitted.geometry.checkerboard import Checkerboard
from src.whitted.geometry.sphere import Sphere
from src.whitted.scene.scene import Scene

# =============================================================================
# Layout Constants
# =============================================================================

SPHERE_RADIUS = 0.6

# Sphere centers, front to back
SPHERE_CENTERS = (
    (0.75, 0.1, 1.0),
    (-0.75, 0.1, 2.25),
    (3.75, 0.1, 4.0),
    (-2.75, 0.1, 3.5),
)

FLOOR_POINT = (0.0, -0.5, 0.0)
FLOOR_NORMAL = (0.0, 1.0, 0.0)
FLOOR_REFLECTION = 0.25
FLOOR_DIFFUSE_C = 0.75
FLOOR_SPECULAR_C = 0.5

# (reflection, diffuse_c, specular_c)
MIRROR_MATERIAL = (0.95, 0.95, 0.95)
MATTE_MATERIAL_0 = (0.03, 0.95, 0.4)
MATTE_MATERIAL_1 = (0.04, 0.95, 0.4)


@dataclass(frozen=True, eq=False)
class ExamplePalette:
    """Colors and materials of one example scene.

    Attributes:
        sphere_colors: One color per entry of SPHERE_CENTERS.
        sphere_materials: (reflection, diffuse_c, specular_c) per sphere.
        floor_colors: (black, white) checkerboard colors.
    """

    sphere_colors: tuple[Vector3, Vector3, Vector3, Vector3]
    sphere_materials: tuple[tuple[float, float, float], ...]
    floor_colors: tuple[Vector3, Vector3]


def _palette(index: int) -> ExamplePalette:
    if index == 0:
        return ExamplePalette(
            sphere_colors=(rgb(25, 25, 25), rgb(139, 0, 139), rgb(32, 178, 170), rgb(218, 165, 32)),
            sphere_materials=(MIRROR_MATERIAL, MATTE_MATERIAL_0, MATTE_MATERIAL_0, MIRROR_MATERIAL),
            floor_colors=(rgb(0, 0, 0), rgb(255, 255, 255)),
        )
    if index == 1:
        return ExamplePalette(
            sphere_colors=(rgb(77, 238, 234), rgb(116, 238, 21), rgb(255, 231, 0), rgb(240, 0, 255)),
            sphere_materials=(MIRROR_MATERIAL, MATTE_MATERIAL_1, MATTE_MATERIAL_1, MIRROR_MATERIAL),
            floor_colors=(rgb(240, 0, 255), rgb(0, 30, 255)),
        )
    raise ValueError(f"Unknown example scene: {index}")


def create_example_scene(index: int = 0) -> Scene:
    """Create one of the example scenes.

    Args:
        index: 0 or 1.

    Returns:
        A Scene with four spheres followed by the checkerboard floor.

    Raises:
        ValueError: If the index is not a known example scene.
    """
    palette = _palette(index)
    scene = Scene()

    for center, color, (reflection, diffuse_c, specular_c) in zip(
        SPHERE_CENTERS, palette.sphere_colors, palette.sphere_materials
    ):
        scene.add(
            Sphere(
                center=center,
                radius=SPHERE_RADIUS,
                base_color=color,
                reflection=reflection,
                diffuse_c=diffuse_c,
                specular_c=specular_c,
            )
        )

    scene.add(
        Checkerboard(
            point=FLOOR_POINT,
            normal_vector=FLOOR_NORMAL,
            colors=palette.floor_colors,
            reflection=FLOOR_REFLECTION,
            diffuse_c=FLOOR_DIFFUSE_C,
            specular_c=FLOOR_SPECULAR_C,
        )
    )
    return scene


def example_tracer(index: int = 0) -> RayTracer:
    """Return the ray tracer settings used with an example scene.

    Raises:
        ValueError: If the index is not a known example scene.
    """
    if index == 0:
        return RayTracer()
    if index == 1:
        return RayTracer(
            ambient=0.1,
            default_diffuse_c=1.0,
            default_specular_c=1.0,
            phong_exponent=50,
            max_depth=8,
            camera=Camera(),
            light=Light(position=(5.0, 5.0, -10.0), color=rgb(210, 200, 50)),
        )
    raise ValueError(f"Unknown example scene: {index}")
