"""Whitted-style recursive ray tracing with Blinn-Phong shading.

This module implements the per-pixel shading algorithm. A pixel's color is
the weighted sum of the colors seen along a chain of mirror bounces:

    color = sum(cumulative_reflection_k * sample_color_k), k = 0 .. max_depth-1

where ``cumulative_reflection_k`` is the product of the reflection
coefficients of every surface hit before bounce k.

Each bounce ("trace") finds the nearest primitive, casts a shadow ray toward
the light, and shades the hit point with a fixed ambient + diffuse +
specular model:

    ambient * base
    + diffuse_c * max(dot(N, L), 0) * base * light.color
    + specular_c * max(dot(N, H), 0) ** phong_exponent * light.color

with ``H = normalize(L + V)`` the half vector between the directions to the
light (L) and to the camera (V).

The bounce loop stops on a miss, or right after adding the ambient-only
contribution of a point that lies in shadow.

Example:
    >>> from src.whitted.core.raytracer import RayTracer, Light
    >>> from src.whitted.scene.presets import create_example_scene
    >>> tracer = RayTracer(ambient=0.1, light=Light(color=(0.8, 0.8, 0.2)))
    >>> scene = create_example_scene(0)
    >>> color = tracer.shade_pixel(scene, 0.0, 0.25)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from src.whitted.camera.pinhole import Camera
from src.whitted.core.vector import (
    Vector3,
    VectorLike,
    as_vec3,
    dot,
    normalize,
    ray_at,
    reflect,
)

if TYPE_CHECKING:
    from src.whitted.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Offset along the surface normal for secondary rays (avoids self-intersection)
SURFACE_EPSILON = 1e-4

DEFAULT_AMBIENT = 0.05
DEFAULT_DIFFUSE_C = 1.0
DEFAULT_SPECULAR_C = 1.0
DEFAULT_PHONG_EXPONENT = 50
DEFAULT_MAX_DEPTH = 8

DEFAULT_LIGHT_POSITION = (5.0, 5.0, -10.0)
DEFAULT_LIGHT_COLOR = (1.0, 1.0, 1.0)


@dataclass(frozen=True, eq=False)
class Light:
    """A single point light.

    Attributes:
        position: Where the light sits. Directions to the light are computed
            as ``normalize(position - hit_point)``.
        color: Light color (RGB).
    """

    position: VectorLike = field(default=DEFAULT_LIGHT_POSITION)
    color: VectorLike = field(default=DEFAULT_LIGHT_COLOR)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vec3(self.position, readonly=True))
        object.__setattr__(self, "color", as_vec3(self.color, readonly=True))

    def to_dict(self) -> dict[str, Any]:
        return {"position": self.position.tolist(), "color": self.color.tolist()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Light:
        return cls(
            position=data.get("position", DEFAULT_LIGHT_POSITION),
            color=data.get("color", DEFAULT_LIGHT_COLOR),
        )


@dataclass(frozen=True, eq=False)
class TraceResult:
    """Outcome of tracing one bounce that hit a primitive.

    Attributes:
        reflection: Reflection coefficient of the primitive that was hit.
        point: The hit point M.
        normal: The unit surface normal N at M.
        color: The shaded color of this bounce.
        occluded: True if M is in shadow. ``color`` then holds the ambient
            term only and the bounce loop must stop after adding it.
    """

    reflection: float
    point: Vector3
    normal: Vector3
    color: Vector3
    occluded: bool = False


@dataclass(frozen=True, eq=False)
class RayTracer:
    """Shading configuration and the recursive tracing algorithm.

    A RayTracer is immutable and holds no per-render state, so one instance
    can be shared by every render worker.

    Attributes:
        ambient: Ambient light term, multiplied by the surface color.
        default_diffuse_c: Default diffuse coefficient. Primitives carry their
            own coefficients; this value is kept for configuration files only.
        default_specular_c: Default specular coefficient (see above).
        phong_exponent: Specular highlight sharpness.
        max_depth: Maximum number of bounces per pixel. 0 renders black.
        camera: The viewpoint.
        light: The point light.
    """

    ambient: float = DEFAULT_AMBIENT
    default_diffuse_c: float = DEFAULT_DIFFUSE_C
    default_specular_c: float = DEFAULT_SPECULAR_C
    phong_exponent: int = DEFAULT_PHONG_EXPONENT
    max_depth: int = DEFAULT_MAX_DEPTH
    camera: Camera = field(default_factory=Camera)
    light: Light = field(default_factory=Light)

    def __post_init__(self) -> None:
        if self.ambient < 0.0:
            raise ValueError(f"Ambient term = {self.ambient} is negative.")
        if int(self.phong_exponent) != self.phong_exponent or self.phong_exponent < 0:
            raise ValueError(
                f"Phong exponent = {self.phong_exponent} must be a non-negative integer."
            )
        if int(self.max_depth) != self.max_depth or self.max_depth < 0:
            raise ValueError(f"Max depth = {self.max_depth} must be a non-negative integer.")
        object.__setattr__(self, "phong_exponent", int(self.phong_exponent))
        object.__setattr__(self, "max_depth", int(self.max_depth))

    def replace(self, **changes: Any) -> RayTracer:
        """Return a copy with some configuration fields overridden."""
        return dataclasses.replace(self, **changes)

    # =========================================================================
    # Tracing
    # =========================================================================

    def trace_ray(
        self, scene: Scene, origin: Vector3, direction: Vector3
    ) -> TraceResult | None:
        """Trace a single bounce and shade the nearest hit.

        Args:
            scene: The scene to intersect.
            origin: The ray origin.
            direction: The ray direction.

        Returns:
            The shaded bounce, or None if the ray hits nothing.
        """
        hit = scene.nearest_hit(origin, direction)
        if hit is None:
            return None

        primitive = hit.primitive
        point = ray_at(origin, direction, hit.t)
        normal = primitive.normal(point)
        base_color = primitive.color(point)

        to_light = normalize(self.light.position - point)
        shadow_origin = point + normal * SURFACE_EPSILON
        if scene.is_occluded(shadow_origin, to_light, exclude=hit.index):
            return TraceResult(
                reflection=primitive.reflection,
                point=point,
                normal=normal,
                color=self.ambient * base_color,
                occluded=True,
            )

        to_camera = normalize(self.camera.position - point)
        half_vector = normalize(to_light + to_camera)
        diffuse = primitive.diffuse_c * max(dot(normal, to_light), 0.0)
        specular = primitive.specular_c * max(dot(normal, half_vector), 0.0) ** self.phong_exponent
        color = (
            self.ambient * base_color
            + diffuse * base_color * self.light.color
            + specular * self.light.color
        )
        return TraceResult(
            reflection=primitive.reflection,
            point=point,
            normal=normal,
            color=color,
        )

    def trace_pixel(self, scene: Scene, origin: Vector3, direction: Vector3) -> Vector3:
        """Run the bounce loop for one primary ray.

        Args:
            scene: The scene to render.
            origin: Primary ray origin.
            direction: Primary ray direction (unit length).

        Returns:
            The accumulated linear color. Components may exceed 1.
        """
        color = np.zeros(3, dtype=np.float64)
        cumulative_reflection = 1.0

        for _ in range(self.max_depth):
            traced = self.trace_ray(scene, origin, direction)
            if traced is None:
                break
            color += cumulative_reflection * traced.color
            if traced.occluded:
                break
            origin = traced.point + traced.normal * SURFACE_EPSILON
            direction = normalize(reflect(direction, traced.normal))
            cumulative_reflection *= traced.reflection

        return color

    def shade_pixel(self, scene: Scene, x: float, y: float) -> Vector3:
        """Compute the color seen through screen coordinate (x, y)."""
        origin, direction = self.camera.primary_ray(x, y)
        return self.trace_pixel(scene, origin, direction)

    # =========================================================================
    # Configuration Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a dictionary (for JSON serialization)."""
        return {
            "ambient": self.ambient,
            "default_diffuse_c": self.default_diffuse_c,
            "default_specular_c": self.default_specular_c,
            "phong_exponent": self.phong_exponent,
            "max_depth": self.max_depth,
            "camera": self.camera.to_dict(),
            "light": self.light.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RayTracer:
        """Load a configuration from a dictionary. Missing keys use defaults.

        Raises:
            ValueError: If a value is out of range.
        """
        return cls(
            ambient=data.get("ambient", DEFAULT_AMBIENT),
            default_diffuse_c=data.get("default_diffuse_c", DEFAULT_DIFFUSE_C),
            default_specular_c=data.get("default_specular_c", DEFAULT_SPECULAR_C),
            phong_exponent=data.get("phong_exponent", DEFAULT_PHONG_EXPONENT),
            max_depth=data.get("max_depth", DEFAULT_MAX_DEPTH),
            camera=Camera.from_dict(data.get("camera", {})),
            light=Light.from_dict(data.get("light", {})),
        )
