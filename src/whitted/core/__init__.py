"""Core rendering module.

Components:
    vector: Vector and color helpers on NumPy arrays
    raytracer: Shading configuration, light, and the recursive bounce loop
    renderer: Framebuffer, column chunking, and the multi-worker renderer

Note: raytracer and renderer are NOT imported here to avoid circular imports.
Import directly from src.whitted.core.raytracer or src.whitted.core.renderer.
"""

from .vector import (
    Vector3,
    VectorLike,
    as_vec3,
    dot,
    length,
    min_distance,
    normalize,
    ray_at,
    reflect,
    rgb,
    vec3,
)

__all__ = [
    "Vector3",
    "VectorLike",
    "vec3",
    "as_vec3",
    "dot",
    "length",
    "normalize",
    "reflect",
    "ray_at",
    "min_distance",
    "rgb",
]
