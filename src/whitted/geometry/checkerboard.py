"""Checkerboard primitive: an infinite plane with two-tone tiling.

A checkerboard is defined by:
- point: Any point on the plane
- normal: The plane normal (normalized on construction)
- colors: A (black, white) pair of tile colors

Ray-plane intersection uses the parametric plane test:
    t = dot(point - origin, normal) / dot(direction, normal)

The ray misses when it runs parallel to the plane (denominator below
``PARALLEL_EPSILON``) or when the plane lies behind the origin (t < 0).

Tile color depends only on the hit point. The two world axes spanning the
plane (x and z for a horizontal floor) are scaled by 2, truncated toward
zero, summed, and the parity of the sum picks the color. Tiles are
therefore 0.5 units wide and the pattern repeats every world unit.

Example:
    >>> from src.whitted.geometry.checkerboard import Checkerboard
    >>> floor = Checkerboard(
    ...     point=(0, -0.5, 0),
    ...     normal_vector=(0, 1, 0),
    ...     colors=((0, 0, 0), (1, 1, 1)),
    ... )
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from src.whitted.core.vector import Vector3, VectorLike, as_vec3, dot, length
from src.whitted.geometry.primitive import Primitive, check_coefficient

# Rays with |dot(direction, normal)| below this are treated as parallel
PARALLEL_EPSILON = 1e-6

# Tiles per world unit along each in-plane axis
TILE_SCALE = 2.0


@dataclass(eq=False)
class Checkerboard(Primitive):
    """An infinite plane with a checkerboard color pattern.

    Attributes:
        point: A point on the plane.
        normal_vector: Unit plane normal.
        colors: Tuple of (black, white) tile colors. Even tiles are black.
        reflection: Reflection coefficient in [0, 1].
        diffuse_c: Diffuse coefficient in [0, 1].
        specular_c: Specular coefficient in [0, 1].
    """

    point: VectorLike
    normal_vector: VectorLike
    colors: tuple[VectorLike, VectorLike]
    reflection: float = 0.25
    diffuse_c: float = 0.75
    specular_c: float = 0.5

    def __post_init__(self) -> None:
        self.point = as_vec3(self.point, readonly=True)
        normal = as_vec3(self.normal_vector)
        norm = length(normal)
        if norm == 0.0:
            raise ValueError("Checkerboard normal must be non-zero.")
        normal /= norm
        normal.flags.writeable = False
        self.normal_vector = normal
        black, white = self.colors
        self.colors = (as_vec3(black, readonly=True), as_vec3(white, readonly=True))
        self.reflection = check_coefficient("reflection", self.reflection)
        self.diffuse_c = check_coefficient("diffuse_c", self.diffuse_c)
        self.specular_c = check_coefficient("specular_c", self.specular_c)

        # The two axes least aligned with the normal span the tiling
        dominant = int(np.argmax(np.abs(normal)))
        self._tile_axes = tuple(axis for axis in range(3) if axis != dominant)

    def intersect(self, origin: Vector3, direction: Vector3) -> float:
        denom = dot(direction, self.normal_vector)
        if abs(denom) < PARALLEL_EPSILON:
            return math.inf
        d = dot(self.point - origin, self.normal_vector) / denom
        if d < 0.0:
            return math.inf
        return d

    def normal(self, point: Vector3) -> Vector3:
        return self.normal_vector

    def tile_index(self, point: Vector3) -> tuple[int, int]:
        """Return the integer tile coordinates containing a point.

        Coordinates are truncated toward zero, so the tiles touching the
        origin along an axis are twice as wide as the others.
        """
        u_axis, v_axis = self._tile_axes
        return int(point[u_axis] * TILE_SCALE), int(point[v_axis] * TILE_SCALE)

    def color(self, point: Vector3) -> Vector3:
        u, v = self.tile_index(point)
        black, white = self.colors
        return white if (u + v) % 2 == 1 else black

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "checkerboard",
            "point": self.point.tolist(),
            "normal": self.normal_vector.tolist(),
            "colors": [self.colors[0].tolist(), self.colors[1].tolist()],
            "reflection": self.reflection,
            "diffuse_c": self.diffuse_c,
            "specular_c": self.specular_c,
        }
