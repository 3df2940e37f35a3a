"""Sphere primitive with robust ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

which expands to the quadratic ``a*t^2 + b*t + c = 0`` with:
    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - radius^2

The two roots are computed as ``q / a`` and ``c / q`` where
``q = -(b + sign(b) * sqrt(discriminant)) / 2``. Choosing the sign of the
square root to match ``b`` avoids catastrophic cancellation when ``b^2`` is
close to the discriminant.

Example:
    >>> from src.whitted.geometry.sphere import Sphere
    >>> from src.whitted.core.vector import vec3
    >>> sphere = Sphere(center=(0, 0, 5), radius=1.0, base_color=(1, 0, 0))
    >>> sphere.intersect(vec3(0, 0, 0), vec3(0, 0, 1))
    4.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from src.whitted.core.vector import Vector3, VectorLike, as_vec3, dot, normalize
from src.whitted.geometry.primitive import Primitive, check_coefficient


def solve_quadratic_robust(a: float, b: float, c: float) -> tuple[float, float] | None:
    """Solve ``a*t^2 + b*t + c = 0`` using a numerically stable formula.

    Args:
        a: Quadratic coefficient (must be non-zero).
        b: Linear coefficient.
        c: Constant term.

    Returns:
        Tuple of (t0, t1) with t0 <= t1, or None if the discriminant is not
        strictly positive (miss or exact tangent).
    """
    discriminant = b * b - 4.0 * a * c
    if discriminant <= 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    q = -(b + math.copysign(sqrt_d, b)) / 2.0
    t0 = q / a
    t1 = c / q
    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass(eq=False)
class Sphere(Primitive):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
        base_color: The constant surface color (RGB in [0, 1]).
        reflection: Reflection coefficient in [0, 1].
        diffuse_c: Diffuse coefficient in [0, 1].
        specular_c: Specular coefficient in [0, 1].
    """

    center: VectorLike
    radius: float
    base_color: VectorLike
    reflection: float = 0.0
    diffuse_c: float = 1.0
    specular_c: float = 1.0

    def __post_init__(self) -> None:
        self.center = as_vec3(self.center, readonly=True)
        self.base_color = as_vec3(self.base_color, readonly=True)
        self.radius = float(self.radius)
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius = {self.radius} must be positive.")
        self.reflection = check_coefficient("reflection", self.reflection)
        self.diffuse_c = check_coefficient("diffuse_c", self.diffuse_c)
        self.specular_c = check_coefficient("specular_c", self.specular_c)

    def intersect(self, origin: Vector3, direction: Vector3) -> float:
        """Return the smallest non-negative hit distance, or ``math.inf``.

        A ray starting inside the sphere hits the far side. A sphere entirely
        behind the origin (both roots negative) is a miss.
        """
        oc = origin - self.center
        a = dot(direction, direction)
        b = 2.0 * dot(direction, oc)
        c = dot(oc, oc) - self.radius * self.radius

        roots = solve_quadratic_robust(a, b, c)
        if roots is None:
            return math.inf

        t0, t1 = roots
        if t1 < 0.0:
            return math.inf
        return t0 if t0 >= 0.0 else t1

    def normal(self, point: Vector3) -> Vector3:
        return normalize(point - self.center)

    def color(self, point: Vector3) -> Vector3:
        return self.base_color

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "sphere",
            "center": self.center.tolist(),
            "radius": self.radius,
            "color": self.base_color.tolist(),
            "reflection": self.reflection,
            "diffuse_c": self.diffuse_c,
            "specular_c": self.specular_c,
        }
