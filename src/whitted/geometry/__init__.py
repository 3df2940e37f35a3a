"""Geometry module for shape primitives.

Components:
    primitive: Abstract Primitive interface
    sphere: Sphere primitive with robust ray-sphere intersection
    checkerboard: Infinite plane with two-tone tiling

Every primitive returns ``math.inf`` from ``intersect`` on a miss. There is
no acceleration structure; scenes are intersected by linear scan.
"""

from .checkerboard import Checkerboard
from .primitive import Primitive
from .sphere import Sphere, solve_quadratic_robust

__all__ = [
    "Primitive",
    "Sphere",
    "solve_quadratic_robust",
    "Checkerboard",
]
