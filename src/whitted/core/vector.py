"""Vector utilities for CPU ray tracing.

Vectors are plain NumPy ``float64`` arrays of shape ``(3,)``. Colors use the
same representation, interpreted as RGB with components in [0, 1].

Example:
    >>> from src.whitted.core.vector import vec3, normalize, reflect
    >>> direction = normalize(vec3(1.0, -1.0, 0.0))
    >>> bounced = reflect(direction, vec3(0.0, 1.0, 0.0))
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors and RGB colors
Vector3 = npt.NDArray[np.float64]

# Anything that can be turned into a Vector3
VectorLike = Sequence[float] | Vector3


def vec3(x: float, y: float, z: float) -> Vector3:
    """Create a 3D vector from its components."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: VectorLike, *, readonly: bool = False) -> Vector3:
    """Convert a sequence of three floats into a new Vector3.

    Args:
        value: Any sequence or array with exactly three components.
        readonly: If True, the returned array is marked non-writeable.
            Used for vectors stored on immutable objects.

    Returns:
        A fresh ``float64`` array of shape (3,).

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.array(value, dtype=np.float64).reshape(-1)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {np.shape(value)}")
    if readonly:
        result.flags.writeable = False
    return result


def dot(a: Vector3, b: Vector3) -> float:
    """Compute the dot product of two vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def length(v: Vector3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def normalize(v: Vector3) -> Vector3:
    """Normalize a vector to unit length.

    The zero vector has no direction; callers must not pass it. Doing so
    yields NaN components rather than raising.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return v / length(v)


def reflect(incident: Vector3, normal: Vector3) -> Vector3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction ``incident - 2 * dot(incident, normal) * normal``.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def ray_at(origin: Vector3, direction: Vector3, t: float) -> Vector3:
    """Compute the point ``origin + t * direction`` along a ray."""
    return origin + direction * t


def min_distance(distances: Iterable[float]) -> float:
    """Return the smallest distance, or infinity for an empty iterable.

    Infinity doubles as the "no hit" sentinel, so an empty candidate list
    behaves like a list of misses.
    """
    return min(distances, default=math.inf)


def rgb(red: int, green: int, blue: int) -> Vector3:
    """Convert 8-bit sRGB channel values to a unit-range color.

    Args:
        red: Red channel in [0, 255].
        green: Green channel in [0, 255].
        blue: Blue channel in [0, 255].

    Returns:
        The color with each component divided by 255.

    Raises:
        ValueError: If any channel is outside [0, 255].
    """
    for i, channel in enumerate((red, green, blue)):
        if not 0 <= channel <= 255:
            raise ValueError(f"Color channel {i} = {channel} is outside [0, 255].")
    return vec3(red, green, blue) / 255.0
