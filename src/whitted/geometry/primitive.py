"""Abstract primitive interface shared by all scene objects.

Every primitive answers four questions for the ray tracer:

- how far along a ray it is hit (``intersect``), with ``math.inf`` for a miss;
- which way its surface faces at a point (``normal``);
- what color it has at a point (``color``);
- how it reflects light (``reflection``, ``diffuse_c``, ``specular_c``).

Ray directions passed to ``intersect`` are not required to be unit length.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.whitted.core.vector import Vector3


def check_coefficient(name: str, value: float) -> float:
    """Validate that a material coefficient lies in [0, 1].

    Args:
        name: Name of the coefficient, used in the error message.
        value: The coefficient value.

    Returns:
        The value converted to float.

    Raises:
        ValueError: If the value is outside [0, 1].
    """
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} = {value} is outside [0, 1].")
    return value


class Primitive(ABC):
    """Base class for geometric primitives.

    Attributes:
        reflection: Weight of the reflected bounce in the final color.
        diffuse_c: Diffuse (Lambert) coefficient.
        specular_c: Specular (Blinn-Phong) coefficient.
    """

    reflection: float
    diffuse_c: float
    specular_c: float

    @abstractmethod
    def intersect(self, origin: Vector3, direction: Vector3) -> float:
        """Return the nearest non-negative hit distance, or ``math.inf``."""

    @abstractmethod
    def normal(self, point: Vector3) -> Vector3:
        """Return the unit surface normal at a point on the surface."""

    @abstractmethod
    def color(self, point: Vector3) -> Vector3:
        """Return the surface color at a point on the surface."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Export the primitive as a JSON-friendly dictionary."""
