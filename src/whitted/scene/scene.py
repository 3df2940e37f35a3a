"""Scene container and scene-level intersection queries.

A Scene owns an ordered, append-only list of primitives. The ray tracer
queries it for the nearest hit along a ray and for shadow-ray occlusion;
neither query mutates the scene, so a single Scene can be shared by every
render worker without locking.

Nearest-hit ties are resolved by insertion order: distances are compared
with a strict ``<`` so the first primitive reaching a distance keeps it.

The scene can also be exported to and loaded from a plain dictionary for
JSON serialization.

Example:
    >>> from src.whitted.scene.scene import Scene
    >>> from src.whitted.geometry import Sphere
    >>> scene = Scene()
    >>> scene.add(Sphere(center=(0, 0, 1), radius=0.6, base_color=(1, 0, 0)))
    0
    >>> len(scene)
    1
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from src.whitted.core.vector import Vector3, min_distance
from src.whitted.geometry.checkerboard import Checkerboard
from src.whitted.geometry.primitive import Primitive
from src.whitted.geometry.sphere import Sphere


@dataclass(frozen=True)
class SceneHit:
    """Nearest intersection of a ray with the scene.

    Attributes:
        index: Insertion index of the primitive that was hit.
        primitive: The primitive that was hit.
        t: Distance along the ray to the hit point.
    """

    index: int
    primitive: Primitive
    t: float


def primitive_from_dict(data: dict[str, Any]) -> Primitive:
    """Create a primitive from its dictionary representation.

    Args:
        data: Dictionary produced by ``Primitive.to_dict()``.

    Returns:
        The reconstructed primitive.

    Raises:
        ValueError: If the primitive type is unknown.
    """
    kind = data.get("type", "").lower()
    if kind == "sphere":
        return Sphere(
            center=data.get("center", [0.0, 0.0, 0.0]),
            radius=data.get("radius", 1.0),
            base_color=data.get("color", [1.0, 1.0, 1.0]),
            reflection=data.get("reflection", 0.0),
            diffuse_c=data.get("diffuse_c", 1.0),
            specular_c=data.get("specular_c", 1.0),
        )
    if kind == "checkerboard":
        black, white = data.get("colors", [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
        return Checkerboard(
            point=data.get("point", [0.0, 0.0, 0.0]),
            normal_vector=data.get("normal", [0.0, 1.0, 0.0]),
            colors=(black, white),
            reflection=data.get("reflection", 0.25),
            diffuse_c=data.get("diffuse_c", 0.75),
            specular_c=data.get("specular_c", 0.5),
        )
    raise ValueError(f"Unknown primitive type: {kind}")


class Scene:
    """Ordered collection of primitives.

    Primitives can only be appended. Their insertion index identifies them
    in hit results and breaks ties between equal hit distances.
    """

    def __init__(self, primitives: Iterable[Primitive] = ()) -> None:
        self._primitives: list[Primitive] = []
        self.extend(primitives)

    def add(self, primitive: Primitive) -> int:
        """Append a primitive to the scene.

        Args:
            primitive: The primitive to add.

        Returns:
            The index of the added primitive.

        Raises:
            TypeError: If the object is not a Primitive.
        """
        if not isinstance(primitive, Primitive):
            raise TypeError(f"Expected a Primitive, got {type(primitive).__name__}")
        self._primitives.append(primitive)
        return len(self._primitives) - 1

    def extend(self, primitives: Iterable[Primitive]) -> None:
        """Append several primitives in order."""
        for primitive in primitives:
            self.add(primitive)

    @property
    def primitives(self) -> tuple[Primitive, ...]:
        """Read-only view of the primitives in insertion order."""
        return tuple(self._primitives)

    def __len__(self) -> int:
        return len(self._primitives)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._primitives)

    def __getitem__(self, index: int) -> Primitive:
        return self._primitives[index]

    # =========================================================================
    # Intersection Queries
    # =========================================================================

    def nearest_hit(self, origin: Vector3, direction: Vector3) -> SceneHit | None:
        """Find the closest primitive along a ray by linear scan.

        Args:
            origin: The ray origin.
            direction: The ray direction (need not be normalized).

        Returns:
            The nearest hit, or None if no primitive returns a finite distance.
        """
        t = math.inf
        hit_index = -1
        for index, primitive in enumerate(self._primitives):
            t_obj = primitive.intersect(origin, direction)
            if t_obj < t:
                t = t_obj
                hit_index = index
        if hit_index < 0:
            return None
        return SceneHit(index=hit_index, primitive=self._primitives[hit_index], t=t)

    def is_occluded(self, origin: Vector3, direction: Vector3, exclude: int) -> bool:
        """Test whether a shadow ray is blocked by any other primitive.

        Args:
            origin: The shadow ray origin (already offset off the surface).
            direction: Direction toward the light.
            exclude: Index of the primitive being shaded. It never occludes
                its own shading point.

        Returns:
            True if any primitive other than ``exclude`` is hit.
        """
        distances = (
            primitive.intersect(origin, direction)
            for index, primitive in enumerate(self._primitives)
            if index != exclude
        )
        return min_distance(distances) < math.inf

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {"primitives": [primitive.to_dict() for primitive in self._primitives]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with a 'primitives' list.

        Raises:
            ValueError: If a primitive has an unknown type or invalid values.
        """
        return cls(primitive_from_dict(item) for item in data.get("primitives", []))

    def __repr__(self) -> str:
        return f"Scene(primitives={len(self._primitives)})"
