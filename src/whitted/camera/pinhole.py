"""Pinhole camera model for primary ray generation.

The camera is described by a position and a "pointing to" target point. It
does not build an orientation basis: every primary ray runs from the camera
position toward a point on a screen plane at the target's depth.

    screen_point = (x, y, target.z)
    direction    = normalize(screen_point - position)

Screen coordinates span ``x in [-1, 1]`` and
``y in [-1/ratio + 0.25, 1/ratio + 0.25]`` where ``ratio = width / height``.
The fixed 0.25 vertical offset lifts the view slightly above the horizon.

Example:
    >>> from src.whitted.camera.pinhole import Camera, ScreenBounds
    >>> camera = Camera()
    >>> bounds = ScreenBounds.from_ratio(16 / 9)
    >>> xs, ys = bounds.grid(320, 180)
    >>> origin, direction = camera.primary_ray(xs[0], ys[0])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt

from src.whitted.core.vector import Vector3, VectorLike, as_vec3, normalize, vec3

# Vertical offset of the screen window (world units)
SCREEN_Y_OFFSET = 0.25

DEFAULT_CAMERA_POSITION = (0.0, 0.35, -1.0)
DEFAULT_CAMERA_TARGET = (0.0, 0.0, 0.0)


@dataclass(frozen=True, eq=False)
class Camera:
    """An immutable pinhole camera.

    Attributes:
        position: The eye point every primary ray starts from.
        target: The point the camera looks at. Only its z component is used,
            as the depth of the screen plane.
    """

    position: VectorLike = field(default=DEFAULT_CAMERA_POSITION)
    target: VectorLike = field(default=DEFAULT_CAMERA_TARGET)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vec3(self.position, readonly=True))
        object.__setattr__(self, "target", as_vec3(self.target, readonly=True))

    def primary_ray(self, x: float, y: float) -> tuple[Vector3, Vector3]:
        """Build the primary ray through a screen coordinate.

        Args:
            x: Horizontal screen coordinate.
            y: Vertical screen coordinate.

        Returns:
            Tuple of (origin, unit direction).
        """
        screen_point = vec3(x, y, self.target[2])
        return self.position.copy(), normalize(screen_point - self.position)

    def to_dict(self) -> dict[str, Any]:
        return {"position": self.position.tolist(), "target": self.target.tolist()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Camera:
        return cls(
            position=data.get("position", DEFAULT_CAMERA_POSITION),
            target=data.get("target", DEFAULT_CAMERA_TARGET),
        )


@dataclass(frozen=True)
class ScreenBounds:
    """Rectangle of the screen plane covered by the image.

    Attributes:
        x0: Left edge.
        y0: Bottom edge.
        x1: Right edge.
        y1: Top edge.
    """

    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_ratio(cls, ratio: float) -> ScreenBounds:
        """Compute the screen window for an image aspect ratio (width / height)."""
        if ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {ratio} must be positive.")
        return cls(
            x0=-1.0,
            y0=-1.0 / ratio + SCREEN_Y_OFFSET,
            x1=1.0,
            y1=1.0 / ratio + SCREEN_Y_OFFSET,
        )

    def grid(
        self, width: int, height: int
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Evenly spaced screen coordinates for each column and row.

        Both ends of each range are included.

        Args:
            width: Number of columns.
            height: Number of rows.

        Returns:
            Tuple of (xs, ys) with lengths width and height. Row 0 is the
            bottom of the screen window.
        """
        xs = np.linspace(self.x0, self.x1, width)
        ys = np.linspace(self.y0, self.y1, height)
        return xs, ys
