"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera and the screen coordinate window
"""

from .pinhole import Camera, ScreenBounds

__all__ = [
    "Camera",
    "ScreenBounds",
]
