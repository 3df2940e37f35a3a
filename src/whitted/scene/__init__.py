"""Scene module.

Components:
    scene: Ordered primitive container with nearest-hit and shadow queries
    presets: The two example scenes and their ray tracer settings
"""

from .presets import create_example_scene, example_tracer
from .scene import Scene, SceneHit, primitive_from_dict

__all__ = [
    "Scene",
    "SceneHit",
    "primitive_from_dict",
    "create_example_scene",
    "example_tracer",
]
