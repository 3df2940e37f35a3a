"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: default ray
tracer settings and small scenes that render quickly.
"""

import pytest

from src.whitted.core.raytracer import RayTracer
from src.whitted.geometry import Checkerboard, Sphere
from src.whitted.scene.scene import Scene


@pytest.fixture
def tracer():
    """Ray tracer with the default configuration."""
    return RayTracer()


@pytest.fixture
def single_sphere_scene():
    """A single non-reflective sphere of radius 0.6 at the origin."""
    return Scene(
        [
            Sphere(
                center=(0.0, 0.0, 0.0),
                radius=0.6,
                base_color=(0.8, 0.2, 0.1),
                reflection=0.0,
                diffuse_c=0.9,
                specular_c=0.5,
            )
        ]
    )


@pytest.fixture
def floor_scene():
    """A reflective sphere resting above a checkerboard floor."""
    return Scene(
        [
            Sphere(
                center=(0.0, 0.1, 1.0),
                radius=0.6,
                base_color=(0.2, 0.4, 0.9),
                reflection=0.5,
                diffuse_c=0.95,
                specular_c=0.95,
            ),
            Checkerboard(
                point=(0.0, -0.5, 0.0),
                normal_vector=(0.0, 1.0, 0.0),
                colors=((0.0, 0.0, 0.0), (1.0, 1.0, 1.0)),
            ),
        ]
    )

