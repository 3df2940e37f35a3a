"""CPU ray tracer for Whitted-style reflective scenes.

This package renders scenes of spheres and checkerboard planes lit by a
single point light, with support for:
- Recursive mirror reflections up to a fixed bounce depth
- Hard shadows from the point light
- Ambient + diffuse + Blinn-Phong specular shading
- Tiled rendering on a pool of worker threads

Subpackages:
    core: Vector utilities, the ray tracing engine and the tiled renderer
    geometry: Shape primitives and intersection algorithms
    scene: Scene container, queries, serialization and example scenes
    camera: Pinhole camera and screen coordinates
    preview: PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
