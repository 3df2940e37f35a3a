"""Preview module for output and visualization.

Components:
    export: PNG export via Pillow
    display: Matplotlib-based static preview

Example:
    >>> from src.whitted.preview import save_png, show_preview
    >>> save_png(framebuffer.to_numpy(), "output.png")
    >>> show_preview(framebuffer.to_numpy())
"""

from src.whitted.preview.display import show_preview
from src.whitted.preview.export import load_png, save_png

__all__ = [
    "show_preview",
    "save_png",
    "load_png",
]
