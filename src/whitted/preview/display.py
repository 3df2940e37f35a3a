"""Matplotlib-based preview display for rendered images.

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> framebuffer = renderer.render_framebuffer(scene, 320, 180)
    >>> show_preview(framebuffer.to_numpy(), title="Scene 0")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def show_preview(
    image: npt.NDArray[np.uint8],
    *,
    title: str | None = None,
    render_seconds: float | None = None,
    figsize: tuple[float, float] = (8, 4.5),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: Image array of shape (H, W, 3) with dtype uint8.
        title: Custom title (default shows the image size).
        render_seconds: If given, the render time is appended to the title.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    if title is None:
        height, width = image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    if render_seconds is not None:
        title += f" ({render_seconds:.2f}s)"

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image)
    ax.axis("off")
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
