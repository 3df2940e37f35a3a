"""Image export utilities for rendered framebuffers.

Supported formats:
    - PNG (8-bit RGB via Pillow)

The image is first written to a temporary file next to the destination and
then moved into place, so a failed write never leaves a partial image at
the destination path.

Example:
    >>> from src.whitted.preview.export import save_png
    >>> save_png(framebuffer.to_numpy(), "output.png")
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an 8-bit RGB array as a PNG file.

    Args:
        image: Image array of shape (H, W, 3) with dtype uint8. Row 0 is the
            top of the image.
        filepath: Output file path.

    Raises:
        ValueError: If the array has the wrong shape or dtype.
        OSError: If the file cannot be written. The destination is untouched.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {image.dtype}")

    destination = Path(filepath)
    pil_image = PILImage.fromarray(image)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            pil_image.save(handle, format="PNG")
        os.replace(tmp_name, destination)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load a PNG file as an (H, W, 3) uint8 array."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
