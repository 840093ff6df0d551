"""
PNG export of rendered images.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image as PILImage

DEFAULT_OUTPUT = Path("output") / "render.png"


def save_png(rgba: np.ndarray, filename: Union[str, Path] = DEFAULT_OUTPUT) -> Path:
    """Save an 8-bit RGBA image as PNG.

    Args:
        rgba: uint8 array of shape (height, width, 4), as from ``to_rgba8``
        filename: Output path; parent directories are created

    Returns:
        The path written to
    """
    if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"expected a (height, width, 4) uint8 array, got {rgba.dtype} {rgba.shape}")

    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.fromarray(rgba).save(path, format='PNG')
    return path
