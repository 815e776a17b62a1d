"""Image export utilities for rendered images.

This module writes the renderer's gamma-corrected byte grid to files or
streams.

Supported formats:
    - PPM (plain-text P3, written directly)
    - PNG (8-bit RGB via Pillow)

Pixel grids are (height, width, 3) uint8 arrays in scan order: top row first,
pixels left to right, as produced by ColorBuffer.to_bytes().

Example:
    >>> from pathtracer.preview.export import save_image
    >>> # pixels = render(world, camera, settings).to_bytes()
    >>> # save_image(pixels, "field.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_pixels(pixels: npt.NDArray[np.uint8]) -> None:
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) pixel grid, got shape {pixels.shape}")


def write_ppm(stream: TextIO, pixels: npt.NDArray[np.uint8]) -> None:
    """Write a pixel grid as a plain-text PPM (P3) image.

    The header is ``P3``, ``width height`` and ``255``, followed by one
    ``r g b`` line per pixel in scan order.

    Args:
        stream: Text stream to write to.
        pixels: Byte grid of shape (height, width, 3).

    Raises:
        ValueError: If the grid does not have shape (height, width, 3).
    """
    _check_pixels(pixels)
    height, width, _ = pixels.shape
    stream.write(f"P3\n{width} {height}\n255\n")
    for r, g, b in pixels.reshape(-1, 3).tolist():
        stream.write(f"{r} {g} {b}\n")


def save_ppm(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a pixel grid as a plain-text PPM file."""
    with open(filepath, "w", encoding="ascii") as stream:
        write_ppm(stream, pixels)


def save_png(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a pixel grid as an 8-bit RGB PNG file using Pillow."""
    _check_pixels(pixels)
    pil_image = PILImage.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    pil_image.save(filepath, format="PNG")


def save_image(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a pixel grid, choosing the format from the file suffix.

    Args:
        pixels: Byte grid of shape (height, width, 3).
        filepath: Output path ending in ``.ppm`` or ``.png``.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(pixels, filepath)
    elif suffix == ".png":
        save_png(pixels, filepath)
    else:
        raise ValueError(f"Unsupported image format {suffix!r}; use .ppm or .png")


def compute_rmse(
    image_a: npt.NDArray[np.floating | np.integer],
    image_b: npt.NDArray[np.floating | np.integer],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
