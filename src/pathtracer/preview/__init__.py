"""Preview module for render output.

Components:
    export: PPM/PNG image export and image comparison utilities

Example:
    >>> from pathtracer.preview import save_image
    >>> # save_image(buffer.to_bytes(), "output.png")
"""

from pathtracer.preview.export import (
    compute_rmse,
    save_image,
    save_png,
    save_ppm,
    write_ppm,
)

__all__ = [
    "write_ppm",
    "save_ppm",
    "save_png",
    "save_image",
    "compute_rmse",
]
