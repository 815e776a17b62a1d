"""Camera module for view and ray generation.

Components:
    thin_lens: Look-at camera with depth of field (pinhole at zero aperture)

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera, CameraConfig

__all__ = [
    "Camera",
    "CameraConfig",
]
