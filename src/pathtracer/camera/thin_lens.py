"""Thin-lens camera model with depth of field.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Rays start at a random point on a lens disk of radius aperture / 2 and pass
through the matching point on the viewport placed at the focus distance.
Geometry on the focus plane stays sharp and everything else blurs. A zero
aperture degenerates to a pinhole camera.

Example:
    >>> import numpy as np
    >>> from pathtracer.camera.thin_lens import Camera, CameraConfig
    >>> camera = Camera.from_config(
    ...     CameraConfig(
    ...         lookfrom=(13.0, 2.0, 3.0),
    ...         lookat=(0.0, 0.0, 0.0),
    ...         vfov=20.0,
    ...         aspect_ratio=16.0 / 9.0,
    ...         aperture=0.1,
    ...     )
    ... )
    >>> ray = camera.ray_from(0.5, 0.5, np.random.default_rng(0))  # Image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector, random_in_unit_disk

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """User-facing camera configuration.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 gives a pinhole camera.
        focus_distance: Distance to the plane in perfect focus. Defaults to
            the distance between lookfrom and lookat.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 20.0
    aspect_ratio: float = 16.0 / 9.0
    aperture: float = 0.0
    focus_distance: float | None = None

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Vertical field of view must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        if self.aperture < 0.0:
            raise ValueError(f"Aperture must be non-negative, got {self.aperture}")
        if self.focus_distance is not None and self.focus_distance <= 0.0:
            raise ValueError(f"Focus distance must be positive, got {self.focus_distance}")
        if tuple(self.lookfrom) == tuple(self.lookat):
            raise ValueError("Camera position and target must differ")

    def resolved_focus_distance(self) -> float:
        """Return the focus distance, defaulting to |lookfrom - lookat|."""
        if self.focus_distance is not None:
            return self.focus_distance
        return (Vector(*self.lookfrom) - Vector(*self.lookat)).length()


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """Immutable thin-lens camera.

    Args:
        look_from: Eye position.
        look_at: Point the camera looks at.
        up: World up vector.
        vfov: Vertical field of view in radians.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter.
        focus_distance: Distance from the eye to the focus plane.
    """

    __slots__ = ("origin", "lower_left", "horizontal", "vertical", "u", "v", "w", "lens_radius")

    def __init__(
        self,
        look_from: Vector,
        look_at: Vector,
        up: Vector,
        vfov: float,
        aspect_ratio: float,
        aperture: float,
        focus_distance: float,
    ) -> None:
        viewport_height = 2.0 * math.tan(vfov / 2.0)
        viewport_width = aspect_ratio * viewport_height

        w = (look_from - look_at).unit()
        u = up.cross(w).unit()
        v = w.cross(u)

        horizontal = u * (focus_distance * viewport_width)
        vertical = v * (focus_distance * viewport_height)

        self.origin = look_from
        self.horizontal = horizontal
        self.vertical = vertical
        self.lower_left = look_from - horizontal / 2.0 - vertical / 2.0 - w * focus_distance
        self.u = u
        self.v = v
        self.w = w
        self.lens_radius = aperture / 2.0

    @classmethod
    def from_config(cls, config: CameraConfig) -> Camera:
        """Derive a camera from a configuration (vfov given in degrees)."""
        return cls(
            look_from=Vector(*config.lookfrom),
            look_at=Vector(*config.lookat),
            up=Vector(*config.vup),
            vfov=math.radians(config.vfov),
            aspect_ratio=config.aspect_ratio,
            aperture=config.aperture,
            focus_distance=config.resolved_focus_distance(),
        )

    def ray_from(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generate a ray through fractional image coordinates (s, t).

        Coordinates are normalized:
        - s = 0: left edge, s = 1: right edge
        - t = 0: bottom edge, t = 1: top edge

        Args:
            s: Horizontal coordinate in [0, 1].
            t: Vertical coordinate in [0, 1].
            rng: Random source for lens sampling.

        Returns:
            A ray from a point on the lens toward the focus plane. Its
            direction is not normalized.
        """
        if self.lens_radius > 0.0:
            lens = random_in_unit_disk(rng) * self.lens_radius
            origin = self.origin + self.u * lens.x + self.v * lens.y
        else:
            origin = self.origin
        target = self.lower_left + self.horizontal * s + self.vertical * t
        return Ray(origin, target - origin)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin!r}, lens_radius={self.lens_radius!r})"
