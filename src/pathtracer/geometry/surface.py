"""Intersection contract shared by every geometric primitive.

Surfaces answer a single question: where does a ray first meet them inside a
parametric interval? The answer is a Hit record, which is transient (it lives
for one intersection query) and borrows, never owns, the material at the
intersection point.

Hit construction orients the reported normal against the incoming ray and
remembers whether the surface's outward normal already faced the ray. Materials
rely on that front-face flag to tell entering from exiting, which matters for
dielectrics.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector

if TYPE_CHECKING:
    from pathtracer.materials.material import Material

# Parametric interval (t_min, t_max) accepted by Surface.hit
TRange = tuple[float, float]

# Allowed deviation from unit length for outward normals
NORMAL_TOLERANCE = 1e-4


@dataclass(frozen=True, slots=True)
class Hit:
    """Record of a ray-surface intersection.

    Attributes:
        point: World-space intersection point.
        normal: Unit geometric normal, always opposing the incoming ray.
        t: Parametric distance of the intersection along the ray.
        front_face: True if the surface's outward normal faced the ray, i.e.
            the ray arrived from outside.
        material: Material at the intersection point.
    """

    point: Vector
    normal: Vector
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        point: Vector,
        outward_normal: Vector,
        material: Material,
        t: float,
    ) -> Hit:
        """Build a hit record, orienting the normal against the ray.

        Args:
            ray: The incoming ray.
            point: Intersection point.
            outward_normal: Unit normal pointing out of the surface.
            material: Material at the intersection point.
            t: Parametric distance of the intersection.

        Returns:
            A Hit whose normal opposes ``ray.direction``.
        """
        assert abs(outward_normal.length() - 1.0) <= NORMAL_TOLERANCE, (
            f"outward normal must be unit length, got {outward_normal.length()}"
        )
        front_face = ray.direction.dot(outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, front_face=front_face, material=material)


class Surface(ABC):
    """Anything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_range: TRange) -> Hit | None:
        """Find the closest intersection with ``t_range[0] <= t <= t_range[1]``.

        Implementations must never report a hit outside the interval.

        Args:
            ray: The ray to test.
            t_range: Accepted (t_min, t_max) interval.

        Returns:
            The closest Hit, or None if the ray misses within the interval.
        """
