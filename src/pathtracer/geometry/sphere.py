"""Sphere primitive with ray-sphere intersection.

The intersection solves

    |origin + t * direction - center|^2 = radius^2

which expands to the quadratic a*t^2 + 2*half_b*t + c = 0 with:

    a      = dot(direction, direction)
    half_b = dot(direction, origin - center)
    c      = dot(oc, oc) - radius^2

The half-b form keeps the discriminant as half_b^2 - a*c.

A negative radius is allowed and meaningful: the outward normal
(point - center) / radius then points toward the center, turning the sphere
inside out. Nesting a negative-radius sphere inside a glass sphere produces a
hollow glass shell.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vector import Vector
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> sphere = Sphere(Vector(0, 0, -1), 0.5, Lambertian(Vector(0.5, 0.5, 0.5)))
    >>> hit = sphere.hit(Ray(Vector(0, 0, 0), Vector(0, 0, -1)), (0.001, 100.0))
    >>> hit.t
    0.5
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector
from pathtracer.geometry.surface import Hit, Surface, TRange

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


class Sphere(Surface):
    """A sphere defined by center, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius. Negative values flip the normal inward.
        material: Material shared by the whole surface.

    Raises:
        ValueError: If the radius is zero.
    """

    __slots__ = ("center", "radius", "material")

    def __init__(self, center: Vector, radius: float, material: Material) -> None:
        if radius == 0.0:
            raise ValueError("Sphere radius must be non-zero")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_range: TRange) -> Hit | None:
        """Test for ray-sphere intersection.

        Both roots are evaluated and the near root is tried before the far
        root; the first one inside ``t_range`` wins. Trying the near root first
        matters when the ray starts inside the sphere.

        Args:
            ray: The ray to test. The direction need not be normalized but
                must be non-zero; a zero direction divides by zero.
            t_range: Accepted (t_min, t_max) interval, bounds inclusive.

        Returns:
            A Hit for the closest valid root, or None.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)
        t_min, t_max = t_range
        for root in ((-half_b - sqrt_d) / a, (-half_b + sqrt_d) / a):
            if t_min <= root <= t_max:
                point = ray.at(root)
                # Normalized again: far from a small sphere, rounding moves the
                # root enough to leave the point measurably off the surface
                outward_normal = ((point - self.center) / self.radius).unit()
                return Hit.from_outward_normal(ray, point, outward_normal, self.material, root)
        return None

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r}, material={self.material!r})"
