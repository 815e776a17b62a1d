"""Lambertian (ideal diffuse) material implementation.

The scattered direction is the hit normal plus a random unit vector, which
yields a cosine-weighted distribution about the normal without building a
local frame.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.vector import Vector
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> gray = Lambertian(Vector(0.5, 0.5, 0.5))
    >>> # scatter = gray.scatter(ray, hit, np.random.default_rng())
"""

from __future__ import annotations

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector, random_unit_vector
from pathtracer.geometry.surface import Hit
from pathtracer.materials.material import Material, Scatter


class Lambertian(Material):
    """Ideal diffuse reflector.

    Attributes:
        albedo: Diffuse reflectance (RGB, each component in [0, 1]).
    """

    __slots__ = ("albedo",)

    def __init__(self, albedo: Vector) -> None:
        self.albedo = albedo

    def scatter(self, ray: Ray, hit: Hit, rng: np.random.Generator) -> Scatter:
        """Scatter diffusely about the hit normal.

        If the normal and the random unit vector nearly cancel, the bare
        normal is used so the scattered ray never has a degenerate direction.
        Lambertian surfaces always scatter.
        """
        direction = hit.normal + random_unit_vector(rng)
        if direction.near_zero():
            direction = hit.normal
        return Scatter(Ray(hit.point, direction), self.albedo)

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo!r})"
