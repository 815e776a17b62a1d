"""Metal (specular reflective) material implementation.

This module implements specular reflection with optional fuzziness. A perfect
metal (fuzz=0) is a mirror; rougher metals perturb the mirror direction by a
random point inside a sphere of radius ``fuzz``.

The reflection formula is:
    R = I - 2(I . N)N

where I is the unit incident direction and N is the surface normal.

Example:
    >>> from pathtracer.core.vector import Vector
    >>> from pathtracer.materials.metal import Metal
    >>> gold = Metal(Vector(0.8, 0.6, 0.2), fuzz=0.3)
    >>> Metal(Vector(1.0, 1.0, 1.0), fuzz=3.0).fuzz
    1.0
"""

from __future__ import annotations

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector, random_in_unit_sphere
from pathtracer.geometry.surface import Hit
from pathtracer.materials.material import Material, Scatter


class Metal(Material):
    """Specular reflector with optional fuzz.

    Attributes:
        albedo: The reflective color tint (RGB, each component in [0, 1]).
        fuzz: Perturbation radius, clamped to [0, 1]. 0 = perfect mirror.
    """

    __slots__ = ("albedo", "fuzz")

    def __init__(self, albedo: Vector, fuzz: float = 0.0) -> None:
        self.albedo = albedo
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray: Ray, hit: Hit, rng: np.random.Generator) -> Scatter | None:
        """Reflect about the normal, then perturb by the fuzz.

        Returns:
            The reflected ray tinted by the albedo, or None if the perturbed
            direction points into the surface (the ray is absorbed).
        """
        reflected = ray.direction.unit().reflect(hit.normal)
        direction = reflected + random_in_unit_sphere(rng) * self.fuzz
        if direction.dot(hit.normal) <= 0.0:
            return None
        return Scatter(Ray(hit.point, direction), self.albedo)

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, fuzz={self.fuzz!r})"
