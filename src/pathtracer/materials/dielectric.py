"""Dielectric (glass/water) material implementation.

This module implements transparent materials with refraction and Fresnel
reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on the
Fresnel reflectance, which increases at grazing angles. Glass absorbs nothing:
the attenuation is always white.

Example:
    >>> from pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(1.5)
    >>> round(Dielectric.reflectance(1.0, 1.0 / 1.5), 4)  # Normal incidence
    0.04
"""

from __future__ import annotations

import math

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import ONE
from pathtracer.geometry.surface import Hit
from pathtracer.materials.material import Material, Scatter


class Dielectric(Material):
    """Refractive material such as glass or water.

    Attributes:
        refractive_index: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    __slots__ = ("refractive_index",)

    def __init__(self, refractive_index: float) -> None:
        if refractive_index <= 0.0:
            raise ValueError(
                f"Index of refraction = {refractive_index} must be positive."
            )
        self.refractive_index = refractive_index

    @staticmethod
    def reflectance(cosine: float, index_ratio: float) -> float:
        """Compute Fresnel reflectance using Schlick's approximation.

        Args:
            cosine: Cosine of the angle between the incident ray and normal.
            index_ratio: Ratio of refractive indices.

        Returns:
            The approximate reflectance in [0, 1].
        """
        r0 = ((1.0 - index_ratio) / (1.0 + index_ratio)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cosine) ** 5

    def index_ratio(self, front_face: bool) -> float:
        """Ratio n_incident / n_transmitted for the side the ray arrives from.

        Entering from outside (front face) the ratio is 1/ior; exiting from
        inside it is ior.
        """
        return 1.0 / self.refractive_index if front_face else self.refractive_index

    def scatter(self, ray: Ray, hit: Hit, rng: np.random.Generator) -> Scatter:
        """Reflect or refract the incoming ray.

        Reflection happens on total internal reflection, or with probability
        equal to the Schlick reflectance. Dielectrics always scatter.
        """
        unit_direction = ray.direction.unit()
        cos_theta = min(hit.normal.dot(-unit_direction), 1.0)
        sin_theta = math.sqrt(max(1.0 - cos_theta * cos_theta, 0.0))
        ratio = self.index_ratio(hit.front_face)

        cannot_refract = ratio * sin_theta > 1.0
        if cannot_refract or rng.random() < self.reflectance(cos_theta, ratio):
            direction = unit_direction.reflect(hit.normal)
        else:
            direction = unit_direction.refract(hit.normal, ratio)

        return Scatter(Ray(hit.point, direction), ONE)

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index!r})"
