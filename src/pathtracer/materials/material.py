"""Light-scattering contract shared by every material.

A material turns an incoming ray and its hit record into either a scattered
ray plus an attenuation (the per-bounce color filter), or nothing, meaning
the ray was absorbed.

Materials are immutable once constructed. A single instance is shared by
many surfaces and copied into every render worker, so it must stay picklable.
Randomness comes from the caller's generator, never from material state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector
from pathtracer.geometry.surface import Hit


class Scatter(NamedTuple):
    """Result of a successful scatter event.

    Attributes:
        ray: The scattered ray, starting at the hit point.
        attenuation: Component-wise color filter applied to the light
            arriving along ``ray``.
    """

    ray: Ray
    attenuation: Vector


class Material(ABC):
    """Base class for scattering models."""

    @abstractmethod
    def scatter(self, ray: Ray, hit: Hit, rng: np.random.Generator) -> Scatter | None:
        """Scatter an incoming ray at a hit point.

        Args:
            ray: The incoming ray.
            hit: Intersection record for the ray.
            rng: The calling worker's random source.

        Returns:
            The scattered ray and attenuation, or None if the ray is absorbed.
        """
