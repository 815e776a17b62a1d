"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules. Every random
helper takes an explicit generator, so tests get a freshly seeded one.
"""

import numpy as np
import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector
from pathtracer.geometry.surface import Hit
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng() -> np.random.Generator:
    """A deterministic random generator, reseeded for each test."""
    return np.random.default_rng(42)


@pytest.fixture
def gray() -> Lambertian:
    """Mid-gray diffuse material."""
    return Lambertian(Vector(0.5, 0.5, 0.5))


@pytest.fixture
def make_hit():
    """Factory building a Hit at the origin for a ray arriving along ``direction``.

    The surface is the xz-plane with outward normal +y unless another
    outward normal is given.
    """

    def _make_hit(direction, material, outward_normal=Vector(0.0, 1.0, 0.0), point=Vector(0.0, 0.0, 0.0)):
        ray = Ray(point - direction, direction)
        return ray, Hit.from_outward_normal(ray, point, outward_normal, material, 1.0)

    return _make_hit
