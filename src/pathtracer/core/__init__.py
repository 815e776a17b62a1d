"""Core rendering module.

This module contains the fundamental building blocks for path tracing:

Components:
    vector: Vector algebra and random sampling utilities
    ray: Ray data structure
    color: Color accumulators and per-pixel accumulation buffers
    integrator: Recursive radiance estimator and sky background
    renderer: Multi-worker sample accumulation and merging

All random sampling takes an explicit numpy Generator so that every render
worker owns an independent stream.
"""

from .color import Color, ColorBuffer, linear_to_bytes
from .ray import Ray
from .vector import (
    ONE,
    ZERO,
    Vector,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator or pathtracer.core.renderer.

__all__ = [
    "Vector",
    "ZERO",
    "ONE",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
    "Ray",
    "Color",
    "ColorBuffer",
    "linear_to_bytes",
]
