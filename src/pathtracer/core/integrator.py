"""Path tracing integrator for Monte Carlo light transport.

The radiance estimator traces a ray into the scene, asks the hit material to
scatter it, and recurses on the scattered ray. Each bounce multiplies the
incoming radiance by the material's attenuation:

    radiance(ray) = attenuation * radiance(scattered)

Paths end when they escape to the background, when a material absorbs them,
or when the bounce budget runs out. The budget cutoff returns black, which
trades a small bias for bounded work per sample.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.integrator import MAX_DEPTH, ray_color
    >>> from pathtracer.geometry.surface_list import SurfaceList
    >>> # color = ray_color(ray, world, MAX_DEPTH, np.random.default_rng())
"""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import ONE, ZERO, Vector
from pathtracer.geometry.surface import Surface

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# Lower intersection bound; keeps scattered rays from re-hitting their origin
T_MIN = 1e-3
T_MAX = math.inf

# Zenith color of the sky gradient
SKY_BLUE = Vector(0.5, 0.7, 1.0)

# Environment lookup used when a ray escapes the scene
Background = Callable[[Ray], Vector]


def sky_gradient(ray: Ray) -> Vector:
    """Vertical white-to-blue gradient modeling ambient sky light.

    Blends from white (direction pointing straight down) to sky blue
    (straight up) using the normalized vertical component of the ray.

    Args:
        ray: The escaping ray.

    Returns:
        The background radiance along the ray.
    """
    t = (ray.direction.unit().y + 1.0) / 2.0
    return ONE * (1.0 - t) + SKY_BLUE * t


def ray_color(
    ray: Ray,
    world: Surface,
    depth: int,
    rng: np.random.Generator,
    background: Background = sky_gradient,
) -> Vector:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        world: Scene geometry.
        depth: Remaining bounce budget. 0 returns black.
        rng: Random source for material scattering.
        background: Radiance for rays that leave the scene.

    Returns:
        A single-sample linear-light radiance estimate.
    """
    if depth <= 0:
        return ZERO

    hit = world.hit(ray, (T_MIN, T_MAX))
    if hit is None:
        return background(ray)

    scatter = hit.material.scatter(ray, hit, rng)
    if scatter is None:
        return ZERO

    return ray_color(scatter.ray, world, depth - 1, rng, background) * scatter.attenuation
