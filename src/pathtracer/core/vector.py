"""Vector algebra and random sampling utilities for CPU path tracing.

This module provides the immutable Vector value type used for points,
directions and linear-light colors, plus the Monte Carlo sampling helpers
built on top of it.

Random helpers never touch process-wide random state. Every sampler takes an
explicit ``numpy.random.Generator`` so each render worker can own its own
independent stream.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.vector import Vector, random_unit_vector
    >>> rng = np.random.default_rng(42)
    >>> v = Vector(1.0, 2.0, 2.0)
    >>> v.length()
    3.0
    >>> d = random_unit_vector(rng)  # Uniform direction on the unit sphere
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

# Threshold below which every component counts as zero (see Vector.near_zero)
NEAR_ZERO_EPSILON = 1e-8


class Vector(NamedTuple):
    """A 3-component float vector.

    Vectors are immutable; every operation returns a new instance. Indexing
    (``v[0]``, ``v[1]``, ``v[2]``) and iteration follow the x, y, z order.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    x: float
    y: float
    z: float

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Vector) -> Vector:  # type: ignore[override]
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, other: float | Vector) -> Vector:  # type: ignore[override]
        """Scale by a number, or multiply component-wise by another vector.

        Component-wise multiplication is how colors are tinted by an
        attenuation.
        """
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vector:  # type: ignore[override]
        return Vector(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, scalar: float) -> Vector:
        """Divide by a scalar. A zero divisor raises ZeroDivisionError."""
        return self * (1.0 / scalar)

    # -------------------------------------------------------------------------
    # Products and norms
    # -------------------------------------------------------------------------

    def dot(self, other: Vector) -> float:
        """Compute the dot product of two vectors."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Compute the cross product ``self x other``."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Squared Euclidean length. Cheaper than length() for comparisons."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def unit(self) -> Vector:
        """Return the vector scaled to unit length.

        The caller must ensure the length is non-zero; a zero vector yields
        IEEE infinities/NaNs rather than an error.
        """
        length = self.length()
        if length == 0.0:
            return Vector(math.nan, math.nan, math.nan)
        return self / length

    def near_zero(self) -> bool:
        """Check whether every component is below 1e-8 in absolute value.

        Used by diffuse scattering to detect degenerate directions.
        """
        return (
            abs(self.x) < NEAR_ZERO_EPSILON
            and abs(self.y) < NEAR_ZERO_EPSILON
            and abs(self.z) < NEAR_ZERO_EPSILON
        )

    # -------------------------------------------------------------------------
    # Optics
    # -------------------------------------------------------------------------

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector about a normal.

        Computes ``v - 2 (v . n) n``. The normal should be unit length.

        Args:
            normal: The surface normal.

        Returns:
            The reflected vector.
        """
        return self - normal * (2.0 * self.dot(normal))

    def refract(self, normal: Vector, index_ratio: float) -> Vector:
        """Refract this direction through a surface using Snell's law.

        The refracted ray is decomposed into a component perpendicular to the
        normal and a component parallel to it:

            r_perp = ratio * (v + cos(theta) * n)
            r_par  = -sqrt(|1 - |r_perp|^2|) * n

        Total internal reflection is not detected here; callers decide between
        reflection and refraction before calling this.

        Args:
            normal: Unit surface normal facing the incoming ray.
            index_ratio: Ratio of refractive indices (n_incident / n_transmitted).

        Returns:
            The refracted direction.
        """
        incident = self.unit()
        cos_theta = min(normal.dot(-incident), 1.0)
        perpendicular = (incident + normal * cos_theta) * index_ratio
        parallel = normal * -math.sqrt(abs(1.0 - perpendicular.length_squared()))
        return perpendicular + parallel

    # -------------------------------------------------------------------------
    # Random construction
    # -------------------------------------------------------------------------

    @classmethod
    def random(
        cls,
        rng: np.random.Generator,
        low: float = 0.0,
        high: float = 1.0,
    ) -> Vector:
        """Draw a vector with components uniform in ``[low, high)``.

        Args:
            rng: Random source to draw from.
            low: Lower bound (inclusive).
            high: Upper bound (exclusive).

        Returns:
            A random vector.
        """
        x, y, z = rng.uniform(low, high, 3).tolist()
        return cls(x, y, z)


ZERO = Vector(0.0, 0.0, 0.0)
ONE = Vector(1.0, 1.0, 1.0)


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vector:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling over the cube [-1, 1]^3. The expected number of
    draws is about 1.9; the loop is deliberately uncapped.

    Args:
        rng: Random source to draw from.

    Returns:
        A random point with length_squared() < 1.
    """
    while True:
        p = Vector.random(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vector:
    """Generate a random unit vector (normalized random_in_unit_sphere)."""
    return random_in_unit_sphere(rng).unit()


def random_in_unit_disk(rng: np.random.Generator) -> Vector:
    """Generate a random point inside the unit disk in the xy-plane.

    Used to sample the camera lens for depth of field.

    Args:
        rng: Random source to draw from.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2).tolist()
        if x * x + y * y < 1.0:
            return Vector(x, y, 0.0)
