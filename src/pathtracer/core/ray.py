"""Ray data structure.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vector import Vector
    >>> ray = Ray(origin=Vector(0.0, 0.0, 0.0), direction=Vector(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vector(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

from typing import NamedTuple

from pathtracer.core.vector import Vector


class Ray(NamedTuple):
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            unit length; intersection code accounts for its magnitude.
    """

    origin: Vector
    direction: Vector

    def at(self, t: float) -> Vector:
        """Compute the point ``origin + t * direction``. ``t`` is not validated."""
        return self.origin + self.direction * t
