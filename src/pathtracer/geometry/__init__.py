"""Geometry module for shape primitives and intersection.

Components:
    surface: Hit record and the Surface intersection contract
    sphere: Sphere primitive with ray-sphere intersection
    surface_list: Closest-hit aggregate over child surfaces

Ray-object intersection follows the pattern:
    hit = surface.hit(ray, (t_min, t_max))  # Hit or None
"""

from .sphere import Sphere
from .surface import Hit, Surface, TRange
from .surface_list import SurfaceList

__all__ = [
    "Hit",
    "Surface",
    "TRange",
    "Sphere",
    "SurfaceList",
]
