"""Materials module for light-scattering models.

Components:
    material: Scatter record and the Material contract
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides:
    - scatter(ray, hit, rng): a Scatter(ray, attenuation), or None if absorbed
"""

from .dielectric import Dielectric
from .lambertian import Lambertian
from .material import Material, Scatter
from .metal import Metal

__all__ = [
    "Material",
    "Scatter",
    "Lambertian",
    "Metal",
    "Dielectric",
]
