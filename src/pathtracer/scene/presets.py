"""Built-in scene configurations.

This module provides factory functions for ready-made scenes and a registry
used by the command line to look them up by name.

Scenes:
    field: A ground plane strewn with small random spheres (diffuse, metal
        and glass) around three large feature spheres.
    hollow: Four spheres on a ground, one of them a hollow glass shell made
        of a glass sphere with a negative-radius sphere nested inside.

Example:
    >>> import numpy as np
    >>> from pathtracer.scene.presets import get_scene
    >>> preset = get_scene("field")
    >>> world = preset.build(np.random.default_rng(7))
    >>> preset.lookfrom
    (13.0, 2.0, 3.0)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from pathtracer.core.vector import Vector
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.surface import Surface
from pathtracer.geometry.surface_list import SurfaceList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal

logger = logging.getLogger(__name__)

# =============================================================================
# Field Scene Parameters
# =============================================================================

# Small spheres are scattered on the grid [-FIELD_EXTENT, FIELD_EXTENT)^2
FIELD_EXTENT = 11
SMALL_RADIUS = 0.2

# Small spheres closer than this to FIELD_CLEARING are skipped
FIELD_CLEARING = Vector(4.0, 0.2, 0.0)
CLEARING_RADIUS = 0.9

# Probability of each small-sphere material: diffuse, metal, glass
MATERIAL_WEIGHTS = (0.8, 0.15, 0.05)

GLASS_IOR = 1.5


def field_scene(rng: np.random.Generator) -> SurfaceList:
    """Create the random sphere field.

    The layout is random but fully determined by ``rng``. One glass material
    instance is shared by every glass sphere.

    Args:
        rng: Random source for sphere placement and materials.

    Returns:
        The scene as a SurfaceList.
    """
    glass = Dielectric(GLASS_IOR)
    surfaces: list[Surface] = [
        Sphere(Vector(0.0, -1000.0, 0.0), 1000.0, Lambertian(Vector(0.5, 0.5, 0.5))),
    ]

    for x in range(-FIELD_EXTENT, FIELD_EXTENT):
        for z in range(-FIELD_EXTENT, FIELD_EXTENT):
            jitter_x, jitter_z = rng.random(2).tolist()
            center = Vector(x + 0.9 * jitter_x, SMALL_RADIUS, z + 0.9 * jitter_z)
            if (center - FIELD_CLEARING).length() <= CLEARING_RADIUS:
                continue

            choice = rng.choice(len(MATERIAL_WEIGHTS), p=MATERIAL_WEIGHTS)
            material: Material
            if choice == 0:
                material = Lambertian(Vector.random(rng) * Vector.random(rng))
            elif choice == 1:
                material = Metal(Vector.random(rng, 0.5, 1.0), float(rng.uniform(0.0, 0.5)))
            else:
                material = glass
            surfaces.append(Sphere(center, SMALL_RADIUS, material))

    surfaces.append(Sphere(Vector(0.0, 1.0, 0.0), 1.0, glass))
    surfaces.append(Sphere(Vector(-4.0, 1.0, 0.0), 1.0, Lambertian(Vector(0.4, 0.2, 0.1))))
    surfaces.append(Sphere(Vector(4.0, 1.0, 0.0), 1.0, Metal(Vector(0.7, 0.6, 0.5), 0.0)))

    logger.debug("Built field scene with %d spheres", len(surfaces))
    return SurfaceList(surfaces)


def hollow_scene(rng: np.random.Generator | None = None) -> SurfaceList:
    """Create a small scene with a hollow glass sphere.

    The left sphere is a glass shell: an outer sphere of radius 0.5 and an
    inner sphere of radius -0.4 whose normals point inward.

    Args:
        rng: Unused; accepted so every scene builder shares one signature.

    Returns:
        The scene as a SurfaceList.
    """
    glass = Dielectric(GLASS_IOR)
    surfaces = [
        Sphere(Vector(0.0, -100.5, -1.0), 100.0, Lambertian(Vector(0.8, 0.8, 0.0))),
        Sphere(Vector(0.0, 0.0, -1.0), 0.5, Lambertian(Vector(0.1, 0.2, 0.5))),
        Sphere(Vector(-1.0, 0.0, -1.0), 0.5, glass),
        Sphere(Vector(-1.0, 0.0, -1.0), -0.4, glass),
        Sphere(Vector(1.0, 0.0, -1.0), 0.5, Metal(Vector(0.8, 0.6, 0.2), 0.0)),
    ]
    return SurfaceList(surfaces)


# =============================================================================
# Scene Registry
# =============================================================================


@dataclass(frozen=True)
class ScenePreset:
    """A named scene with its default camera placement.

    Attributes:
        name: Registry key.
        build: Factory producing the scene from a random source.
        lookfrom: Default camera position.
        lookat: Default camera target.
    """

    name: str
    build: Callable[[np.random.Generator], Surface]
    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]


SCENES: dict[str, ScenePreset] = {
    "field": ScenePreset("field", field_scene, (13.0, 2.0, 3.0), (0.0, 0.0, 0.0)),
    "hollow": ScenePreset("hollow", hollow_scene, (-2.0, 2.0, 1.0), (0.0, 0.0, -1.0)),
}


def get_scene(name: str) -> ScenePreset:
    """Look up a scene preset by name (case-insensitive).

    Raises:
        ValueError: If no scene has that name.
    """
    try:
        return SCENES[name.lower()]
    except KeyError:
        available = ", ".join(sorted(SCENES))
        raise ValueError(f"Unknown scene {name!r}; available scenes: {available}") from None
