"""Aggregate surface returning the closest hit among its children.

This is the renderer's only acceleration structure: a linear scan, O(n) per
ray, with no spatial partitioning.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pathtracer.core.ray import Ray
from pathtracer.geometry.surface import Hit, Surface, TRange


class SurfaceList(Surface):
    """An ordered, immutable collection of surfaces.

    Args:
        surfaces: Child surfaces, queried in iteration order.
    """

    def __init__(self, surfaces: Iterable[Surface] = ()) -> None:
        self._surfaces: tuple[Surface, ...] = tuple(surfaces)

    def hit(self, ray: Ray, t_range: TRange) -> Hit | None:
        """Return the closest hit among all children.

        The upper bound shrinks to the ``t`` of each accepted hit, so every
        later child is only queried in ``(t_min, closest_so_far)``. The last
        accepted hit is therefore the globally closest one.
        """
        t_min, closest_so_far = t_range
        closest: Hit | None = None
        for surface in self._surfaces:
            hit = surface.hit(ray, (t_min, closest_so_far))
            if hit is not None:
                closest_so_far = hit.t
                closest = hit
        return closest

    def __len__(self) -> int:
        return len(self._surfaces)

    def __iter__(self) -> Iterator[Surface]:
        return iter(self._surfaces)

    def __repr__(self) -> str:
        return f"SurfaceList({len(self._surfaces)} surfaces)"
