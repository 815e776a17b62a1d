"""Render configuration.

RenderSettings gathers the image and sampling parameters handed to the
renderer. Camera placement lives in pathtracer.camera.CameraConfig.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from pathtracer.core.integrator import MAX_DEPTH

DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 225
DEFAULT_SAMPLES = 50


@dataclass(frozen=True)
class RenderSettings:
    """Image and sampling parameters for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Total samples per pixel, summed over all workers.
        workers: Number of worker processes. None means one per logical core.
        max_depth: Bounce budget for each light path.
        seed: Seed for the per-worker random streams. None draws fresh
            entropy from the OS.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    samples_per_pixel: int = DEFAULT_SAMPLES
    workers: int | None = None
    max_depth: int = MAX_DEPTH
    seed: int | None = None

    def __post_init__(self) -> None:
        for name in ("width", "height", "samples_per_pixel", "max_depth"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def worker_count(self) -> int:
        """Number of workers actually started.

        Never more than samples_per_pixel, since a worker needs at least one
        sample per pixel to contribute.
        """
        requested = self.workers if self.workers is not None else (os.cpu_count() or 1)
        return max(1, min(requested, self.samples_per_pixel))

    def samples_per_worker(self) -> list[int]:
        """Split samples_per_pixel as evenly as possible across workers.

        The first ``samples_per_pixel % worker_count`` workers take one extra
        sample so the total is preserved exactly.
        """
        count = self.worker_count
        base, extra = divmod(self.samples_per_pixel, count)
        return [base + (1 if i < extra else 0) for i in range(count)]
