"""Parallel renderer for multi-worker sample accumulation.

The renderer splits the samples per pixel across workers, not the image:
every worker renders the entire image at its share of the samples, using its
own random stream and its own ColorBuffer. Once all workers have finished,
the driver merges their buffers pixel by pixel. Because accumulator merging
is commutative and associative, the result does not depend on which worker
finishes first.

Workers are separate processes, so pure-Python sampling runs on every core
instead of queueing behind the interpreter lock. Each worker receives its own
pickled copy of the scene, camera and random generator, and hands its
ColorBuffer back by value. Nothing mutable is shared and no locks are needed.
The only synchronization point is the final join.

Progress reporting keeps to the same rule. Each worker owns one slot of a
manager-backed counter list and only ever writes that slot. The driver sums
the slots while it waits and calls the user callback itself.

Scenes, cameras and backgrounds handed to ``render`` must be picklable:
module-level classes and functions, not lambdas or locally defined classes.

Example:
    >>> from pathtracer.config import RenderSettings
    >>> from pathtracer.core.renderer import render
    >>> settings = RenderSettings(width=64, height=36, samples_per_pixel=8, seed=1)
    >>> # buffer = render(world, camera, settings)
    >>> # pixels = buffer.to_bytes()  # (36, 64, 3) uint8, top row first
"""

from __future__ import annotations

import logging
import multiprocessing
import time
from collections.abc import Callable, MutableSequence
from concurrent.futures import ProcessPoolExecutor, wait
from contextlib import ExitStack

import numpy as np
import numpy.typing as npt

from pathtracer.camera.thin_lens import Camera
from pathtracer.config import RenderSettings
from pathtracer.core.color import Color, ColorBuffer
from pathtracer.core.integrator import Background, ray_color, sky_gradient
from pathtracer.core.vector import ZERO
from pathtracer.geometry.surface import Surface

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (completed_samples, total_samples) summed over all workers
ProgressCallback = Callable[[int, int], None]

# Seconds between progress callback invocations
DEFAULT_POLL_INTERVAL = 0.1


class WorkerProgress:
    """Completed-sample counter owned by a single worker.

    The counter lives in slot ``index`` of ``counters``, which may be a plain
    list or a multiprocessing manager list proxy shared with the driver. Only
    the owning worker writes its slot; the driver only reads it.

    Args:
        counters: Backing sequence of per-worker counts. Defaults to a
            private single-slot list.
        index: Slot owned by this worker.
    """

    __slots__ = ("_counters", "_index")

    def __init__(self, counters: MutableSequence[int] | None = None, index: int = 0) -> None:
        self._counters = counters if counters is not None else [0]
        self._index = index

    @property
    def completed(self) -> int:
        return self._counters[self._index]

    def advance(self, samples: int) -> None:
        self._counters[self._index] += samples


def render_worker(
    world: Surface,
    camera: Camera,
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    rng: np.random.Generator,
    progress: WorkerProgress | None = None,
    background: Background = sky_gradient,
) -> ColorBuffer:
    """Render the whole image at a fixed number of samples per pixel.

    Rows are produced top row first. Each sample jitters its position inside
    the pixel before asking the camera for a ray.

    Args:
        world: Scene geometry.
        camera: Camera generating primary rays.
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Samples taken for every pixel by this worker.
        max_depth: Bounce budget per path.
        rng: Random source owned by this worker.
        progress: Optional counter advanced after every row.
        background: Radiance for rays leaving the scene.

    Returns:
        A ColorBuffer holding ``samples_per_pixel`` samples for every pixel.
    """
    buffer = ColorBuffer(width, height)
    s_scale = 1.0 / max(width - 1, 1)
    t_scale = 1.0 / max(height - 1, 1)

    for row in range(height):
        j = height - 1 - row
        for i in range(width):
            total = ZERO
            for _ in range(samples_per_pixel):
                du, dv = rng.random(2).tolist()
                ray = camera.ray_from((i + du) * s_scale, (j + dv) * t_scale, rng)
                total = total + ray_color(ray, world, max_depth, rng, background)
            buffer.add(row, i, Color(total, samples_per_pixel))
        if progress is not None:
            progress.advance(width * samples_per_pixel)

    return buffer


def render(
    world: Surface,
    camera: Camera,
    settings: RenderSettings,
    progress: ProgressCallback | None = None,
    *,
    background: Background = sky_gradient,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> ColorBuffer:
    """Render a scene with parallel workers and merge their samples.

    Args:
        world: Scene geometry; copied to every worker process.
        camera: Camera generating primary rays; copied to every worker.
        settings: Image size, sample count, worker count, depth and seed.
        progress: Optional callback receiving (completed, total) samples.
            Always called from the calling thread, including once at the end.
        background: Radiance for rays leaving the scene.
        poll_interval: Seconds between progress callbacks.

    Returns:
        The merged ColorBuffer with ``settings.samples_per_pixel`` samples in
        every pixel.

    Raises:
        Exception: Any exception raised by a worker. The render is abandoned
            and no partial image is returned.
    """
    shares = settings.samples_per_worker()
    seeds = np.random.SeedSequence(settings.seed).spawn(len(shares))
    total = settings.width * settings.height * settings.samples_per_pixel

    logger.info(
        "Rendering %dx%d at %d spp with %d worker processes",
        settings.width,
        settings.height,
        settings.samples_per_pixel,
        len(shares),
    )
    logger.debug("Samples per worker: %s", shares)
    start_time = time.perf_counter()

    with ExitStack() as stack:
        counters: MutableSequence[int] = [0] * len(shares)
        trackers: list[WorkerProgress | None] = [None] * len(shares)
        if progress is not None:
            manager = stack.enter_context(multiprocessing.Manager())
            counters = manager.list(counters)
            trackers = [WorkerProgress(counters, index) for index in range(len(shares))]

        executor = stack.enter_context(ProcessPoolExecutor(max_workers=len(shares)))
        futures = [
            executor.submit(
                render_worker,
                world,
                camera,
                settings.width,
                settings.height,
                share,
                settings.max_depth,
                np.random.default_rng(seed),
                tracker,
                background,
            )
            for share, seed, tracker in zip(shares, seeds, trackers)
        ]

        pending = set(futures)
        while pending:
            _, pending = wait(pending, timeout=poll_interval)
            if progress is not None:
                progress(sum(counters[:]), total)

    # Re-raises the first worker failure, if any
    buffers = [future.result() for future in futures]
    merged = ColorBuffer.merge_all(buffers)

    logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
    return merged


def render_pixels(
    world: Surface,
    camera: Camera,
    settings: RenderSettings,
    progress: ProgressCallback | None = None,
) -> npt.NDArray[np.uint8]:
    """Render and return the gamma-corrected byte grid, shape (height, width, 3).

    Rows are in scan order: top row first, pixels left to right.
    """
    return render(world, camera, settings, progress).to_bytes()
