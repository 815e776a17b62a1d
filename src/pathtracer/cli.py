"""Command-line interface for rendering built-in scenes.

Usage:
    pathtracer [options] [scene]
    python -m pathtracer [options] [scene]

Options:
    --width, -W WIDTH              Image width in pixels (default: 400)
    --height, -H HEIGHT            Image height in pixels (default: 225)
    --camera-pos, -p X,Y,Z         Camera position (default: per scene)
    --camera-target, -t X,Y,Z      Where the camera is looking (default: per scene)
    --camera-fov, -f DEGREES       Vertical field of view (default: 20.0)
    --camera-aperture, -a SIZE     Lens aperture (default: 0.1)
    --camera-focus-distance DIST   Focus distance (default: |pos - target|)
    --samples, -s SAMPLES          Samples per pixel (default: 50)
    --jobs, -j JOBS                Worker processes (default: one per core)
    --seed SEED                    Random seed for a reproducible render
    --output, -o PATH              Output .ppm or .png (default: PPM on stdout)
    --quiet                        Suppress progress output
    --log-level LEVEL              Logging level (default: WARNING)

Example:
    pathtracer --width 200 --height 112 --samples 16 -o field.png field
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

import numpy as np

from pathtracer.camera.thin_lens import Camera, CameraConfig
from pathtracer.config import DEFAULT_HEIGHT, DEFAULT_SAMPLES, DEFAULT_WIDTH, RenderSettings
from pathtracer.core.renderer import ProgressCallback, render
from pathtracer.preview.export import save_image, write_ppm
from pathtracer.scene.presets import SCENES, get_scene

logger = logging.getLogger(__name__)


def parse_vector(text: str) -> tuple[float, float, float]:
    """Parse a vector of the form ``"x,y,z"``."""
    parts = text.split(",")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected 'x,y,z', got {text!r}")
    try:
        x, y, z = (float(part) for part in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number in {text!r}") from None
    return (x, y, z)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a built-in scene with a CPU path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-W", "--width", type=int, default=DEFAULT_WIDTH,
                        help=f"Image width in pixels (default: {DEFAULT_WIDTH})")
    parser.add_argument("-H", "--height", type=int, default=DEFAULT_HEIGHT,
                        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})")
    parser.add_argument("-p", "--camera-pos", type=parse_vector, default=None,
                        help='Camera position, of the form "x,y,z"')
    parser.add_argument("-t", "--camera-target", type=parse_vector, default=None,
                        help="Where the camera is looking")
    parser.add_argument("-f", "--camera-fov", type=float, default=20.0,
                        help="Vertical field of view, in degrees (default: 20.0)")
    parser.add_argument("-a", "--camera-aperture", type=float, default=0.1,
                        help="Lens aperture (default: 0.1)")
    parser.add_argument("--camera-focus-distance", type=float, default=None,
                        help="Focus distance (default: distance to the target)")
    parser.add_argument("-s", "--samples", type=int, default=DEFAULT_SAMPLES,
                        help=f"Samples per pixel (default: {DEFAULT_SAMPLES})")
    parser.add_argument("-j", "--jobs", type=int, default=None,
                        help="Worker processes (default: one per logical core)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for scene layout and sampling")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Output file (.ppm or .png); PPM on stdout if omitted")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress progress output")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    parser.add_argument("scene", nargs="?", default="field", type=str.lower, choices=sorted(SCENES),
                        help="Scene to render, case-insensitive (default: field)")
    return parser


def make_progress_printer(quiet: bool) -> ProgressCallback | None:
    """Return a callback printing a single updating progress line to stderr."""
    if quiet:
        return None

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        elapsed = time.time() - start_time
        progress_pct = (current / target) * 100 if target > 0 else 0
        print(
            f"\r  Progress: {current}/{target} samples ({progress_pct:.1f}%) - {elapsed:.1f}s",
            end="",
            file=sys.stderr,
            flush=True,
        )

    return progress_callback


def run(args: argparse.Namespace) -> None:
    """Render the requested scene and write the image."""
    settings = RenderSettings(
        width=args.width,
        height=args.height,
        samples_per_pixel=args.samples,
        workers=args.jobs,
        seed=args.seed,
    )
    preset = get_scene(args.scene)
    camera_config = CameraConfig(
        lookfrom=args.camera_pos if args.camera_pos is not None else preset.lookfrom,
        lookat=args.camera_target if args.camera_target is not None else preset.lookat,
        vfov=args.camera_fov,
        aspect_ratio=settings.aspect_ratio,
        aperture=args.camera_aperture,
        focus_distance=args.camera_focus_distance,
    )

    world = preset.build(np.random.default_rng(args.seed))
    camera = Camera.from_config(camera_config)

    buffer = render(world, camera, settings, make_progress_printer(args.quiet))
    if not args.quiet:
        print(file=sys.stderr)  # Newline after progress

    pixels = buffer.to_bytes()
    if args.output is None:
        write_ppm(sys.stdout, pixels)
        sys.stdout.flush()
    else:
        save_image(pixels, args.output)
        logger.info("Saved to %s", args.output)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        run(args)
        return 0
    except Exception as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
