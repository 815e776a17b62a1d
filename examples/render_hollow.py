#!/usr/bin/env python3
"""Render the hollow glass sphere scene.

This script shows the library API end to end: build a scene, derive a camera,
render with several workers and save the result.

Usage:
    python examples/render_hollow.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 180)
    --samples SAMPLES   Number of samples per pixel (default: 32)
    --output OUTPUT     Output file path (default: hollow.png)
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Render the hollow glass sphere scene.")
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=180, help="Image height in pixels (default: 180)")
    parser.add_argument("--samples", type=int, default=32, help="Number of samples per pixel (default: 32)")
    parser.add_argument("--output", type=str, default="hollow.png", help="Output file path (default: hollow.png)")
    return parser.parse_args()


def render_hollow(width: int, height: int, num_samples: int, output_path: str) -> Path:
    """Render the hollow scene and save it to ``output_path``."""
    from pathtracer.camera.thin_lens import Camera, CameraConfig
    from pathtracer.config import RenderSettings
    from pathtracer.core.renderer import render
    from pathtracer.preview.export import save_image
    from pathtracer.scene.presets import hollow_scene

    settings = RenderSettings(width=width, height=height, samples_per_pixel=num_samples)
    camera = Camera.from_config(
        CameraConfig(
            lookfrom=(-2.0, 2.0, 1.0),
            lookat=(0.0, 0.0, -1.0),
            vfov=20.0,
            aspect_ratio=settings.aspect_ratio,
        )
    )

    start_time = time.time()
    buffer = render(hollow_scene(), camera, settings)
    output_file = Path(output_path)
    save_image(buffer.to_bytes(), output_file)

    print(f"Saved to: {output_file.absolute()}")
    print(f"Total time: {time.time() - start_time:.2f}s")
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        render_hollow(args.width, args.height, args.samples, args.output)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
