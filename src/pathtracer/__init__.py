"""CPU path tracer with multi-worker sample accumulation.

This package renders scenes of spheres by Monte Carlo path tracing, with
support for:
- Lambertian, metal and dielectric (glass) materials
- Thin-lens camera with depth of field
- Sky-gradient background lighting
- Parallel rendering where each worker owns its random stream and buffer

Subpackages:
    core: Vector algebra, rays, color accumulators, integrator and renderer
    geometry: Hit records, spheres and surface lists
    materials: Scattering models
    camera: Thin-lens camera
    scene: Built-in scene presets
    preview: PPM/PNG export
"""

__version__ = "0.1.0"
