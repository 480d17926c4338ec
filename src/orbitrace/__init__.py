"""Recursive sphere ray tracer.

This package renders a flat list of spheres lit by point lights into a grid
of colors, with support for:
- Closed-form ray-sphere intersection
- Recursive specular reflection with a bounded bounce depth
- Lambertian diffuse shading with shadow probes
- Row-parallel rendering with cooperative cancellation
- A Taichi kernel backend for accelerated frames

Subpackages:
    core: Vector algebra, colors, rays, shading engine, and frame generation
    geometry: Sphere primitive and intersection test
    scene: Scene model, lights, and the animated reference scene
    camera: Camera model and primary ray generation
    preview: Frame export utilities
"""

__version__ = "0.1.0"
