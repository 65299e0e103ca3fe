"""Whitted-style CPU ray tracer built on Taichi.

This package turns a declarative scene (camera, spheres, planes, materials,
lights, fog) into an 8-bit RGB image using recursive ray-object
intersection, Phong local illumination with hard shadows, and mirror
reflections.

Subpackages:
    core: Rays, vector helpers, configuration, shading and the render loop
    geometry: Sphere and plane primitives with ray intersection
    materials: Material registry (color, specular exponent, reflectivity)
    scene: Scene model, registries, intersection resolver and loaders
    preview: Image export and debug drawing utilities
"""

__version__ = "0.1.0"
