"""Core rendering module.

Components:
    ray: Vector utilities for ray directions
    config: Render and output options
    shading: Light contributions, fog and reflection tracing
    renderer: Viewport mapping, region rendering and band partitioning

All per-pixel work runs in Taichi kernels; the host side only uploads the
scene and assembles the image bands.
"""

from .ray import normalize, reflect, vec3

# Note: shading and renderer are NOT imported here to avoid circular imports.
# Import directly from whitted.core.shading or whitted.core.renderer when needed.

__all__ = [
    "vec3",
    "normalize",
    "reflect",
]
