"""Geometry module for shape primitives.

Components:
    sphere: HitType result, Sphere primitive with ray-sphere intersection
    plane: Infinite plane primitive with ray-plane intersection

All intersection routines are Taichi functions (@ti.func) that answer
"does this ray hit me inside (t_min, t_max), and at which t":
    result = hit_shape(ray_origin, ray_direction, shape, t_min, t_max)

There is no acceleration structure; the scene resolver scans primitives
linearly.
"""

from .plane import Plane, hit_plane, plane_normal
from .sphere import HitType, Sphere, hit_sphere, miss, sphere_normal

__all__ = [
    "HitType",
    "miss",
    "Sphere",
    "hit_sphere",
    "sphere_normal",
    "Plane",
    "hit_plane",
    "plane_normal",
]
