"""Infinite plane primitive with ray-plane intersection.

A plane is defined by any point on it and its unit normal. The normal is
normalized when the scene is built, so the intersection code never
renormalizes it.

Ray-plane intersection solves:
    dot(normal, ray_origin + t * ray_direction - point) = 0

which gives:
    t = dot(normal, point - ray_origin) / dot(normal, ray_direction)

Rays parallel to the plane (denominator zero) never hit it, even when the
ray lies inside the plane.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.geometry.plane import Plane, hit_plane
    >>> # Ground plane at y = -1 facing up
    >>> ground = Plane(point=ti.math.vec3(0, -1, 0), normal=ti.math.vec3(0, 1, 0))
    >>> # Use hit_plane within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from .sphere import HitType, miss

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Rays with |dot(normal, direction)| below this are treated as parallel
PARALLEL_EPSILON = 1e-8


@ti.dataclass
class Plane:
    """An infinite plane defined by a point and a unit normal.

    Attributes:
        point: Any point on the plane (vec3).
        normal: The unit surface normal (vec3).
    """

    point: vec3
    normal: vec3


@ti.func
def hit_plane(
    ray_origin: vec3,
    ray_direction: vec3,
    plane: Plane,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitType:
    """Test for ray-plane intersection within the open range (t_min, t_max).

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (need not be normalized).
        plane: The plane to test intersection against.
        t_min: Lower bound of the valid range (exclusive).
        t_max: Upper bound of the valid range (exclusive).

    Returns:
        A HitType with the ray parameter of the intersection.
    """
    denom = tm.dot(plane.normal, ray_direction)

    result = miss()

    if ti.abs(denom) > PARALLEL_EPSILON:
        t = tm.dot(plane.normal, plane.point - ray_origin) / denom
        if t > t_min and t < t_max:
            result = HitType(hit=1, t=t)

    return result


@ti.func
def plane_normal(plane: Plane, point: vec3) -> vec3:
    """Get the unit normal of a plane (constant over its surface)."""
    return plane.normal
