"""Vector utilities for ray directions.

The intersection and shading code pass rays around as raw origin and
direction vectors. Directions are not required to be normalized: the ray
parameter ``t`` is measured in units of ``|direction|``, so ``t = 1`` is
always ``origin + direction``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.ray import reflect, vec3
    >>> # Inside a kernel:
    >>> # mirrored = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Zero vectors are rejected when the scene is built, so no guard is
    applied here; a zero input yields non-finite components.
    """
    return v / tm.length(v)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes the mirror direction of the incident vector about the surface
    normal. The normal must be unit length; the incident vector keeps its
    magnitude.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal
