"""Whitted-style shading: local illumination, hard shadows and reflections.

For a surface point p with unit normal N seen from direction V, each light
contributes:
    - ambient lights: their color, unconditionally
    - directional and point lights: nothing if a shadow ray from p toward
      the light hits any object (any_hit, starting SHADOW_EPSILON past the
      surface and ending at the light for point lights); otherwise the
      Phong diffuse and specular terms of the hit material

Mirror reflections are traced iteratively with a throughput weight instead
of call-stack recursion (Taichi functions cannot recurse). The radiance of
a hit on a material with color C and reflectivity r is:

    C * (local * (1 - r) + r * reflected)   while the bounce budget lasts
    C * local                               once it is exhausted

where ``reflected`` is the radiance along the mirror ray, or the
background if that ray escapes. Each hit's radiance is additionally
blended toward the background by the world's fog. The budget strictly
decreases, so tracing always terminates after at most
max_reflections + 1 intersections.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.shading import shade_ray
    >>> from whitted.scene.manager import SceneManager
    >>> from whitted.scene.demo import create_demo_scene
    >>> SceneManager().load(create_demo_scene())
    >>> r, g, b = shade_ray((0.0, 0.0, 0.0), (0.0, -0.1, 0.5), t_min=0.5, max_reflections=3)
"""

import taichi as ti
import taichi.math as tm

from whitted.core.ray import normalize, reflect
from whitted.materials.phong import eval_diffuse, eval_specular, get_material
from whitted.scene.intersection import (
    T_MAX,
    any_hit,
    closest_hit,
    object_material,
    object_normal,
)
from whitted.scene.lights import (
    get_light_color,
    get_light_kind,
    get_light_vector,
    num_lights,
)
from whitted.scene.model import LightType
from whitted.scene.world import fog_factor, get_background

# Type alias for 3D vectors
vec3 = tm.vec3

# Lower bound for shadow and reflection rays to avoid self-intersection
SHADOW_EPSILON = 1e-3


@ti.func
def light_contribution(
    light_idx: ti.i32,
    point: vec3,
    normal: vec3,
    to_viewer: vec3,
    spec: ti.f32,
) -> vec3:
    """Compute the light vector contributed by one light at a surface point.

    Args:
        light_idx: Index of the light in the light registry.
        point: The surface point.
        normal: Unit surface normal at the point.
        to_viewer: Unit vector from the point toward the ray origin.
        spec: Specular exponent of the surface material.

    Returns:
        The (uncolored) light arriving at the point from this light.
    """
    kind = get_light_kind(light_idx)
    light_color = get_light_color(light_idx)
    result = vec3(0.0, 0.0, 0.0)

    if kind == int(LightType.AMBIENT):
        result = light_color
    else:
        to_light = get_light_vector(light_idx)
        t_max = T_MAX
        if kind == int(LightType.POINT):
            offset = to_light - point
            t_max = tm.length(offset)
            to_light = offset / t_max

        shadow = any_hit(point, to_light, SHADOW_EPSILON, t_max)
        if shadow.hit == 0:
            result = eval_diffuse(normal, to_light, light_color) + eval_specular(
                normal, to_light, to_viewer, spec, light_color
            )

    return result


@ti.func
def local_illumination(point: vec3, normal: vec3, to_viewer: vec3, spec: ti.f32) -> vec3:
    """Sum the contributions of every light at a surface point."""
    total = vec3(0.0, 0.0, 0.0)
    for light_idx in range(num_lights[None]):
        total += light_contribution(light_idx, point, normal, to_viewer, spec)
    return total


@ti.func
def trace_ray(
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    max_reflections: ti.i32,
) -> vec3:
    """Trace a ray through the scene, following mirror reflections.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        t_min: Lower bound for the first intersection (the viewport
            distance for primary rays).
        max_reflections: Reflection budget.

    Returns:
        The radiance along the ray (not clamped).
    """
    background = get_background()

    radiance = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)

    origin = ray_origin
    direction = ray_direction
    lower = t_min
    remaining = max_reflections

    # Active flag for ray continuation (no break in the bounce loop)
    active = 1

    for _ in range(max_reflections + 1):
        if active == 1:
            rec = closest_hit(origin, direction, lower, T_MAX)

            if rec.hit == 0:
                radiance += throughput * background
                active = 0
            else:
                point = rec.point
                normal = object_normal(rec.index, point)
                material = get_material(object_material(rec.index, point))

                # Fog: this hit's radiance is blended toward the background
                fog = fog_factor(tm.length(point - origin))
                radiance += throughput * fog * background
                throughput *= 1.0 - fog

                to_viewer = -normalize(direction)
                local = local_illumination(point, normal, to_viewer, material.spec)

                local_weight = 1.0
                if remaining > 0 and material.refl > 0.0:
                    local_weight = 1.0 - material.refl

                radiance += throughput * material.color * local * local_weight

                if local_weight < 1.0:
                    throughput *= material.color * material.refl
                    origin = point
                    direction = reflect(direction, normal)
                    lower = SHADOW_EPSILON
                    remaining -= 1
                else:
                    active = 0

    return radiance


# =============================================================================
# Host-side shading query
# =============================================================================

_shade_result = ti.Vector.field(3, dtype=ti.f32, shape=())


@ti.kernel
def _shade_ray_kernel(origin: vec3, direction: vec3, t_min: ti.f32, max_reflections: ti.i32):
    # Single-iteration outer loop keeps the scene scans serial
    for _ in range(1):
        _shade_result[None] = trace_ray(origin, direction, t_min, max_reflections)


def shade_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    t_min: float = SHADOW_EPSILON,
    max_reflections: int = 0,
) -> tuple[float, float, float]:
    """Trace a single ray from Python.

    Useful for checking the shading of individual rays in tests and tools.
    The scene must already be loaded into the registries.

    Returns:
        The unclamped radiance (R, G, B) along the ray.
    """
    _shade_ray_kernel(
        tm.vec3(*origin), tm.vec3(*direction), t_min, max_reflections
    )
    c = _shade_result[None]
    return (float(c[0]), float(c[1]), float(c[2]))
