"""Phong material model and material registry.

A material carries a base color, a specular exponent and a reflectivity.
The local illumination from one unoccluded light is:

    diffuse  = max(0, N . L) * light_color
    specular = max(0, R . V) ^ spec * light_color

where L points from the surface toward the light, R is L mirrored about
the normal N and V points from the surface toward the viewer. Both terms
vanish when the light is behind the surface (N . L <= 0); the specular term
is skipped for matte materials (spec <= 0).

Reflectivity ``refl`` in [0, 1] is the fraction of radiance taken from the
mirror direction instead of the local term.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.materials.phong import add_phong_material
    >>> red_glossy = add_phong_material((1.0, 0.0, 0.0), spec=500.0, refl=0.2)
"""

import taichi as ti
import taichi.math as tm

from whitted.core.ray import reflect

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class PhongMaterial:
    """Phong material properties.

    Attributes:
        color: Base surface color (RGB, each component in [0, 1]).
        spec: Specular exponent. Values <= 0 disable the highlight.
        refl: Reflectivity in [0, 1].
    """

    color: vec3
    spec: ti.f32
    refl: ti.f32


@ti.func
def eval_diffuse(normal: vec3, to_light: vec3, light_color: vec3) -> vec3:
    """Evaluate the diffuse term for one light.

    Args:
        normal: Unit surface normal.
        to_light: Unit vector from the surface point toward the light.
        light_color: Light color (RGB).

    Returns:
        max(0, N . L) * light_color.
    """
    return ti.max(tm.dot(normal, to_light), 0.0) * light_color


@ti.func
def eval_specular(
    normal: vec3,
    to_light: vec3,
    to_viewer: vec3,
    spec: ti.f32,
    light_color: vec3,
) -> vec3:
    """Evaluate the Phong specular term for one light.

    Args:
        normal: Unit surface normal.
        to_light: Unit vector from the surface point toward the light.
        to_viewer: Unit vector from the surface point toward the ray origin.
        spec: Specular exponent of the material.
        light_color: Light color (RGB).

    Returns:
        max(0, R . V) ^ spec * light_color, or zero for matte materials and
        lights behind the surface.
    """
    result = vec3(0.0, 0.0, 0.0)
    if spec > 0.0 and tm.dot(normal, to_light) > 0.0:
        # R = 2N(N . L) - L
        mirrored = reflect(-to_light, normal)
        r_dot_v = tm.dot(mirrored, to_viewer)
        if r_dot_v > 0.0:
            result = (r_dot_v**spec) * light_color
    return result


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

# Storage for material properties (Structure of Arrays)
material_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_specs = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_refls = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_phong_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_phong_material(
    color: tuple[float, float, float],
    spec: float = -1.0,
    refl: float = 0.0,
) -> int:
    """Add a material to the material registry.

    Args:
        color: Base surface color as (R, G, B) tuple.
        spec: Specular exponent. Values <= 0 make the material matte.
        refl: Reflectivity in [0, 1].

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If refl is outside [0, 1].
    """
    if refl < 0.0 or refl > 1.0:
        raise ValueError(f"Reflectivity {refl} is outside [0, 1]")

    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_colors[idx] = vec3(color[0], color[1], color[2])
    material_specs[idx] = spec
    material_refls[idx] = refl
    num_materials[None] = idx + 1
    return idx


def get_phong_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_material(material_idx: ti.i32) -> PhongMaterial:
    """Get the full material record by index."""
    return PhongMaterial(
        color=material_colors[material_idx],
        spec=material_specs[material_idx],
        refl=material_refls[material_idx],
    )
