"""Light registry stored in Taichi fields.

Each light has a kind (see LightType), a color and one vector whose meaning
depends on the kind:
    AMBIENT: unused; contributes its color everywhere, never shadowed
    DIRECTIONAL: unit direction from surfaces toward the light
    POINT: light position; radiates in all directions without attenuation

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.lights import add_light, clear_lights
    >>> from whitted.scene.model import LightType
    >>> clear_lights()
    >>> add_light(LightType.POINT, (1.0, 1.0, 1.0), (0.0, 5.0, 0.0))
    0
"""

import taichi as ti
import taichi.math as tm

from whitted.scene.model import LightType

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum number of lights in the scene
MAX_LIGHTS = 64

light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Clear all lights."""
    num_lights[None] = 0


def add_light(
    kind: LightType,
    color: tuple[float, float, float],
    vector: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> int:
    """Add a light to the registry.

    Args:
        kind: The light type.
        color: Light color (RGB).
        vector: Direction toward the light (directional, unit length) or
            light position (point). Ignored for ambient lights.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    light_kinds[idx] = int(kind)
    light_colors[idx] = vec3(color[0], color[1], color[2])
    light_vectors[idx] = vec3(vector[0], vector[1], vector[2])
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the registry."""
    return int(num_lights[None])


@ti.func
def get_light_kind(light_idx: ti.i32) -> ti.i32:
    return light_kinds[light_idx]


@ti.func
def get_light_color(light_idx: ti.i32) -> vec3:
    return light_colors[light_idx]


@ti.func
def get_light_vector(light_idx: ti.i32) -> vec3:
    return light_vectors[light_idx]
