"""World parameters stored in Taichi fields.

Holds the camera position, the background color and the optional fog
range. Fog blends the radiance of a hit toward the background by its
distance from the ray origin:

    f = clamp((distance - near) / (far - near), 0, 1)
    radiance = (1 - f) * radiance + f * background
"""

import taichi as ti
import taichi.math as tm

from whitted.scene.model import World

# Type alias for 3D vectors
vec3 = tm.vec3

_camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())
_background = ti.Vector.field(3, dtype=ti.f32, shape=())
_fog_enabled = ti.field(dtype=ti.i32, shape=())
_fog_near = ti.field(dtype=ti.f32, shape=())
_fog_far = ti.field(dtype=ti.f32, shape=())


def setup_world(world: World) -> None:
    """Write the world parameters into the device fields."""
    _camera_position[None] = vec3(*world.camera_position)
    _background[None] = vec3(*world.background)
    if world.fog is None:
        _fog_enabled[None] = 0
        _fog_near[None] = 0.0
        _fog_far[None] = 0.0
    else:
        _fog_enabled[None] = 1
        _fog_near[None] = world.fog[0]
        _fog_far[None] = world.fog[1]


def clear_world() -> None:
    """Reset to the default world (camera at the origin, black, no fog)."""
    setup_world(World())


def get_world_info() -> dict[str, object]:
    """Get the current world state for debugging."""
    camera = _camera_position[None]
    background = _background[None]
    fog = None
    if _fog_enabled[None]:
        fog = (float(_fog_near[None]), float(_fog_far[None]))
    return {
        "camera_position": (float(camera[0]), float(camera[1]), float(camera[2])),
        "background": (float(background[0]), float(background[1]), float(background[2])),
        "fog": fog,
    }


@ti.func
def get_camera_position() -> vec3:
    return _camera_position[None]


@ti.func
def get_background() -> vec3:
    return _background[None]


@ti.func
def fog_factor(distance: ti.f32) -> ti.f32:
    """Compute the fog blend weight for a hit at the given distance.

    Returns:
        0 when fog is disabled or the hit is nearer than the fog range,
        rising linearly to 1 at the far bound.
    """
    f = 0.0
    if _fog_enabled[None] == 1:
        f = (distance - _fog_near[None]) / (_fog_far[None] - _fog_near[None])
        f = tm.clamp(f, 0.0, 1.0)
    return f
