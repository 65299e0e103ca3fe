"""Scene-level intersection resolver.

Objects of every primitive kind live in a single table in insertion order,
so "storage order" is well defined across kinds. The resolver scans that
table linearly; there is no acceleration structure.

Two queries are provided:
    closest_hit: the globally nearest hit. The comparison is strict, so on
        equal t the first object in storage order wins.
    any_hit: the first object in storage order that reports a hit, without
        scanning the rest. Used for shadow rays, where only existence
        matters.

Both return a SceneHit carrying the object index and the hit point
origin + t * direction. Host-side wrappers (query_closest_hit,
query_any_hit) run the same functions through a small kernel for tests
and tools.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.intersection import add_sphere, clear_objects, query_closest_hit
    >>> clear_objects()
    >>> add_sphere((0.0, 0.0, 3.0), 1.0, material_id=0)
    0
    >>> query_closest_hit((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
    (0, (0.0, 0.0, 2.0))
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from whitted.geometry.plane import Plane, hit_plane, plane_normal
from whitted.geometry.sphere import HitType, Sphere, hit_sphere, miss, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Upper bound used for "infinite" ray ranges
T_MAX = 1e30


class ObjectKind(IntEnum):
    """Primitive kind stored in the object table."""

    SPHERE = 0
    PLANE = 1


@ti.dataclass
class SceneHit:
    """Record of a ray-scene intersection.

    Attributes:
        hit: 1 if any object was hit, 0 otherwise.
        index: Index of the hit object in storage order (-1 on a miss).
        t: The ray parameter of the hit.
        point: The hit point origin + t * direction.
    """

    hit: ti.i32
    index: ti.i32
    t: ti.f32
    point: vec3


# Maximum number of objects supported in the scene
MAX_OBJECTS = 1024

# Object storage: Structure of Arrays layout.
# object_positions holds the sphere center or a point on the plane,
# object_normals is only meaningful for planes, object_radii only for spheres.
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
object_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_radii = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
object_material_ids = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())

# Result slots for host-side queries
_query_index = ti.field(dtype=ti.i32, shape=())
_query_point = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_objects() -> None:
    """Clear all objects from the scene.

    Resets the object count to zero. The field data is overwritten when new
    objects are added.
    """
    num_objects[None] = 0


def _next_object_index() -> int:
    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    return idx


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).
        material_id: The material index to associate with this sphere.

    Returns:
        The index of the added object.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    idx = _next_object_index()
    object_kinds[idx] = int(ObjectKind.SPHERE)
    object_positions[idx] = vec3(center[0], center[1], center[2])
    object_normals[idx] = vec3(0.0, 0.0, 0.0)
    object_radii[idx] = radius
    object_material_ids[idx] = material_id
    num_objects[None] = idx + 1
    return idx


def add_plane(
    point: tuple[float, float, float],
    normal: tuple[float, float, float],
    material_id: int = 0,
) -> int:
    """Add a plane to the scene.

    Args:
        point: Any point on the plane.
        normal: The unit plane normal (callers normalize).
        material_id: The material index to associate with this plane.

    Returns:
        The index of the added object.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    idx = _next_object_index()
    object_kinds[idx] = int(ObjectKind.PLANE)
    object_positions[idx] = vec3(point[0], point[1], point[2])
    object_normals[idx] = vec3(normal[0], normal[1], normal[2])
    object_radii[idx] = 0.0
    object_material_ids[idx] = material_id
    num_objects[None] = idx + 1
    return idx


def get_object_count() -> int:
    """Get the number of objects in the scene."""
    return int(num_objects[None])


# =============================================================================
# Per-object dispatch
# =============================================================================


@ti.func
def hit_object(
    index: ti.i32,
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitType:
    """Test a ray against the object stored at index."""
    result = miss()
    kind = object_kinds[index]
    if kind == int(ObjectKind.SPHERE):
        sphere = Sphere(center=object_positions[index], radius=object_radii[index])
        result = hit_sphere(ray_origin, ray_direction, sphere, t_min, t_max)
    elif kind == int(ObjectKind.PLANE):
        plane = Plane(point=object_positions[index], normal=object_normals[index])
        result = hit_plane(ray_origin, ray_direction, plane, t_min, t_max)
    return result


@ti.func
def object_normal(index: ti.i32, point: vec3) -> vec3:
    """Get the outward unit normal of an object at a surface point."""
    normal = vec3(0.0, 0.0, 0.0)
    kind = object_kinds[index]
    if kind == int(ObjectKind.SPHERE):
        sphere = Sphere(center=object_positions[index], radius=object_radii[index])
        normal = sphere_normal(sphere, point)
    elif kind == int(ObjectKind.PLANE):
        plane = Plane(point=object_positions[index], normal=object_normals[index])
        normal = plane_normal(plane, point)
    return normal


@ti.func
def object_material(index: ti.i32, point: vec3) -> ti.i32:
    """Get the material index of an object at a surface point.

    Materials are constant per object today; the point is part of the
    signature so textured materials can slot in later.
    """
    return object_material_ids[index]


@ti.func
def _make_miss_record() -> SceneHit:
    return SceneHit(hit=0, index=-1, t=0.0, point=vec3(0.0, 0.0, 0.0))


# =============================================================================
# Scene queries
# =============================================================================


@ti.func
def closest_hit(
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
) -> SceneHit:
    """Find the closest object hit by a ray inside (t_min, t_max).

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        t_min: Lower bound of the valid range (exclusive).
        t_max: Upper bound of the valid range (exclusive).

    Returns:
        A SceneHit for the nearest hit, or a miss record.
    """
    best_t = t_max
    result = _make_miss_record()

    for i in range(num_objects[None]):
        rec = hit_object(i, ray_origin, ray_direction, t_min, t_max)
        if rec.hit == 1 and rec.t < best_t:
            best_t = rec.t
            result = SceneHit(
                hit=1,
                index=i,
                t=rec.t,
                point=ray_origin + rec.t * ray_direction,
            )

    return result


@ti.func
def any_hit(
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
) -> SceneHit:
    """Find the first object in storage order hit by a ray (shadow query).

    Stops scanning at the first hit; the returned object is not necessarily
    the closest one.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        t_min: Lower bound of the valid range (exclusive).
        t_max: Upper bound of the valid range (exclusive).

    Returns:
        A SceneHit for the first hit found, or a miss record.
    """
    result = _make_miss_record()
    n = num_objects[None]
    i = 0

    while result.hit == 0 and i < n:
        rec = hit_object(i, ray_origin, ray_direction, t_min, t_max)
        if rec.hit == 1:
            result = SceneHit(
                hit=1,
                index=i,
                t=rec.t,
                point=ray_origin + rec.t * ray_direction,
            )
        i += 1

    return result


# =============================================================================
# Host-side query wrappers
# =============================================================================


@ti.kernel
def _closest_hit_kernel(origin: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32):
    # Single-iteration outer loop keeps the object scan serial
    for _ in range(1):
        rec = closest_hit(origin, direction, t_min, t_max)
        _query_index[None] = rec.index
        _query_point[None] = rec.point


@ti.kernel
def _any_hit_kernel(origin: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32):
    for _ in range(1):
        rec = any_hit(origin, direction, t_min, t_max)
        _query_index[None] = rec.index
        _query_point[None] = rec.point


def _to_result():
    index = int(_query_index[None])
    if index < 0:
        return None
    p = _query_point[None]
    return index, (float(p[0]), float(p[1]), float(p[2]))


def query_closest_hit(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    t_min: float = 0.0,
    t_max: float = T_MAX,
) -> tuple[int, tuple[float, float, float]] | None:
    """Run closest_hit from Python.

    Returns:
        (object_index, hit_point), or None if nothing is hit.
    """
    _closest_hit_kernel(vec3(*origin), vec3(*direction), t_min, t_max)
    return _to_result()


def query_any_hit(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    t_min: float = 0.0,
    t_max: float = T_MAX,
) -> tuple[int, tuple[float, float, float]] | None:
    """Run any_hit from Python.

    Returns:
        (object_index, hit_point), or None if nothing is hit.
    """
    _any_hit_kernel(vec3(*origin), vec3(*direction), t_min, t_max)
    return _to_result()
