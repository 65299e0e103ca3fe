"""Immutable host-side scene description.

The scene model is what the loading stage hands to the renderer: a flat
list of objects, a flat list of lights and the world parameters. Every
record validates itself on construction, so malformed geometry (zero
normals, non-positive radii, reflectivity outside [0, 1], inverted fog
bounds) is rejected with a ValueError before anything reaches the Taichi
registries. The render loop therefore never has to defend against it.

Materials are plain values shared by reference: several objects may hold
the same Material instance and the scene manager registers it only once.

Example:
    >>> from whitted.scene.model import (
    ...     Light, LightType, Material, PlaneInfo, Scene, SphereInfo, World
    ... )
    >>> gray = Material(color=(0.5, 0.5, 0.5), spec=10.0)
    >>> scene = Scene(
    ...     objects=(
    ...         SphereInfo(center=(0.0, 0.0, 3.0), radius=1.0, material=gray),
    ...         PlaneInfo.from_normal((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), gray),
    ...     ),
    ...     lights=(Light.ambient((0.2, 0.2, 0.2)),),
    ...     world=World(background=(0.0, 0.0, 0.0)),
    ... )
"""

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

import numpy as np

Vector = tuple[float, float, float]

# Tolerance for "unit length" checks on normals and light directions
UNIT_TOLERANCE = 1e-4


def _as_vector(value, name: str) -> Vector:
    """Convert a 3-sequence to a tuple of floats, rejecting bad input."""
    array = np.asarray(value, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"{name} must have exactly 3 components, got {value!r}")
    if not np.all(np.isfinite(array)):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return (float(array[0]), float(array[1]), float(array[2]))


def normalized(value, name: str = "vector") -> Vector:
    """Return the unit vector in the direction of value.

    Raises:
        ValueError: If the vector has zero length.
    """
    array = np.asarray(_as_vector(value, name), dtype=np.float64)
    norm = float(np.linalg.norm(array))
    if norm < 1e-12:
        raise ValueError(f"{name} must not be the zero vector")
    array = array / norm
    return (float(array[0]), float(array[1]), float(array[2]))


def _check_unit(value: Vector, name: str) -> None:
    norm = math.sqrt(value[0] ** 2 + value[1] ** 2 + value[2] ** 2)
    if abs(norm - 1.0) > UNIT_TOLERANCE:
        raise ValueError(f"{name} must be unit length, got length {norm:.6f}")


@dataclass(frozen=True, eq=False)
class Material:
    """Surface material.

    Compared by identity: two materials with equal fields are still two
    distinct materials of the scene.

    Attributes:
        color: Base surface color (RGB, components in [0, 1]).
        spec: Specular exponent. Values <= 0 give a matte surface.
        refl: Reflectivity in [0, 1].
    """

    color: Vector
    spec: float = -1.0
    refl: float = 0.0

    def __post_init__(self) -> None:
        color = _as_vector(self.color, "Material color")
        for i, component in enumerate(color):
            if component < 0.0 or component > 1.0:
                raise ValueError(f"Material color component {i} = {component} is outside [0, 1]")
        if not 0.0 <= self.refl <= 1.0:
            raise ValueError(f"Material reflectivity {self.refl} is outside [0, 1]")
        object.__setattr__(self, "color", color)
        object.__setattr__(self, "spec", float(self.spec))
        object.__setattr__(self, "refl", float(self.refl))


@dataclass(frozen=True)
class SphereInfo:
    """A sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The material of the sphere.
    """

    center: Vector
    radius: float
    material: Material

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_vector(self.center, "Sphere center"))
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))


@dataclass(frozen=True)
class PlaneInfo:
    """An infinite plane in the scene.

    Attributes:
        point: Any point on the plane.
        normal: The unit surface normal. Use from_normal() to normalize an
            arbitrary non-zero vector.
        material: The material of the plane.
    """

    point: Vector
    normal: Vector
    material: Material

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", _as_vector(self.point, "Plane point"))
        normal = _as_vector(self.normal, "Plane normal")
        _check_unit(normal, "Plane normal")
        object.__setattr__(self, "normal", normal)

    @classmethod
    def from_normal(cls, point, normal, material: Material) -> "PlaneInfo":
        """Create a plane, normalizing the given normal first."""
        return cls(point=point, normal=normalized(normal, "Plane normal"), material=material)


SceneObject = Union[SphereInfo, PlaneInfo]


class LightType(IntEnum):
    """Enumeration of supported light types."""

    AMBIENT = 0
    DIRECTIONAL = 1
    POINT = 2


@dataclass(frozen=True)
class Light:
    """A light source.

    Attributes:
        kind: The light type.
        color: Light color (RGB). Values above 1 are allowed.
        vector: Unused for ambient lights. For directional lights the unit
            direction from surfaces toward the light; for point lights the
            light position.
    """

    kind: LightType
    color: Vector
    vector: Vector = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", LightType(self.kind))
        color = _as_vector(self.color, "Light color")
        if min(color) < 0.0:
            raise ValueError(f"Light color must be non-negative, got {color}")
        object.__setattr__(self, "color", color)
        vector = _as_vector(self.vector, "Light vector")
        if self.kind == LightType.DIRECTIONAL:
            _check_unit(vector, "Directional light direction")
        object.__setattr__(self, "vector", vector)

    @classmethod
    def ambient(cls, color) -> "Light":
        """Create an ambient light."""
        return cls(kind=LightType.AMBIENT, color=color)

    @classmethod
    def directional(cls, direction, color) -> "Light":
        """Create a directional light, normalizing the direction."""
        return cls(
            kind=LightType.DIRECTIONAL,
            color=color,
            vector=normalized(direction, "Directional light direction"),
        )

    @classmethod
    def point(cls, position, color) -> "Light":
        """Create a point light."""
        return cls(kind=LightType.POINT, color=color, vector=position)


@dataclass(frozen=True)
class World:
    """World parameters.

    Attributes:
        camera_position: Camera position; the camera looks down +z.
        background: Color of rays that hit nothing (RGB in [0, 1]).
        fog: Optional (near, far) distances for blending toward the
            background. None disables fog.
    """

    camera_position: Vector = (0.0, 0.0, 0.0)
    background: Vector = (0.0, 0.0, 0.0)
    fog: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "camera_position", _as_vector(self.camera_position, "Camera position")
        )
        object.__setattr__(self, "background", _as_vector(self.background, "Background"))
        if self.fog is not None:
            near, far = (float(v) for v in self.fog)
            if not near < far:
                raise ValueError(f"Fog near ({near}) must be less than fog far ({far})")
            object.__setattr__(self, "fog", (near, far))


@dataclass(frozen=True)
class Scene:
    """A complete, validated scene.

    Attributes:
        objects: Intersectable objects, in scan order.
        lights: Light sources.
        world: World parameters.
    """

    objects: tuple[SceneObject, ...] = ()
    lights: tuple[Light, ...] = ()
    world: World = field(default_factory=World)

    def __post_init__(self) -> None:
        object.__setattr__(self, "objects", tuple(self.objects))
        object.__setattr__(self, "lights", tuple(self.lights))
        for obj in self.objects:
            if not isinstance(obj, (SphereInfo, PlaneInfo)):
                raise ValueError(f"Unsupported scene object {obj!r}")

    def materials(self) -> list[Material]:
        """Get the distinct materials used by the scene, in first-use order."""
        seen: dict[int, Material] = {}
        for obj in self.objects:
            seen.setdefault(id(obj.material), obj.material)
        return list(seen.values())
