"""Scene manager: uploads an immutable scene into the Taichi registries.

The render kernels read the scene from module-level Taichi fields (object
table, material registry, light registry, world parameters). The
SceneManager is the only writer of those fields. It is used once per
render, before any kernel is launched, so the scene is read-only for the
whole render and every worker can share it without locking.

Materials are shared by reference: each distinct Material instance is
registered once and every object using it points at the same index.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.manager import SceneManager
    >>> from whitted.scene.demo import create_demo_scene
    >>> manager = SceneManager()
    >>> manager.load(create_demo_scene())
    >>> manager.get_object_count()
    5
"""

import logging

from whitted.materials.phong import (
    add_phong_material,
    clear_phong_materials,
    get_phong_material_count,
)
from whitted.scene.intersection import (
    add_plane,
    add_sphere,
    clear_objects,
    get_object_count,
)
from whitted.scene.lights import add_light, clear_lights, get_light_count
from whitted.scene.model import Material, PlaneInfo, Scene, SphereInfo
from whitted.scene.world import clear_world, setup_world

logger = logging.getLogger(__name__)


def clear_scene() -> None:
    """Clear every scene registry (objects, materials, lights, world)."""
    clear_objects()
    clear_phong_materials()
    clear_lights()
    clear_world()


class SceneManager:
    """Coordinates the object, material, light and world registries.

    Attributes:
        scene: The scene most recently loaded, or None.
        material_ids: Mapping from id(Material) to its registry index.
    """

    def __init__(self) -> None:
        """Initialize with empty registries."""
        self.scene: Scene | None = None
        self.material_ids: dict[int, int] = {}
        self._materials: list[Material] = []
        self.clear()

    def clear(self) -> None:
        """Clear all registries and local tracking."""
        clear_scene()
        self.scene = None
        self.material_ids.clear()
        self._materials.clear()

    def material_id(self, material: Material) -> int:
        """Register a material if needed and return its registry index."""
        key = id(material)
        if key not in self.material_ids:
            self.material_ids[key] = add_phong_material(
                material.color, spec=material.spec, refl=material.refl
            )
            # Keep the instance alive so its id() stays unique
            self._materials.append(material)
        return self.material_ids[key]

    def load(self, scene: Scene) -> None:
        """Replace the registries' contents with the given scene.

        Objects keep their order from scene.objects, which is the scan order
        of the intersection resolver.

        Raises:
            RuntimeError: If a registry capacity is exceeded.
        """
        self.clear()

        for obj in scene.objects:
            material_id = self.material_id(obj.material)
            if isinstance(obj, SphereInfo):
                add_sphere(obj.center, obj.radius, material_id=material_id)
            elif isinstance(obj, PlaneInfo):
                add_plane(obj.point, obj.normal, material_id=material_id)

        for light in scene.lights:
            add_light(light.kind, light.color, light.vector)

        setup_world(scene.world)
        self.scene = scene

        logger.debug(
            "Loaded scene: %d objects, %d materials, %d lights",
            get_object_count(),
            get_phong_material_count(),
            get_light_count(),
        )

    def get_object_count(self) -> int:
        return get_object_count()

    def get_material_count(self) -> int:
        return get_phong_material_count()

    def get_light_count(self) -> int:
        return get_light_count()

    def __repr__(self) -> str:
        return (
            f"SceneManager(objects={self.get_object_count()}, "
            f"materials={self.get_material_count()}, lights={self.get_light_count()})"
        )
