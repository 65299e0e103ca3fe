"""Scene module: scene description, registries and intersection queries.

Components:
    model: Immutable, validated scene description (materials, spheres,
        planes, lights, world)
    loader: JSON scene files to render options, output options and scene
    demo: Built-in demo scene
    intersection: Object table and the closest_hit / any_hit resolver
    lights: Light registry
    world: Camera position, background and fog
    manager: Uploads a Scene into the registries

Only the pure-Python parts are imported here. The registry modules
allocate Taichi fields on import, so import them directly (for example
``from whitted.scene.manager import SceneManager``) after ``ti.init()``.
"""

from .demo import DemoSceneParams, create_demo_scene
from .loader import SceneDescription, load_scene, scene_from_dict
from .model import (
    Light,
    LightType,
    Material,
    PlaneInfo,
    Scene,
    SceneObject,
    SphereInfo,
    World,
    normalized,
)

__all__ = [
    # Model
    "Material",
    "SphereInfo",
    "PlaneInfo",
    "SceneObject",
    "Light",
    "LightType",
    "World",
    "Scene",
    "normalized",
    # Loader
    "SceneDescription",
    "load_scene",
    "scene_from_dict",
    # Demo scene
    "DemoSceneParams",
    "create_demo_scene",
]
