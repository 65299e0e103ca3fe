"""Materials module.

Components:
    phong: Phong material model (diffuse + specular) with reflectivity,
        plus the material registry stored in Taichi fields

Materials are owned by the scene and shared by reference: the scene
manager registers each distinct material once and every object using it
stores the same material index.
"""

from .phong import (
    MAX_MATERIALS,
    PhongMaterial,
    add_phong_material,
    clear_phong_materials,
    eval_diffuse,
    eval_specular,
    get_material,
    get_phong_material_count,
)

__all__ = [
    "PhongMaterial",
    "MAX_MATERIALS",
    "add_phong_material",
    "clear_phong_materials",
    "get_phong_material_count",
    "get_material",
    "eval_diffuse",
    "eval_specular",
]
