"""Scene file loading.

Scene files are JSON documents describing the render options, the output
image, the world, a table of named materials, the objects and the lights:

    {
      "render": {"max_reflections": 3, "threads": 4},
      "output": {"format": "png", "width": 320, "height": 240, "bits_per_channel": 8},
      "world": {"camera_position": [0, 0, 0], "background": [0, 0, 0], "fog": [10, 40]},
      "materials": {
        "red": {"color": [1, 0, 0], "spec": 500, "refl": 0.2}
      },
      "objects": [
        {"type": "sphere", "center": [0, -1, 3], "radius": 1, "material": "red"},
        {"type": "plane", "point": [0, -2, 0], "normal": [0, 1, 0], "material": "red"}
      ],
      "lights": [
        {"type": "ambient", "color": [0.2, 0.2, 0.2]},
        {"type": "point", "position": [2, 1, 0], "color": [0.6, 0.6, 0.6]},
        {"type": "directional", "direction": [1, 4, 4], "color": [0.2, 0.2, 0.2]}
      ]
    }

Every section is optional except "objects"; missing sections fall back to
the defaults of RenderOptions, OutputOptions and World. Objects naming the
same material share one Material instance. Plane normals and directional
light directions are normalized here.

All problems are reported as ValueError, before anything is uploaded.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from whitted.core.config import DEFAULT_MAX_REFLECTIONS, OutputOptions, RenderOptions
from whitted.scene.model import (
    Light,
    Material,
    PlaneInfo,
    Scene,
    SceneObject,
    SphereInfo,
    World,
)

_OUTPUT_FIELDS = {"format", "width", "height", "bits_per_channel"}


@dataclass(frozen=True)
class SceneDescription:
    """Everything a scene file resolves to.

    Attributes:
        render: Render options.
        output: Output image options.
        scene: The validated scene.
    """

    render: RenderOptions
    output: OutputOptions
    scene: Scene


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ValueError(f"{where}: missing required field '{key}'")
    return data[key]


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{where}: expected a JSON object, got {value!r}")
    return value


def _sequence(value: Any, where: str) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{where}: expected a JSON array, got {value!r}")
    return list(value)


def _number(value: Any, where: str) -> float:
    # bool is an int subclass; JSON true/false are not numbers here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _integer(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: expected an integer, got {value!r}")
    return value


def _vector(value: Any, where: str) -> tuple[float, float, float]:
    items = _sequence(value, where)
    if len(items) != 3:
        raise ValueError(f"{where}: expected 3 components, got {value!r}")
    return tuple(_number(v, where) for v in items)


def _parse_materials(data: Mapping[str, Any]) -> dict[str, Material]:
    materials = {}
    for name, entry in data.items():
        where = f"material '{name}'"
        entry = _mapping(entry, where)
        materials[name] = Material(
            color=_vector(_require(entry, "color", where), f"{where}.color"),
            spec=_number(entry.get("spec", -1.0), f"{where}.spec"),
            refl=_number(entry.get("refl", 0.0), f"{where}.refl"),
        )
    return materials


def _parse_object(data: Any, index: int, materials: dict[str, Material]) -> SceneObject:
    where = f"object {index}"
    data = _mapping(data, where)
    kind = str(_require(data, "type", where)).lower()

    material_name = _require(data, "material", where)
    if not isinstance(material_name, str):
        raise ValueError(f"{where}.material: expected a material name, got {material_name!r}")
    if material_name not in materials:
        raise ValueError(f"{where}: unknown material '{material_name}'")
    material = materials[material_name]

    if kind == "sphere":
        return SphereInfo(
            center=_vector(_require(data, "center", where), f"{where}.center"),
            radius=_number(_require(data, "radius", where), f"{where}.radius"),
            material=material,
        )
    if kind == "plane":
        return PlaneInfo.from_normal(
            _vector(_require(data, "point", where), f"{where}.point"),
            _vector(_require(data, "normal", where), f"{where}.normal"),
            material,
        )
    raise ValueError(f"{where}: unknown object type '{kind}'")


def _parse_light(data: Any, index: int) -> Light:
    where = f"light {index}"
    data = _mapping(data, where)
    kind = str(_require(data, "type", where)).lower()
    color = _vector(_require(data, "color", where), f"{where}.color")

    if kind == "ambient":
        return Light.ambient(color)
    if kind == "directional":
        return Light.directional(
            _vector(_require(data, "direction", where), f"{where}.direction"), color
        )
    if kind == "point":
        return Light.point(_vector(_require(data, "position", where), f"{where}.position"), color)
    raise ValueError(f"{where}: unknown light type '{kind}'")


def _parse_render(data: Mapping[str, Any]) -> RenderOptions:
    threads = data.get("threads")
    return RenderOptions(
        max_reflections=_integer(
            data.get("max_reflections", DEFAULT_MAX_REFLECTIONS), "render.max_reflections"
        ),
        threads=_integer(threads, "render.threads") if threads is not None else None,
    )


def _parse_output(data: Mapping[str, Any]) -> OutputOptions:
    unknown = set(data) - _OUTPUT_FIELDS
    if unknown:
        raise ValueError(f"output: unknown fields {sorted(unknown)}")

    fields = dict(data)
    for key in ("width", "height", "bits_per_channel"):
        if key in fields:
            _integer(fields[key], f"output.{key}")
    if "format" in fields and not isinstance(fields["format"], str):
        raise ValueError(f"output.format: expected a format name, got {fields['format']!r}")
    return OutputOptions(**fields)


def _parse_world(data: Mapping[str, Any]) -> World:
    fog = data.get("fog")
    if fog is not None:
        items = _sequence(fog, "world.fog")
        if len(items) != 2:
            raise ValueError(f"world.fog: expected [near, far], got {fog!r}")
        fog = (_number(items[0], "world.fog"), _number(items[1], "world.fog"))

    return World(
        camera_position=_vector(
            data.get("camera_position", (0.0, 0.0, 0.0)), "world.camera_position"
        ),
        background=_vector(data.get("background", (0.0, 0.0, 0.0)), "world.background"),
        fog=fog,
    )


def scene_from_dict(data: Mapping[str, Any]) -> SceneDescription:
    """Build a SceneDescription from parsed scene data.

    Field types are checked here so that every malformed document fails
    with a ValueError naming the offending field.

    Args:
        data: The decoded scene document.

    Returns:
        The resolved render options, output options and scene.

    Raises:
        ValueError: If the document is malformed or violates a scene
            invariant.
    """
    if not isinstance(data, Mapping):
        raise ValueError("Scene document must be a JSON object")

    render = _parse_render(_mapping(data.get("render", {}), "render"))
    output = _parse_output(_mapping(data.get("output", {}), "output"))
    world = _parse_world(_mapping(data.get("world", {}), "world"))

    materials = _parse_materials(_mapping(data.get("materials", {}), "materials"))
    objects = tuple(
        _parse_object(obj, i, materials)
        for i, obj in enumerate(_sequence(_require(data, "objects", "scene"), "objects"))
    )
    lights = tuple(
        _parse_light(light, i)
        for i, light in enumerate(_sequence(data.get("lights", []), "lights"))
    )

    return SceneDescription(
        render=render,
        output=output,
        scene=Scene(objects=objects, lights=lights, world=world),
    )


def load_scene(path: str | Path) -> SceneDescription:
    """Load a scene file.

    Args:
        path: Path to a JSON scene file.

    Returns:
        The resolved render options, output options and scene.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or describes an invalid scene.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON ({e})") from e
    return scene_from_dict(data)
