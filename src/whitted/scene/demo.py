"""Built-in demo scene.

The demo scene is the classic Whitted test setup seen from a camera at the
origin looking down +z:
- Red, blue and green glossy spheres resting near a yellow ground plane
- A silver mirror sphere behind them
- One ambient, one point and one directional light

It is used by the command-line script when no scene file is given and by
the end-to-end tests.

Example:
    >>> from whitted.scene.demo import DemoSceneParams, create_demo_scene
    >>> scene = create_demo_scene()
    >>> len(scene.objects)
    5
    >>> foggy = create_demo_scene(DemoSceneParams(fog=(5.0, 30.0)))
"""

from dataclasses import dataclass

from whitted.scene.model import Light, Material, PlaneInfo, Scene, SphereInfo, World

# =============================================================================
# Demo Scene Constants
# =============================================================================

RED_MATERIAL = (1.0, 0.0, 0.0)
BLUE_MATERIAL = (0.0, 0.0, 1.0)
GREEN_MATERIAL = (0.0, 1.0, 0.0)
GROUND_MATERIAL = (1.0, 1.0, 0.0)
MIRROR_MATERIAL = (0.9, 0.9, 0.9)

GROUND_HEIGHT = -2.0


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        ambient_intensity: Gray level of the ambient light.
        point_intensity: Gray level of the point light.
        directional_intensity: Gray level of the directional light.
        background: Background color (RGB).
        fog: Optional (near, far) fog range.
        mirror_reflectivity: Reflectivity of the mirror sphere.
    """

    ambient_intensity: float = 0.2
    point_intensity: float = 0.6
    directional_intensity: float = 0.2
    background: tuple[float, float, float] = (0.0, 0.0, 0.0)
    fog: tuple[float, float] | None = None
    mirror_reflectivity: float = 0.9


def create_demo_scene(params: DemoSceneParams | None = None) -> Scene:
    """Create the demo scene.

    Args:
        params: Optional DemoSceneParams. If None, uses the defaults.

    Returns:
        A validated Scene.
    """
    if params is None:
        params = DemoSceneParams()

    red = Material(color=RED_MATERIAL, spec=500.0, refl=0.2)
    blue = Material(color=BLUE_MATERIAL, spec=500.0, refl=0.3)
    green = Material(color=GREEN_MATERIAL, spec=10.0, refl=0.4)
    ground = Material(color=GROUND_MATERIAL, spec=1000.0, refl=0.5)
    mirror = Material(color=MIRROR_MATERIAL, spec=1000.0, refl=params.mirror_reflectivity)

    objects = (
        SphereInfo(center=(0.0, -1.0, 3.0), radius=1.0, material=red),
        SphereInfo(center=(2.0, 0.0, 4.0), radius=1.0, material=blue),
        SphereInfo(center=(-2.0, 0.0, 4.0), radius=1.0, material=green),
        SphereInfo(center=(0.0, 1.5, 7.0), radius=1.5, material=mirror),
        PlaneInfo(point=(0.0, GROUND_HEIGHT, 0.0), normal=(0.0, 1.0, 0.0), material=ground),
    )

    a = params.ambient_intensity
    p = params.point_intensity
    d = params.directional_intensity
    lights = (
        Light.ambient((a, a, a)),
        Light.point((2.0, 1.0, 0.0), (p, p, p)),
        Light.directional((1.0, 4.0, 4.0), (d, d, d)),
    )

    world = World(
        camera_position=(0.0, 0.0, 0.0),
        background=params.background,
        fog=params.fog,
    )

    return Scene(objects=objects, lights=lights, world=world)
