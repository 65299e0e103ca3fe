"""Tests for the host-side scene model and its validation."""

import math

import pytest


class TestMaterial:
    def test_defaults(self):
        from whitted.scene.model import Material

        material = Material(color=(0.5, 0.5, 0.5))
        assert material.spec == -1.0
        assert material.refl == 0.0

    @pytest.mark.parametrize("refl", [-0.1, 1.5])
    def test_reflectivity_out_of_range(self, refl):
        from whitted.scene.model import Material

        with pytest.raises(ValueError, match="reflectivity"):
            Material(color=(1.0, 0.0, 0.0), refl=refl)

    def test_color_out_of_range(self):
        from whitted.scene.model import Material

        with pytest.raises(ValueError, match="color"):
            Material(color=(1.2, 0.0, 0.0))

    def test_color_must_have_three_components(self):
        from whitted.scene.model import Material

        with pytest.raises(ValueError, match="3 components"):
            Material(color=(1.0, 0.0))

    def test_materials_compare_by_identity(self):
        from whitted.scene.model import Material

        a = Material(color=(1.0, 0.0, 0.0))
        b = Material(color=(1.0, 0.0, 0.0))
        assert a != b
        assert a == a


class TestObjects:
    def test_sphere_radius_must_be_positive(self):
        from whitted.scene.model import Material, SphereInfo

        material = Material(color=(1.0, 1.0, 1.0))
        with pytest.raises(ValueError, match="radius"):
            SphereInfo(center=(0.0, 0.0, 3.0), radius=0.0, material=material)
        with pytest.raises(ValueError, match="radius"):
            SphereInfo(center=(0.0, 0.0, 3.0), radius=-1.0, material=material)

    def test_sphere_center_must_be_finite(self):
        from whitted.scene.model import Material, SphereInfo

        with pytest.raises(ValueError, match="finite"):
            SphereInfo(
                center=(0.0, math.nan, 3.0),
                radius=1.0,
                material=Material(color=(1.0, 1.0, 1.0)),
            )

    def test_plane_normal_must_be_unit(self):
        from whitted.scene.model import Material, PlaneInfo

        with pytest.raises(ValueError, match="unit length"):
            PlaneInfo(point=(0.0, 0.0, 0.0), normal=(0.0, 2.0, 0.0), material=Material(color=(1.0, 1.0, 1.0)))

    def test_plane_from_normal_normalizes(self):
        from whitted.scene.model import Material, PlaneInfo

        plane = PlaneInfo.from_normal((0.0, -1.0, 0.0), (0.0, 3.0, 4.0), Material(color=(1.0, 1.0, 1.0)))
        assert plane.normal == pytest.approx((0.0, 0.6, 0.8))

    def test_plane_zero_normal_rejected(self):
        from whitted.scene.model import Material, PlaneInfo

        with pytest.raises(ValueError, match="zero vector"):
            PlaneInfo.from_normal((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), Material(color=(1.0, 1.0, 1.0)))


class TestLights:
    def test_directional_is_normalized(self):
        from whitted.scene.model import Light, LightType

        light = Light.directional((1.0, 4.0, 4.0), (0.2, 0.2, 0.2))
        assert light.kind == LightType.DIRECTIONAL
        assert math.sqrt(sum(v * v for v in light.vector)) == pytest.approx(1.0)

    def test_directional_must_be_unit(self):
        from whitted.scene.model import Light, LightType

        with pytest.raises(ValueError, match="unit length"):
            Light(kind=LightType.DIRECTIONAL, color=(1.0, 1.0, 1.0), vector=(0.0, 2.0, 0.0))

    def test_directional_zero_direction_rejected(self):
        from whitted.scene.model import Light

        with pytest.raises(ValueError, match="zero vector"):
            Light.directional((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))

    def test_point_light_keeps_position(self):
        from whitted.scene.model import Light, LightType

        light = Light.point((2.0, 1.0, 0.0), (0.6, 0.6, 0.6))
        assert light.kind == LightType.POINT
        assert light.vector == (2.0, 1.0, 0.0)

    def test_negative_color_rejected(self):
        from whitted.scene.model import Light

        with pytest.raises(ValueError, match="non-negative"):
            Light.ambient((-0.1, 0.0, 0.0))

    def test_unknown_kind_rejected(self):
        from whitted.scene.model import Light

        with pytest.raises(ValueError):
            Light(kind=7, color=(1.0, 1.0, 1.0))


class TestWorldAndScene:
    def test_world_defaults(self):
        from whitted.scene.model import World

        world = World()
        assert world.camera_position == (0.0, 0.0, 0.0)
        assert world.background == (0.0, 0.0, 0.0)
        assert world.fog is None

    @pytest.mark.parametrize("fog", [(10.0, 10.0), (20.0, 5.0)])
    def test_fog_near_must_be_less_than_far(self, fog):
        from whitted.scene.model import World

        with pytest.raises(ValueError, match="Fog near"):
            World(fog=fog)

    def test_scene_rejects_unknown_objects(self):
        from whitted.scene.model import Scene

        with pytest.raises(ValueError, match="Unsupported scene object"):
            Scene(objects=["not an object"])

    def test_scene_converts_lists(self):
        from whitted.scene.model import Light, Scene

        scene = Scene(objects=[], lights=[Light.ambient((0.1, 0.1, 0.1))])
        assert isinstance(scene.objects, tuple)
        assert isinstance(scene.lights, tuple)

    def test_distinct_materials_in_first_use_order(self):
        from whitted.scene.model import Material, PlaneInfo, Scene, SphereInfo

        shared = Material(color=(1.0, 0.0, 0.0))
        other = Material(color=(0.0, 1.0, 0.0))
        scene = Scene(
            objects=[
                SphereInfo((0.0, 0.0, 3.0), 1.0, shared),
                PlaneInfo((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), other),
                SphereInfo((2.0, 0.0, 3.0), 1.0, shared),
            ]
        )
        materials = scene.materials()
        assert len(materials) == 2
        assert materials[0] is shared
        assert materials[1] is other
