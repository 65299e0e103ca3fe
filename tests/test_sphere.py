"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (nearest root)
- Ray missing sphere
- Ray starting inside sphere (far root)
- Open range bounds
- Hit distance and surface property over many configurations
"""

import math

import pytest
import taichi as ti


def _make_query():
    """Build a kernel that tests one ray against one sphere."""
    from whitted.geometry.sphere import Sphere, hit_sphere, sphere_normal, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    point = ti.Vector.field(3, dtype=ti.f32, shape=())
    normal = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def query(
        origin: vec3,
        direction: vec3,
        center: vec3,
        radius: ti.f32,
        t_min: ti.f32,
        t_max: ti.f32,
    ):
        sphere = Sphere(center=center, radius=radius)
        record = hit_sphere(origin, direction, sphere, t_min, t_max)
        hit[None] = record.hit
        t_val[None] = record.t
        p = origin + record.t * direction
        point[None] = p
        normal[None] = sphere_normal(sphere, p)

    def run(origin, direction, center=(0.0, 0.0, 0.0), radius=1.0, t_min=1e-3, t_max=1e30):
        query(vec3(*origin), vec3(*direction), vec3(*center), radius, t_min, t_max)
        return hit[None], t_val[None], point[None], normal[None]

    return run


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit(self):
        """Ray from z=5 toward the origin hits the front of the unit sphere."""
        run = _make_query()
        hit, t, p, n = run((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5
        # Outward normal
        assert abs(n[0]) < 1e-5
        assert abs(n[1]) < 1e-5
        assert abs(n[2] - 1.0) < 1e-5

    def test_unnormalized_direction_scales_t(self):
        """t is measured in units of |direction|."""
        run = _make_query()
        hit, t, p, _ = run((0.0, 0.0, 5.0), (0.0, 0.0, -2.0))

        assert hit == 1
        assert abs(t - 2.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5

    def test_miss(self):
        run = _make_query()
        hit, _, _, _ = run((0.0, 2.0, 5.0), (0.0, 0.0, -1.0))
        assert hit == 0

    def test_pointing_away(self):
        run = _make_query()
        hit, _, _, _ = run((0.0, 0.0, 5.0), (0.0, 0.0, 1.0))
        assert hit == 0

    def test_origin_inside_uses_far_root(self):
        run = _make_query()
        hit, t, p, n = run((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))

        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert abs(p[0] - 1.0) < 1e-5
        assert abs(n[0] - 1.0) < 1e-5

    def test_range_excludes_near_root(self):
        """When t0 <= t_min, the far root is reported if it is in range."""
        run = _make_query()
        hit, t, _, _ = run((0.0, 0.0, -5.0), (0.0, 0.0, 1.0), t_min=5.0)

        assert hit == 1
        assert abs(t - 6.0) < 1e-5

    def test_range_excludes_both_roots(self):
        run = _make_query()
        hit, _, _, _ = run((0.0, 0.0, -5.0), (0.0, 0.0, 1.0), t_max=3.0)
        assert hit == 0

    def test_range_bounds_are_exclusive(self):
        run = _make_query()
        hit, _, _, _ = run((0.0, 0.0, -5.0), (0.0, 0.0, 1.0), t_min=6.0)
        assert hit == 0

    @pytest.mark.parametrize(
        "center,radius,origin",
        [
            ((0.0, 0.0, 3.0), 1.0, (0.0, 0.0, 0.0)),
            ((2.0, -1.0, 4.0), 0.5, (0.0, 0.0, 0.0)),
            ((-3.0, 2.0, 10.0), 2.5, (1.0, 1.0, -1.0)),
            ((0.0, 100.0, 0.0), 7.0, (0.0, -5.0, 0.0)),
            ((5.0, 5.0, 5.0), 0.1, (-5.0, 0.0, 2.0)),
        ],
    )
    def test_ray_toward_center_hits_at_distance_minus_radius(self, center, radius, origin):
        run = _make_query()
        offset = [c - o for c, o in zip(center, origin)]
        distance = math.sqrt(sum(x * x for x in offset))
        direction = tuple(x / distance for x in offset)

        hit, t, p, _ = run(origin, direction, center=center, radius=radius)

        assert hit == 1
        assert t == pytest.approx(distance - radius, rel=1e-4, abs=1e-4)
        dist_to_center = math.sqrt(sum((p[i] - center[i]) ** 2 for i in range(3)))
        assert dist_to_center == pytest.approx(radius, rel=1e-4, abs=1e-4)
