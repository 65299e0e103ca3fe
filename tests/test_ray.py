"""Unit tests for the vector helpers."""

import math

import taichi as ti


class TestVectorUtils:
    """Tests for normalize and reflect."""

    def test_normalize(self):
        from whitted.core.ray import normalize, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 3.0, 4.0))

        test_kernel()
        n = result[None]
        assert abs(n[0]) < 1e-6
        assert abs(n[1] - 0.6) < 1e-6
        assert abs(n[2] - 0.8) < 1e-6

    def test_reflect(self):
        """Reflecting a 45 degree ray off a floor flips its vertical part."""
        from whitted.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_reflect_preserves_length(self):
        from whitted.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        normal = (0.0, 0.6, 0.8)

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(0.3, -2.0, 1.5), vec3(normal[0], normal[1], normal[2]))

        test_kernel()
        r = result[None]
        assert abs(math.sqrt(r[0] ** 2 + r[1] ** 2 + r[2] ** 2) - math.sqrt(0.09 + 4.0 + 2.25)) < 1e-5
