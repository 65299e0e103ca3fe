"""Tests for render and output options."""

import pytest


class TestRenderOptions:
    def test_defaults(self):
        from whitted.core.config import RenderOptions

        options = RenderOptions()
        assert options.max_reflections == 3
        assert options.threads is None

    def test_zero_reflections_allowed(self):
        from whitted.core.config import RenderOptions

        assert RenderOptions(max_reflections=0).max_reflections == 0

    def test_negative_reflections_rejected(self):
        from whitted.core.config import RenderOptions

        with pytest.raises(ValueError, match="max_reflections"):
            RenderOptions(max_reflections=-1)

    def test_negative_threads_rejected(self):
        from whitted.core.config import RenderOptions

        with pytest.raises(ValueError, match="threads"):
            RenderOptions(threads=-2)

    def test_explicit_threads(self):
        from whitted.core.config import RenderOptions

        assert RenderOptions(threads=3).resolved_threads() == 3

    @pytest.mark.parametrize("threads", [None, 0])
    def test_threads_default_to_cpu_count(self, monkeypatch, threads):
        from whitted.core import config

        monkeypatch.setattr(config.os, "cpu_count", lambda: 6)
        assert config.RenderOptions(threads=threads).resolved_threads() == 6

    def test_unknown_cpu_count_falls_back_to_one(self, monkeypatch):
        from whitted.core import config

        monkeypatch.setattr(config.os, "cpu_count", lambda: None)
        assert config.resolve_threads(None) == 1


class TestOutputOptions:
    def test_defaults(self):
        from whitted.core.config import ImageFormat, OutputOptions

        options = OutputOptions()
        assert options.format is ImageFormat.PNG
        assert options.dims == (320, 240)
        assert options.bits_per_channel == 8

    def test_format_from_string(self):
        from whitted.core.config import ImageFormat, OutputOptions

        assert OutputOptions(format="PPM").format is ImageFormat.PPM

    def test_unknown_format(self):
        from whitted.core.config import OutputOptions

        with pytest.raises(ValueError, match="Unsupported image format"):
            OutputOptions(format="gif")

    @pytest.mark.parametrize("bits", [1, 16, 32])
    def test_unsupported_bit_depth(self, bits):
        from whitted.core.config import OutputOptions

        with pytest.raises(ValueError, match="bit depth"):
            OutputOptions(bits_per_channel=bits)

    @pytest.mark.parametrize("width,height", [(0, 240), (320, 0), (-5, 10)])
    def test_non_positive_dimensions(self, width, height):
        from whitted.core.config import OutputOptions

        with pytest.raises(ValueError, match="dimensions"):
            OutputOptions(width=width, height=height)
