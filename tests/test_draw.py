"""Tests for the debug drawing utilities."""

import numpy as np
import pytest


def _buffer(width=10, height=8):
    return np.zeros((height, width, 3), dtype=np.uint8)


def _lit(buffer):
    rows, cols = np.nonzero(buffer.any(axis=2))
    return set(zip(cols.tolist(), rows.tolist()))


class TestMapColor:
    @pytest.mark.parametrize(
        "color,expected",
        [
            ((0.0, 0.5, 1.0), (0, 127, 255)),
            ((0.999, 0.2, 0.004), (254, 51, 1)),
            ((-1.0, 1.5, 0.0), (0, 255, 0)),
        ],
    )
    def test_clamps_and_truncates(self, color, expected):
        from whitted.preview.draw import map_color

        assert map_color(color) == expected


class TestDrawPixel:
    def test_origin_maps_to_canvas_center(self):
        from whitted.preview.draw import draw_pixel

        buffer = _buffer()
        draw_pixel(buffer, (0, 0), (1.0, 1.0, 1.0))
        # Column W//2, row H//2 - 1
        assert _lit(buffer) == {(5, 3)}

    def test_y_grows_upward(self):
        from whitted.preview.draw import draw_pixel

        buffer = _buffer()
        draw_pixel(buffer, (-5, 3), (1.0, 0.0, 0.0))
        draw_pixel(buffer, (4, -4), (0.0, 1.0, 0.0))

        assert tuple(buffer[0, 0]) == (255, 0, 0)
        assert tuple(buffer[7, 9]) == (0, 255, 0)

    @pytest.mark.parametrize("point", [(5, 0), (-6, 0), (0, 4), (0, -5)])
    def test_out_of_bounds(self, point):
        from whitted.preview.draw import draw_pixel

        with pytest.raises(IndexError):
            draw_pixel(_buffer(), point, (1.0, 1.0, 1.0))


class TestDrawLine:
    def test_horizontal_inclusive(self):
        from whitted.preview.draw import draw_line

        buffer = _buffer()
        draw_line(buffer, (2, 4), (7, 4), (1.0, 1.0, 1.0))
        assert _lit(buffer) == {(x, 4) for x in range(2, 8)}

    def test_vertical(self):
        from whitted.preview.draw import draw_line

        buffer = _buffer()
        draw_line(buffer, (3, 6), (3, 1), (1.0, 1.0, 1.0))
        assert _lit(buffer) == {(3, y) for y in range(1, 7)}

    def test_diagonal(self):
        from whitted.preview.draw import draw_line

        buffer = _buffer()
        draw_line(buffer, (0, 0), (5, 5), (1.0, 1.0, 1.0))
        assert _lit(buffer) == {(i, i) for i in range(6)}

    def test_single_point(self):
        from whitted.preview.draw import draw_line

        buffer = _buffer()
        draw_line(buffer, (4, 4), (4, 4), (0.0, 0.0, 1.0))
        assert _lit(buffer) == {(4, 4)}
        assert tuple(buffer[4, 4]) == (0, 0, 255)

    @pytest.mark.parametrize(
        "start,end",
        [((0, 0), (9, 3)), ((9, 7), (1, 2)), ((2, 7), (4, 0)), ((8, 1), (0, 6))],
    )
    def test_shallow_and_steep_lines(self, start, end):
        """One pixel per step along the major axis, endpoints included."""
        from whitted.preview.draw import draw_line

        buffer = _buffer()
        draw_line(buffer, start, end, (1.0, 1.0, 1.0))
        lit = _lit(buffer)

        assert start in lit
        assert end in lit
        assert len(lit) == max(abs(end[0] - start[0]), abs(end[1] - start[1])) + 1

    def test_endpoint_out_of_bounds(self):
        from whitted.preview.draw import draw_line

        with pytest.raises(IndexError):
            draw_line(_buffer(), (0, 0), (10, 0), (1.0, 1.0, 1.0))
