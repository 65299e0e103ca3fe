"""Debug drawing over a rendered pixel buffer.

Buffers are (H, W, 3) uint8 arrays as produced by the renderer. draw_pixel
takes centered coordinates with y growing upward, the same convention the
viewport mapping uses: x in [-W/2, W/2), y in [-H/2, H/2). draw_line works
in raw buffer coordinates (column, row).
"""

import numpy as np
import numpy.typing as npt

Color = tuple[float, float, float]


def map_color(color: Color) -> tuple[int, int, int]:
    """Map a [0, 1] RGB color to 8-bit channels.

    Channels are clamped to [0, 1] and scaled by 255, truncating.
    """
    return tuple(int(min(max(c, 0.0), 1.0) * 255) for c in color)


def _check_bounds(buffer: npt.NDArray[np.uint8], column: int, row: int) -> None:
    height, width = buffer.shape[:2]
    if not (0 <= column < width and 0 <= row < height):
        raise IndexError(
            f"Pixel ({column}, {row}) is outside the {width}x{height} buffer"
        )


def draw_pixel(buffer: npt.NDArray[np.uint8], point: tuple[int, int], color: Color) -> None:
    """Write one pixel at centered coordinates.

    Args:
        buffer: Target (H, W, 3) buffer, modified in place.
        point: (x, y) with the origin at the canvas center and y up.
        color: RGB color in [0, 1].

    Raises:
        IndexError: If the point is outside the canvas.
    """
    height, width = buffer.shape[:2]
    x, y = point
    column = x + width // 2
    row = height // 2 - 1 - y
    _check_bounds(buffer, column, row)
    buffer[row, column] = map_color(color)


def draw_line(
    buffer: npt.NDArray[np.uint8],
    start: tuple[int, int],
    end: tuple[int, int],
    color: Color,
) -> None:
    """Draw a line with integer Bresenham stepping.

    Both endpoints are drawn.

    Args:
        buffer: Target (H, W, 3) buffer, modified in place.
        start: (column, row) of the first endpoint.
        end: (column, row) of the last endpoint.
        color: RGB color in [0, 1].

    Raises:
        IndexError: If either endpoint is outside the buffer.
    """
    _check_bounds(buffer, *start)
    _check_bounds(buffer, *end)

    rgb = map_color(color)
    x0, y0 = start
    x1, y1 = end

    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        buffer[y0, x0] = rgb
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
