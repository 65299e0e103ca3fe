"""Output stage and debug drawing.

Components:
    export: Encode a rendered pixel buffer as PNG or PPM with Pillow
    draw: Centered-coordinate pixel writes and Bresenham lines over a
        pixel buffer, for overlaying diagnostics

Example:
    >>> from whitted.preview import draw_line, save_image
    >>> draw_line(pixels, (0, 0), (319, 239), (1.0, 0.0, 0.0))
    >>> save_image(pixels, "render.png")
"""

from whitted.preview.draw import draw_line, draw_pixel, map_color
from whitted.preview.export import image_to_pil, save_image

__all__ = [
    # Export functions
    "save_image",
    "image_to_pil",
    # Debug drawing
    "map_color",
    "draw_pixel",
    "draw_line",
]
