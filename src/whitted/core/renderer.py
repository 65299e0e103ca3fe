"""Viewport mapping and the render loop.

The canvas of W x H pixels is mapped onto a planar viewport VIEW_WIDTH wide
and H/W high (square pixels), VIEW_DISTANCE in front of the camera. Pixel
column c and row r of the canvas correspond to the centered coordinates

    x = c - W // 2
    y = H // 2 - 1 - r          (rows grow downward, y grows upward)

and the primary ray through them has direction

    (x * VIEW_WIDTH / W, y * (H / W) / H, VIEW_DISTANCE)

left un-normalized. It is traced from the camera position with the range
(VIEW_DISTANCE, T_MAX).

The region kernel renders any rectangular tile of the canvas into its own
uint8 buffer, always mapping through the full canvas size, so tiles
assemble into exactly the full image. render_scene partitions the canvas
into horizontal bands, renders each band with the configured number of CPU
workers and concatenates the bands in canvas order. Each pixel depends
only on its own ray tree, so the image is byte-identical for any thread
count.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.config import OutputOptions, RenderOptions
    >>> from whitted.core.renderer import render_scene
    >>> from whitted.scene.demo import create_demo_scene
    >>> pixels = render_scene(create_demo_scene(), RenderOptions(), OutputOptions())
    >>> pixels.shape
    (240, 320, 3)
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from whitted.core.config import OutputOptions, RenderOptions
from whitted.core.shading import trace_ray
from whitted.scene.manager import SceneManager
from whitted.scene.model import Scene
from whitted.scene.world import get_camera_position

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# Distance from the camera to the viewport plane
VIEW_DISTANCE = 0.5

# Width of the viewport in world units; its height follows the aspect ratio
VIEW_WIDTH = 1.0

# IEEE 754 single-precision exponent bits; all set means inf or NaN
_EXPONENT_MASK = 0x7F800000

# Count of pixels whose radiance was NaN or infinite in the last launch
_invalid_pixels = ti.field(dtype=ti.i32, shape=())


@ti.func
def primary_ray_direction(x: ti.i32, y: ti.i32, canvas_w: ti.i32, canvas_h: ti.i32) -> vec3:
    """Map centered canvas coordinates to a viewport ray direction."""
    view_height = ti.cast(canvas_h, ti.f32) / ti.cast(canvas_w, ti.f32)
    view_x = ti.cast(x, ti.f32) * VIEW_WIDTH / ti.cast(canvas_w, ti.f32)
    view_y = ti.cast(y, ti.f32) * view_height / ti.cast(canvas_h, ti.f32)
    return vec3(view_x, view_y, VIEW_DISTANCE)


@ti.func
def is_finite(color: vec3) -> ti.i32:
    """Check every channel for inf or NaN.

    Works on the bit pattern so fast-math float assumptions cannot fold the
    test away.
    """
    finite = 1
    for k in ti.static(range(3)):
        bits = ti.bit_cast(color[k], ti.i32)
        if (bits & _EXPONENT_MASK) == _EXPONENT_MASK:
            finite = 0
    return finite


@ti.kernel
def _render_region_kernel(
    out: ti.types.ndarray(dtype=ti.u8, ndim=3),
    start_x: ti.i32,
    start_y: ti.i32,
    region_w: ti.i32,
    region_h: ti.i32,
    canvas_w: ti.i32,
    canvas_h: ti.i32,
    max_reflections: ti.i32,
    threads: ti.template(),
):
    """Render a tile of the canvas into out (region_h x region_w x 3)."""
    ti.loop_config(parallelize=threads)
    for j, i in ti.ndrange(region_h, region_w):
        camera = get_camera_position()
        x = start_x + i - canvas_w // 2
        y = canvas_h // 2 - 1 - (start_y + j)

        direction = primary_ray_direction(x, y, canvas_w, canvas_h)
        color = trace_ray(camera, direction, VIEW_DISTANCE, max_reflections)

        if is_finite(color) == 0:
            ti.atomic_add(_invalid_pixels[None], 1)
            color = vec3(0.0, 0.0, 0.0)

        color = tm.clamp(color, 0.0, 1.0)
        for k in ti.static(range(3)):
            # Float to integer cast truncates
            out[j, i, k] = ti.cast(color[k] * 255.0, ti.u8)


def partition_bands(height: int, bands: int) -> list[tuple[int, int]]:
    """Split canvas rows into contiguous, disjoint bands.

    Args:
        height: Number of canvas rows.
        bands: Requested number of bands. Clamped to [1, height].

    Returns:
        List of (start_row, rows) in canvas order. The first height % bands
        bands are one row taller than the rest.
    """
    bands = max(1, min(bands, height))
    base, extra = divmod(height, bands)

    result = []
    start = 0
    for index in range(bands):
        rows = base + (1 if index < extra else 0)
        result.append((start, rows))
        start += rows
    return result


def render_region(
    start: tuple[int, int],
    dims: tuple[int, int],
    canvas: tuple[int, int],
    max_reflections: int,
    threads: int = 1,
) -> npt.NDArray[np.uint8]:
    """Render a rectangular tile of the canvas for the loaded scene.

    Args:
        start: (column, row) of the tile's top-left pixel.
        dims: (width, height) of the tile.
        canvas: (width, height) of the full canvas.
        max_reflections: Reflection budget per primary ray.
        threads: Number of CPU workers for this tile.

    Returns:
        A (height, width, 3) uint8 array, row 0 at the top.

    Raises:
        ValueError: If the tile does not lie inside the canvas.
        RuntimeError: If any pixel's radiance was not finite.
    """
    start_x, start_y = start
    region_w, region_h = dims
    canvas_w, canvas_h = canvas

    if region_w <= 0 or region_h <= 0:
        raise ValueError(f"Region dimensions must be positive, got {region_w}x{region_h}")
    if (
        start_x < 0
        or start_y < 0
        or start_x + region_w > canvas_w
        or start_y + region_h > canvas_h
    ):
        raise ValueError(
            f"Region {region_w}x{region_h} at ({start_x}, {start_y}) "
            f"lies outside the {canvas_w}x{canvas_h} canvas"
        )

    out = np.zeros((region_h, region_w, 3), dtype=np.uint8)
    _invalid_pixels[None] = 0
    _render_region_kernel(
        out,
        start_x,
        start_y,
        region_w,
        region_h,
        canvas_w,
        canvas_h,
        max_reflections,
        threads,
    )

    invalid = int(_invalid_pixels[None])
    if invalid:
        raise RuntimeError(
            f"Render produced {invalid} non-finite pixel(s) in region "
            f"{region_w}x{region_h} at ({start_x}, {start_y})"
        )
    return out


def render_scene(
    scene: Scene,
    render_options: RenderOptions | None = None,
    output_options: OutputOptions | None = None,
) -> npt.NDArray[np.uint8]:
    """Render a scene into a row-major RGB buffer.

    Uploads the scene into the registries, renders the canvas band by band
    and assembles the bands in canvas order. The whole render fails if any
    band fails; no partial image is returned.

    Band launches run one after another because the scene registries are
    process-global fields; the CPU workers are spread over the rows inside
    each launch. The bands therefore do not add parallelism. They give each
    launch its own sub-buffer and exercise the same render_region path that
    callers use to render independent tiles of a larger canvas, so any band
    layout assembles into the same image.

    Args:
        scene: The scene to render.
        render_options: Reflection budget and worker count. Defaults to
            RenderOptions().
        output_options: Image size. Defaults to OutputOptions().

    Returns:
        A (height, width, 3) uint8 array.

    Raises:
        RuntimeError: If a registry overflows or a pixel is not finite.
    """
    if render_options is None:
        render_options = RenderOptions()
    if output_options is None:
        output_options = OutputOptions()

    width, height = output_options.dims
    threads = render_options.resolved_threads()

    SceneManager().load(scene)

    bands = partition_bands(height, threads)
    logger.debug(
        "Rendering %dx%d in %d band(s) with %d thread(s), max_reflections=%d",
        width,
        height,
        len(bands),
        threads,
        render_options.max_reflections,
    )

    start_time = time.perf_counter()
    parts = [
        render_region(
            (0, start_row),
            (width, rows),
            (width, height),
            render_options.max_reflections,
            threads=threads,
        )
        for start_row, rows in bands
    ]
    image = np.concatenate(parts, axis=0)
    elapsed = time.perf_counter() - start_time

    logger.info("Rendered %dx%d image in %.2fs", width, height, elapsed)
    return image
