"""Image export for rendered pixel buffers.

The renderer hands over a row-major (H, W, 3) uint8 buffer; this module
only encodes it. Bit depth is fixed at 8 bits per channel.

Supported formats:
    - PNG (via Pillow)
    - PPM (binary P6, via Pillow)

Example:
    >>> from whitted.core.config import ImageFormat
    >>> from whitted.preview.export import save_image
    >>> save_image(pixels, "output.ppm", ImageFormat.PPM)
"""

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.core.config import ImageFormat

logger = logging.getLogger(__name__)

# Pillow encoder names per output format
_PIL_FORMATS = {
    ImageFormat.PNG: "PNG",
    ImageFormat.PPM: "PPM",
}


def image_to_pil(pixels: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap a rendered buffer as a Pillow RGB image.

    Args:
        pixels: Array of shape (H, W, 3) with dtype uint8.

    Returns:
        The Pillow image (row 0 at the top).

    Raises:
        ValueError: If the array is not an (H, W, 3) uint8 buffer.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) buffer, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 buffer, got {pixels.dtype}")
    return PILImage.fromarray(np.ascontiguousarray(pixels))


def save_image(
    pixels: npt.NDArray[np.uint8],
    filepath: str | Path,
    image_format: ImageFormat | str | None = None,
) -> None:
    """Save a rendered buffer to disk.

    Args:
        pixels: Array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path.
        image_format: Encoding to use. If None, inferred from the file
            suffix.

    Raises:
        ValueError: If the format is unsupported or cannot be inferred.
    """
    path = Path(filepath)
    if image_format is None:
        if not path.suffix:
            raise ValueError(f"Cannot infer image format from '{path}'")
        image_format = path.suffix[1:]
    image_format = ImageFormat.parse(image_format)

    image_to_pil(pixels).save(path, format=_PIL_FORMATS[image_format])
    logger.debug("Saved %s image to %s", image_format.value, path)
