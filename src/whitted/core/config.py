"""Render and output configuration.

The scene loader resolves everything a render needs into two small
immutable option objects that are passed explicitly into the render entry
point. There is no process-wide mutable configuration.

Defaults match the classic build: a 320x240 image with 8-bit channels and
at most three mirror bounces.

Example:
    >>> from whitted.core.config import OutputOptions, RenderOptions
    >>> render_options = RenderOptions(max_reflections=2, threads=4)
    >>> output_options = OutputOptions(width=640, height=480)
    >>> render_options.resolved_threads()
    4
"""

import os
from dataclasses import dataclass
from enum import Enum

# Output defaults (image dimensions in pixels)
DEFAULT_WIDTH = 320
DEFAULT_HEIGHT = 240

# Only 8-bit channels are supported
SUPPORTED_BITS_PER_CHANNEL = 8

# Maximum number of mirror bounces per primary ray
DEFAULT_MAX_REFLECTIONS = 3


class ImageFormat(str, Enum):
    """Image encodings understood by the output stage."""

    PNG = "png"
    PPM = "ppm"

    @classmethod
    def parse(cls, name: "str | ImageFormat") -> "ImageFormat":
        """Look up a format by (case-insensitive) name.

        Raises:
            ValueError: If the name does not match a supported format.
        """
        if isinstance(name, ImageFormat):
            return name
        try:
            return cls(name.lower())
        except ValueError:
            supported = ", ".join(f.value for f in cls)
            raise ValueError(
                f"Unsupported image format '{name}' (supported: {supported})"
            ) from None


def resolve_threads(threads: int | None) -> int:
    """Resolve a requested worker count.

    Args:
        threads: Explicit worker count, or None/0 to use the host's
            detected parallelism.

    Returns:
        A positive worker count.
    """
    if threads:
        return threads
    return os.cpu_count() or 1


@dataclass(frozen=True)
class RenderOptions:
    """Options controlling the render itself.

    Attributes:
        max_reflections: Reflection budget per primary ray. 0 disables
            reflections entirely.
        threads: Number of CPU workers, or None to use every core.
    """

    max_reflections: int = DEFAULT_MAX_REFLECTIONS
    threads: int | None = None

    def __post_init__(self) -> None:
        if self.max_reflections < 0:
            raise ValueError(
                f"max_reflections must be non-negative, got {self.max_reflections}"
            )
        if self.threads is not None and self.threads < 0:
            raise ValueError(f"threads must be non-negative, got {self.threads}")

    def resolved_threads(self) -> int:
        """Get the effective worker count for this render."""
        return resolve_threads(self.threads)


@dataclass(frozen=True)
class OutputOptions:
    """Options describing the output image.

    Attributes:
        format: Image encoding used by the export stage.
        width: Image width in pixels.
        height: Image height in pixels.
        bits_per_channel: Bits per color channel. Only 8 is supported.
    """

    format: ImageFormat = ImageFormat.PNG
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    bits_per_channel: int = SUPPORTED_BITS_PER_CHANNEL

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize the format through object.__setattr__
        object.__setattr__(self, "format", ImageFormat.parse(self.format))

        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.bits_per_channel != SUPPORTED_BITS_PER_CHANNEL:
            raise ValueError(
                f"Unsupported bit depth {self.bits_per_channel}; "
                f"only {SUPPORTED_BITS_PER_CHANNEL} bits per channel are supported"
            )

    @property
    def dims(self) -> tuple[int, int]:
        """Image dimensions as (width, height)."""
        return self.width, self.height
