#!/usr/bin/env python3
"""Render a scene file (or the built-in demo scene) to an image.

Usage:
    python -m examples.render_scene [scene.json] [options]

Options:
    --width WIDTH                Image width in pixels (overrides the scene file)
    --height HEIGHT              Image height in pixels (overrides the scene file)
    --threads N                  CPU workers, 0 for every core (overrides the scene file)
    --max-reflections N          Reflection budget (overrides the scene file)
    --output OUTPUT              Output file path (default: render.png)
    --format {png,ppm}           Output format (default: from the scene file or suffix)
    --quiet                      Suppress progress output
    --verbose                    Enable debug logging

Example:
    python -m examples.render_scene examples/scenes/demo.json --threads 4 --output demo.png
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scene",
        nargs="?",
        default=None,
        help="JSON scene file (default: built-in demo scene)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Image width in pixels (default: 320 or the scene file's)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: 240 or the scene file's)",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of CPU workers, 0 for every core (default: every core)",
    )
    parser.add_argument(
        "--max-reflections",
        type=int,
        default=None,
        help="Mirror bounces per primary ray (default: 3 or the scene file's)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--format",
        choices=["png", "ppm"],
        default=None,
        help="Output format (default: inferred from the output suffix)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def _overrides(**values: object) -> dict[str, object]:
    return {key: value for key, value in values.items() if value is not None}


def render_scene_file(
    scene_path: str | None = None,
    output_path: str = "render.png",
    image_format: str | None = None,
    width: int | None = None,
    height: int | None = None,
    threads: int | None = None,
    max_reflections: int | None = None,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Command-line values override the scene file's render and output
    sections.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.core.config import OutputOptions, RenderOptions
    from whitted.core.renderer import render_scene
    from whitted.preview.export import save_image
    from whitted.scene.demo import create_demo_scene
    from whitted.scene.loader import load_scene

    if scene_path is None:
        if not quiet:
            print("Using built-in demo scene")
        scene = create_demo_scene()
        render_options = RenderOptions()
        output_options = OutputOptions()
    else:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        description = load_scene(scene_path)
        scene = description.scene
        render_options = description.render
        output_options = description.output

    output_file = Path(output_path)
    if image_format is None and output_file.suffix:
        image_format = output_file.suffix[1:]

    render_options = dataclasses.replace(
        render_options,
        **_overrides(threads=threads, max_reflections=max_reflections),
    )
    output_options = dataclasses.replace(
        output_options,
        **_overrides(format=image_format, width=width, height=height),
    )

    if not quiet:
        print(
            f"Rendering {len(scene.objects)} objects, {len(scene.lights)} lights "
            f"at {output_options.width}x{output_options.height} "
            f"({render_options.resolved_threads()} threads, "
            f"{render_options.max_reflections} reflections)..."
        )

    start_time = time.time()
    pixels = render_scene(scene, render_options, output_options)
    save_image(pixels, output_file, output_options.format)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # The renderer's worker pool is Taichi's CPU thread pool
    ti.init(arch=ti.cpu)

    try:
        render_scene_file(
            scene_path=args.scene,
            output_path=args.output,
            image_format=args.format,
            width=args.width,
            height=args.height,
            threads=args.threads,
            max_reflections=args.max_reflections,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
