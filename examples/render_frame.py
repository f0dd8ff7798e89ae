#!/usr/bin/env python3
"""Render a single frame of the mirror sphere scene.

This script renders one frame from a given camera position and writes it as
text to stdout or to a file, or as a grayscale PNG.

Usage:
    python -m examples.render_frame [options]

Options:
    --width WIDTH       Grid width in cells (default: 200)
    --height HEIGHT     Grid height in cells (default: 250)
    --camera X Y Z      Camera position (default: 0 1 -6)
    --output OUTPUT     Output file (.png or text); prints to stdout if omitted
    --two-tone          Use the two-tone terminal mapping for text output
    --verbose           Log render timings

Example:
    python -m examples.render_frame --width 96 --height 54 --camera 0 1.4 -4
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render one frame of the mirror sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=200,
        help="Grid width in cells (default: 200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=250,
        help="Grid height in cells (default: 250)",
    )
    parser.add_argument(
        "--camera",
        type=float,
        nargs=3,
        default=[0.0, 1.0, -6.0],
        metavar=("X", "Y", "Z"),
        help="Camera position (default: 0 1 -6)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file (.png for an image, anything else for text)",
    )
    parser.add_argument(
        "--two-tone",
        action="store_true",
        help="Use the two-tone terminal mapping for text output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log render timings",
    )
    return parser.parse_args()


def render_single_frame(
    width: int,
    height: int,
    camera_position: tuple[float, float, float],
    output_path: str | None = None,
    two_tone: bool = False,
) -> str:
    """Render one frame and write it out.

    Args:
        width: Grid width in cells.
        height: Grid height in cells.
        camera_position: Camera position (x, y, z).
        output_path: Destination file, or None to return the text only.
        two_tone: Use the two-tone mapping for text output.

    Returns:
        The rendered frame as text.
    """
    # Lazy imports to allow Taichi initialization first
    from src.sphereview.camera.controls import CameraState
    from src.sphereview.core.renderer import FrameBuffer, render_frame
    from src.sphereview.preview.export import frame_to_text, save_png, save_text
    from src.sphereview.scene.params import SceneParams

    params = SceneParams(width=width, height=height, camera_position=camera_position)
    camera = CameraState.from_tuple(params.camera_position)
    frame = FrameBuffer(params.width, params.height)
    render_frame(camera, frame, params)

    if output_path is not None:
        if Path(output_path).suffix.lower() == ".png":
            save_png(frame, output_path)
        else:
            save_text(frame, output_path, full_ramp=not two_tone)

    return frame_to_text(frame, full_ramp=not two_tone)


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from src.sphereview.logging_config import setup_logging

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu, log_level=ti.WARN, fast_math=False)
    except Exception:
        ti.init(arch=ti.cpu, log_level=ti.WARN, fast_math=False)

    try:
        text = render_single_frame(
            width=args.width,
            height=args.height,
            camera_position=tuple(args.camera),
            output_path=args.output,
            two_tone=args.two_tone,
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output is None:
        print(text)
    else:
        print(f"Saved to: {Path(args.output).absolute()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
