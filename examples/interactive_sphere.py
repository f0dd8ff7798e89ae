#!/usr/bin/env python3
"""Interactive mirror-sphere viewer in the terminal.

This script clears the terminal and re-renders the scene after every key
press, redrawing only the characters that changed.

Usage:
    python -m examples.interactive_sphere [options]

Options:
    --full-ramp         Draw all seven shading levels instead of two tones
    --log-file PATH     Write log messages (including per-frame timings) to PATH
    --log-level LEVEL   Logging level (default: INFO)
    --arch {cpu,gpu}    Taichi backend (default: cpu)

Controls:
    w / s   Move forward / backward (z)
    a / d   Move left / right (x)
    y / x   Move up / down (y)
    Ctrl-C  Quit
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402

# Backends selectable with --arch
ARCHES = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactive terminal viewer for the mirror sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--full-ramp",
        action="store_true",
        help="Draw all seven shading levels instead of two tones",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Write log messages to this file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--arch",
        choices=sorted(ARCHES),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    return parser.parse_args()


def initialize_taichi(arch_name: str, logger: logging.Logger) -> str:
    """Start Taichi on the requested backend.

    One small kernel runs per key press, so the CPU backend is the default.
    A GPU request falls back to the CPU when no device is available.

    Returns:
        Name of the backend in use.
    """
    if arch_name == "gpu":
        try:
            ti.init(arch=ARCHES["gpu"], log_level=ti.WARN, fast_math=False)
            return "gpu"
        except Exception as e:
            logger.warning("GPU backend unavailable (%s), using CPU", e)

    ti.init(arch=ARCHES["cpu"], log_level=ti.WARN, fast_math=False)
    return "cpu"


def main() -> int:
    """Main entry point for the interactive viewer.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()

    from src.sphereview.logging_config import setup_logging

    # Log lines on the terminal would overwrite the frame
    logger = setup_logging(
        level=getattr(logging, args.log_level),
        log_file=args.log_file,
        console=False,
    )

    backend = initialize_taichi(args.arch, logger)
    logger.info("Taichi backend: %s", backend)

    # Import after Taichi initialization
    from src.sphereview.preview.interactive import InteractiveViewer
    from src.sphereview.preview.terminal import TerminalSurface

    try:
        with TerminalSurface() as surface:
            viewer = InteractiveViewer(surface, full_ramp=args.full_ramp)
            viewer.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
