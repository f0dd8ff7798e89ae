"""Snapshot export for rendered frames.

This module turns the contents of a frame buffer into text or a grayscale
image so a single frame can be inspected without a terminal.

Supported formats:
    - Plain text (one line per grid row)
    - PNG (8-bit grayscale via Pillow, one pixel per cell)

Example:
    >>> from src.sphereview.preview.export import save_png, frame_to_text
    >>> text = frame_to_text(frame)
    >>> save_png(frame, "frame.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.sphereview.preview.diff import BLANK_CHAR, DENSE_CHAR
from src.sphereview.shading.glyphs import DENSE, EMPTY_CELL, RAMP_SIZE, glyphs_to_chars

if TYPE_CHECKING:
    from src.sphereview.core.renderer import FrameBuffer


def frame_to_text(frame: FrameBuffer, *, full_ramp: bool = True) -> str:
    """Render the frame buffer as text.

    Args:
        frame: The frame buffer to convert.
        full_ramp: Use all ramp glyphs (default) or the two-tone mapping of
            the terminal display.

    Returns:
        The grid rows joined with newlines. Trailing blanks are kept so every
        line is exactly frame.width characters long.
    """
    glyphs = frame.glyphs_numpy()
    if full_ramp:
        chars = glyphs_to_chars(glyphs)
    else:
        chars = np.where(glyphs == DENSE, DENSE_CHAR, BLANK_CHAR)
    return "\n".join("".join(row) for row in chars)


def frame_to_image(frame: FrameBuffer) -> npt.NDArray[np.uint8]:
    """Convert the frame buffer to an 8-bit grayscale image.

    Ramp index i maps to i * 255 / (RAMP_SIZE - 1); empty cells are black.

    Returns:
        Array of shape (height, width) with dtype uint8.
    """
    glyphs = frame.glyphs_numpy()
    levels = np.where(glyphs == EMPTY_CELL, 0, glyphs).astype(np.float32)
    return np.round(levels * 255.0 / (RAMP_SIZE - 1)).astype(np.uint8)


def save_png(frame: FrameBuffer, filepath: str | Path) -> None:
    """Save the frame buffer as a grayscale PNG.

    Args:
        frame: The frame buffer to save.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(frame_to_image(frame))
    pil_image.save(filepath)


def save_text(frame: FrameBuffer, filepath: str | Path, *, full_ramp: bool = True) -> None:
    """Save frame_to_text() output to a UTF-8 text file."""
    Path(filepath).write_text(frame_to_text(frame, full_ramp=full_ramp) + "\n", encoding="utf-8")
