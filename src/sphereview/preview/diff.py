"""Diff presenter: redraw only the cells that changed.

After a render pass the frame buffer's dirty flags mark exactly the cells
whose glyph changed. The presenter turns each of them into one positioned
write (1-based row and column) on the display surface and leaves every other
cell of the physical display alone.

By default the display is two-tone: DENSE renders as '*' and every other
ramp level renders as a blank. Pass full_ramp=True to draw the actual ramp
glyph instead.

Example:
    >>> from src.sphereview.preview.diff import format_redraw
    >>> format_redraw(1, 5, "*")
    '\\x1b[1;5H*'
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import numpy as np
import numpy.typing as npt

from src.sphereview.shading.glyphs import DENSE, SHADE_RAMP, glyphs_to_chars

if TYPE_CHECKING:
    from src.sphereview.core.renderer import FrameBuffer

logger = logging.getLogger(__name__)

# Characters used by the two-tone display
DENSE_CHAR = SHADE_RAMP[DENSE]
BLANK_CHAR = " "

# Redraw command: (row, column, character), 1-based
Redraw = tuple[int, int, str]


class DisplaySurface(Protocol):
    """Anything that can place a single character at a screen position."""

    def move_and_write(self, row: int, col: int, char: str) -> None: ...

    def flush(self) -> None: ...


def format_redraw(row: int, col: int, char: str) -> str:
    """ANSI cursor-position sequence followed by the character."""
    return f"\033[{row};{col}H{char}"


def collect_redraws(
    glyphs: npt.NDArray[np.int32],
    changed: npt.NDArray[np.bool_],
    *,
    full_ramp: bool = False,
) -> list[Redraw]:
    """List the redraw commands for the dirty cells of a frame.

    Args:
        glyphs: (height, width) array of ramp indices.
        changed: (height, width) array of dirty flags.
        full_ramp: Draw the ramp glyph instead of the two-tone mapping.

    Returns:
        Redraw commands in row-major order.

    Raises:
        ValueError: If the arrays have different shapes.
    """
    if glyphs.shape != changed.shape:
        raise ValueError(
            f"Glyph and dirty-flag shapes must match: {glyphs.shape} vs {changed.shape}"
        )

    rows, cols = np.nonzero(changed)
    values = glyphs[rows, cols]
    if full_ramp:
        chars = glyphs_to_chars(values)
    else:
        chars = np.where(values == DENSE, DENSE_CHAR, BLANK_CHAR)

    return [
        (int(row) + 1, int(col) + 1, str(char))
        for row, col, char in zip(rows, cols, chars)
    ]


class DiffPresenter:
    """Writes the dirty cells of a frame to a display surface.

    Attributes:
        surface: The display surface receiving positioned writes.
        full_ramp: Whether to draw all seven ramp levels.
    """

    def __init__(self, surface: DisplaySurface, *, full_ramp: bool = False) -> None:
        self.surface = surface
        self.full_ramp = full_ramp

    def present(self, frame: FrameBuffer) -> int:
        """Redraw the cells flagged by the last render pass.

        Args:
            frame: The frame buffer after render_frame().

        Returns:
            Number of cells written.
        """
        redraws = collect_redraws(
            frame.glyphs_numpy(),
            frame.changed_numpy(),
            full_ramp=self.full_ramp,
        )
        for row, col, char in redraws:
            self.surface.move_and_write(row, col, char)
        self.surface.flush()

        logger.debug("Presented %d cells", len(redraws))
        return len(redraws)
