"""Preview module for output and interaction.

This module handles getting rendered frames onto a screen:

Components:
    diff: Diff presenter that redraws only changed cells
    terminal: ANSI terminal display surface with blocking key input
    interactive: Keyboard-driven render loop
    export: Text and PNG snapshots of a frame

Example:
    >>> from src.sphereview.preview import InteractiveViewer, TerminalSurface
    >>> with TerminalSurface() as surface:
    ...     InteractiveViewer(surface).run()
"""

from src.sphereview.preview.diff import (
    DiffPresenter,
    collect_redraws,
    format_redraw,
)
from src.sphereview.preview.export import (
    frame_to_image,
    frame_to_text,
    save_png,
    save_text,
)
from src.sphereview.preview.interactive import InteractiveViewer
from src.sphereview.preview.terminal import TerminalSurface

__all__ = [
    # Interactive loop
    "InteractiveViewer",
    "TerminalSurface",
    # Diff presentation
    "DiffPresenter",
    "collect_redraws",
    "format_redraw",
    # Export functions
    "frame_to_text",
    "frame_to_image",
    "save_png",
    "save_text",
]
