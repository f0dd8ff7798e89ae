"""ANSI terminal display surface and blocking key input.

TerminalSurface is a context manager that prepares the terminal for the
viewer: it clears the screen, homes and hides the cursor, and switches stdin
to cbreak mode so single key presses arrive without Enter. Everything is
restored on exit.

Example:
    >>> with TerminalSurface() as surface:
    ...     surface.write("Press any key to start")
    ...     surface.flush()
    ...     key = surface.read_key()
"""

from __future__ import annotations

import os
import sys
from typing import IO, Any

from src.sphereview.preview.diff import format_redraw

try:
    import termios
    import tty
except ImportError:  # Windows
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
RESET_ATTRIBUTES = "\033[0m"


class TerminalSurface:
    """Character display on an ANSI terminal.

    Args:
        stream: Output stream (default: sys.stdout).
        input_stream: Input stream for key reads (default: sys.stdin).
        clear: Clear the screen when entering the context.
    """

    def __init__(
        self,
        stream: IO[str] | None = None,
        input_stream: IO[str] | None = None,
        *,
        clear: bool = True,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._input = input_stream if input_stream is not None else sys.stdin
        self._clear = clear
        self._cursor_hidden = False
        self._stdin_fd: int | None = None
        self._termios_before: Any = None

    def __enter__(self) -> TerminalSurface:
        if self._clear:
            self.clear()
        self._stream.write(HIDE_CURSOR)
        self._stream.flush()
        self._cursor_hidden = True
        self._enable_cbreak()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def _enable_cbreak(self) -> None:
        if termios is None or not self._input.isatty():
            return
        fd = self._input.fileno()
        try:
            self._termios_before = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            self._stdin_fd = fd
        except termios.error:
            self._termios_before = None
            self._stdin_fd = None

    def restore(self) -> None:
        """Show the cursor again and restore the terminal input mode."""
        if self._cursor_hidden:
            self._stream.write(RESET_ATTRIBUTES)
            self._stream.write(SHOW_CURSOR)
            self._stream.flush()
            self._cursor_hidden = False

        if self._stdin_fd is not None and self._termios_before is not None:
            try:
                termios.tcsetattr(self._stdin_fd, termios.TCSADRAIN, self._termios_before)
            except termios.error:
                pass
        self._stdin_fd = None
        self._termios_before = None

    def clear(self) -> None:
        """Clear the screen and move the cursor to the top-left corner."""
        self._stream.write(CLEAR_SCREEN)
        self._stream.write(CURSOR_HOME)
        self._stream.flush()

    def write(self, text: str) -> None:
        """Write text at the current cursor position."""
        self._stream.write(text)

    def move_and_write(self, row: int, col: int, char: str) -> None:
        """Write a single character at a 1-based (row, column) position."""
        self._stream.write(format_redraw(row, col, char))

    def flush(self) -> None:
        """Flush buffered output to the terminal."""
        self._stream.flush()

    def read_key(self) -> str | None:
        """Block until one character is available.

        Returns:
            The character, or None when the input has ended.
        """
        if self._stdin_fd is not None:
            data = os.read(self._stdin_fd, 1)
            if not data:
                return None
            if data == b"\x03":
                raise KeyboardInterrupt
            return data.decode("utf-8", errors="ignore")

        char = self._input.read(1)
        return char if char else None
