"""
Inline line renderer.

``LineRenderer`` draws a prompt below the current cursor position and
remembers how many lines the last frame occupied, so that :meth:`clear`
erases exactly that frame and nothing above it.  Every prompt redraw is a
``clear()`` followed by a ``render()``.
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import TextIO

from prompt_engine.tui.ansi import clear_line, cursor_up


class LineRenderer:
    """
    Render/clear pair for inline prompts.

    Parameters
    ----------
    output:
        Writable text stream, defaults to ``sys.stdout``.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output: TextIO = output or sys.stdout
        self._printed_lines: int = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def printed_lines(self) -> int:
        """Number of lines drawn by the last :meth:`render` still on screen."""
        return self._printed_lines

    def render(self, lines: list[str], suffix: str = "") -> int:
        """
        Draw *lines* starting at the current cursor position.

        The last line is not terminated, which leaves the cursor on the
        frame so :meth:`clear` can walk back up over it.

        Parameters
        ----------
        lines:
            Pre-styled rows, top to bottom.
        suffix:
            Raw control sequence written after the last row (for example a
            cursor move placing the caret inside a text field).  It must not
            print anything visible.

        Returns
        -------
        int
            The number of lines drawn.
        """
        buf = StringIO()
        buf.write("\n".join(lines))
        buf.write(suffix)
        self._write(buf.getvalue())
        self._printed_lines = len(lines)
        return self._printed_lines

    def clear(self) -> None:
        """Erase the lines drawn by the last :meth:`render`."""
        if self._printed_lines == 0:
            return
        buf = StringIO()
        buf.write((clear_line() + cursor_up(1)) * (self._printed_lines - 1))
        buf.write(clear_line())
        self._write(buf.getvalue())
        self._printed_lines = 0

    def write(self, data: str) -> None:
        """Write raw data that is not part of the frame."""
        self._write(data)

    def println(self, text: str) -> None:
        """Write a finished line below the frame; it is never cleared."""
        self._write(text + "\n")

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _write(self, data: str) -> None:
        """Write data to the output stream and flush."""
        self._output.write(data)
        self._output.flush()
