"""
Scrollable window over a list of rows.

``Viewport`` keeps a cursor and a window offset over ``item_count`` logical
rows and maintains ``offset <= cursor < offset + window_size`` across every
navigation operation and terminal resize.
"""

from __future__ import annotations

from collections.abc import Iterable

MIN_INDICATOR_WIDTH = 15


def indicator_width(labels: Iterable[str]) -> int:
    """Width of the boundary indicator rows for a list of *labels*."""
    longest = max((len(label) for label in labels), default=0)
    return max(MIN_INDICATOR_WIDTH, longest + 4)


def fit_pattern(pattern: str, width: int) -> str:
    """Repeat *pattern* and cut it to exactly *width* characters."""
    if width <= 0:
        return ""
    if not pattern:
        return " " * width
    repeats = -(-width // len(pattern))
    return (pattern * repeats)[:width]


class Viewport:
    """
    Cursor-following window over ``item_count`` rows.

    Parameters
    ----------
    item_count:
        Number of logical rows.  Must be at least one.
    window_size:
        Requested number of visible rows, clamped to ``[1, item_count]``.
    offset_window_scroll:
        When ``True`` the window scrolls one row early in the direction of
        travel so the row after the cursor stays visible while more rows
        exist.  When ``False`` it only scrolls once the cursor would leave
        the window.
    """

    def __init__(
        self,
        item_count: int,
        window_size: int,
        offset_window_scroll: bool = True,
    ) -> None:
        if item_count < 1:
            raise ValueError("Viewport needs at least one item")
        self._item_count = item_count
        self._desired_size = max(1, min(window_size, item_count))
        self._window_size = self._desired_size
        self._offset_window_scroll = offset_window_scroll
        self._cursor = 0
        self._offset = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def window_size(self) -> int:
        """Effective number of visible rows after the last resize."""
        return self._window_size

    @property
    def visible_range(self) -> range:
        return range(self._offset, self._offset + self._window_size)

    @property
    def scrolls(self) -> bool:
        """Whether the window is narrower than the list."""
        return self._window_size < self._item_count

    @property
    def has_more_above(self) -> bool:
        return self._offset > 0

    @property
    def has_more_below(self) -> bool:
        return self._offset + self._window_size < self._item_count

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move(self, delta: int) -> bool:
        """
        Move the cursor by *delta* rows, clamped to the list.

        Returns
        -------
        bool
            ``False`` when the cursor did not move (nothing to redraw).
        """
        new_cursor = self._clamp_cursor(self._cursor + delta)
        if new_cursor == self._cursor:
            return False
        direction = 1 if new_cursor > self._cursor else -1
        self._cursor = new_cursor
        self._follow(direction)
        return True

    def home(self) -> bool:
        """Jump to the first row."""
        if self._cursor == 0 and self._offset == 0:
            return False
        self._cursor = 0
        self._offset = 0
        return True

    def end(self) -> bool:
        """Jump to the last row."""
        last = self._item_count - 1
        if self._cursor == last and self._offset == self._max_offset():
            return False
        self._cursor = last
        self._offset = self._max_offset()
        return True

    def page_up(self) -> bool:
        """Move up one window and put the cursor at the top edge."""
        new_cursor = self._clamp_cursor(self._cursor - self._window_size)
        if new_cursor == self._cursor:
            return False
        self._cursor = new_cursor
        offset = new_cursor
        if self._lookahead() and new_cursor > 0:
            offset -= 1
        self._offset = offset
        self._clamp_offset()
        return True

    def page_down(self) -> bool:
        """Move down one window and put the cursor at the bottom edge."""
        new_cursor = self._clamp_cursor(self._cursor + self._window_size)
        if new_cursor == self._cursor:
            return False
        self._cursor = new_cursor
        offset = new_cursor - self._window_size + 1
        if self._lookahead() and new_cursor < self._item_count - 1:
            offset += 1
        self._offset = offset
        self._clamp_offset()
        return True

    def resize(self, available_rows: int | None, chrome_rows: int = 0) -> None:
        """
        Recompute the effective window size for the terminal height.

        Parameters
        ----------
        available_rows:
            Current terminal height, or ``None`` when unknown.
        chrome_rows:
            Rows the prompt needs besides the window (question line,
            indicator rows).
        """
        size = self._desired_size
        if available_rows is not None:
            size = min(size, available_rows - chrome_rows)
        self._window_size = max(1, min(size, self._item_count))
        self._clamp_offset()

    # ------------------------------------------------------------------
    # Boundary indicators
    # ------------------------------------------------------------------

    def indicators(
        self,
        width: int,
        more_pattern: str,
        end_pattern: str,
    ) -> tuple[str | None, str | None]:
        """
        Return the ``(top, bottom)`` indicator rows.

        Both are ``None`` when the whole list fits in the window.  Each row
        uses *more_pattern* when rows are hidden on that side and
        *end_pattern* otherwise.
        """
        if not self.scrolls:
            return None, None
        top = fit_pattern(more_pattern if self.has_more_above else end_pattern, width)
        bottom = fit_pattern(more_pattern if self.has_more_below else end_pattern, width)
        return top, bottom

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookahead(self) -> bool:
        return self._offset_window_scroll and self._window_size > 1

    def _max_offset(self) -> int:
        return self._item_count - self._window_size

    def _clamp_cursor(self, value: int) -> int:
        return max(0, min(value, self._item_count - 1))

    def _follow(self, direction: int) -> None:
        if direction > 0:
            needed = self._cursor
            if self._lookahead():
                needed = min(self._cursor + 1, self._item_count - 1)
            if needed >= self._offset + self._window_size:
                self._offset = needed - self._window_size + 1
        else:
            needed = self._cursor
            if self._lookahead():
                needed = max(self._cursor - 1, 0)
            if needed < self._offset:
                self._offset = needed
        self._clamp_offset()

    def _clamp_offset(self) -> None:
        offset = max(self._offset, self._cursor - self._window_size + 1)
        offset = min(offset, self._cursor)
        self._offset = max(0, min(offset, self._max_offset()))
