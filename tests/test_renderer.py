"""Tests for the inline line renderer and ANSI helpers."""

from io import StringIO

from prompt_engine.tui.ansi import (
    CSI,
    FG,
    RESET,
    clear_line,
    cursor_back,
    cursor_up,
    highlight,
    style,
)
from prompt_engine.tui.renderer import LineRenderer


class TestAnsi:
    """Tests for ANSI helpers."""

    def test_style_plain(self) -> None:
        """No attributes leave the text untouched."""
        assert style("x") == "x"

    def test_style_attributes(self) -> None:
        """Attributes are emitted in order and reset afterwards."""
        assert style("x", fg=FG.RED, bold=True) == f"{FG.RED}{CSI}1mx{RESET}"

    def test_highlight_disabled(self) -> None:
        """A disabled highlight is plain text."""
        assert highlight("x", False) == "x"

    def test_cursor_moves_skip_zero(self) -> None:
        """Zero-length moves emit nothing."""
        assert cursor_up(0) == ""
        assert cursor_back(0) == ""
        assert cursor_back(3) == f"{CSI}3D"


class TestLineRenderer:
    """Tests for LineRenderer."""

    def test_render_returns_line_count(self) -> None:
        """render writes the lines without a trailing newline."""
        out = StringIO()
        renderer = LineRenderer(out)

        assert renderer.render(["one", "two", "three"]) == 3
        assert out.getvalue() == "one\ntwo\nthree"
        assert renderer.printed_lines == 3

    def test_render_suffix(self) -> None:
        """The suffix follows the last line."""
        out = StringIO()
        renderer = LineRenderer(out)

        renderer.render(["abc"], suffix=cursor_back(1))
        assert out.getvalue() == "abc" + cursor_back(1)

    def test_clear_erases_exactly_the_frame(self) -> None:
        """clear walks up one line less than it rendered."""
        out = StringIO()
        renderer = LineRenderer(out)
        renderer.render(["a", "b", "c"])
        out.truncate(0)
        out.seek(0)

        renderer.clear()

        expected = (clear_line() + cursor_up(1)) * 2 + clear_line()
        assert out.getvalue() == expected
        assert renderer.printed_lines == 0

    def test_clear_twice_is_noop(self) -> None:
        """A second clear writes nothing."""
        out = StringIO()
        renderer = LineRenderer(out)
        renderer.render(["a"])
        renderer.clear()
        written = out.getvalue()

        renderer.clear()

        assert out.getvalue() == written

    def test_clear_without_render(self) -> None:
        """Clearing before any render writes nothing."""
        out = StringIO()

        LineRenderer(out).clear()

        assert out.getvalue() == ""

    def test_println_is_not_part_of_frame(self) -> None:
        """println output is never counted for clearing."""
        out = StringIO()
        renderer = LineRenderer(out)

        renderer.println("done")

        assert out.getvalue() == "done\n"
        assert renderer.printed_lines == 0

    def test_clear_up_count_matches_render(self) -> None:
        """Every render/clear pair moves up by lines - 1."""
        for count in range(1, 6):
            out = StringIO()
            renderer = LineRenderer(out)
            renderer.render([str(i) for i in range(count)])
            renderer.clear()

            assert out.getvalue().count(cursor_up(1)) == count - 1
