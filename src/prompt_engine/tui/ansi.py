"""
ANSI escape sequences used by the prompts.

Only what an inline prompt needs: SGR styling, the shared question
decorations, relative cursor movement, line erasing and cursor visibility.
"""

from __future__ import annotations

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"


def sgr(*params: int) -> str:
    """Select Graphic Rendition sequence for *params*."""
    return f"{CSI}{';'.join(str(p) for p in params)}m"


class FG:
    """Foreground colors used by the prompts."""

    RED = sgr(31)
    GREEN = sgr(32)
    BRIGHT_BLUE = sgr(94)


_BOLD, _DIM, _ITALIC, _UNDERLINE = 1, 2, 3, 4


def style(
    text: str,
    *,
    fg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    italic: bool = False,
    underline: bool = False,
) -> str:
    """
    Wrap *text* in SGR attributes followed by ``RESET``.

    *fg* is a ready-made color sequence such as ``FG.GREEN``.  Text with no
    attribute at all is returned unchanged.
    """
    flags = ((bold, _BOLD), (dim, _DIM), (italic, _ITALIC), (underline, _UNDERLINE))
    prefix = (fg or "") + "".join(sgr(code) for enabled, code in flags if enabled)
    if not prefix:
        return text
    return f"{prefix}{text}{RESET}"


# ---------------------------------------------------------------------------
# Prompt decorations
# ---------------------------------------------------------------------------

PRIMARY_COLOR = FG.BRIGHT_BLUE
PREFIX = style("?", fg=FG.GREEN) + " "


def prompt_text(text: str) -> str:
    """The question in bold, followed by a separating space."""
    return style(text, bold=True) + " "


def highlight(text: str, enabled: bool = True) -> str:
    """*text* in the primary color when *enabled*."""
    if not enabled:
        return text
    return style(text, fg=PRIMARY_COLOR)


# ---------------------------------------------------------------------------
# Cursor and line control
# ---------------------------------------------------------------------------

def cursor_up(n: int = 1) -> str:
    return f"{CSI}{n}A" if n > 0 else ""


def cursor_down(n: int = 1) -> str:
    return f"{CSI}{n}B" if n > 0 else ""


def cursor_back(n: int = 1) -> str:
    return f"{CSI}{n}D" if n > 0 else ""


def clear_line() -> str:
    """Return to column one and erase the whole line."""
    return f"\r{CSI}2K"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"
