"""
Single-choice list prompt.

Controls:

- ``Up`` / ``Down`` move the highlighted option by one.
- ``Home`` / ``End`` jump to the first / last option.
- ``PageUp`` / ``PageDown`` move by one window.
- ``Enter`` returns the highlighted option's value.
- ``Ctrl+C`` cancels, ``Ctrl+D`` exits the program.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from prompt_engine.config import PromptConfig
from prompt_engine.prompts.base import answer_line, prepare_loop
from prompt_engine.prompts.selection import OptionsSource, build_options
from prompt_engine.tui.ansi import PREFIX, highlight, hide_cursor, prompt_text, show_cursor, style
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.loop import Answer, Binding, PromptSpec
from prompt_engine.tui.renderer import LineRenderer
from prompt_engine.tui.terminal import PromptIO
from prompt_engine.tui.viewport import Viewport, indicator_width


def viewport_lines(
    viewport: Viewport,
    rows: list[str],
    width: int,
    config: PromptConfig,
) -> list[str]:
    """Lay out the visible *rows* between the boundary indicators."""
    top, bottom = viewport.indicators(width, config.more_pattern, config.end_pattern)
    lines: list[str] = []
    if top is not None:
        lines.append(style(top, dim=True))
    lines.extend(rows[index] for index in viewport.visible_range)
    if bottom is not None:
        lines.append(style(bottom, dim=True))
    return lines


def navigation_bindings(
    viewport: Viewport,
    keybindings: KeybindingsManager,
    redraw: Callable[[bool], None],
) -> list[Binding]:
    """Cursor movement bindings over *viewport*."""

    def step(operation: Callable[[], bool]) -> Callable[[], None]:
        return lambda: redraw(operation())

    return [
        Binding(keybindings.combos("up"), step(lambda: viewport.move(-1))),
        Binding(keybindings.combos("down"), step(lambda: viewport.move(1))),
        Binding(keybindings.combos("home"), step(viewport.home)),
        Binding(keybindings.combos("end"), step(viewport.end)),
        Binding(keybindings.combos("page_up"), step(viewport.page_up)),
        Binding(keybindings.combos("page_down"), step(viewport.page_down)),
    ]


def redrawer(renderer: LineRenderer, render: Callable[[], None]) -> Callable[[bool], None]:
    """Build a ``redraw(changed)`` callback that repaints only on change."""

    def redraw(changed: bool) -> None:
        if not changed:
            return
        renderer.clear()
        render()

    return redraw


async def list_prompt(
    label: str,
    options: OptionsSource,
    *,
    io: PromptIO | None = None,
    config: PromptConfig | None = None,
    keybindings: KeybindingsManager | None = None,
) -> Any:
    """
    Ask the user to pick one option.

    Parameters
    ----------
    label:
        The question.
    options:
        Labels, or a mapping of label to value.

    Returns
    -------
    Any
        The chosen value, ``None`` when there are no options (nothing is
        drawn), or :data:`~prompt_engine.tui.loop.CANCELLED`.
    """
    items = build_options(options)
    if not items:
        return None

    loop, config = prepare_loop(io, config, keybindings)
    renderer = loop.renderer
    viewport = Viewport(len(items), config.window_size, config.offset_window_scroll)
    width = indicator_width(item.label for item in items)

    def render() -> None:
        viewport.resize(loop.io.terminal_rows(), config.chrome_rows)
        rows = [
            highlight("  " + item.label, index == viewport.cursor)
            for index, item in enumerate(items)
        ]
        renderer.render([PREFIX + prompt_text(label)] + viewport_lines(viewport, rows, width, config))

    redraw = redrawer(renderer, render)

    def submit() -> Answer[Any]:
        chosen = items[viewport.cursor]
        renderer.clear()
        renderer.println(show_cursor() + answer_line(label, chosen.label))
        return Answer(chosen.value)

    bindings = navigation_bindings(viewport, loop.keybindings, redraw)
    bindings.append(Binding(loop.keybindings.combos("submit"), submit))

    renderer.write(hide_cursor())
    return await loop.run(
        PromptSpec(
            label=label,
            render=render,
            clear=renderer.clear,
            bindings=bindings,
            on_exit=lambda: renderer.write(show_cursor()),
        )
    )
