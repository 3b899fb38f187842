"""
Multi-choice checkbox prompt.

Controls:

- ``Up`` / ``Down`` / ``Home`` / ``End`` / ``PageUp`` / ``PageDown`` move
  the cursor.
- ``Space`` marks or unmarks the option under the cursor.  Marking an
  option marks the options it requires; unmarking one unmarks the options
  that require it.
- ``Enter`` returns the values of the marked options, in the order they
  were marked.
- ``Ctrl+C`` cancels, ``Ctrl+D`` exits the program.
"""

from __future__ import annotations

from typing import Any

from prompt_engine.config import PromptConfig
from prompt_engine.prompts.base import prepare_loop
from prompt_engine.prompts.list_prompt import navigation_bindings, redrawer, viewport_lines
from prompt_engine.prompts.selection import OptionsSource, SelectionGraph, build_options
from prompt_engine.tui.ansi import (
    PREFIX,
    PRIMARY_COLOR,
    RESET,
    highlight,
    hide_cursor,
    prompt_text,
    show_cursor,
)
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.loop import Answer, Binding, PromptSpec
from prompt_engine.tui.terminal import PromptIO
from prompt_engine.tui.viewport import Viewport, indicator_width

CHECKED = "☒"
UNCHECKED = "☐"


async def checkbox_prompt(
    label: str,
    options: OptionsSource,
    *,
    io: PromptIO | None = None,
    config: PromptConfig | None = None,
    keybindings: KeybindingsManager | None = None,
) -> Any:
    """
    Ask the user to mark any number of options.

    Parameters
    ----------
    label:
        The question.
    options:
        Labels, a mapping of label to value, or a mapping of label to
        ``{"value", "selected", "requires"}`` (see
        :func:`~prompt_engine.prompts.selection.build_options`).

    Returns
    -------
    Any
        The list of marked values, ``[]`` when there are no options (nothing
        is drawn), or :data:`~prompt_engine.tui.loop.CANCELLED`.
    """
    items = build_options(options)
    if not items:
        return []

    loop, config = prepare_loop(io, config, keybindings)
    renderer = loop.renderer
    graph = SelectionGraph(items)
    viewport = Viewport(len(items), config.window_size, config.offset_window_scroll)
    width = indicator_width(item.label for item in items)

    def row(index: int) -> str:
        current = PRIMARY_COLOR + ">" if index == viewport.cursor else " "
        box = CHECKED if graph.is_selected(index) else UNCHECKED
        return f"{current} {box} {items[index].label}{RESET}"

    def render() -> None:
        viewport.resize(loop.io.terminal_rows(), config.chrome_rows)
        rows = [row(index) for index in range(len(items))]
        renderer.render([PREFIX + prompt_text(label)] + viewport_lines(viewport, rows, width, config))

    redraw = redrawer(renderer, render)

    def toggle() -> None:
        graph.toggle(viewport.cursor)
        redraw(True)

    def submit() -> Answer[list[Any]]:
        renderer.clear()
        labels = graph.labels()
        text = (
            highlight("<empty>")
            if not labels
            else ", ".join(highlight(item) for item in labels)
        )
        renderer.println(show_cursor() + PREFIX + prompt_text(label) + text)
        return Answer(graph.values())

    bindings = navigation_bindings(viewport, loop.keybindings, redraw)
    bindings.append(Binding(loop.keybindings.combos("toggle"), toggle))
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
