"""
Yes/no confirmation prompt.

The answer is read from the first non-blank character typed: ``y`` means
yes, ``n`` means no, case-insensitive.  ``Enter`` on anything else keeps the
prompt open; on a blank line it returns the default when there is one.
"""

from __future__ import annotations

from typing import Any

from prompt_engine.config import PromptConfig
from prompt_engine.prompts.base import answer_line, prepare_loop
from prompt_engine.prompts.list_prompt import redrawer
from prompt_engine.prompts.text import TextBuffer, editing_bindings, typing_action
from prompt_engine.tui.ansi import PREFIX, cursor_back, prompt_text
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.loop import Answer, Binding, PromptSpec
from prompt_engine.tui.terminal import PromptIO


def confirm_suffix(default: bool | None) -> str:
    if default is None:
        return " [y/n]"
    return " [Y/n]" if default else " [y/N]"


def parse_confirmation(text: str, default: bool | None) -> bool | None:
    """Interpret typed *text*; ``None`` means the answer is not valid yet."""
    stripped = text.lstrip()
    if not stripped:
        return default
    first = stripped[0].lower()
    if first == "y":
        return True
    if first == "n":
        return False
    return None


def confirm_question(label: str, default: bool | None = None) -> str:
    return prompt_text(label + confirm_suffix(default))


async def confirm_prompt(
    label: str,
    default: bool | None = None,
    *,
    io: PromptIO | None = None,
    config: PromptConfig | None = None,
    keybindings: KeybindingsManager | None = None,
) -> Any:
    """
    Ask a yes/no question.

    Returns
    -------
    Any
        ``True``, ``False``, or :data:`~prompt_engine.tui.loop.CANCELLED`.
    """
    loop, config = prepare_loop(io, config, keybindings)
    renderer = loop.renderer
    buffer = TextBuffer()
    question = confirm_question(label, default)

    def render() -> None:
        renderer.render([PREFIX + question + buffer.text], suffix=cursor_back(buffer.caret_offset))

    redraw = redrawer(renderer, render)

    def submit() -> Answer[bool] | None:
        result = parse_confirmation(buffer.text, default)
        if result is None:
            return None
        renderer.clear()
        renderer.println(answer_line(label, "Yes" if result else "No"))
        return Answer(result)

    bindings = editing_bindings(buffer, loop.keybindings, redraw)
    bindings.append(Binding(loop.keybindings.combos("submit"), submit))

    return await loop.run(
        PromptSpec(
            label=label,
            render=render,
            clear=renderer.clear,
            bindings=bindings,
            default_action=typing_action(buffer, redraw),
        )
    )
