"""
Free-text prompts: plain input and masked password input.

Controls:

- Printable keys insert at the caret.
- ``Left`` / ``Right`` move the caret, ``Up`` / ``Home`` jump to the start,
  ``Down`` / ``End`` jump to the end.
- ``Backspace`` / ``Delete`` remove the character before / after the caret.
- ``Enter`` returns the text.
- ``Ctrl+C`` cancels, ``Ctrl+D`` exits the program.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from prompt_engine.config import PromptConfig
from prompt_engine.prompts.base import answer_line, prepare_loop
from prompt_engine.prompts.list_prompt import redrawer
from prompt_engine.prompts.text import TextBuffer, editing_bindings, typing_action
from prompt_engine.tui.ansi import PREFIX, cursor_back, prompt_text
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.loop import Answer, Binding, PromptSpec
from prompt_engine.tui.terminal import PromptIO
from prompt_engine.tui.viewport import fit_pattern

DEFAULT_MASK = "*"


def mask_text(text: str, substitute: bool | str) -> str:
    """
    Mask *text* for display.

    ``True`` shows one ``*`` per character, a string is repeated to the
    length of the text, ``False`` shows nothing.
    """
    if substitute is False:
        return ""
    pattern = DEFAULT_MASK if substitute is True else substitute
    return fit_pattern(pattern, len(text))


def input_question(label: str, default: str | None = None) -> str:
    """Question text of an input prompt, with the default in brackets."""
    return prompt_text(label) + (f"[{default}] " if isinstance(default, str) else "")


async def _text_prompt(
    label: str,
    question: str,
    display: Callable[[str], str],
    finish: Callable[[str], tuple[Any, str]],
    io: PromptIO | None,
    config: PromptConfig | None,
    keybindings: KeybindingsManager | None,
) -> Any:
    loop, config = prepare_loop(io, config, keybindings)
    renderer = loop.renderer
    buffer = TextBuffer()

    def render() -> None:
        shown = display(buffer.text)
        # the caret can only be placed when every character is echoed
        back = buffer.caret_offset if len(shown) == len(buffer.text) else 0
        renderer.render([PREFIX + question + shown], suffix=cursor_back(back))

    redraw = redrawer(renderer, render)

    def submit() -> Answer[Any]:
        result, shown = finish(buffer.text)
        renderer.clear()
        renderer.println(answer_line(label, shown))
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


async def input_prompt(
    label: str,
    default: str | None = None,
    *,
    io: PromptIO | None = None,
    config: PromptConfig | None = None,
    keybindings: KeybindingsManager | None = None,
) -> Any:
    """
    Ask for a line of text.

    Surrounding whitespace is trimmed.  A blank answer returns *default*
    when one is given, which is shown in brackets after the question.

    Returns
    -------
    Any
        The text, or :data:`~prompt_engine.tui.loop.CANCELLED`.
    """
    question = input_question(label, default)

    def finish(text: str) -> tuple[str, str]:
        trimmed = text.strip()
        result = trimmed if trimmed or default is None else default
        return result, result or "<empty>"

    return await _text_prompt(label, question, lambda text: text, finish, io, config, keybindings)


async def password_prompt(
    label: str,
    substitute: bool | str = True,
    *,
    io: PromptIO | None = None,
    config: PromptConfig | None = None,
    keybindings: KeybindingsManager | None = None,
) -> Any:
    """
    Ask for a secret.

    The text is returned untrimmed and only ever displayed masked (see
    :func:`mask_text`).

    Returns
    -------
    Any
        The text, or :data:`~prompt_engine.tui.loop.CANCELLED`.
    """

    def finish(text: str) -> tuple[str, str]:
        if not text:
            return text, "<empty>"
        return text, mask_text(text, substitute) or "<hidden>"

    return await _text_prompt(
        label,
        prompt_text(label),
        lambda text: mask_text(text, substitute),
        finish,
        io,
        config,
        keybindings,
    )
