"""
Forms: several text-style questions asked one after another.

Every question still to come is drawn below the current one, so the user
sees the whole form from the start.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TextIO

from prompt_engine.config import PromptConfig
from prompt_engine.prompts.base import UnknownPromptTypeError
from prompt_engine.prompts.confirm_prompt import confirm_prompt, confirm_question
from prompt_engine.prompts.input_prompt import input_prompt, input_question, password_prompt
from prompt_engine.tui.ansi import PREFIX, clear_line, cursor_down, cursor_up, prompt_text
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.loop import CANCELLED
from prompt_engine.tui.terminal import PromptIO

FORM_PROMPTS = {
    "confirm": confirm_prompt,
    "input": input_prompt,
    "password": password_prompt,
}

# Question line of each type, as its prompt first draws it
FORM_QUESTIONS: dict[str, Callable[..., str]] = {
    "confirm": confirm_question,
    "input": input_question,
    "password": lambda label, *_params: prompt_text(label),
}


def _preview(output: TextIO, lines: list[str]) -> None:
    """Draw *lines* and put the cursor back at the start of the first one."""
    output.write("\n".join(clear_line() + line for line in lines))
    output.write("\r" + cursor_up(len(lines) - 1))
    output.flush()


async def form(
    elements: Mapping[str, Sequence[Any]],
    *,
    io: PromptIO | None = None,
    config: PromptConfig | None = None,
    keybindings: KeybindingsManager | None = None,
) -> Any:
    """
    Ask every element of *elements* in order.

    Each element maps a result name to ``(type, label, *params)`` where
    type is ``"confirm"``, ``"input"`` or ``"password"`` and params are
    the prompt's positional arguments::

        await form({
            "username": ("input", "Username:", "admin"),
            "password": ("password", "Password:"),
            "remember": ("confirm", "Remember password?", False),
        })

    Every type is checked before anything is drawn.  The questions still
    to come stay visible below the one being asked.

    Returns
    -------
    Any
        A dict of answers keyed by element name, or
        :data:`~prompt_engine.tui.loop.CANCELLED` as soon as one prompt is
        cancelled.

    Raises
    ------
    UnknownPromptTypeError
        If an element has an unsupported type.
    """
    for name, (prompt_type, *_rest) in elements.items():
        if prompt_type not in FORM_PROMPTS:
            raise UnknownPromptTypeError(f"The type {prompt_type!r} of {name!r} is not a valid type")

    io = io or PromptIO.default()
    config = config or PromptConfig()
    if keybindings is None:
        keybindings = config.build_keybindings()

    entries = list(elements.items())
    lines = [PREFIX + FORM_QUESTIONS[prompt_type](*params) for _name, (prompt_type, *params) in entries]

    results: dict[str, Any] = {}
    for index, (name, (prompt_type, label, *params)) in enumerate(entries):
        _preview(io.output, lines[index:])
        prompt = FORM_PROMPTS[prompt_type]
        result = await prompt(label, *params, io=io, config=config, keybindings=keybindings)
        if result is CANCELLED:
            # the cancel marker ends on the first preview line still drawn
            remaining = len(entries) - index - 1
            if remaining:
                io.output.write(cursor_down(remaining - 1) + "\n")
                io.output.flush()
            return CANCELLED
        results[name] = result
    return results
