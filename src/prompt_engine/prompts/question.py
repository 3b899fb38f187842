"""
Single entry point dispatching on the prompt type.
"""

from __future__ import annotations

from typing import Any

from prompt_engine.prompts.base import UnknownPromptTypeError
from prompt_engine.prompts.checkbox_prompt import checkbox_prompt
from prompt_engine.prompts.confirm_prompt import confirm_prompt
from prompt_engine.prompts.input_prompt import input_prompt, password_prompt
from prompt_engine.prompts.list_prompt import list_prompt

PROMPT_TYPES = {
    "list": list_prompt,
    "checkbox": checkbox_prompt,
    "confirm": confirm_prompt,
    "input": input_prompt,
    "password": password_prompt,
}


async def question(prompt_type: str, label: str, *args: Any, **kwargs: Any) -> Any:
    """
    Run one prompt of *prompt_type*.

    ============  =========================================  ==================
    type          extra positional argument                  answer
    ============  =========================================  ==================
    ``list``      options (labels or label -> value)         one value
    ``checkbox``  options (labels, label -> value or spec)   list of values
    ``confirm``   default (``None``, ``True``, ``False``)    ``bool``
    ``input``     default text                               ``str``
    ``password``  substitute (``True``, pattern, ``False``)  ``str``
    ============  =========================================  ==================

    Keyword arguments (``io``, ``config``, ``keybindings``) are passed
    through.  Every prompt returns
    :data:`~prompt_engine.tui.loop.CANCELLED` when cancelled.

    Example::

        flavour = await question("list", "Flavour?", ["vanilla", "chocolate"])

    Raises
    ------
    UnknownPromptTypeError
        If *prompt_type* is not one of the types above.
    """
    prompt = PROMPT_TYPES.get(prompt_type)
    if prompt is None:
        raise UnknownPromptTypeError(f"Unsupported type: {prompt_type}")
    return await prompt(label, *args, **kwargs)
