"""
Prompt Engine - interactive terminal questions for Python programs.

Renders one question at a time (list, checkbox, free text, password,
confirmation) inline in the terminal, reads raw key presses and resolves
to the user's answer or to ``CANCELLED``.

Example:
    import asyncio

    from prompt_engine import CANCELLED, question

    async def main():
        toppings = await question("checkbox", "Toppings?", {
            "Cheese": {"value": "cheese", "selected": True},
            "Crackers": {"value": "crackers", "requires": "Cheese"},
            "Olives": "olives",
        })
        if toppings is CANCELLED:
            return
        print(toppings)

    asyncio.run(main())
"""

from prompt_engine.config import PromptConfig, load_config
from prompt_engine.logging import get_logger, setup_logging
from prompt_engine.prompts import (
    Option,
    SelectionGraph,
    UnknownPromptTypeError,
    build_options,
    checkbox_prompt,
    confirm_prompt,
    form,
    input_prompt,
    list_prompt,
    password_prompt,
    question,
)
from prompt_engine.tui import (
    CANCELLED,
    Answer,
    Binding,
    Key,
    KeybindingsManager,
    KeyCombo,
    PromptIO,
    PromptSpec,
    RenderLoop,
    UnsupportedModifierError,
    Viewport,
)

__version__ = "0.1.0"

__all__ = [
    # Prompts
    "question",
    "list_prompt",
    "checkbox_prompt",
    "input_prompt",
    "password_prompt",
    "confirm_prompt",
    "form",
    "CANCELLED",
    # Selection
    "Option",
    "SelectionGraph",
    "build_options",
    # Core
    "RenderLoop",
    "PromptSpec",
    "Binding",
    "Answer",
    "PromptIO",
    "Key",
    "KeyCombo",
    "KeybindingsManager",
    "Viewport",
    # Config
    "PromptConfig",
    "load_config",
    # Errors
    "UnknownPromptTypeError",
    "UnsupportedModifierError",
    # Logging
    "setup_logging",
    "get_logger",
]
