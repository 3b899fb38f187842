"""
Prompt types built on the render loop.

Every prompt is a coroutine returning the user's answer or
:data:`~prompt_engine.tui.loop.CANCELLED`.
"""
from __future__ import annotations

from prompt_engine.prompts.base import UnknownPromptTypeError
from prompt_engine.prompts.checkbox_prompt import checkbox_prompt
from prompt_engine.prompts.confirm_prompt import confirm_prompt
from prompt_engine.prompts.form import form
from prompt_engine.prompts.input_prompt import input_prompt, password_prompt
from prompt_engine.prompts.list_prompt import list_prompt
from prompt_engine.prompts.question import PROMPT_TYPES, question
from prompt_engine.prompts.selection import Option, SelectionGraph, build_options

__all__ = [
    # Dispatch
    "question",
    "PROMPT_TYPES",
    "UnknownPromptTypeError",
    # Prompts
    "list_prompt",
    "checkbox_prompt",
    "input_prompt",
    "password_prompt",
    "confirm_prompt",
    "form",
    # Selection
    "Option",
    "SelectionGraph",
    "build_options",
]
