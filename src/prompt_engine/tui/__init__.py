"""
Terminal core of the prompt engine.

Key parsing and chord matching, keybinding management, the inline line
renderer, the scrolling viewport and the render loop that ties them
together.
"""
from __future__ import annotations

from prompt_engine.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from prompt_engine.tui.keycombo import KeyCombo, UnsupportedModifierError
from prompt_engine.tui.keys import Key, parse_key
from prompt_engine.tui.loop import CANCELLED, Answer, Binding, PromptSpec, RenderLoop
from prompt_engine.tui.renderer import LineRenderer
from prompt_engine.tui.terminal import PromptIO, TerminalKeySource, terminal_rows
from prompt_engine.tui.viewport import Viewport, indicator_width

__all__ = [
    # Keys
    "Key",
    "parse_key",
    "KeyCombo",
    "UnsupportedModifierError",
    # Keybindings
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
    # Loop
    "RenderLoop",
    "PromptSpec",
    "Binding",
    "Answer",
    "CANCELLED",
    # Rendering
    "LineRenderer",
    "Viewport",
    "indicator_width",
    # Terminal
    "PromptIO",
    "TerminalKeySource",
    "terminal_rows",
]
