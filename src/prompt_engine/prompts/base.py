"""Setup shared by the prompt implementations."""

from __future__ import annotations

from prompt_engine.config import PromptConfig
from prompt_engine.tui.ansi import PREFIX, highlight, prompt_text
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.loop import RenderLoop
from prompt_engine.tui.terminal import PromptIO


class UnknownPromptTypeError(ValueError):
    """Raised when a prompt type tag is not recognised."""


def prepare_loop(
    io: PromptIO | None,
    config: PromptConfig | None,
    keybindings: KeybindingsManager | None,
) -> tuple[RenderLoop, PromptConfig]:
    """Resolve defaults and build the render loop for one prompt."""
    config = config or PromptConfig()
    if keybindings is None:
        keybindings = config.build_keybindings()
    return RenderLoop(io, keybindings), config


def answer_line(label: str, text: str) -> str:
    """The line left on screen once a prompt has been answered."""
    return PREFIX + prompt_text(label) + highlight(text)
