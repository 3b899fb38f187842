"""
Single-line text editing shared by the input, password and confirm prompts.
"""

from __future__ import annotations

from collections.abc import Callable

from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.keys import Key
from prompt_engine.tui.loop import Binding, DefaultHandler


class TextBuffer:
    """Editable text with a caret position in ``[0, len(text)]``."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.cursor = len(text)

    def insert(self, chars: str) -> bool:
        if not chars:
            return False
        self.text = self.text[: self.cursor] + chars + self.text[self.cursor :]
        self.cursor += len(chars)
        return True

    def left(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def right(self) -> bool:
        if self.cursor == len(self.text):
            return False
        self.cursor += 1
        return True

    def home(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor = 0
        return True

    def end(self) -> bool:
        if self.cursor == len(self.text):
            return False
        self.cursor = len(self.text)
        return True

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        if self.cursor == len(self.text):
            return False
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        return True

    @property
    def caret_offset(self) -> int:
        """Columns between the end of the text and the caret."""
        return len(self.text) - self.cursor


def accepts_text(key: Key) -> bool:
    """Whether *key* types text rather than being a chord or a bare control key."""
    return not key.ctrl and not key.meta and key.code is not None and bool(key.char)


def editing_bindings(
    buffer: TextBuffer,
    keybindings: KeybindingsManager,
    redraw: Callable[[bool], None],
) -> list[Binding]:
    """Caret movement and deletion bindings for *buffer*."""

    def edit(operation: Callable[[], bool]) -> Callable[[], None]:
        return lambda: redraw(operation())

    return [
        Binding(keybindings.combos("left"), edit(buffer.left)),
        Binding(keybindings.combos("right"), edit(buffer.right)),
        Binding(keybindings.combos("up", "home"), edit(buffer.home)),
        Binding(keybindings.combos("down", "end"), edit(buffer.end)),
        Binding(keybindings.combos("backspace"), edit(buffer.backspace)),
        Binding(keybindings.combos("delete"), edit(buffer.delete)),
    ]


def typing_action(buffer: TextBuffer, redraw: Callable[[bool], None]) -> DefaultHandler:
    """Default action inserting printable keys into *buffer*."""

    def on_key(key: Key) -> None:
        if accepts_text(key):
            redraw(buffer.insert(key.char))

    return on_key
