"""
Terminal capabilities consumed by the render loop.

The loop never touches stdin or stdout directly: it is handed a
:class:`PromptIO` bundle holding a key source, an output stream and an
optional terminal-height probe.  :meth:`PromptIO.default` wires these to
the real terminal; tests pass scripted key streams and ``StringIO`` sinks.
"""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import TextIO

import readchar

from prompt_engine.tui.keys import Key, parse_key

CTRL_C = "\x03"


def terminal_rows(fd: int | None = None) -> int | None:
    """
    Return the terminal height, or ``None`` when there is no terminal.

    *fd* selects the terminal to measure, stdout by default.
    """
    try:
        rows = (os.get_terminal_size() if fd is None else os.get_terminal_size(fd)).lines
    except OSError:
        return None
    return rows if rows > 0 else None


def read_raw_key() -> str:
    """
    Block until one key press is available and return its raw sequence.

    ``readchar`` switches the terminal to raw mode for the duration of the
    read.  Ctrl+C is reported as its control character instead of
    interrupting the process, so the render loop can treat it as the
    cancel chord.
    """
    try:
        return readchar.readkey()
    except KeyboardInterrupt:
        return CTRL_C


class TerminalKeySource:
    """
    Lazy, infinite stream of :class:`Key` events read from the terminal.

    Each read happens in a worker thread so the event loop is only
    suspended while awaiting the next key.
    """

    def __init__(self, reader: Callable[[], str] = read_raw_key) -> None:
        self._reader = reader

    def __aiter__(self) -> AsyncIterator[Key]:
        return self

    async def __anext__(self) -> Key:
        raw = await asyncio.to_thread(self._reader)
        return parse_key(raw.encode("utf-8"))


@dataclass
class PromptIO:
    """
    Capabilities a prompt runs against.

    Attributes
    ----------
    keys:
        Async iterator of key events.  Shared across the prompts of a form.
    output:
        Stream the prompt draws on.
    rows:
        Optional terminal-height probe consulted on every render.
    """

    keys: AsyncIterator[Key]
    output: TextIO = field(default_factory=lambda: sys.stdout)
    rows: Callable[[], int | None] | None = None

    @classmethod
    def default(cls) -> PromptIO:
        """Capabilities bound to the controlling terminal."""
        return cls(keys=TerminalKeySource(), output=sys.stdout, rows=terminal_rows)

    def terminal_rows(self) -> int | None:
        if self.rows is None:
            return None
        return self.rows()
