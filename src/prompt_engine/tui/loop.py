"""
Event-driven render loop shared by every prompt type.

A prompt describes itself with a :class:`PromptSpec`: how to draw and erase
its current state, an ordered list of :class:`Binding` objects, an optional
catch-all action for free-text input and an optional exit hook.
:class:`RenderLoop` draws the prompt once, then reads key events one at a
time and dispatches them until a handler produces an :class:`Answer`, the
user cancels, or the user forces the whole program to exit.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from prompt_engine.logging import get_logger
from prompt_engine.tui.ansi import PREFIX, highlight, prompt_text, show_cursor
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.keycombo import KeyCombo
from prompt_engine.tui.keys import Key
from prompt_engine.tui.renderer import LineRenderer
from prompt_engine.tui.terminal import PromptIO

logger = get_logger("tui.loop")

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

class _Cancelled:
    """Type of the :data:`CANCELLED` sentinel."""

    _instance: _Cancelled | None = None

    def __new__(cls) -> _Cancelled:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "CANCELLED"

    def __reduce__(self) -> str:
        return "CANCELLED"


CANCELLED = _Cancelled()
"""Returned by a prompt the user cancelled.  Compare with ``is``."""


@dataclass(frozen=True)
class Answer(Generic[T]):
    """Terminal outcome of a handler: the prompt resolves to *value*."""

    value: T


Outcome = Union[Answer[Any], None]
Handler = Callable[[], Union[Outcome, Awaitable[Outcome]]]
DefaultHandler = Callable[[Key], Union[Outcome, Awaitable[Outcome]]]
Hook = Callable[[], Any]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


# ---------------------------------------------------------------------------
# Prompt description
# ---------------------------------------------------------------------------

@dataclass
class Binding:
    """
    One or more chords and the handler they trigger.

    The handler returns ``None`` to keep the prompt running (after redrawing
    itself if its state changed) or an :class:`Answer` to resolve it.
    """

    combos: KeyCombo | Sequence[KeyCombo]
    handler: Handler

    def __post_init__(self) -> None:
        if isinstance(self.combos, KeyCombo):
            self.combos = (self.combos,)
        else:
            self.combos = tuple(self.combos)

    def matches(self, key: Key) -> bool:
        return any(combo.test(key) for combo in self.combos)


@dataclass
class PromptSpec:
    """
    Everything the render loop needs to run one prompt.

    Attributes
    ----------
    label:
        Question text, used for the cancel/exit markers.
    render:
        Draws the current state.
    clear:
        Erases exactly what the last ``render`` drew.
    bindings:
        Ordered; the first binding matching a key wins.
    default_action:
        Receives keys no binding matched.
    on_exit:
        Runs once when the prompt ends, whichever way it ends.
    """

    label: str
    render: Hook
    clear: Hook
    bindings: list[Binding] = field(default_factory=list)
    default_action: DefaultHandler | None = None
    on_exit: Hook | None = None


class _ExitHook:
    """Wraps ``on_exit`` so it runs at most once."""

    def __init__(self, hook: Hook | None) -> None:
        self._hook = hook
        self._done = hook is None

    async def __call__(self) -> None:
        if self._done:
            return
        self._done = True
        await _maybe_await(self._hook())


# ---------------------------------------------------------------------------
# Loop
# ---------------------------------------------------------------------------

class RenderLoop:
    """
    Single-threaded dispatcher for one active prompt.

    Parameters
    ----------
    io:
        Key source and output stream.  Defaults to the real terminal.
    keybindings:
        Supplies the ``cancel`` and ``exit`` chords.
    """

    def __init__(
        self,
        io: PromptIO | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self._io = io or PromptIO.default()
        self._keybindings = keybindings or KeybindingsManager()
        self._renderer = LineRenderer(self._io.output)

    @property
    def io(self) -> PromptIO:
        return self._io

    @property
    def renderer(self) -> LineRenderer:
        """Renderer bound to this loop's output, for the prompt to draw with."""
        return self._renderer

    @property
    def keybindings(self) -> KeybindingsManager:
        return self._keybindings

    async def run(self, spec: PromptSpec) -> Any:
        """
        Run *spec* until it resolves.

        Returns
        -------
        Any
            The value of the first :class:`Answer` a handler returns, or
            :data:`CANCELLED` if the user pressed the cancel chord.

        Raises
        ------
        SystemExit
            When the user presses the exit chord.
        """
        exit_hook = _ExitHook(spec.on_exit)
        await _maybe_await(spec.render())

        while True:
            key = await self._next_key()
            if key is None:
                logger.debug("Key stream ended during %r, cancelling", spec.label)
                return await self._cancel(spec, exit_hook)

            if self._keybindings.matches(key, "cancel"):
                logger.debug("Prompt %r cancelled", spec.label)
                return await self._cancel(spec, exit_hook)

            if self._keybindings.matches(key, "exit"):
                logger.debug("Prompt %r forced exit", spec.label)
                await _maybe_await(spec.clear())
                await exit_hook()
                self._renderer.println(
                    show_cursor() + PREFIX + prompt_text(spec.label) + highlight("<exit>")
                )
                sys.exit(0)

            outcome = await self._dispatch(spec, key)
            if outcome is None:
                continue
            if not isinstance(outcome, Answer):
                raise TypeError(
                    f"Prompt handlers must return None or Answer, got {type(outcome).__name__}"
                )
            await exit_hook()
            return outcome.value

    async def _dispatch(self, spec: PromptSpec, key: Key) -> Outcome:
        for index, binding in enumerate(spec.bindings):
            if binding.matches(key):
                logger.debug("Key %s handled by binding %d", key.name, index)
                return await _maybe_await(binding.handler())
        if spec.default_action is not None:
            return await _maybe_await(spec.default_action(key))
        return None

    async def _cancel(self, spec: PromptSpec, exit_hook: _ExitHook) -> _Cancelled:
        await _maybe_await(spec.clear())
        await exit_hook()
        self._renderer.println(
            show_cursor() + PREFIX + prompt_text(spec.label) + highlight("<cancel>")
        )
        return CANCELLED

    async def _next_key(self) -> Key | None:
        try:
            return await self._io.keys.__anext__()
        except StopAsyncIteration:
            return None
