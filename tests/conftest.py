"""Shared pytest fixtures for prompt-engine tests."""

import logging
from collections.abc import Callable, Iterable
from io import StringIO

import pytest

from prompt_engine.config import PromptConfig
from prompt_engine.tui.keys import Key
from prompt_engine.tui.terminal import PromptIO


class ScriptedKeys:
    """Finite async key stream that records how many keys were consumed."""

    def __init__(self, keys: Iterable[Key]) -> None:
        self._keys = list(keys)
        self.consumed = 0

    def __aiter__(self) -> "ScriptedKeys":
        return self

    async def __anext__(self) -> Key:
        if self.consumed >= len(self._keys):
            raise StopAsyncIteration
        key = self._keys[self.consumed]
        self.consumed += 1
        return key


def _flatten(items: Iterable[Key | Iterable[Key]]) -> list[Key]:
    keys: list[Key] = []
    for item in items:
        if isinstance(item, Key):
            keys.append(item)
        else:
            keys.extend(_flatten(item))
    return keys


@pytest.fixture
def make_io() -> Callable[..., PromptIO]:
    """Build a PromptIO that replays the given keys and captures output."""

    def factory(*keys: Key | Iterable[Key], rows: int | None = None) -> PromptIO:
        return PromptIO(
            keys=ScriptedKeys(_flatten(keys)),
            output=StringIO(),
            rows=(lambda: rows) if rows is not None else None,
        )

    return factory


@pytest.fixture
def config() -> PromptConfig:
    """Default configuration independent of the environment."""
    return PromptConfig(window_size=7)


@pytest.fixture(autouse=True)
def _no_window_size_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PROMPT_ENGINE_WINDOW_SIZE from leaking into tests."""
    monkeypatch.delenv("PROMPT_ENGINE_WINDOW_SIZE", raising=False)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handler and level changes made by setup_logging()."""
    root = logging.getLogger("prompt_engine")
    handlers, level, disabled = list(root.handlers), root.level, root.disabled
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    root.disabled = disabled
