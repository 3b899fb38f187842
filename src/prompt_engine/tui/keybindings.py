"""
Named prompt actions and the chords that trigger them.

Prompts never hard-code keys: they ask the manager for the chords of an
action (``"submit"``, ``"toggle"``...) and build their bindings from those.
User overrides replace the chords of whole actions and come from a JSON
file or from the ``keybindings`` section of the YAML configuration.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from prompt_engine.logging import get_logger
from prompt_engine.tui.keycombo import KeyCombo
from prompt_engine.tui.keys import Key

logger = get_logger("tui.keybindings")

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    # Handled by the render loop itself
    "cancel": ["ctrl+c"],
    "exit": ["ctrl+d"],
    # Movement
    "up": ["up"],
    "down": ["down"],
    "left": ["left"],
    "right": ["right"],
    "home": ["home"],
    "end": ["end"],
    "page_up": ["page_up"],
    "page_down": ["page_down"],
    # Editing and answering
    "toggle": ["space"],
    "submit": ["enter"],
    "backspace": ["backspace"],
    "delete": ["delete"],
}

DEFAULT_KEYBINDINGS_PATH = Path.home() / ".config" / "prompt-engine" / "keybindings.json"


def _valid_overrides(raw: Any) -> dict[str, list[str]]:
    """Keep the entries of *raw* that map an action to a list of strings."""
    if not isinstance(raw, Mapping):
        logger.warning("Keybindings must be a mapping of action to chords, got %s", type(raw).__name__)
        return {}
    overrides: dict[str, list[str]] = {}
    for action, descriptors in raw.items():
        if isinstance(descriptors, list) and all(isinstance(d, str) for d in descriptors):
            overrides[str(action)] = descriptors
        else:
            logger.warning("Ignoring keybinding %r: expected a list of strings", action)
    return overrides


def _parse_descriptor(action: str, descriptor: str) -> KeyCombo:
    combo = KeyCombo.parse(descriptor)
    if not (combo.key or combo.ctrl or combo.shift or combo.meta):
        # an empty chord would match every unmodified key
        raise ValueError(f"Keybinding {descriptor!r} for {action!r} names no key")
    return combo


class KeybindingsManager:
    """
    Action -> chord table.

    Every descriptor is parsed up front, so a chord asking for Alt fails
    here with :class:`~prompt_engine.tui.keycombo.UnsupportedModifierError`
    instead of halfway through a prompt.

    A descriptor naming neither a key nor a modifier raises ``ValueError``.

    Parameters
    ----------
    user_overrides:
        Action -> descriptor list.  An overridden action loses its default
        chords; the other actions keep theirs.
    """

    def __init__(self, user_overrides: Mapping[str, list[str]] | None = None) -> None:
        self._descriptors: dict[str, list[str]] = {**DEFAULT_KEYBINDINGS, **(user_overrides or {})}
        self._combos: dict[str, list[KeyCombo]] = {
            action: [_parse_descriptor(action, d) for d in descriptors]
            for action, descriptors in self._descriptors.items()
        }

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> KeybindingsManager:
        """
        Build a manager from a JSON override file.

        *config_path* defaults to ``~/.config/prompt-engine/keybindings.json``.
        A missing or unreadable file leaves the defaults in place::

            {"cancel": ["ctrl+c", "escape"], "toggle": ["space", "x"]}
        """
        path = Path(config_path) if config_path is not None else DEFAULT_KEYBINDINGS_PATH
        if not path.is_file():
            return cls()

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable keybindings file %s: %s", path, exc)
            return cls()

        logger.debug("Loaded keybindings from %s", path)
        return cls(user_overrides=_valid_overrides(raw))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def combos(self, *actions: str) -> list[KeyCombo]:
        """Chords of *actions*, concatenated in order."""
        return [combo for action in actions for combo in self._combos.get(action, [])]

    def matches(self, key: Key | str, action: str) -> bool:
        """
        Whether *key* triggers *action*.

        *key* is a key event, tested with :meth:`KeyCombo.test`, or a chord
        string such as ``"ctrl+c"``, compared by chord equality.
        """
        combos = self._combos.get(action, [])
        if isinstance(key, str):
            return KeyCombo.parse(key) in combos
        return any(combo.test(key) for combo in combos)

    def find_action(self, key: Key | str) -> str | None:
        """First action, in table order, that *key* triggers."""
        return next((action for action in self._combos if self.matches(key, action)), None)

    def get_keys(self, action: str) -> list[str]:
        """The descriptor strings of *action*, as written."""
        return list(self._descriptors.get(action, []))

    def actions(self) -> list[str]:
        return list(self._descriptors)
