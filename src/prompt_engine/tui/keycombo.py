"""
Modifier + key chords.

A :class:`KeyCombo` is the canonical form of a chord such as ``Ctrl+S`` or
``Shift+Tab``.  Chords are parsed from human-readable strings, lifted from
raw :class:`~prompt_engine.tui.keys.Key` events, and tested against events
through an alias table so that display names (``Enter``, ``ArrowUp``) match
the identifiers the key parser emits (``enter``, ``up``) and vice versa.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from prompt_engine.tui.keys import Key

# ---------------------------------------------------------------------------
# Alias table
# ---------------------------------------------------------------------------

_ALIAS_GROUPS: list[tuple[str, ...]] = [
    ("Escape", "Esc"),
    (" ", "Space"),
    ("ArrowLeft", "Left"),
    ("ArrowRight", "Right"),
    ("ArrowUp", "Up"),
    ("ArrowDown", "Down"),
    ("Enter", "Return"),
    ("Add", "Plus", "+"),
    ("Subtract", "Minus", "-"),
    ("Multiply", "Times", "*"),
    ("Divide", "Div", "/"),
    ("Decimal", "."),
    ("Separator", ","),
    ("PageUp", "page_up", "PgUp"),
    ("PageDown", "page_down", "PgDn"),
    ("Delete", "Del"),
    ("Backspace", "BS"),
]


def _build_alias_map(groups: list[tuple[str, ...]]) -> dict[str, frozenset[str]]:
    aliases: dict[str, set[str]] = {}
    for group in groups:
        lowered = {name.lower() for name in group}
        for name in lowered:
            aliases.setdefault(name, set()).update(lowered)
    return {name: frozenset(members) for name, members in aliases.items()}


KEY_ALIASES: dict[str, frozenset[str]] = _build_alias_map(_ALIAS_GROUPS)

_SEPARATOR = re.compile(r"\s*\++\s*")

_META_NAMES = frozenset({"meta", "super", "win", "command"})
_ALT_NAMES = frozenset({"alt", "option"})


def _canonical(key: str) -> str:
    """Return a stable representative of *key*'s alias group."""
    lowered = key.lower()
    group = KEY_ALIASES.get(lowered)
    if group is None:
        return lowered
    return min(group)


class UnsupportedModifierError(ValueError):
    """Raised when a chord asks for a modifier terminals cannot report."""


class KeyCombo:
    """
    A combination of modifier keys and maybe a normal key.

    Parameters
    ----------
    ctrl, shift, meta:
        Whether the modifier must be present (``True``) or absent.
    alt:
        Alt/Option is not supported; passing ``True`` raises
        :class:`UnsupportedModifierError`.
    key:
        Key name that must be pressed.  An empty string accepts any key.

    Two combos are equal when their modifiers match and their key names are
    the same under the alias table, ignoring case.
    """

    __slots__ = ("_ctrl", "_shift", "_alt", "_meta", "_key")

    def __init__(
        self,
        *,
        ctrl: bool = False,
        shift: bool = False,
        alt: bool = False,
        meta: bool = False,
        key: str = "",
    ) -> None:
        if alt:
            raise UnsupportedModifierError("The Alt/Option key is not supported!")
        self._ctrl = bool(ctrl)
        self._shift = bool(shift)
        self._alt = False
        self._meta = bool(meta)
        self._key = key or ""

    # ------------------------------------------------------------------
    # Read-only attributes
    # ------------------------------------------------------------------

    @property
    def ctrl(self) -> bool:
        return self._ctrl

    @property
    def shift(self) -> bool:
        return self._shift

    @property
    def alt(self) -> bool:
        return self._alt

    @property
    def meta(self) -> bool:
        return self._meta

    @property
    def key(self) -> str:
        return self._key

    @property
    def option(self) -> bool:
        return self._alt

    @property
    def command(self) -> bool:
        return self._meta

    @property
    def win(self) -> bool:
        return self._meta

    @property
    def super_(self) -> bool:
        return self._meta

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> KeyCombo:
        """
        Parse a key combination from a string.

        Parts are separated by ``+``.  Modifier keys are ``Ctrl``, ``Shift``,
        ``Alt`` (``Option``) and the meta key, written as ``Meta``,
        ``Super``, ``Win`` or ``Command``.  Any other part is the key.  When
        several keys are given only the last one is kept.

        >>> KeyCombo.parse("Ctrl+Shift+Esc").key
        'Esc'

        Raises
        ------
        UnsupportedModifierError
            If the string asks for ``Alt`` or ``Option``.
        """
        ctrl = shift = alt = meta = False
        key = ""

        for part in _SEPARATOR.split(text.strip()):
            if not part:
                continue
            lower_part = part.lower()
            if lower_part == "ctrl":
                ctrl = True
            elif lower_part == "shift":
                shift = True
            elif lower_part in _ALT_NAMES:
                alt = True
            elif lower_part in _META_NAMES:
                meta = True
            else:
                key = part

        return cls(ctrl=ctrl, shift=shift, alt=alt, meta=meta, key=key)

    @classmethod
    def from_key(cls, key: Key) -> KeyCombo:
        """Create a combo that mirrors a raw key event."""
        return cls(ctrl=key.ctrl, shift=key.shift, meta=key.meta, key=key.name)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def test(self, key: Key) -> bool:
        """
        Test this combination against a key event.

        The modifiers must match exactly.  The key matches when this combo
        has no key, when the names are equal ignoring case, or when the
        event's name is an alias of this combo's key.
        """
        if (
            self._ctrl != key.ctrl
            or self._shift != key.shift
            or self._meta != key.meta
        ):
            return False
        if not self._key:
            return True
        wanted = self._key.lower()
        actual = key.name.lower()
        if wanted == actual:
            return True
        return actual in KEY_ALIASES.get(wanted, ())

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def string_parts_windows(self) -> list[str]:
        """Get the string parts for a Windows system of this key combo."""
        return self._parts("Win", "Alt")

    def to_string_windows(self) -> str:
        return "+".join(self.string_parts_windows())

    def string_parts_linux(self) -> list[str]:
        """Get the string parts for a Linux / Unix system of this key combo."""
        return self._parts("Super", "Alt")

    def to_string_linux(self) -> str:
        return "+".join(self.string_parts_linux())

    def string_parts_mac(self) -> list[str]:
        """Get the string parts for a macOS system of this key combo."""
        return self._parts("Command", "Option")

    def to_string_mac(self) -> str:
        return "+".join(self.string_parts_mac())

    def string_parts(self) -> list[str]:
        """Get the string parts for the platform we are running on."""
        if sys.platform.startswith("win"):
            return self.string_parts_windows()
        if sys.platform.startswith("linux"):
            return self.string_parts_linux()
        return self.string_parts_mac()

    def _parts(self, meta_name: str, alt_name: str) -> list[str]:
        parts: list[str] = []
        if self._ctrl:
            parts.append("Ctrl")
        if self._meta:
            parts.append(meta_name)
        if self._shift:
            parts.append("Shift")
        if self._alt:
            parts.append(alt_name)
        if self._key:
            parts.append(self._key)
        return parts

    def to_dict(self) -> dict[str, Any]:
        return {
            "ctrl": self._ctrl,
            "shift": self._shift,
            "alt": self._alt,
            "meta": self._meta,
            "key": self._key,
        }

    def __str__(self) -> str:
        return "+".join(self.string_parts())

    def __repr__(self) -> str:
        return f"KeyCombo.parse({self.to_string_linux()!r})"

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def _identity(self) -> tuple[bool, bool, bool, str]:
        return (self._ctrl, self._shift, self._meta, _canonical(self._key))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyCombo):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())
