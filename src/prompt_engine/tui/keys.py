"""
Key parsing for terminal input.

Turns the raw byte sequence of one key press into a :class:`Key` event.
Chords keep the base key in ``name`` and report modifiers as flags, so
``Ctrl+C`` is ``Key(name="c", ctrl=True)`` and ``Meta+Up`` is
``Key(name="up", meta=True)``; the render loop matches these against
:class:`~prompt_engine.tui.keycombo.KeyCombo` chords.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Raw key identifier: a symbolic name for special keys (``'enter'``,
        ``'up'``, ``'page_down'``, ``'f5'``) or the character itself.
    char:
        Printable text the key produces, empty for navigation keys and chords.
    ctrl, meta, shift:
        Modifier flags.  Shift is only known for upper-case letters and
        xterm-encoded sequences.
    code:
        Code point of the text the key inserts, ``None`` when the key
        produces no consumable input.
    """

    name: str
    char: str = ""
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    code: int | None = None


KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_INSERT = Key(name="insert")
KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")
KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="page_up")
KEY_PAGE_DOWN = Key(name="page_down")
KEY_SPACE = Key(name="space", char=" ", code=ord(" "))
KEY_UNKNOWN = Key(name="unknown")

FUNCTION_KEYS: dict[int, Key] = {n: Key(name=f"f{n}") for n in range(1, 13)}
KEY_F1 = FUNCTION_KEYS[1]
KEY_F5 = FUNCTION_KEYS[5]


def printable(ch: str) -> Key:
    """Event for typing the single character *ch*."""
    if ch == " ":
        return KEY_SPACE
    return Key(name=ch, char=ch, shift=ch.isupper(), code=ord(ch))


def ctrl(letter: str) -> Key:
    """Event for ``Ctrl+<letter>``."""
    return Key(name=letter, ctrl=True)


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# Final bytes shared by CSI (ESC [) and SS3 (ESC O) sequences
_FINAL_BYTE: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
}

_SS3_ONLY: dict[str, Key] = {
    "P": FUNCTION_KEYS[1],
    "Q": FUNCTION_KEYS[2],
    "R": FUNCTION_KEYS[3],
    "S": FUNCTION_KEYS[4],
}

# Tilde codes of F1-F12 (16 and 22 are unused)
_F_KEY_CODES = (11, 12, 13, 14, 15, 17, 18, 19, 20, 21, 23, 24)

# CSI <number> ~
_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    2: KEY_INSERT,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    7: KEY_HOME,
    8: KEY_END,
    **{code: FUNCTION_KEYS[n] for n, code in enumerate(_F_KEY_CODES, start=1)},
}

_CTRL_SYMBOLS: dict[int, str] = {0x1C: "\\", 0x1D: "]", 0x1E: "^", 0x1F: "_"}


def _with_modifiers(base: Key, modifier: int) -> Key:
    """
    Apply an xterm modifier parameter to *base*.

    The parameter is ``1 + shift + 2*alt + 4*ctrl + 8*meta``.  Terminals
    use the Alt and Meta bits interchangeably, so both set ``meta``.
    """
    bits = modifier - 1
    return replace(
        base,
        shift=bool(bits & 1),
        meta=bool(bits & 2 or bits & 8),
        ctrl=bool(bits & 4),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_key(data: bytes) -> Key:
    """
    Parse the raw bytes of one key press.

    Handles printable UTF-8 characters, control bytes (Enter, Tab,
    Backspace, Ctrl+letter), ESC-prefixed Meta chords and CSI/SS3
    navigation sequences with xterm modifier parameters.  Anything else
    is ``Key(name="unknown")``.
    """
    if not data:
        return KEY_UNKNOWN
    if data[0] == 0x1B:
        return _parse_escape(data[1:])
    if data[0] < 0x20 or data[0] == 0x7F:
        return _parse_control(data[0])
    return _parse_text(data)


def _parse_text(data: bytes) -> Key:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN
    if len(text) == 1 and text.isprintable():
        return printable(text)
    return KEY_UNKNOWN


def _parse_control(byte: int) -> Key:
    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if byte == 0x00:
        return Key(name="space", ctrl=True)
    if byte <= 26:
        return ctrl(chr(byte + 96))
    if byte in _CTRL_SYMBOLS:
        return ctrl(_CTRL_SYMBOLS[byte])
    return KEY_UNKNOWN


def _parse_escape(rest: bytes) -> Key:
    """Parse what follows an ESC byte."""
    if not rest:
        return KEY_ESCAPE
    if rest[:1] == b"[":
        return _parse_csi(rest[1:])
    if rest[:1] == b"O" and len(rest) == 2:
        final = chr(rest[1])
        return _FINAL_BYTE.get(final) or _SS3_ONLY.get(final) or KEY_UNKNOWN

    inner = parse_key(rest)
    if inner is KEY_UNKNOWN or inner.meta:
        return KEY_UNKNOWN
    return replace(inner, meta=True)


def _parse_csi(payload: bytes) -> Key:
    """
    Parse the bytes after ``ESC [``.

    Accepted forms: ``<final>``, ``<n>~``, ``<n>;<mod>~`` and
    ``1;<mod><final>``.
    """
    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return KEY_UNKNOWN
    if not text:
        return KEY_UNKNOWN

    if text == "Z":
        return Key(name="tab", shift=True)

    final = text[-1]
    params = text[:-1].split(";") if len(text) > 1 else []

    if final == "~":
        base = _TILDE.get(_safe_int(params[0])) if params else None
    elif final in _FINAL_BYTE:
        base = _FINAL_BYTE[final]
    else:
        return KEY_UNKNOWN
    if base is None or len(params) > 2:
        return KEY_UNKNOWN

    if final != "~" and len(params) == 1:
        # "<n><final>" without a modifier is not a key we know
        return KEY_UNKNOWN
    if len(params) == 2:
        modifier = _safe_int(params[1])
        if modifier is None:
            return KEY_UNKNOWN
        return _with_modifiers(base, modifier)
    return base


def _safe_int(s: str) -> int | None:
    """Return ``int(s)`` or ``None`` if *s* is not a valid integer."""
    try:
        return int(s)
    except ValueError:
        return None
