"""Tests for modifier + key chords."""

import sys

import pytest

from prompt_engine.tui.keycombo import KEY_ALIASES, KeyCombo, UnsupportedModifierError
from prompt_engine.tui.keys import KEY_ENTER, KEY_SPACE, KEY_UP, Key, parse_key


class TestParse:
    """Tests for KeyCombo.parse."""

    def test_modifiers_and_key(self) -> None:
        """Ctrl+Shift+Esc sets both modifiers and keeps the key text."""
        combo = KeyCombo.parse("Ctrl+Shift+Esc")

        assert combo.ctrl is True
        assert combo.shift is True
        assert combo.meta is False
        assert combo.key == "Esc"

    def test_case_insensitive_modifiers(self) -> None:
        """Modifier names are matched ignoring case."""
        combo = KeyCombo.parse("CTRL+shift+a")

        assert combo.ctrl is True
        assert combo.shift is True
        assert combo.key == "a"

    def test_whitespace_around_separator(self) -> None:
        """Spaces around '+' are ignored."""
        assert KeyCombo.parse(" Ctrl + s ") == KeyCombo(ctrl=True, key="s")

    @pytest.mark.parametrize("name", ["Meta", "Super", "Win", "Command"])
    def test_meta_spellings(self, name: str) -> None:
        """Every meta key spelling sets meta."""
        combo = KeyCombo.parse(f"{name}+k")

        assert combo.meta is True
        assert combo.command is True
        assert combo.win is True
        assert combo.super_ is True

    @pytest.mark.parametrize("text", ["Alt+x", "Option+x", "ctrl+alt+delete"])
    def test_alt_rejected(self, text: str) -> None:
        """Alt and Option are rejected when parsing."""
        with pytest.raises(UnsupportedModifierError):
            KeyCombo.parse(text)

    def test_alt_rejected_in_constructor(self) -> None:
        """Alt is rejected by the constructor too, and is a ValueError."""
        with pytest.raises(ValueError, match="Alt/Option"):
            KeyCombo(alt=True, key="x")

    def test_modifier_only(self) -> None:
        """A chord with no key has an empty key."""
        combo = KeyCombo.parse("Ctrl")

        assert combo.ctrl is True
        assert combo.key == ""

    def test_multiple_keys_keep_last(self) -> None:
        """When several keys are given only the last one is kept."""
        assert KeyCombo.parse("Ctrl+A+B").key == "B"

    @pytest.mark.parametrize(
        "text",
        ["Ctrl+S", "Shift+Tab", "Meta+Shift+Up", "Ctrl+Meta+Enter", "Escape", "Space", "F5"],
    )
    def test_round_trip(self, text: str) -> None:
        """Parsing the string form of a parsed chord gives the same chord."""
        combo = KeyCombo.parse(text)

        assert KeyCombo.parse(str(combo)) == combo
        assert KeyCombo.parse(combo.to_string_windows()) == combo
        assert KeyCombo.parse(combo.to_string_linux()) == combo
        assert KeyCombo.parse(combo.to_string_mac()) == combo


class TestFromKey:
    """Tests for KeyCombo.from_key."""

    def test_mirrors_event(self) -> None:
        """The combo copies the modifiers and name of the event."""
        combo = KeyCombo.from_key(Key(name="c", ctrl=True))

        assert combo == KeyCombo(ctrl=True, key="c")

    def test_matches_its_own_event(self) -> None:
        """A combo built from an event matches that event."""
        key = parse_key(b"\x1b[1;2A")

        assert KeyCombo.from_key(key).test(key) is True


class TestMatching:
    """Tests for KeyCombo.test."""

    def test_exact_name(self) -> None:
        """A key name matches the event of the same name."""
        assert KeyCombo.parse("up").test(KEY_UP) is True

    def test_name_case_insensitive(self) -> None:
        """Key names match ignoring case."""
        assert KeyCombo.parse("Enter").test(KEY_ENTER) is True

    def test_alias(self) -> None:
        """Display names match the identifiers the key parser emits."""
        assert KeyCombo.parse("ArrowUp").test(KEY_UP) is True
        assert KeyCombo.parse("Return").test(KEY_ENTER) is True
        assert KeyCombo.parse("PgDn").test(Key(name="page_down")) is True

    def test_name_outside_alias_groups(self) -> None:
        """Keys without aliases match by name alone."""
        assert "tab" not in KEY_ALIASES
        assert KeyCombo.parse("Tab").test(parse_key(b"\t")) is True
        assert KeyCombo.parse("Shift+Tab").test(parse_key(b"\x1b[Z")) is True
        assert KeyCombo.parse("Tab").test(KEY_ENTER) is False

    def test_alias_symmetry(self) -> None:
        """If A matches an event named B then B matches an event named A."""
        for name, group in KEY_ALIASES.items():
            for other in group:
                assert KeyCombo(key=name).test(Key(name=other)) is True
                assert KeyCombo(key=other).test(Key(name=name)) is True

    def test_modifiers_must_match_exactly(self) -> None:
        """Extra or missing modifiers prevent a match."""
        combo = KeyCombo.parse("Ctrl+c")

        assert combo.test(Key(name="c", ctrl=True)) is True
        assert combo.test(Key(name="c")) is False
        assert combo.test(Key(name="c", ctrl=True, shift=True)) is False
        assert KeyCombo.parse("c").test(Key(name="c", ctrl=True)) is False

    def test_empty_key_is_wildcard(self) -> None:
        """A combo without a key matches any event with the same modifiers."""
        combo = KeyCombo(ctrl=True)

        assert combo.test(Key(name="x", ctrl=True)) is True
        assert combo.test(Key(name="x")) is False

    def test_space(self) -> None:
        """The space combo matches the space event."""
        assert KeyCombo.parse("space").test(KEY_SPACE) is True
        assert KeyCombo(key=" ").test(KEY_SPACE) is True

    def test_different_keys(self) -> None:
        """Unrelated names do not match."""
        assert KeyCombo.parse("down").test(KEY_UP) is False


class TestDisplay:
    """Tests for the platform string forms."""

    def test_windows(self) -> None:
        """Windows shows the meta key as Win."""
        combo = KeyCombo(ctrl=True, shift=True, meta=True, key="K")

        assert combo.string_parts_windows() == ["Ctrl", "Win", "Shift", "K"]
        assert combo.to_string_windows() == "Ctrl+Win+Shift+K"

    def test_linux(self) -> None:
        """Linux shows the meta key as Super."""
        combo = KeyCombo(ctrl=True, meta=True, key="K")

        assert combo.to_string_linux() == "Ctrl+Super+K"

    def test_mac(self) -> None:
        """macOS shows the meta key as Command."""
        combo = KeyCombo(meta=True, shift=True, key="K")

        assert combo.to_string_mac() == "Command+Shift+K"

    def test_str_uses_platform(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """str() picks the notation of the running platform."""
        combo = KeyCombo(meta=True, key="K")

        monkeypatch.setattr(sys, "platform", "win32")
        assert str(combo) == "Win+K"
        monkeypatch.setattr(sys, "platform", "linux")
        assert str(combo) == "Super+K"
        monkeypatch.setattr(sys, "platform", "darwin")
        assert str(combo) == "Command+K"

    def test_to_dict(self) -> None:
        """to_dict exposes every flag and the key."""
        assert KeyCombo.parse("Ctrl+s").to_dict() == {
            "ctrl": True,
            "shift": False,
            "alt": False,
            "meta": False,
            "key": "s",
        }


class TestEquality:
    """Tests for equality and hashing."""

    def test_alias_equality(self) -> None:
        """Combos naming the same key through aliases are equal."""
        assert KeyCombo.parse("Ctrl+Esc") == KeyCombo.parse("ctrl+escape")
        assert KeyCombo.parse("Up") == KeyCombo.parse("ArrowUp")

    def test_hash_consistent_with_equality(self) -> None:
        """Equal combos hash the same and collapse in a set."""
        combos = {KeyCombo.parse("Enter"), KeyCombo.parse("return"), KeyCombo.parse("ENTER")}

        assert len(combos) == 1

    def test_modifiers_distinguish(self) -> None:
        """Different modifiers make different combos."""
        assert KeyCombo.parse("Ctrl+s") != KeyCombo.parse("s")

    def test_empty_key_not_equal_to_named_key(self) -> None:
        """The wildcard only applies when testing events."""
        assert KeyCombo(ctrl=True) != KeyCombo(ctrl=True, key="c")

    def test_not_equal_to_other_types(self) -> None:
        """Comparison with a string is not equality."""
        assert KeyCombo.parse("a") != "a"
