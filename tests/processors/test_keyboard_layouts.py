"""
Keyboard Layout Unit Tests

Tests for physical-to-logical key translation on QWERTY, Dvorak and
Colemak, and the reverse lookup used for hints.
"""

import pytest

from integrity.processors.layouts import (
    KeyboardLayout,
    available_layouts,
    layout_display_name,
    reverse_translate_key,
    translate_key,
)


class TestTranslateKey:
    """Physical QWERTY key -> character typed on the layout."""

    @pytest.mark.parametrize("key", ["a", "q", "1", " ", "Z"])
    def test_qwerty_is_identity(self, key):
        assert translate_key(key, KeyboardLayout.QWERTY) == key

    @pytest.mark.parametrize("physical, logical", [
        ("q", "'"), ("w", ","), ("e", "."), ("r", "p"), ("t", "y"),
        ("a", "a"), ("s", "o"), ("d", "e"), ("f", "u"), ("h", "d"),
        ("z", ";"), ("x", "q"), ("c", "j"),
        ("Q", '"'), ("S", "O"),
        ("[", "-"), ("-", "["),
    ])
    def test_dvorak(self, physical, logical):
        assert translate_key(physical, KeyboardLayout.DVORAK) == logical

    @pytest.mark.parametrize("physical, logical", [
        ("e", "f"), ("r", "p"), ("t", "g"), ("p", ";"),
        ("s", "r"), ("d", "s"), ("k", "e"), (";", "o"),
        ("n", "k"), ("P", ":"),
        ("q", "q"), ("a", "a"), ("z", "z"),
    ])
    def test_colemak(self, physical, logical):
        assert translate_key(physical, KeyboardLayout.COLEMAK) == logical

    @pytest.mark.parametrize("layout", list(KeyboardLayout))
    def test_digits_space_and_unknown_pass_through(self, layout):
        for key in ("1", "0", " ", "€"):
            assert translate_key(key, layout) == key

    def test_accepts_layout_name(self):
        assert translate_key("q", "dvorak") == "'"

    def test_unknown_layout_raises(self):
        with pytest.raises(ValueError):
            translate_key("q", "azerty")


class TestReverseTranslateKey:
    """Character -> physical key to press."""

    def test_qwerty_is_identity(self):
        assert reverse_translate_key("a", KeyboardLayout.QWERTY) == "a"

    @pytest.mark.parametrize("logical, physical", [("'", "q"), (",", "w"), ("a", "a"), ("o", "s")])
    def test_dvorak(self, logical, physical):
        assert reverse_translate_key(logical, KeyboardLayout.DVORAK) == physical

    @pytest.mark.parametrize("logical, physical", [("f", "e"), ("p", "r"), ("e", "k")])
    def test_colemak(self, logical, physical):
        assert reverse_translate_key(logical, KeyboardLayout.COLEMAK) == physical

    def test_unmapped_character(self):
        assert reverse_translate_key("€", KeyboardLayout.DVORAK) == "€"

    def test_dvorak_user_typing_hello(self):
        physical = [reverse_translate_key(ch, KeyboardLayout.DVORAK) for ch in "hello"]

        assert "".join(physical) == "jdpps"
        assert "".join(translate_key(k, KeyboardLayout.DVORAK) for k in physical) == "hello"


class TestLayoutNames:
    def test_display_names(self):
        assert layout_display_name(KeyboardLayout.QWERTY) == "QWERTY"
        assert layout_display_name(KeyboardLayout.DVORAK) == "Dvorak"
        assert layout_display_name("colemak") == "Colemak"

    def test_available_layouts(self):
        assert available_layouts() == [
            KeyboardLayout.QWERTY,
            KeyboardLayout.DVORAK,
            KeyboardLayout.COLEMAK,
        ]
