"""
Keyboard Layout Translation

Maps the key a US-QWERTY keyboard reports to the character a typist on
an alternative layout (Dvorak, Colemak) actually meant, and back.

Keys without a mapping pass through unchanged, so digits, spaces and
characters outside the tables are never altered.
"""

from enum import Enum
from typing import Dict, List


class KeyboardLayout(str, Enum):
    """Supported typist layouts."""
    QWERTY = "qwerty"
    DVORAK = "dvorak"
    COLEMAK = "colemak"


LAYOUT_DISPLAY_NAMES = {
    KeyboardLayout.QWERTY: "QWERTY",
    KeyboardLayout.DVORAK: "Dvorak",
    KeyboardLayout.COLEMAK: "Colemak",
}


def _pairs(physical: str, logical: str) -> Dict[str, str]:
    return dict(zip(physical, logical))


# =============================================================================
# Layout Tables (physical QWERTY key -> logical character)
# =============================================================================

_LETTERS = "qwertyuiopasdfghjklzxcvbnm"

# Identical on every layout unless a mapping overrides them
_SYMBOLS = "`~1!2@3#4$5%6^7&8*9(0)-_=+[{]}\\|;:'\",<.>/? "

QWERTY_KEYS: Dict[str, str] = {
    **_pairs(_LETTERS, _LETTERS),
    **_pairs(_LETTERS.upper(), _LETTERS.upper()),
    **_pairs(_SYMBOLS, _SYMBOLS),
}

DVORAK_MAPPING: Dict[str, str] = {
    **_pairs("qwertyuiop", "',.pyfgcrl"),
    **_pairs("QWERTYUIOP", "\"<>PYFGCRL"),
    **_pairs("asdfghjkl;", "aoeuidhtns"),
    **_pairs("ASDFGHJKL:", "AOEUIDHTNS"),
    **_pairs("zxcvbnm", ";qjkxbm"),
    **_pairs("ZXCVBNM", ":QJKXBM"),
    **_pairs("'\"[{]}-_=+/?", "qQ-_=+[{]}/?"),
}

COLEMAK_MAPPING: Dict[str, str] = {
    **_pairs("ertyuiop", "fpgjluy;"),
    **_pairs("ERTYUIOP", "FPGJLUY:"),
    **_pairs("sdfgjkl;", "rstdneio"),
    **_pairs("SDFGJKL:", "RSTDNEIO"),
    "n": "k",
    "N": "K",
}

_LAYOUT_TABLES: Dict[KeyboardLayout, Dict[str, str]] = {
    KeyboardLayout.QWERTY: QWERTY_KEYS,
    KeyboardLayout.DVORAK: {**QWERTY_KEYS, **DVORAK_MAPPING},
    KeyboardLayout.COLEMAK: {**QWERTY_KEYS, **COLEMAK_MAPPING},
}


# =============================================================================
# Translation
# =============================================================================

def translate_key(physical_key: str, layout: KeyboardLayout) -> str:
    """
    Translate a physical key press to the character typed on ``layout``.

    Args:
        physical_key: Key as reported by a QWERTY keyboard (e.g. "q")
        layout: Layout the typist is using

    Returns:
        Logical character (e.g. "'" for "q" on Dvorak)
    """
    layout = KeyboardLayout(layout)
    if layout is KeyboardLayout.QWERTY:
        return physical_key
    return _LAYOUT_TABLES[layout].get(physical_key, physical_key)


def reverse_translate_key(logical_char: str, layout: KeyboardLayout) -> str:
    """Physical key to press for ``logical_char``; used for hints."""
    layout = KeyboardLayout(layout)
    if layout is KeyboardLayout.QWERTY:
        return logical_char
    for physical_key, mapped in _LAYOUT_TABLES[layout].items():
        if mapped == logical_char:
            return physical_key
    return logical_char


def layout_display_name(layout: KeyboardLayout) -> str:
    return LAYOUT_DISPLAY_NAMES[KeyboardLayout(layout)]


def available_layouts() -> List[KeyboardLayout]:
    return list(KeyboardLayout)
