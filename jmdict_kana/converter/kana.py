"""Kana conversion helpers."""

HIRAGANA_START = 0x3040
HIRAGANA_END = 0x309F
KATAKANA_OFFSET = 0x60


def is_hiragana(char: str) -> bool:
    """True if the character lies in the Unicode hiragana block."""
    return HIRAGANA_START <= ord(char) <= HIRAGANA_END


def hiragana_to_katakana(text: str) -> str:
    """
    Convert every hiragana character to its katakana counterpart.

    Characters outside U+3040-U+309F are returned unchanged.
    """
    return "".join(
        chr(ord(char) + KATAKANA_OFFSET) if is_hiragana(char) else char
        for char in text
    )
