"""
DX7 LCD character set.

Voice names are stored as 10 bytes in the code page of the DX7's
character LCD. It matches ASCII for 0x20-0x7D except for 0x5C, which
shows a Yen sign. The remaining codes hold subscript digits, arrows,
Greek letters and a few symbols.

Two translation tables are provided:
- UNICODE_TABLE: the closest Unicode glyph for each LCD character
- ASCII_TABLE: a 7-bit ASCII approximation for plain terminals

Both tables cover all 256 byte values and never map to an empty string.
"""

from enum import Enum
from typing import Iterable, Tuple

NAME_LENGTH = 10


class Charset(str, Enum):
    """Output charset for voice names and table borders."""

    UNICODE = "unicode"
    ASCII = "ascii"


# fmt: off
UNICODE_TABLE: Tuple[str, ...] = (
    "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈",   # 0x00
    " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ",   # 0x10
    " ", "!", '"', "#", "$", "%", "&", "'", "(", ")", "*", "+", ",", "-", ".", "/",   # 0x20
    "0", "1", "2", "3", "4", "5", "6", "7", "8", "9", ":", ";", "<", "=", ">", "?",   # 0x30
    "@", "A", "B", "C", "D", "E", "F", "G", "H", "I", "J", "K", "L", "M", "N", "O",   # 0x40
    "P", "Q", "R", "S", "T", "U", "V", "W", "X", "Y", "Z", "[", "¥", "]", "^", "_",   # 0x50
    "`", "a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n", "o",   # 0x60
    "p", "q", "r", "s", "t", "u", "v", "w", "x", "y", "z", "{", "|", "}", "→", "←",   # 0x70
    " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ",   # 0x80
    " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ",   # 0x90
    " ", "∘", "⌈", "⌋", "~", "⋅", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~",   # 0xA0
    "-", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~",   # 0xB0
    "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~",   # 0xC0
    "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "~", "°",   # 0xD0
    "∝", "ä", "ß", "ε", "μ", "σ", "ρ", "g", "√", "~", "j", "×", "¢", "₤", "ñ", "ö",   # 0xE0
    "p", "q", "ϴ", "∞", "Ω", "ü", "Σ", "π", "ẍ", "y", "~", "~", "~", "÷", " ", "█",   # 0xF0
)

# Low half: the LCD page degraded to ASCII (0x5C Yen -> Y, arrows -> > <)
_ASCII_LOW: Tuple[str, ...] = (
    " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ",   # 0x00
    " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ", " ",   # 0x10
    " ", "!", '"', "#", "$", "%", "&", "'", "(", ")", "*", "+", ",", "-", ".", "/",   # 0x20
    "0", "1", "2", "3", "4", "5", "6", "7", "8", "9", ":", ";", "<", "=", ">", "?",   # 0x30
    "@", "A", "B", "C", "D", "E", "F", "G", "H", "I", "J", "K", "L", "M", "N", "O",   # 0x40
    "P", "Q", "R", "S", "T", "U", "V", "W", "X", "Y", "Z", "[", "Y", "]", "^", "_",   # 0x50
    "`", "a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l", "m", "n", "o",   # 0x60
    "p", "q", "r", "s", "t", "u", "v", "w", "x", "y", "z", "{", "|", "}", ">", "<",   # 0x70
)
# fmt: on

# High half: blank where the LCD is blank, "~" placeholder otherwise
_ASCII_HIGH: Tuple[str, ...] = tuple(
    " " if glyph == " " else (glyph if glyph.isascii() else "~") for glyph in UNICODE_TABLE[0x80:]
)

ASCII_TABLE: Tuple[str, ...] = _ASCII_LOW + _ASCII_HIGH


def lcd_char(code: int, charset: Charset = Charset.UNICODE) -> str:
    """Translate one LCD character code (0-255)."""
    table = UNICODE_TABLE if charset == Charset.UNICODE else ASCII_TABLE
    return table[code & 0xFF]


def decode_name(name: Iterable[int], charset: Charset = Charset.UNICODE) -> str:
    """
    Translate a stored voice name to printable text.

    Args:
        name: The raw name bytes (normally 10)
        charset: Translation table to use

    Returns:
        Printable name, one character per stored byte
    """
    return "".join(lcd_char(code, charset) for code in name)
