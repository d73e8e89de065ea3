"""Unicode Braille encoding.

Each Braille character (U+2800–U+28FF) encodes a 2×4 dot matrix (8 dots).
Dot (row, col) maps to a fixed bit; OR-ing the bits of the raised dots and
adding the block base gives the code point.
"""

from __future__ import annotations

from collections.abc import Iterable

BRAILLE_BASE = 0x2800
BRAILLE_BLANK = chr(BRAILLE_BASE)
BRAILLE_FULL = chr(BRAILLE_BASE + 0xFF)

# Rows top to bottom, columns left to right.
_BRAILLE_DOT_MAP = [
    [0x01, 0x08],
    [0x02, 0x10],
    [0x04, 0x20],
    [0x40, 0x80],
]


def dot_bit(row: int, col: int) -> int:
    """Bit for dot (row, col). Positions outside the 4×2 matrix contribute 0."""
    if 0 <= row < len(_BRAILLE_DOT_MAP) and 0 <= col < len(_BRAILLE_DOT_MAP[0]):
        return _BRAILLE_DOT_MAP[row][col]
    return 0x00


def cell_from_dots(dots: Iterable[tuple[int, int]]) -> int:
    """Collapse raised (row, col) dots into one cell value."""
    value = 0
    for row, col in dots:
        value |= dot_bit(row, col)
    return value


def braille_char(value: int) -> str:
    """Character for a cell value in [0, 255]."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Braille cell value out of range: {value}")
    return chr(BRAILLE_BASE + value)


def is_braille(char: str) -> bool:
    return len(char) == 1 and BRAILLE_BASE <= ord(char) <= BRAILLE_BASE + 0xFF
