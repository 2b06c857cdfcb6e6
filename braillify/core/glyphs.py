"""Braille glyph table and 2x4 block encoding.

Each braille character covers a 2-wide x 4-tall dot grid. Blocks are
packed into an 8-bit index with the left column in the low nibble and
the right column in the high nibble, top row first:

    bit 0  bit 4
    bit 1  bit 5
    bit 2  bit 6
    bit 3  bit 7

Unicode numbers the dots differently (dots 7 and 8 were added to the
6-dot cell later), so the table reorders bits into code point order.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

BRAILLE_BASE = 0x2800

# Unicode bit for each index bit, i.e. dots 1, 2, 3, 7, 4, 5, 6, 8
INDEX_TO_UNICODE_BIT: tuple[int, ...] = (0, 1, 2, 6, 3, 4, 5, 7)

BLOCK_WIDTH = 2
BLOCK_HEIGHT = 4

# A cell counts as a raised dot above this value
DOT_CUTOFF = 0.5


class RowMapping(str, Enum):
    """Which field rows feed the four dot rows of a block."""

    CORRECT = "correct"  # dot row i reads field row y + i
    LEGACY = "legacy"  # every dot row reads field row y + 1


def _code_point(index: int) -> int:
    bits = 0
    for src, dst in enumerate(INDEX_TO_UNICODE_BIT):
        if index & (1 << src):
            bits |= 1 << dst
    return BRAILLE_BASE + bits


BRAILLE_TABLE: tuple[str, ...] = tuple(chr(_code_point(i)) for i in range(256))


def _dot(field: np.ndarray, x: int, y: int) -> bool:
    h, w = field.shape
    return 0 <= y < h and 0 <= x < w and field[y, x] > DOT_CUTOFF


def block_index(
    field: np.ndarray,
    x: int,
    y: int,
    inverted: bool = False,
    rows: RowMapping = RowMapping.CORRECT,
) -> int:
    """Pack the 2x4 block anchored at (x, y) into an 8-bit dot index.

    Cells past the right or bottom edge are off. With `RowMapping.LEGACY`
    all four dot rows sample row y + 1, which reproduces the output of the
    original braillify tool; that row reads as off past the last image row.
    """
    h, w = field.shape
    index = 0
    for i in range(BLOCK_HEIGHT):
        if y + i >= h:
            break
        src_y = y + 1 if rows == RowMapping.LEGACY else y + i
        if _dot(field, x, src_y):
            index |= 1 << i
        if x + 1 < w and _dot(field, x + 1, src_y):
            index |= 1 << (i + BLOCK_HEIGHT)

    if inverted:
        index ^= 0xFF
    return index


def encode_block(
    field: np.ndarray,
    x: int,
    y: int,
    inverted: bool = False,
    rows: RowMapping = RowMapping.CORRECT,
) -> str:
    """Return the braille glyph for the 2x4 block anchored at (x, y)."""
    return BRAILLE_TABLE[block_index(field, x, y, inverted, rows)]
