"""Assemble braille glyphs into text."""

from __future__ import annotations

import numpy as np

from braillify.core.glyphs import (
    BLOCK_HEIGHT,
    BLOCK_WIDTH,
    RowMapping,
    encode_block,
)


def render_lines(
    field: np.ndarray,
    inverted: bool = False,
    rows: RowMapping = RowMapping.CORRECT,
) -> list[str]:
    """Convert a binary field to braille lines, one per 4-row band.

    Partial bands and columns at the edges are padded with off dots, so
    the result has ceil(h / 4) lines of ceil(w / 2) glyphs each.
    """
    h, w = field.shape
    lines = []
    for y in range(0, h, BLOCK_HEIGHT):
        line_chars = []
        for x in range(0, w, BLOCK_WIDTH):
            line_chars.append(encode_block(field, x, y, inverted, rows))
        lines.append("".join(line_chars))
    return lines


def render(
    field: np.ndarray,
    inverted: bool = False,
    rows: RowMapping = RowMapping.CORRECT,
) -> str:
    """Render a binary field as a text block, every line ending in a newline."""
    return "".join(line + "\n" for line in render_lines(field, inverted, rows))
