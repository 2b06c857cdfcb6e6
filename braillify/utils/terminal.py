"""Terminal size detection utilities."""

from __future__ import annotations

import shutil


def get_terminal_size(fallback: tuple[int, int] = (80, 24)) -> tuple[int, int]:
    """Return (columns, rows) of the terminal attached to stdout.

    The COLUMNS and LINES environment variables take precedence; when
    stdout is not a terminal `fallback` is used.
    """
    size = shutil.get_terminal_size(fallback=fallback)
    return max(size.columns, 1), max(size.lines, 1)


def fit_to_terminal(
    img_width: int,
    img_height: int,
    max_width: int | None = None,
    max_height: int | None = None,
) -> int:
    """Calculate how many braille columns fit the terminal.

    A braille glyph covers 2x4 pixels, so keeping the pixel aspect ratio
    means `columns` glyphs wide produce about `columns * img_height /
    (2 * img_width)` rows.

    Args:
        img_width: original image width in pixels.
        img_height: original image height in pixels.
        max_width: maximum character columns (defaults to terminal width).
        max_height: maximum character rows (defaults to terminal height - 1
            for the prompt).

    Returns:
        Number of output columns, at least 1.
    """
    if max_width is None or max_height is None:
        tw, th = get_terminal_size()
        if max_width is None:
            max_width = tw
        if max_height is None:
            max_height = max(th - 1, 1)

    # Height-constrained column count
    by_height = int(2 * max_height * img_width / img_height)
    return max(1, min(max_width, by_height))
