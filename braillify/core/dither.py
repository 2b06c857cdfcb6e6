"""Serpentine Floyd-Steinberg error diffusion dithering."""

from __future__ import annotations

import numpy as np

# Kernel weights relative to the scan direction `d`:
#        *   7
#    1   5   3
# (x-d) (x) (x+d)
WEIGHT_AHEAD = 7 / 16
WEIGHT_BELOW = 5 / 16
WEIGHT_BELOW_AHEAD = 3 / 16
WEIGHT_BELOW_BEHIND = 1 / 16


def floyd_steinberg(field: np.ndarray, threshold: float = 0.5) -> np.ndarray:
    """Dither a luminance field to binary values in place.

    Even rows are scanned left to right, odd rows right to left. Each
    pixel becomes 1.0 if its accumulated value is above `threshold`,
    otherwise 0.0, and the quantization error is pushed onto the
    neighbours not yet visited. Error that would land outside the image
    is dropped.

    Thresholds outside [0, 1] are allowed; they simply drive the whole
    field towards all-on or all-off.

    Args:
        field: 2D float array of shape (height, width), mutated in place.
        threshold: binary cutoff, fixed for the whole pass.

    Returns:
        The same array, now holding only 0.0 and 1.0.
    """
    if field.ndim != 2:
        raise ValueError(f"Expected a 2D field, got {field.ndim}D")
    if not np.issubdtype(field.dtype, np.floating):
        raise TypeError(f"Expected a float field, got {field.dtype}")

    h, w = field.shape

    for y in range(h):
        if y % 2:
            d = -1
            x_range = range(w - 1, -1, -1)
        else:
            d = 1
            x_range = range(w)
        has_below = y + 1 < h

        for x in x_range:
            old = float(field[y, x])
            new = 1.0 if old > threshold else 0.0
            field[y, x] = new
            err = old - new

            ahead = x + d
            behind = x - d
            if 0 <= ahead < w:
                field[y, ahead] += err * WEIGHT_AHEAD
            if not has_below:
                continue
            field[y + 1, x] += err * WEIGHT_BELOW
            if 0 <= ahead < w:
                field[y + 1, ahead] += err * WEIGHT_BELOW_AHEAD
            if 0 <= behind < w:
                field[y + 1, behind] += err * WEIGHT_BELOW_BEHIND

    return field
