"""Grayscale sample buffer to luminance field conversion."""

from __future__ import annotations

import numpy as np

from braillify.core.errors import EmptyImageError

# Samples are divided by 256 so full white lands just below 1.0
SAMPLE_SCALE = 256.0


def normalize(samples, width: int, height: int) -> np.ndarray:
    """Convert 8-bit grayscale samples to a float field in [0.0, 1.0).

    Args:
        samples: row-major grayscale bytes, either a (height, width) array
            or any flat buffer of width * height bytes.
        width: image width in pixels.
        height: image height in pixels.

    Returns:
        New float64 array of shape (height, width). The caller's buffer
        is never modified.

    Raises:
        EmptyImageError: if width or height is zero.
        ValueError: if the buffer does not hold width * height samples.
    """
    if width <= 0 or height <= 0:
        raise EmptyImageError(width, height)

    if isinstance(samples, np.ndarray):
        arr = samples
    else:
        arr = np.frombuffer(bytes(samples), dtype=np.uint8)

    if arr.ndim == 2:
        if arr.shape != (height, width):
            raise ValueError(
                f"Sample grid shape {arr.shape} does not match {height}x{width}"
            )
    elif arr.size != width * height:
        raise ValueError(
            f"Expected {width * height} samples, got {arr.size}"
        )

    return arr.reshape(height, width).astype(np.float64) / SAMPLE_SCALE
