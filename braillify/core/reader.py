"""Image decoding into single-channel grayscale samples.

Pillow does the actual decoding; everything downstream only ever sees a
(height, width) uint8 array.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from braillify.core.errors import DecodeError

logger = logging.getLogger(__name__)

# Pillow modes holding 16-bit samples; "I" is what older Pillow releases
# load 16-bit PNGs as
WIDE_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I")


def as_grayscale(img: Image.Image) -> Image.Image:
    """Return an 8-bit grayscale ("L") version of `img`.

    16-bit samples keep their top byte. Pillow's own conversion clips
    them at 255 instead, which turns almost any 16-bit image white.
    """
    if img.mode == "L":
        return img
    if img.mode in WIDE_MODES:
        wide = np.asarray(img).astype(np.int64)
        narrow = (np.clip(wide, 0, 0xFFFF) >> 8).astype(np.uint8)
        return Image.fromarray(narrow)
    return img.convert("L")


def open_grayscale(path: str | Path) -> Image.Image:
    """Decode an image file and return it as an 8-bit grayscale ("L") image.

    The file handle is closed before returning.

    Raises:
        DecodeError: if the file is missing, unreadable, not an image, or
            larger than Pillow's decompression bomb limit.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            logger.debug(
                "Decoding %s (%s, %s, %dx%d)",
                path, img.format, img.mode, img.width, img.height,
            )
            img.load()
            return as_grayscale(img).copy()
    except FileNotFoundError as e:
        raise DecodeError(f"File not found: {path}") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large to decode {path}: {e}") from e
    except (OSError, ValueError) as e:
        raise DecodeError(f"Cannot decode image {path}: {e}") from e


def to_samples(img: Image.Image) -> tuple[np.ndarray, int, int]:
    """Return (samples, width, height) for a Pillow image."""
    img = as_grayscale(img)
    samples = np.asarray(img, dtype=np.uint8)
    return samples, img.width, img.height


def load_grayscale(path: str | Path) -> tuple[np.ndarray, int, int]:
    """Decode an image file to a row-major grayscale sample grid.

    Returns:
        (samples, width, height) where samples has shape (height, width).

    Raises:
        DecodeError: if the file cannot be read or parsed.
    """
    return to_samples(open_grayscale(path))
