"""Conversion pipeline.

Decode → (optional resize) → normalize → dither → braille render.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from braillify.core.dither import floyd_steinberg
from braillify.core.errors import EmptyImageError
from braillify.core.glyphs import BLOCK_WIDTH, RowMapping
from braillify.core.luminance import normalize
from braillify.core.reader import as_grayscale, open_grayscale, to_samples
from braillify.core.renderer import render

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Conversion settings that affect output."""

    threshold: float = 0.5  # nominally 0.0 to 1.0
    invert: bool = False
    rows: RowMapping = RowMapping.CORRECT
    width: int | None = None  # output columns; None keeps native size


def _resize_for_braille(img: Image.Image, columns: int) -> Image.Image:
    """Resize so the image spans `columns` braille cells (2 pixels each).

    Pixel aspect ratio is kept; braille cells are twice as tall as wide,
    which matches a typical terminal character cell.
    """
    if columns < 1:
        raise ValueError(f"Output width must be at least 1, got {columns}")
    pixel_w = columns * BLOCK_WIDTH
    pixel_h = max(1, round(img.height * pixel_w / img.width))
    return img.resize((pixel_w, pixel_h), Image.Resampling.LANCZOS)


def convert_samples(samples, width: int, height: int, settings: Settings) -> str:
    """Run the pixel pipeline over a raw grayscale sample buffer.

    Raises:
        EmptyImageError: if width or height is zero.
    """
    start = time.perf_counter()
    field = normalize(samples, width, height)
    floyd_steinberg(field, settings.threshold)
    text = render(field, inverted=settings.invert, rows=settings.rows)
    elapsed = (time.perf_counter() - start) * 1000
    logger.debug(
        "Converted %dx%d samples in %.1fms (threshold=%s, invert=%s, rows=%s)",
        width, height, elapsed, settings.threshold, settings.invert,
        settings.rows.value,
    )
    return text


def convert_image(img: Image.Image, settings: Settings) -> str:
    """Convert an already-opened Pillow image."""
    if img.width == 0 or img.height == 0:
        raise EmptyImageError(img.width, img.height)
    img = as_grayscale(img)
    if settings.width is not None:
        img = _resize_for_braille(img, settings.width)
        logger.debug("Resized to %dx%d", img.width, img.height)
    samples, w, h = to_samples(img)
    return convert_samples(samples, w, h, settings)


def convert(
    path: str | Path,
    threshold: float = 0.5,
    inverted: bool = False,
    rows: RowMapping = RowMapping.CORRECT,
    width: int | None = None,
) -> str:
    """Convert an image file to braille text.

    Raises:
        DecodeError: if the file cannot be read or parsed.
        EmptyImageError: if the image has zero width or height.
    """
    settings = Settings(threshold=threshold, invert=inverted, rows=rows, width=width)
    return convert_file(path, settings)


def convert_file(path: str | Path, settings: Settings) -> str:
    """Convert an image file using a prepared `Settings`."""
    img = open_grayscale(path)
    return convert_image(img, settings)
