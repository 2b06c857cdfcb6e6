"""Exceptions raised by the conversion pipeline."""

from __future__ import annotations


class BraillifyError(Exception):
    """Base class for all conversion failures."""


class DecodeError(BraillifyError, OSError):
    """The image file could not be read or parsed."""


class EmptyImageError(BraillifyError, ValueError):
    """The image decoded fine but has zero width or height."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"Image has no pixels: {width}x{height}")
        self.width = width
        self.height = height
