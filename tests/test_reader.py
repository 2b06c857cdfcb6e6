"""Tests for image decoding."""

import numpy as np
import pytest
from PIL import Image

from braillify.core.errors import DecodeError
from braillify.core.reader import (
    as_grayscale,
    load_grayscale,
    open_grayscale,
    to_samples,
)


class TestLoadGrayscale:
    @pytest.fixture
    def gray_png(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (3, 5), 200).save(str(path))
        return path

    def test_samples_shape(self, gray_png):
        samples, w, h = load_grayscale(gray_png)
        assert (w, h) == (3, 5)
        assert samples.shape == (5, 3)
        assert samples.dtype == np.uint8
        assert (samples == 200).all()

    def test_accepts_str_path(self, gray_png):
        _, w, h = load_grayscale(str(gray_png))
        assert (w, h) == (3, 5)

    def test_color_converted_to_luminance(self, tmp_path):
        path = tmp_path / "white.png"
        Image.new("RGB", (4, 4), (255, 255, 255)).save(str(path))
        samples, _, _ = load_grayscale(path)
        assert (samples == 255).all()

    def test_open_returns_l_mode(self, tmp_path):
        path = tmp_path / "red.gif"
        Image.new("RGB", (6, 2), (255, 0, 0)).save(str(path))
        img = open_grayscale(path)
        assert img.mode == "L"
        assert img.size == (6, 2)


class TestDecodeErrors:
    def test_file_not_found(self, tmp_path):
        with pytest.raises(DecodeError, match="File not found"):
            load_grayscale(tmp_path / "missing.png")

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("definitely not a png")
        with pytest.raises(DecodeError, match="Cannot decode"):
            load_grayscale(path)

    def test_decode_error_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_grayscale(tmp_path / "missing.png")


class TestToSamples:
    def test_converts_non_l_images(self):
        img = Image.new("RGB", (2, 3), (0, 0, 0))
        samples, w, h = to_samples(img)
        assert (w, h) == (2, 3)
        assert samples.shape == (3, 2)
        assert (samples == 0).all()


class TestWideSamples:
    @pytest.fixture
    def quarter_gray_16bit(self, tmp_path):
        path = tmp_path / "deep.png"
        Image.new("I;16", (4, 8), 16384).save(str(path))
        return path

    def test_16bit_png_keeps_high_byte(self, quarter_gray_16bit):
        samples, w, h = load_grayscale(quarter_gray_16bit)
        assert (w, h) == (4, 8)
        assert (samples == 64).all()

    def test_16bit_in_memory(self):
        img = Image.new("I;16", (3, 2), 0xFFFF)
        samples, _, _ = to_samples(img)
        assert (samples == 255).all()

    def test_32bit_int_mode_clamped_to_16bit_range(self):
        img = Image.new("I", (2, 2), 0x8000)
        samples, _, _ = to_samples(img)
        assert (samples == 128).all()

    def test_as_grayscale_leaves_l_untouched(self):
        img = Image.new("L", (2, 2), 7)
        assert as_grayscale(img) is img


class TestDecompressionBomb:
    def test_oversized_image_is_decode_error(self, tmp_path, monkeypatch):
        path = tmp_path / "big.png"
        Image.new("L", (64, 64), 128).save(str(path))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        with pytest.raises(DecodeError, match="too large"):
            load_grayscale(path)
