"""Tests for braille text assembly."""

import math

import numpy as np
import pytest

from braillify.core.glyphs import RowMapping
from braillify.core.renderer import render, render_lines


class TestRenderLines:
    @pytest.mark.parametrize(
        "w,h", [(1, 1), (2, 4), (3, 5), (8, 8), (7, 13), (1, 9), (10, 1)]
    )
    def test_dimensions(self, w, h):
        lines = render_lines(np.zeros((h, w)))
        assert len(lines) == math.ceil(h / 4)
        assert all(len(line) == math.ceil(w / 2) for line in lines)

    def test_layout(self):
        field = np.zeros((8, 4))
        field[0:4, 0:2] = 1.0  # top-left cell full
        field[4, 3] = 1.0  # top-right dot of bottom-right cell
        assert render_lines(field) == ["⣿⠀", "⠀⠈"]

    def test_inverted(self):
        field = np.zeros((4, 4))
        assert render_lines(field, inverted=True) == ["⣿⣿"]


class TestRender:
    def test_every_line_terminated(self):
        text = render(np.zeros((9, 3)))
        assert text.endswith("\n")
        assert text.count("\n") == 3
        assert text.splitlines() == render_lines(np.zeros((9, 3)))

    def test_single_cell(self):
        assert render(np.ones((4, 2))) == "⣿\n"

    def test_rows_passed_through(self):
        field = np.zeros((4, 2))
        field[1, :] = 1.0
        assert render(field, rows=RowMapping.LEGACY) == "⣿\n"
        assert render(field, rows=RowMapping.CORRECT) == "⠒\n"
