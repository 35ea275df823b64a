"""Tests for the plain-text PNM codec."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from seamcarve import pnm
from seamcarve.pnm import PNMFormatError, PNMImage
from seamcarve.grid import PixelGrid
from seamcarve.carving import SeamCarver
from seamcarve.cli import main

GRAY_TEXT = (
    "P2\n"
    "# CREATOR: test suite\n"
    "# second comment\n"
    "4 3\n"
    "15\n"
    "0 3 3 0 \n"
    "1 9 9 1 \n"
    "0 3 3 0 \n"
)

COLOR_TEXT = (
    "P3\n"
    "2 2\n"
    "255\n"
    "255 0 0  0 255 0\n"
    "0 0 255  10 20 30\n"
)


class TestParse:
    def test_gray_header_and_pixels(self):
        image = pnm.parse(GRAY_TEXT)
        assert image.magic == 'P2'
        assert image.comments == ["# CREATOR: test suite", "# second comment"]
        assert image.grid.shape == (3, 4)
        assert image.grid.max_value == 15
        assert image.grid.to_rows()[1] == [1, 9, 9, 1]

    def test_color_pixels(self):
        image = pnm.parse(COLOR_TEXT)
        assert image.magic == 'P3'
        assert image.grid.mode == 'rgb'
        assert image.grid.to_rows() == [[(255, 0, 0), (0, 255, 0)],
                                        [(0, 0, 255), (10, 20, 30)]]

    def test_free_form_whitespace(self):
        image = pnm.parse("P2 2 2 7\n1\n2 3\n\t4")
        assert image.grid.to_rows() == [[1, 2], [3, 4]]
        assert image.comments == []

    def test_inline_comments_are_ignored(self):
        image = pnm.parse("P2\n2 1 # size\n9\n4 5\n")
        assert image.grid.to_rows() == [[4, 5]]
        assert image.comments == []

    def test_bad_magic(self):
        with pytest.raises(PNMFormatError):
            pnm.parse("P5\n1 1\n255\n0\n")

    def test_empty(self):
        with pytest.raises(PNMFormatError):
            pnm.parse("")

    def test_truncated_header(self):
        with pytest.raises(PNMFormatError):
            pnm.parse("P2\n4 3\n")

    def test_non_positive_header(self):
        with pytest.raises(PNMFormatError):
            pnm.parse("P2\n0 3\n255\n")
        with pytest.raises(PNMFormatError):
            pnm.parse("P2\n1 1\n0\n0\n")

    def test_insufficient_pixels(self):
        with pytest.raises(PNMFormatError):
            pnm.parse("P2\n2 2\n9\n1 2 3\n")

    def test_non_integer_sample(self):
        with pytest.raises(PNMFormatError):
            pnm.parse("P2\n2 1\n9\n1 x\n")

    def test_sample_above_max(self):
        with pytest.raises(PNMFormatError):
            pnm.parse("P2\n2 1\n9\n1 10\n")

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            pnm.parse("not an image")


class TestRender:
    def test_unmodified_is_byte_exact(self):
        image = pnm.parse(GRAY_TEXT)
        assert pnm.render(image) == GRAY_TEXT

    def test_unmodified_irregular_layout_is_byte_exact(self):
        text = "P2\n# c\n2   2\n\n7\n1 2\r\n3 4"
        assert pnm.render(pnm.parse(text)) == text

    def test_double_transpose_is_still_unmodified(self):
        image = pnm.parse(COLOR_TEXT)
        image.grid.transpose()
        image.grid.transpose()
        assert pnm.render(image) == COLOR_TEXT

    def test_carved_uses_canonical_layout(self):
        image = pnm.parse(GRAY_TEXT)
        SeamCarver(image.grid).remove_vertical_seams(1)
        assert pnm.render(image) == (
            "P2\n"
            "# CREATOR: test suite\n"
            "# second comment\n"
            "3 3\n"
            "15\n"
            "3 3 0 \n"
            "9 9 1 \n"
            "3 3 0 \n"
        )

    def test_color_canonical_layout(self):
        grid = PixelGrid.from_rows([[(1, 2, 3), (4, 5, 6)]], max_value=9)
        assert pnm.render(PNMImage(grid)) == "P3\n2 1\n9\n1 2 3 4 5 6 \n"

    def test_render_then_parse(self):
        grid = PixelGrid.from_rows([[0, 5], [7, 2], [1, 1]], max_value=7)
        image = pnm.parse(pnm.render(PNMImage(grid, comments=["# hi"])))
        assert image.grid == grid
        assert image.comments == ["# hi"]


class TestFiles:
    def test_read_write_roundtrip(self, tmp_path):
        src = tmp_path / "in.pgm"
        src.write_bytes(GRAY_TEXT.replace("\n", "\r\n").encode())
        out = tmp_path / "out.pgm"
        pnm.write(pnm.read(src), out)
        assert out.read_bytes() == src.read_bytes()

    def test_latin1_comment_roundtrip(self, tmp_path):
        """Comment bytes that are not valid UTF-8 are kept exactly."""
        raw = b"P2\n# Cr\xe9\xe9 par GIMP\n2 2\n255\n1 2\n3 4\n"
        src = tmp_path / "in.pgm"
        src.write_bytes(raw)

        image = pnm.read(src)
        assert image.comments == ["# Cr\xe9\xe9 par GIMP"]

        assert main([str(src), '0', '0']) == 0
        assert (tmp_path / "in_processed_0_0.pgm").read_bytes() == raw

    def test_latin1_comment_kept_after_carving(self, tmp_path):
        src = tmp_path / "in.pgm"
        src.write_bytes(b"P2\n# Cr\xe9\xe9\n2 2\n255\n1 2\n3 4\n")

        assert main([str(src), '1', '0']) == 0
        out = (tmp_path / "in_processed_1_0.pgm").read_bytes()
        assert out.startswith(b"P2\n# Cr\xe9\xe9\n1 2\n255\n")
