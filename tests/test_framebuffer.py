"""Tests for RGBA8 packing and the framebuffer."""

import logging

import pytest
import numpy as np
from PIL import Image

from lumentrace.vec3 import Color
from lumentrace.framebuffer import (
    Framebuffer, ImageWriteError, pack_rgba, unpack_rgba, color_to_rgba
)


class TestPacking:
    """Test the packed pixel word layout."""

    def test_layout(self):
        assert pack_rgba(0x11, 0x22, 0x33, 0x44) == 0x44332211

    def test_default_alpha(self):
        assert pack_rgba(0, 0, 0) >> 24 == 255

    @pytest.mark.parametrize("channels", [
        (0, 0, 0, 0),
        (255, 255, 255, 255),
        (1, 2, 3, 4),
        (255, 0, 128, 255),
        (17, 200, 99, 3),
    ])
    def test_round_trip(self, channels):
        assert unpack_rgba(pack_rgba(*channels)) == channels

    def test_unpack_numpy_word(self):
        assert unpack_rgba(np.uint32(pack_rgba(10, 20, 30))) == (10, 20, 30, 255)


class TestColorToRgba:
    """Test gamma correction, averaging and clamping."""

    def test_black(self):
        assert color_to_rgba(Color(0, 0, 0)) == (0, 0, 0, 255)

    def test_white_clamped_to_255(self):
        assert color_to_rgba(Color(1, 1, 1)) == (255, 255, 255, 255)

    def test_overbright_clamped(self):
        assert color_to_rgba(Color(7, 2, 1.5)) == (255, 255, 255, 255)

    def test_gamma_two(self):
        # sqrt(0.25) = 0.5 -> 128
        assert color_to_rgba(Color(0.25, 0.25, 0.25)) == (128, 128, 128, 255)

    def test_averages_samples(self):
        assert color_to_rgba(Color(1.0, 0.0, 2.0), samples=4) == (128, 0, 181, 255)

    def test_negative_noise_is_black(self):
        assert color_to_rgba(Color(-1e-12, 0, 0)) == (0, 0, 0, 255)


class TestFramebuffer:
    """Test pixel storage and vertical flip."""

    def test_starts_zeroed(self):
        fb = Framebuffer(3, 2)
        assert fb.pixels.shape == (6,)
        assert fb.pixels.dtype == np.uint32
        assert not fb.pixels.any()

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            Framebuffer(0, 5)

    def test_bottom_row_stored_last(self):
        fb = Framebuffer(3, 2)
        fb.set_pixel(1, 0, 10, 20, 30)
        assert fb.pixels[1 + 1 * 3] == pack_rgba(10, 20, 30)
        assert fb.get_pixel(1, 0) == (10, 20, 30, 255)

    def test_top_row_stored_first(self):
        fb = Framebuffer(3, 2)
        fb.set_pixel(2, 1, 1, 2, 3, 4)
        assert fb.pixels[2] == pack_rgba(1, 2, 3, 4)

    def test_out_of_range(self):
        fb = Framebuffer(3, 2)
        with pytest.raises(IndexError):
            fb.set_pixel(3, 0, 0, 0, 0)
        with pytest.raises(IndexError):
            fb.get_pixel(0, -1)

    def test_to_array(self):
        fb = Framebuffer(2, 2)
        fb.set_pixel(0, 1, 255, 0, 0)   # top left
        fb.set_pixel(1, 0, 0, 0, 255)   # bottom right
        rgba = fb.to_array()

        assert rgba.shape == (2, 2, 4)
        assert rgba.dtype == np.uint8
        assert tuple(rgba[0, 0]) == (255, 0, 0, 255)
        assert tuple(rgba[1, 1]) == (0, 0, 255, 255)
        assert tuple(rgba[0, 1]) == (0, 0, 0, 0)

    def test_stride(self):
        assert Framebuffer(5, 3).stride == 20


class TestSavePng:
    """Test PNG output."""

    def test_save_and_reload(self, tmp_path):
        fb = Framebuffer(4, 3)
        fb.set_pixel(0, 2, 255, 128, 0)
        fb.set_pixel(3, 0, 10, 20, 30)

        path = fb.save_png(tmp_path / "out" / "image.png")

        assert path.exists()
        with Image.open(path) as img:
            assert img.mode == 'RGBA'
            assert img.size == (4, 3)
            assert img.getpixel((0, 0)) == (255, 128, 0, 255)
            assert img.getpixel((3, 2)) == (10, 20, 30, 255)

    def test_unwritable_path(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(ImageWriteError):
            Framebuffer(2, 2).save_png(blocker / "image.png")

    def test_logs_row_stride(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger="lumentrace.framebuffer"):
            Framebuffer(5, 3).save_png(tmp_path / "image.png")
        assert "5x3 image (20 bytes per row)" in caplog.text
