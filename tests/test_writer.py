"""Tests for the output writer."""

import numpy as np
import pytest
from PIL import Image

from inkbit.core.grid import PixelGrid
from inkbit.core.writer import pack_rows, save_image, save_raw, to_one_bit


def _checker(width, height):
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[::2, ::2] = 255
    arr[1::2, 1::2] = 255
    return PixelGrid(arr)


class TestToOneBit:
    def test_mode_and_values(self):
        img = to_one_bit(_checker(4, 2))
        assert img.mode == "1"
        assert img.size == (4, 2)
        assert img.getpixel((0, 0)) == 255
        assert img.getpixel((1, 0)) == 0


class TestPackRows:
    def test_msb_first(self):
        grid = PixelGrid.new(8, 1, (0, 0, 0))
        grid.set(0, 0, 255)
        grid.set(7, 0, 255)
        assert pack_rows(grid) == bytes([0b10000001])

    def test_rows_padded_to_bytes(self):
        grid = PixelGrid.new(10, 2)
        data = pack_rows(grid)
        assert len(data) == 4
        assert data == bytes([0xFF, 0xC0, 0xFF, 0xC0])

    def test_checker(self):
        assert pack_rows(_checker(8, 2)) == bytes([0xAA, 0x55])


class TestSaveImage:
    def test_save_png(self, tmp_path):
        output = tmp_path / "out.png"
        save_image(_checker(8, 8), output)
        img = Image.open(str(output))
        assert img.format == "PNG"
        assert img.mode == "1"
        assert img.size == (8, 8)

    def test_save_rgb(self, tmp_path):
        output = tmp_path / "out.bmp"
        save_image(_checker(4, 4), output, one_bit=False)
        img = Image.open(str(output))
        assert img.mode == "RGB"

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            save_image(_checker(2, 2), tmp_path / "out.jpg")


class TestSaveRaw:
    def test_writes_packed_bytes(self, tmp_path):
        output = tmp_path / "out.bin"
        written = save_raw(_checker(16, 3), output)
        assert written == 6
        assert output.read_bytes() == bytes([0xAA, 0xAA, 0x55, 0x55, 0xAA, 0xAA])
