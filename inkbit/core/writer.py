"""Save binarized grids as images or packed printer raster rows."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from inkbit.core.grid import PixelGrid

IMAGE_SUFFIXES = (".png", ".bmp", ".gif", ".tif", ".tiff")

# Channel values above this count as ink after inversion.
INK_LEVEL = 127


def to_one_bit(grid: PixelGrid) -> Image.Image:
    """Convert a binarized grid to a Pillow mode "1" image."""
    mask = grid.gray_array() > INK_LEVEL
    gray = mask.astype(np.uint8) * 255
    return Image.fromarray(gray).convert("1", dither=Image.Dither.NONE)


def save_image(grid: PixelGrid, output_path: Path, one_bit: bool = True) -> None:
    """Save ``grid`` in the format given by the output file extension."""
    suffix = output_path.suffix.lower()
    if suffix not in IMAGE_SUFFIXES:
        raise ValueError(f"Unsupported output format: {suffix}")
    img = to_one_bit(grid) if one_bit else grid.to_image()
    img.save(str(output_path))


def pack_rows(grid: PixelGrid) -> bytes:
    """Pack the grid into MSB-first 1-bit raster rows.

    A set bit marks an ink pixel. Each row is padded to a whole number of
    bytes (``ceil(width / 8)``).
    """
    ink = grid.gray_array() > INK_LEVEL
    return np.packbits(ink, axis=1).tobytes()


def save_raw(grid: PixelGrid, output_path: Path) -> int:
    """Write packed raster rows to ``output_path``. Returns bytes written."""
    data = pack_rows(grid)
    output_path.write_bytes(data)
    return len(data)
