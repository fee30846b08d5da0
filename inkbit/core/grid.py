"""Mutable 2D pixel buffer shared by every binarization algorithm."""

from __future__ import annotations

import numpy as np
from PIL import Image

from inkbit.core.luminance import luminance, luminance_array

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

Sample = tuple[int, int, int]


class PixelGrid:
    """Row-major RGB grid backed by a (height, width, 3) uint8 array.

    Binarized pixels keep all three channels so the grid stays displayable.
    Writes outside the grid are ignored.
    """

    def __init__(self, pixels: np.ndarray) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected a (height, width, 3) array, got {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def new(cls, width: int, height: int, fill: Sample = WHITE) -> PixelGrid:
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = fill
        return cls(pixels)

    @classmethod
    def from_image(cls, img: Image.Image) -> PixelGrid:
        return cls(np.array(img.convert("RGB"), dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Sample:
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def set(self, x: int, y: int, sample: Sample | int) -> None:
        """Write an RGB triple, or a single intensity into all channels."""
        if not self.in_bounds(x, y):
            return
        self.pixels[y, x] = sample

    def gray(self, x: int, y: int) -> int:
        return luminance(self.get(x, y))

    def gray_array(self) -> np.ndarray:
        return luminance_array(self.pixels)

    def copy(self) -> PixelGrid:
        return PixelGrid(self.pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"
