"""Clustered-dot halftoning.

The input is sampled in ``JUMP`` x ``JUMP`` blocks. Each block's mean gray
sets the radius of a filled black circle on a new white canvas sized
``SIDE`` pixels per block. Circles are drawn with their bounding box at the
block's input-space origin, not at the output cell origin, so neighbouring
dots overlap when ``radius`` exceeds ``SIDE / 2``.
"""

from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageDraw

from inkbit.core.grid import PixelGrid

SIDE = 4  # output cell size in pixels
JUMP = 4  # input sampling stride
ALPHA = 3  # max radius scaling factor

BACKGROUND = 255
DOT = 0


def output_size(width: int, height: int) -> tuple[int, int]:
    """Canvas dimensions for an input of ``width`` x ``height``."""
    return SIDE * math.ceil(width / JUMP), SIDE * math.ceil(height / JUMP)


def block_average(gray: np.ndarray, x: int, y: int, size: int = JUMP) -> float:
    """Mean gray of the block at (x, y), clipped to the image bounds.

    Edge blocks are averaged over the pixels they actually contain.
    """
    block = gray[y : y + size, x : x + size]
    return int(block.sum()) / block.size


def dot_radius(average: float) -> int:
    """Circle radius for a block whose mean gray is ``average``."""
    intensity = 1 - average / 255.0
    return int(ALPHA * intensity * SIDE / 2)


def halftone(grid: PixelGrid) -> PixelGrid:
    """Render ``grid`` as a halftone on a new, larger canvas.

    The input grid is left untouched.
    """
    gray = grid.gray_array()
    canvas = Image.new("L", output_size(grid.width, grid.height), BACKGROUND)
    draw = ImageDraw.Draw(canvas)

    for y in range(0, grid.height, JUMP):
        for x in range(0, grid.width, JUMP):
            radius = dot_radius(block_average(gray, x, y))
            if radius > 0:
                diameter = radius * 2
                draw.ellipse((x, y, x + diameter - 1, y + diameter - 1), fill=DOT)

    return PixelGrid.from_image(canvas)
