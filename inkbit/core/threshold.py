"""Flat and corner-referenced thresholding."""

from __future__ import annotations

import numpy as np

from inkbit.core.grid import PixelGrid
from inkbit.core.luminance import brightness

FLAT_CUTOFF = 127


def threshold(grid: PixelGrid, cutoff: int) -> PixelGrid:
    """Map every pixel to 255 if its gray value is above ``cutoff``, else 0.

    There is no cross-pixel dependency, so the whole buffer is updated in
    one vectorised pass.
    """
    binary = np.where(grid.gray_array() > cutoff, 255, 0).astype(np.uint8)
    grid.pixels[:, :, :] = binary[:, :, np.newaxis]
    return grid


def mean_cutoff(grid: PixelGrid) -> int:
    """Cutoff used by the mean-threshold algorithm.

    Derived from the lightness of the top-left pixel only, truncated to an
    int, so it is 1 for a pure white corner and 0 otherwise.
    """
    return int(brightness(grid.get(0, 0)))


def mean_threshold(grid: PixelGrid) -> PixelGrid:
    return threshold(grid, mean_cutoff(grid))
