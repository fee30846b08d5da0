"""Polarity flip to match the target device's ink convention."""

from __future__ import annotations

from inkbit.core.grid import PixelGrid


def invert(grid: PixelGrid) -> PixelGrid:
    """Replace every channel ``c`` with ``255 - c`` in place."""
    grid.pixels[:] = 255 - grid.pixels
    return grid
