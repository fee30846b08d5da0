"""Error diffusion dithering (Floyd-Steinberg and Atkinson).

Pixels are visited in raster order. Each pixel is quantised to black or
white around a fixed midpoint and written back immediately, then its
quantisation error is pushed to not-yet-visited neighbours according to a
kernel table. Targets are always ahead in the current row or in a later
row, so a pixel can accumulate error from several sources before it is
itself visited.
"""

from __future__ import annotations

from dataclasses import dataclass

from inkbit.core.grid import PixelGrid

MIDPOINT = 127


@dataclass(frozen=True)
class KernelEntry:
    """Share ``numerator / denominator`` of the error goes to (x+dx, y+dy)."""

    dx: int
    dy: int
    numerator: int
    denominator: int


FLOYD_STEINBERG: tuple[KernelEntry, ...] = (
    KernelEntry(1, 0, 7, 16),
    KernelEntry(-1, 1, 3, 16),
    KernelEntry(0, 1, 5, 16),
    KernelEntry(1, 1, 1, 16),
)

# Only 6/8 of the error is propagated; the rest is dropped on purpose.
ATKINSON: tuple[KernelEntry, ...] = (
    KernelEntry(1, 0, 1, 8),
    KernelEntry(2, 0, 1, 8),
    KernelEntry(-1, 1, 1, 8),
    KernelEntry(0, 1, 1, 8),
    KernelEntry(1, 1, 1, 8),
    KernelEntry(0, 2, 1, 8),
)


def scaled_error(error: int, numerator: int, denominator: int) -> int:
    """Compute ``error * numerator / denominator`` truncated toward zero.

    Multiplication happens first. Python's ``//`` floors, which would round
    negative errors away from zero, so the sign is handled separately.
    """
    product = error * numerator
    quotient = abs(product) // denominator
    return quotient if product >= 0 else -quotient


def adjust_pixel(grid: PixelGrid, x: int, y: int, delta: int) -> None:
    """Add ``delta`` to the gray value at (x, y), clamped to [0, 255].

    Out-of-range targets are ignored. The result replaces any original
    color with a gray sample.
    """
    if not grid.in_bounds(x, y):
        return
    value = min(255, max(0, grid.gray(x, y) + delta))
    grid.set(x, y, value)


def diffuse_pixel(
    grid: PixelGrid, x: int, y: int, kernel: tuple[KernelEntry, ...]
) -> int:
    """Quantise one pixel and spread its error. Returns the error."""
    old = grid.gray(x, y)
    new = 255 if old > MIDPOINT else 0
    error = old - new
    grid.set(x, y, new)

    for entry in kernel:
        delta = scaled_error(error, entry.numerator, entry.denominator)
        adjust_pixel(grid, x + entry.dx, y + entry.dy, delta)
    return error


def error_diffusion(grid: PixelGrid, kernel: tuple[KernelEntry, ...]) -> PixelGrid:
    """Dither ``grid`` in place with the given kernel and return it."""
    for y in range(grid.height):
        for x in range(grid.width):
            diffuse_pixel(grid, x, y, kernel)
    return grid


def floyd_steinberg(grid: PixelGrid) -> PixelGrid:
    return error_diffusion(grid, FLOYD_STEINBERG)


def atkinson(grid: PixelGrid) -> PixelGrid:
    return error_diffusion(grid, ATKINSON)
