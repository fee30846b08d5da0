"""Binarization pipeline.

Resize to the printer width → binarize with the selected algorithm → invert.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from PIL import Image

from inkbit.core.dither import atkinson, floyd_steinberg
from inkbit.core.grid import PixelGrid
from inkbit.core.halftone import halftone
from inkbit.core.invert import invert
from inkbit.core.reader import load_image
from inkbit.core.threshold import FLAT_CUTOFF, mean_threshold, threshold

DEFAULT_WIDTH = 384  # 58 mm thermal printer at 8 dots/mm


class Algorithm(str, Enum):
    ATKINSON = "atkinson"
    FLOYD_STEINBERG = "floyd-steinberg"
    HALFTONE = "halftone"
    MEAN_THRESHOLD = "mean-threshold"
    NONE = "none"


class BinarizationError(ValueError):
    """Raised when a pipeline request is rejected before any pixel is touched."""


class UnknownAlgorithmError(BinarizationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown image binarization algorithm: {name}")
        self.name = name


class WidthMismatchError(BinarizationError):
    def __init__(self, width: int, target_width: int) -> None:
        super().__init__(
            f"Wrong width of {width} px. An image with a width of "
            f"{target_width} px is required for 'none' binarization"
        )
        self.width = width
        self.target_width = target_width


def _flat_threshold(grid: PixelGrid) -> PixelGrid:
    return threshold(grid, FLAT_CUTOFF)


BINARIZERS: dict[Algorithm, Callable[[PixelGrid], PixelGrid]] = {
    Algorithm.ATKINSON: atkinson,
    Algorithm.FLOYD_STEINBERG: floyd_steinberg,
    Algorithm.HALFTONE: halftone,
    Algorithm.MEAN_THRESHOLD: mean_threshold,
    Algorithm.NONE: _flat_threshold,
}


def parse_algorithm(name: str | Algorithm) -> Algorithm:
    """Match an algorithm name case-insensitively."""
    if isinstance(name, Algorithm):
        return name
    try:
        return Algorithm(str(name).strip().lower())
    except ValueError:
        raise UnknownAlgorithmError(name) from None


@dataclass(frozen=True)
class Settings:
    """Processing settings that affect output."""

    algorithm: Algorithm = Algorithm.FLOYD_STEINBERG
    width: int = DEFAULT_WIDTH


def binarize(grid: PixelGrid, algorithm: Algorithm) -> PixelGrid:
    """Run one binarization algorithm.

    Diffusion and threshold algorithms mutate ``grid`` and return it;
    halftone returns a new, larger grid.
    """
    return BINARIZERS[algorithm](grid)


def scaled_height(width: int, height: int, target_width: int) -> int:
    """Height that preserves the aspect ratio at ``target_width``."""
    return max(1, round(height * target_width / width))


def resize_to_width(grid: PixelGrid, target_width: int) -> PixelGrid:
    """Resize to ``target_width`` keeping the aspect ratio.

    Always returns a new grid.
    """
    if grid.width == target_width:
        return grid.copy()
    height = scaled_height(grid.width, grid.height, target_width)
    resized = grid.to_image().resize((target_width, height), Image.Resampling.LANCZOS)
    return PixelGrid.from_image(resized)


def process(
    source: PixelGrid,
    target_width: int,
    algorithm_name: str | Algorithm,
    resize: Callable[[PixelGrid, int], PixelGrid] = resize_to_width,
) -> PixelGrid:
    """Resize, binarize and invert ``source``.

    All validation happens before any pixel work, so a failed call never
    leaves a partially processed grid behind. ``source`` itself is only
    read.

    Raises:
        UnknownAlgorithmError: if ``algorithm_name`` is not recognised.
        WidthMismatchError: if "none" is requested for an image whose width
            differs from ``target_width``.
        ValueError: if ``target_width`` is not positive.
    """
    algorithm = parse_algorithm(algorithm_name)
    if target_width <= 0:
        raise ValueError(f"Target width must be positive, got {target_width}")
    if algorithm == Algorithm.NONE and source.width != target_width:
        raise WidthMismatchError(source.width, target_width)

    resized = resize(source, target_width)
    return invert(binarize(resized, algorithm))


def convert_file(path: str | Path, settings: Settings) -> PixelGrid:
    """Load an image file and run it through the pipeline."""
    return process(load_image(path), settings.width, settings.algorithm)
