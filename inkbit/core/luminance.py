"""Pixel to scalar gray conversion.

Gray is the plain (unweighted) mean of the three channels with integer
truncation, not perceptual luma.
"""

from __future__ import annotations

import numpy as np


def luminance(sample: tuple[int, int, int]) -> int:
    """Return the gray value (0-255) of an RGB sample."""
    r, g, b = sample
    return (int(r) + int(g) + int(b)) // 3


def luminance_array(pixels: np.ndarray) -> np.ndarray:
    """Gray value of every pixel in a (height, width, 3) buffer.

    Channels are widened before summing so uint8 input cannot overflow.
    """
    return pixels.astype(np.int32).sum(axis=2) // 3


def brightness(sample: tuple[int, int, int]) -> float:
    """HSL lightness of an RGB sample in [0.0, 1.0]."""
    return (max(sample) + min(sample)) / 510.0
