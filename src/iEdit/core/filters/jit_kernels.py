"""JIT-compiled kernels for the colour adjustments.

The kernel walks a packed RGBA buffer and writes into a separate output
buffer so the source pixels stay untouched.  Separated from the executor to
keep the compiled code free of any container handling.
"""

from __future__ import annotations

import numpy as np
from numba import jit

from .algorithms import (
    _apply_brightness,
    _apply_contrast,
    _apply_saturation,
    _to_channel,
)


@jit(nopython=True, cache=True)
def _apply_colour_adjustments(
    source: np.ndarray,
    output: np.ndarray,
    width: int,
    height: int,
    brightness_factor: float,
    contrast_factor: float,
    contrast_pivot: float,
    saturation_factor: float,
    weight_r: float,
    weight_g: float,
    weight_b: float,
) -> None:
    """Apply brightness, contrast and saturation, in that order, pixel by pixel."""
    if width <= 0 or height <= 0:
        return

    row_stride = width * 4
    for y in range(height):
        row_offset = y * row_stride
        for x in range(width):
            offset = row_offset + x * 4

            r = float(source[offset])
            g = float(source[offset + 1])
            b = float(source[offset + 2])

            r = _apply_brightness(r, brightness_factor)
            g = _apply_brightness(g, brightness_factor)
            b = _apply_brightness(b, brightness_factor)

            r = _apply_contrast(r, contrast_factor, contrast_pivot)
            g = _apply_contrast(g, contrast_factor, contrast_pivot)
            b = _apply_contrast(b, contrast_factor, contrast_pivot)

            r, g, b = _apply_saturation(
                r,
                g,
                b,
                saturation_factor,
                weight_r,
                weight_g,
                weight_b,
            )

            output[offset] = _to_channel(r)
            output[offset + 1] = _to_channel(g)
            output[offset + 2] = _to_channel(b)
            output[offset + 3] = source[offset + 3]
