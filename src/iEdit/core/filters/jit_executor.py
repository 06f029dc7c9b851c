"""JIT-accelerated colour adjustment executor using Numba.

This is the fastest path for the brightness, contrast and saturation pass.
Numba needs the original Python bytecode to compile the kernel, so frozen
builds (PyInstaller, Nuitka) report the executor as unavailable and the facade
routes them to the NumPy implementation instead.
"""

from __future__ import annotations

import logging
import sys

import numpy as np

from ...config import CONTRAST_PIVOT, LUMA_WEIGHTS

logger = logging.getLogger(__name__)

_IS_COMPILED = (
    "__compiled__" in globals()
    or hasattr(sys, "frozen")
    or hasattr(sys, "_MEIPASS")
)


def jit_available() -> bool:
    """Return ``True`` when the Numba kernel can be compiled in this process."""

    return not _IS_COMPILED


def apply_colour_adjustments_jit(
    pixels: np.ndarray,
    brightness: float,
    contrast: float,
    saturation: float,
) -> np.ndarray:
    """Return a new ``(height, width, 4)`` array with the colour pass applied.

    Percent values are converted to multiplicative factors here so the kernel
    only deals with plain floats.
    """

    if _IS_COMPILED:
        raise RuntimeError("Numba JIT is unavailable in compiled builds")

    from .jit_kernels import _apply_colour_adjustments

    height, width = int(pixels.shape[0]), int(pixels.shape[1])
    source = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
    output = np.empty_like(source)
    if source.size != width * height * 4:
        raise BufferError("Pixel buffer does not match the declared dimensions")

    weight_r, weight_g, weight_b = LUMA_WEIGHTS
    _apply_colour_adjustments(
        source,
        output,
        width,
        height,
        float(brightness) / 100.0,
        float(contrast) / 100.0,
        CONTRAST_PIVOT,
        float(saturation) / 100.0,
        weight_r,
        weight_g,
        weight_b,
    )
    return output.reshape((height, width, 4))
