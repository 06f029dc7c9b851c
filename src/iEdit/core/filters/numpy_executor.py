"""NumPy vectorized executor for the colour adjustments.

Mirrors the per-pixel maths from :mod:`.algorithms` over whole channel
planes.  It serves as the fallback when the Numba kernel is unavailable and
produces byte-identical output to the JIT path.
"""

from __future__ import annotations

import numpy as np

from ...config import CONTRAST_PIVOT, LUMA_WEIGHTS


def _np_clamp255(arr: np.ndarray) -> np.ndarray:
    """Clamp array values to [0.0, 255.0]."""
    return np.clip(arr, 0.0, 255.0)


def _np_to_channel(arr: np.ndarray) -> np.ndarray:
    """Round half-up and convert to ``uint8``."""
    return np.clip(np.floor(arr + 0.5), 0.0, 255.0).astype(np.uint8)


def _np_apply_saturation(
    r: np.ndarray,
    g: np.ndarray,
    b: np.ndarray,
    factor: float,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    weight_r, weight_g, weight_b = LUMA_WEIGHTS
    luma = weight_r * r + weight_g * g + weight_b * b

    r = _np_clamp255(luma + (r - luma) * factor)
    g = _np_clamp255(luma + (g - luma) * factor)
    b = _np_clamp255(luma + (b - luma) * factor)
    return r, g, b


def apply_colour_adjustments_numpy(
    pixels: np.ndarray,
    brightness: float,
    contrast: float,
    saturation: float,
) -> np.ndarray:
    """Return a new ``(height, width, 4)`` array with the colour pass applied."""

    brightness_factor = float(brightness) / 100.0
    contrast_factor = float(contrast) / 100.0
    saturation_factor = float(saturation) / 100.0

    rgb = pixels[..., :3].astype(np.float64)

    # 1. Brightness
    rgb = _np_clamp255(rgb * brightness_factor)

    # 2. Contrast
    rgb = _np_clamp255(CONTRAST_PIVOT + (rgb - CONTRAST_PIVOT) * contrast_factor)

    # 3. Saturation
    r, g, b = _np_apply_saturation(rgb[..., 0], rgb[..., 1], rgb[..., 2], saturation_factor)

    output = np.empty(pixels.shape, dtype=np.uint8)
    output[..., 0] = _np_to_channel(r)
    output[..., 1] = _np_to_channel(g)
    output[..., 2] = _np_to_channel(b)
    output[..., 3] = pixels[..., 3]
    return output
