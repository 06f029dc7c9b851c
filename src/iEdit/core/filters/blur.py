"""Separable Gaussian blur with repeat-edge sampling."""

from __future__ import annotations

import math

import numpy as np

from ...config import BLUR_KERNEL_SIGMAS


def gaussian_kernel(sigma: float) -> np.ndarray:
    """Return a normalised 1-D Gaussian kernel for standard deviation *sigma*.

    The kernel is truncated at ``ceil(BLUR_KERNEL_SIGMAS * sigma)`` taps on
    each side.  ``sigma <= 0`` yields the single-tap identity kernel.
    """

    if sigma <= 0.0:
        return np.ones(1, dtype=np.float64)
    radius = max(1, int(math.ceil(BLUR_KERNEL_SIGMAS * sigma)))
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    weights = np.exp(-(offsets * offsets) / (2.0 * sigma * sigma))
    return weights / weights.sum()


def _convolve_axis(plane: np.ndarray, kernel: np.ndarray, axis: int) -> np.ndarray:
    """Convolve *plane* with *kernel* along *axis*, clamping samples at the border."""

    radius = kernel.size // 2
    pad = [(0, 0)] * plane.ndim
    pad[axis] = (radius, radius)
    padded = np.pad(plane, pad, mode="edge")

    length = plane.shape[axis]
    result = np.zeros(plane.shape, dtype=np.float64)
    # Accumulate shifted copies rather than calling a generic convolution so
    # the border behaviour is explicit.
    for tap, weight in enumerate(kernel):
        window = [slice(None)] * plane.ndim
        window[axis] = slice(tap, tap + length)
        result += weight * padded[tuple(window)]
    return result


def apply_blur(pixels: np.ndarray, radius: float) -> np.ndarray:
    """Return a new ``(height, width, 4)`` array blurred with sigma = *radius*.

    Only the colour channels are filtered; alpha is copied through.  A radius
    of zero returns an exact copy without sampling any neighbours.
    """

    if radius <= 0:
        return np.array(pixels, dtype=np.uint8, copy=True)

    kernel = gaussian_kernel(float(radius))
    rgb = pixels[..., :3].astype(np.float64)
    rgb = _convolve_axis(rgb, kernel, axis=1)
    rgb = _convolve_axis(rgb, kernel, axis=0)

    output = np.empty(pixels.shape, dtype=np.uint8)
    output[..., :3] = np.clip(np.floor(rgb + 0.5), 0.0, 255.0).astype(np.uint8)
    output[..., 3] = pixels[..., 3]
    return output
