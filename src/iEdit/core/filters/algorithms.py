"""Pure per-pixel colour maths shared by the JIT kernel.

These functions operate on plain floats in the 8-bit ``[0.0, 255.0]`` range
and carry no dependency on NumPy arrays or image containers.  They are
compiled by Numba and inlined into :mod:`.jit_kernels`; the NumPy executor
mirrors the same formulas in vectorised form.
"""

from __future__ import annotations

import math

from numba import jit


@jit(nopython=True, inline="always")
def _clamp255(value: float) -> float:
    """Clamp *value* to the inclusive ``[0.0, 255.0]`` range."""

    if value < 0.0:
        return 0.0
    if value > 255.0:
        return 255.0
    return value


@jit(nopython=True, inline="always")
def _apply_brightness(value: float, factor: float) -> float:
    """Scale a channel by ``brightness / 100``."""

    return _clamp255(value * factor)


@jit(nopython=True, inline="always")
def _apply_contrast(value: float, factor: float, pivot: float) -> float:
    """Stretch a channel away from (or towards) the mid-grey pivot."""

    return _clamp255(pivot + (value - pivot) * factor)


@jit(nopython=True, inline="always")
def _apply_saturation(
    r: float,
    g: float,
    b: float,
    factor: float,
    weight_r: float,
    weight_g: float,
    weight_b: float,
) -> tuple[float, float, float]:
    """Blend each channel towards (factor < 1) or away from the pixel's luma."""

    luma = weight_r * r + weight_g * g + weight_b * b
    r = _clamp255(luma + (r - luma) * factor)
    g = _clamp255(luma + (g - luma) * factor)
    b = _clamp255(luma + (b - luma) * factor)
    return r, g, b


@jit(nopython=True, inline="always")
def _to_channel(value: float) -> int:
    """Round half-up and clamp to an 8-bit channel value."""

    scaled = math.floor(value + 0.5)
    if scaled < 0:
        return 0
    if scaled > 255:
        return 255
    return int(scaled)
