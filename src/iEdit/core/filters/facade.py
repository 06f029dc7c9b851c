"""Facade module coordinating the adjustment executors.

This module provides the public API of the Adjustment Stage, selecting the
appropriate executor for the colour pass and gracefully falling back when the
preferred one cannot run.
"""

from __future__ import annotations

import logging

from ...config import PIPELINE_BACKENDS
from ...errors import InvalidParameterError
from ...models.bitmap import Bitmap
from ...models.types import AdjustmentParameters
from .blur import apply_blur
from .jit_executor import apply_colour_adjustments_jit, jit_available
from .numpy_executor import apply_colour_adjustments_numpy

_LOGGER = logging.getLogger(__name__)


def _resolve_backend(backend: str) -> str:
    if backend not in PIPELINE_BACKENDS:
        raise InvalidParameterError(
            "backend", backend, f"Unknown pipeline backend {backend!r}; expected one of {PIPELINE_BACKENDS}"
        )
    if backend == "auto":
        return "jit" if jit_available() else "numpy"
    return backend


def apply_adjustments(
    bitmap: Bitmap,
    params: AdjustmentParameters,
    *,
    backend: str = "auto",
) -> Bitmap:
    """Return a new :class:`Bitmap` with *params* applied to *bitmap*.

    The source bitmap is treated as the immutable source of truth: every
    executor writes into a fresh buffer so callers can re-run the stage from
    the same pristine input whenever a slider moves.

    Parameters
    ----------
    bitmap:
        Source image.  Must contain at least one pixel.
    params:
        Adjustment snapshot.  Values outside their slider domain are rejected
        with :class:`InvalidParameterError` rather than clamped.
    backend:
        ``"auto"`` (JIT with NumPy fallback), ``"jit"`` or ``"numpy"``.

    Raises
    ------
    EmptyBitmapError
        If *bitmap* has zero width or height.
    InvalidParameterError
        If any parameter or the backend name is invalid.
    """

    bitmap.ensure_not_empty()
    params.validate()
    resolved = _resolve_backend(backend)

    if params.is_identity:
        # Nothing to do - return a detached copy so callers still get an
        # independent instance.
        return bitmap.copy()

    pixels = bitmap.pixels
    if params.has_colour_change:
        pixels = _apply_colour_pass(pixels, params, resolved, fallback=backend == "auto")

    if params.blur > 0:
        pixels = apply_blur(pixels, params.blur)

    return Bitmap(pixels)


def _apply_colour_pass(pixels, params: AdjustmentParameters, backend: str, *, fallback: bool):
    if backend == "numpy":
        return apply_colour_adjustments_numpy(
            pixels, params.brightness, params.contrast, params.saturation
        )

    try:
        return apply_colour_adjustments_jit(
            pixels, params.brightness, params.contrast, params.saturation
        )
    except (BufferError, RuntimeError, TypeError):
        if not fallback:
            raise
        # If the fast path fails we degrade to the vectorised implementation.
        # Both produce identical bytes, so the preview does not change.
        _LOGGER.warning("JIT colour pass failed; using NumPy executor", exc_info=True)
        return apply_colour_adjustments_numpy(
            pixels, params.brightness, params.contrast, params.saturation
        )
