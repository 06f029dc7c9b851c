"""Default configuration values for iEdit."""

from __future__ import annotations

from typing import Final

# Slider domains exposed by the editor.  Brightness, contrast and saturation
# are percentages where ``100`` leaves the image untouched; blur is a radius
# in pixels where ``0`` disables the effect.
ADJUSTMENT_RANGES: Final[dict[str, tuple[int, int]]] = {
    "brightness": (0, 200),
    "contrast": (0, 200),
    "saturation": (0, 200),
    "blur": (0, 20),
}
DEFAULT_ADJUSTMENTS: Final[dict[str, int]] = {
    "brightness": 100,
    "contrast": 100,
    "saturation": 100,
    "blur": 0,
}

# Contrast pivots around this 8-bit value.
CONTRAST_PIVOT: Final[float] = 128.0

# Rec. 601 luma weights used by the saturation blend.
LUMA_WEIGHTS: Final[tuple[float, float, float]] = (0.299, 0.587, 0.114)

# The Gaussian kernel is truncated after this many standard deviations.
BLUR_KERNEL_SIGMAS: Final[float] = 3.0

ROTATION_STEP_DEGREES: Final[int] = 90
VALID_ROTATIONS: Final[tuple[int, ...]] = (0, 90, 180, 270)

# ``auto`` prefers the Numba kernel and degrades to the NumPy implementation.
PIPELINE_BACKENDS: Final[tuple[str, ...]] = ("auto", "jit", "numpy")
DEFAULT_PIPELINE_BACKEND: Final[str] = "auto"

DEFAULT_EXPORT_NAME: Final[str] = "edited-image.png"
DEFAULT_EXPORT_FORMAT: Final[str] = "PNG"
EXPORT_FORMATS: Final[tuple[str, ...]] = ("PNG", "JPEG", "WEBP")
# JPEG output has no alpha channel; transparent pixels are composited onto
# this background colour.
EXPORT_FLATTEN_BACKGROUND: Final[tuple[int, int, int]] = (255, 255, 255)
EXPORT_JPEG_QUALITY: Final[int] = 95

APP_NAME: Final[str] = "iEdit"
