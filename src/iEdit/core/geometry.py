"""Quarter-turn rotation and mirror transforms for bitmaps.

All operations are exact pixel permutations: no interpolation, no colour
change, alpha travels with its pixel.  Rotation is always applied first and
the flips are expressed in the rotated frame, matching what the user sees
after pressing "Rotate" and then "Flip".

Clockwise quarter turns, in ``(x, y)`` image coordinates for a ``W x H``
source::

    k = 1   out(x, y) = in(y, H-1-x)
    k = 2   out(x, y) = in(W-1-x, H-1-y)
    k = 3   out(x, y) = in(W-1-y, x)
"""

from __future__ import annotations

import numpy as np

from ..models.bitmap import Bitmap
from ..models.types import TransformState


def output_size(width: int, height: int, state: TransformState) -> tuple[int, int]:
    """Return the ``(width, height)`` produced by *state* for a source of that size."""

    state.validate()
    if state.rotate_steps % 2:
        return (height, width)
    return (width, height)


def _rotate_pixels(pixels: np.ndarray, steps: int) -> np.ndarray:
    # ``np.rot90`` turns counter-clockwise for positive ``k`` with the array's
    # row axis pointing down, so clockwise steps map to negative ``k``.
    return np.rot90(pixels, k=-(steps % 4), axes=(0, 1))


def rotate_clockwise(bitmap: Bitmap, steps: int = 1) -> Bitmap:
    """Return *bitmap* rotated clockwise by ``steps * 90`` degrees."""

    bitmap.ensure_not_empty()
    return Bitmap(_rotate_pixels(bitmap.pixels, steps))


def flip_horizontal(bitmap: Bitmap) -> Bitmap:
    """Mirror *bitmap* left to right."""

    bitmap.ensure_not_empty()
    return Bitmap(bitmap.pixels[:, ::-1])


def flip_vertical(bitmap: Bitmap) -> Bitmap:
    """Mirror *bitmap* top to bottom."""

    bitmap.ensure_not_empty()
    return Bitmap(bitmap.pixels[::-1, :])


def apply_transform(bitmap: Bitmap, state: TransformState) -> Bitmap:
    """Return a new bitmap with rotation, horizontal flip and vertical flip applied.

    Raises
    ------
    EmptyBitmapError
        If *bitmap* has zero width or height.
    InvalidParameterError
        If the rotation is not a multiple of 90 degrees.
    """

    bitmap.ensure_not_empty()
    state.validate()

    pixels = bitmap.pixels
    if state.rotate_steps:
        pixels = _rotate_pixels(pixels, state.rotate_steps)
    if state.flip_horizontal:
        pixels = pixels[:, ::-1]
    if state.flip_vertical:
        pixels = pixels[::-1, :]
    # ``Bitmap`` copies the (possibly strided) view into a fresh buffer.
    return Bitmap(pixels)
