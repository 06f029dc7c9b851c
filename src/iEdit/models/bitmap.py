"""Immutable RGBA bitmap passed between pipeline stages."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..errors import BitmapFormatError, EmptyBitmapError

CHANNELS = 4


class Bitmap:
    """Rectangular grid of 8-bit RGBA pixels.

    Pixels are stored as a ``(height, width, 4)`` ``uint8`` array in R, G, B, A
    order.  The array is copied on construction and flagged read-only, so a
    bitmap handed to a stage can never be modified behind the caller's back.
    Stages always return a fresh instance.
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray) -> None:
        array = np.asarray(pixels)
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise BitmapFormatError(
                f"Expected a (height, width, {CHANNELS}) array, got shape {array.shape}"
            )
        if array.dtype != np.uint8:
            raise BitmapFormatError(f"Expected uint8 channels, got {array.dtype}")
        frozen = np.array(array, dtype=np.uint8, order="C", copy=True)
        frozen.flags.writeable = False
        self._pixels = frozen

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes | bytearray | memoryview) -> "Bitmap":
        """Build a bitmap from a packed RGBA buffer."""

        if width < 0 or height < 0:
            raise BitmapFormatError(f"Negative dimensions: {width}x{height}")
        expected = width * height * CHANNELS
        buffer = memoryview(data).cast("B")
        if len(buffer) != expected:
            raise BitmapFormatError(
                f"Buffer holds {len(buffer)} bytes, expected {expected} for {width}x{height} RGBA"
            )
        array = np.frombuffer(buffer, dtype=np.uint8).reshape((height, width, CHANNELS))
        return cls(array)

    @classmethod
    def filled(cls, width: int, height: int, rgba: Sequence[int]) -> "Bitmap":
        """Return a *width* x *height* bitmap where every pixel equals *rgba*."""

        if width < 0 or height < 0:
            raise BitmapFormatError(f"Negative dimensions: {width}x{height}")
        if len(rgba) != CHANNELS:
            raise BitmapFormatError(f"Expected {CHANNELS} channel values, got {len(rgba)}")
        array = np.empty((height, width, CHANNELS), dtype=np.uint8)
        array[...] = np.asarray(rgba, dtype=np.uint8)
        return cls(array)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixels(self) -> np.ndarray:
        """Read-only ``(height, width, 4)`` view of the pixel data."""
        return self._pixels

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self._pixels[y, x])
        return (r, g, b, a)

    def tobytes(self) -> bytes:
        return self._pixels.tobytes()

    def copy(self) -> "Bitmap":
        return Bitmap(self._pixels)

    def ensure_not_empty(self) -> None:
        """Raise :class:`EmptyBitmapError` when the bitmap has no pixels."""

        if self.is_empty:
            raise EmptyBitmapError(f"Bitmap has no pixels ({self.width}x{self.height})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and np.array_equal(self._pixels, other._pixels)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height})"
