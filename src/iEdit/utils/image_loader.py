"""Decode image files into :class:`Bitmap` instances using Pillow."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from ..errors import ImageLoadError
from ..models.bitmap import Bitmap

_LOGGER = logging.getLogger(__name__)

SUPPORTED_SUFFIXES: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}
)


def _decode(source: Union[Path, BinaryIO], label: str) -> Bitmap:
    try:
        with Image.open(source) as img:
            # Honour camera orientation so the pipeline sees the upright image.
            img = ImageOps.exif_transpose(img)
            rgba = img.convert("RGBA")
    except UnidentifiedImageError as exc:
        raise ImageLoadError(f"Not an image: {label}") from exc
    except Image.DecompressionBombError as exc:
        raise ImageLoadError(f"Refusing to decode oversized image {label}: {exc}") from exc
    except OSError as exc:
        raise ImageLoadError(f"Failed to decode {label}: {exc}") from exc

    width, height = rgba.size
    bitmap = Bitmap.from_bytes(width, height, rgba.tobytes())
    _LOGGER.debug("Decoded %s as %dx%d RGBA", label, width, height)
    return bitmap


def load_bitmap(path: Union[str, Path]) -> Bitmap:
    """Load the image at *path* as an RGBA :class:`Bitmap`.

    Raises
    ------
    ImageLoadError
        If the path does not point to a file or Pillow cannot decode it.
    """

    source = Path(path)
    if not source.is_file():
        raise ImageLoadError(f"File not found: {source}")
    return _decode(source, str(source))


def bitmap_from_bytes(data: bytes) -> Bitmap:
    """Decode an in-memory image file (PNG, JPEG, ...) into a :class:`Bitmap`."""

    if not data:
        raise ImageLoadError("Empty image payload")
    return _decode(BytesIO(data), "<bytes>")


def describe_image(path: Union[str, Path]) -> dict[str, object]:
    """Return basic properties of the file at *path* without a full decode."""

    source = Path(path)
    if not source.is_file():
        raise ImageLoadError(f"File not found: {source}")
    try:
        with Image.open(source) as img:
            return {
                "path": str(source),
                "format": img.format,
                "mode": img.mode,
                "width": img.width,
                "height": img.height,
                "bytes": source.stat().st_size,
            }
    except UnidentifiedImageError as exc:
        raise ImageLoadError(f"Not an image: {source}") from exc
    except Image.DecompressionBombError as exc:
        raise ImageLoadError(f"Refusing to open oversized image {source}: {exc}") from exc
    except OSError as exc:
        raise ImageLoadError(f"Failed to read {source}: {exc}") from exc
