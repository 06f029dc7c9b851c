"""Export engine for encoding and saving rendered bitmaps."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from PIL import Image

from ..config import (
    DEFAULT_EXPORT_FORMAT,
    EXPORT_FLATTEN_BACKGROUND,
    EXPORT_FORMATS,
    EXPORT_JPEG_QUALITY,
)
from ..errors import ExportError
from ..models.bitmap import Bitmap

_LOGGER = logging.getLogger(__name__)

_SUFFIX_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".webp": "WEBP",
}


def bitmap_to_pil(bitmap: Bitmap) -> Image.Image:
    """Return a detached RGBA :class:`PIL.Image.Image` holding *bitmap*'s pixels."""

    return Image.frombytes("RGBA", bitmap.size, bitmap.tobytes())


def format_for_path(path: Path, default: str = DEFAULT_EXPORT_FORMAT) -> str:
    """Return the Pillow format name implied by *path*'s suffix.

    A path without a suffix maps to *default*.  Any other suffix must name
    one of the export formats; otherwise :class:`ExportError` is raised so a
    ``.bmp`` path never receives PNG bytes.
    """

    suffix = path.suffix.lower()
    if not suffix:
        return default
    try:
        return _SUFFIX_FORMATS[suffix]
    except KeyError:
        raise ExportError(
            f"Unsupported export suffix {path.suffix!r}; use one of {sorted(_SUFFIX_FORMATS)}"
        ) from None


def _prepare_for_format(image: Image.Image, fmt: str) -> Image.Image:
    if fmt == "JPEG":
        # JPEG cannot store alpha; composite onto an opaque background.
        background = Image.new("RGB", image.size, EXPORT_FLATTEN_BACKGROUND)
        background.paste(image, mask=image.getchannel("A"))
        return background
    return image


def _save_options(fmt: str) -> dict[str, object]:
    if fmt == "JPEG":
        return {"quality": EXPORT_JPEG_QUALITY}
    if fmt == "WEBP":
        return {"lossless": True}
    return {}


def encode_bitmap(bitmap: Bitmap, fmt: str = DEFAULT_EXPORT_FORMAT) -> bytes:
    """Encode *bitmap* into the image file format *fmt* and return the bytes."""

    fmt = fmt.upper()
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format: {fmt}")
    bitmap.ensure_not_empty()
    image = _prepare_for_format(bitmap_to_pil(bitmap), fmt)
    buffer = BytesIO()
    try:
        image.save(buffer, fmt, **_save_options(fmt))
    except (OSError, ValueError) as exc:
        raise ExportError(f"Failed to encode bitmap as {fmt}: {exc}") from exc
    return buffer.getvalue()


def get_unique_destination(destination: Path) -> Path:
    """Return *destination* or a variant with a counter if it exists."""
    if not destination.exists():
        return destination

    parent = destination.parent
    stem = destination.stem
    suffix = destination.suffix
    counter = 1
    while True:
        candidate = parent / f"{stem} ({counter}){suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


def export_bitmap(
    bitmap: Bitmap,
    destination: Path,
    *,
    fmt: str | None = None,
    overwrite: bool = False,
) -> Path:
    """Write *bitmap* to *destination* and return the path actually used.

    The format is inferred from the suffix unless *fmt* is given.  Existing
    files are kept: the export lands next to them with a ``(n)`` counter
    unless *overwrite* is set.
    """

    destination = Path(destination)
    fmt = (fmt or format_for_path(destination)).upper()
    payload = encode_bitmap(bitmap, fmt)

    final_dest = destination if overwrite else get_unique_destination(destination)
    try:
        final_dest.parent.mkdir(parents=True, exist_ok=True)
        final_dest.write_bytes(payload)
    except OSError as exc:
        raise ExportError(f"Failed to write {final_dest}: {exc}") from exc

    _LOGGER.info("Exported %dx%d %s to %s", bitmap.width, bitmap.height, fmt, final_dest)
    return final_dest
