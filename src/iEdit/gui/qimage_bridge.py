"""Convert between :class:`Bitmap` and :class:`QImage` for Qt display surfaces."""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..errors import BitmapFormatError
from ..models.bitmap import Bitmap


def bitmap_to_qimage(bitmap: Bitmap) -> QImage:
    """Return a :class:`QImage` that owns a copy of *bitmap*'s pixels.

    ``QImage`` does not take ownership of the buffer passed to its
    constructor, so the wrapper is deep-copied before the byte buffer goes
    out of scope.
    """

    data = bitmap.tobytes()
    image = QImage(
        data,
        bitmap.width,
        bitmap.height,
        bitmap.width * 4,
        QImage.Format.Format_RGBA8888,
    )
    return image.copy()


def qimage_to_bitmap(image: QImage) -> Bitmap:
    """Return a :class:`Bitmap` holding *image*'s pixels in RGBA order."""

    if image.isNull():
        raise BitmapFormatError("Cannot convert a null QImage")
    converted = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width = converted.width()
    height = converted.height()
    bytes_per_line = converted.bytesPerLine()

    buffer = converted.constBits()
    if not isinstance(buffer, memoryview):
        # PyQt-style wrappers need their size set before Python can view them.
        if hasattr(buffer, "setsize"):
            buffer.setsize(converted.sizeInBytes())
        buffer = memoryview(buffer)

    # Rows may carry padding beyond ``width * 4`` bytes; strip it before
    # handing the data to the pipeline.
    rows = np.frombuffer(buffer, dtype=np.uint8, count=bytes_per_line * height)
    rows = rows.reshape((height, bytes_per_line))[:, : width * 4]
    return Bitmap(rows.reshape((height, width, 4)))
