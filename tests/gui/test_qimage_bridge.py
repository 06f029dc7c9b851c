import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for QImage tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtGui", reason="Qt GUI not available", exc_type=ImportError)

from PySide6.QtGui import QColor, QImage

from iEdit.errors import BitmapFormatError
from iEdit.gui.qimage_bridge import bitmap_to_qimage, qimage_to_bitmap
from iEdit.models.bitmap import Bitmap


def test_bitmap_to_qimage_preserves_pixels(random_bitmap):
    image = bitmap_to_qimage(random_bitmap)
    assert (image.width(), image.height()) == random_bitmap.size
    assert image.format() == QImage.Format.Format_RGBA8888

    colour = image.pixelColor(2, 3)
    rgba = (colour.red(), colour.green(), colour.blue(), colour.alpha())
    assert rgba == random_bitmap.pixel(2, 3)


def test_round_trip_through_qimage(random_bitmap):
    assert qimage_to_bitmap(bitmap_to_qimage(random_bitmap)) == random_bitmap


def test_qimage_with_row_padding_is_unpacked():
    # A 3 px wide RGB888 image has 9 data bytes per row padded to 12.
    image = QImage(3, 2, QImage.Format.Format_RGB888)
    image.fill(QColor(10, 20, 30))
    image.setPixelColor(2, 1, QColor(200, 100, 50))

    bitmap = qimage_to_bitmap(image)
    assert bitmap.size == (3, 2)
    assert bitmap.pixel(0, 0) == (10, 20, 30, 255)
    assert bitmap.pixel(2, 1) == (200, 100, 50, 255)


def test_null_qimage_is_rejected():
    with pytest.raises(BitmapFormatError):
        qimage_to_bitmap(QImage())


def test_qimage_owns_its_buffer():
    image = bitmap_to_qimage(Bitmap.filled(2, 2, (1, 2, 3, 255)))
    # The source bytes are gone once the bridge returns; reading must still work.
    assert image.pixelColor(1, 1).blue() == 3
