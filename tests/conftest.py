import os
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Qt must never try to reach a display server during tests.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from iEdit.models.bitmap import Bitmap  # noqa: E402


@pytest.fixture
def random_bitmap() -> Bitmap:
    """A 7x5 bitmap with random colour and alpha values."""
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(5, 7, 4), dtype=np.uint8)
    return Bitmap(pixels)


@pytest.fixture
def labelled_bitmap() -> Bitmap:
    """A 3x2 bitmap whose red channel encodes each pixel's (x, y) position.

    ``red = 10 * y + x`` so geometric tests can read back where a pixel came
    from; green and blue stay constant and alpha is opaque.
    """
    pixels = np.zeros((2, 3, 4), dtype=np.uint8)
    for y in range(2):
        for x in range(3):
            pixels[y, x] = (10 * y + x, 50, 100, 255)
    return Bitmap(pixels)
