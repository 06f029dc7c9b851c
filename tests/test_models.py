"""Tests for the bitmap and parameter models."""

import math

import numpy as np
import pytest

from iEdit.errors import BitmapFormatError, EmptyBitmapError, InvalidParameterError
from iEdit.models.bitmap import Bitmap
from iEdit.models.types import AdjustmentParameters, TransformState


def test_from_bytes_checks_buffer_length():
    data = bytes(range(24))
    bitmap = Bitmap.from_bytes(3, 2, data)
    assert bitmap.size == (3, 2)
    assert bitmap.tobytes() == data
    assert bitmap.pixel(1, 0) == (4, 5, 6, 7)

    with pytest.raises(BitmapFormatError):
        Bitmap.from_bytes(3, 2, data[:-1])


def test_bitmap_rejects_wrong_shape_and_dtype():
    with pytest.raises(BitmapFormatError):
        Bitmap(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(BitmapFormatError):
        Bitmap(np.zeros((2, 2, 4), dtype=np.float32))


def test_bitmap_copies_and_freezes_its_buffer():
    pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    bitmap = Bitmap(pixels)
    pixels[0, 0, 0] = 99

    assert bitmap.pixel(0, 0) == (0, 0, 0, 0)
    with pytest.raises(ValueError):
        bitmap.pixels[0, 0, 0] = 1


def test_bitmap_equality_is_pixel_exact():
    a = Bitmap.filled(2, 3, (1, 2, 3, 4))
    b = Bitmap.filled(2, 3, (1, 2, 3, 4))
    c = Bitmap.filled(3, 2, (1, 2, 3, 4))
    assert a == b
    assert a != c
    assert a != Bitmap.filled(2, 3, (1, 2, 3, 5))


def test_empty_bitmap_detection():
    empty = Bitmap(np.zeros((0, 4, 4), dtype=np.uint8))
    assert empty.is_empty
    with pytest.raises(EmptyBitmapError):
        empty.ensure_not_empty()


def test_adjustment_defaults_are_identity():
    params = AdjustmentParameters()
    params.validate()
    assert params.is_identity
    assert not params.has_colour_change
    assert params.as_dict() == {"brightness": 100, "contrast": 100, "saturation": 100, "blur": 0}


@pytest.mark.parametrize(
    "name, value",
    [
        ("brightness", -1),
        ("brightness", 201),
        ("contrast", 200.5),
        ("saturation", -0.1),
        ("blur", 21),
        ("blur", -1),
        ("blur", math.nan),
        ("contrast", True),
        ("saturation", "100"),
    ],
)
def test_adjustment_validation_rejects_out_of_domain(name, value):
    params = AdjustmentParameters().with_value(name, value)
    with pytest.raises(InvalidParameterError) as excinfo:
        params.validate()
    assert excinfo.value.name == name


def test_adjustment_range_edges_are_valid():
    AdjustmentParameters(brightness=0, contrast=200, saturation=0, blur=20).validate()


def test_with_value_rejects_unknown_name():
    with pytest.raises(InvalidParameterError):
        AdjustmentParameters().with_value("exposure", 10)


def test_rotate_advances_and_wraps():
    state = TransformState()
    seen = []
    for _ in range(5):
        state = state.rotated()
        seen.append(state.rotation)
    assert seen == [90, 180, 270, 0, 90]


def test_flip_toggles_are_independent():
    state = TransformState().toggled_horizontal()
    assert state.flip_horizontal and not state.flip_vertical
    state = state.toggled_vertical().toggled_horizontal()
    assert not state.flip_horizontal and state.flip_vertical


@pytest.mark.parametrize("rotation", [45, 91, 12.5, "90", None])
def test_transform_rejects_non_quarter_turns(rotation):
    with pytest.raises(InvalidParameterError):
        TransformState(rotation=rotation).validate()


def test_transform_normalises_multiples_of_ninety():
    assert TransformState(rotation=-90).normalised().rotation == 270
    assert TransformState(rotation=450).normalised().rotation == 90
    assert TransformState(rotation=360).rotate_steps == 0
    assert TransformState(rotation=360).is_identity


@pytest.mark.parametrize("width, height", [(-1, 2), (2, -3)])
def test_filled_rejects_negative_dimensions(width, height):
    with pytest.raises(BitmapFormatError):
        Bitmap.filled(width, height, (0, 0, 0, 255))
