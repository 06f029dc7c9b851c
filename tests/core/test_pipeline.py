import logging
from unittest.mock import MagicMock

import numpy as np
import pytest

from iEdit.core.filters import apply_adjustments
from iEdit.core.geometry import apply_transform
from iEdit.core.pipeline import EditSession, run_pipeline
from iEdit.errors import EmptyBitmapError, InvalidParameterError
from iEdit.errors.handler import ErrorHandler, ErrorSeverity
from iEdit.events.bus import EventBus
from iEdit.events.edit_events import PreviewRenderedEvent
from iEdit.models.bitmap import Bitmap
from iEdit.models.types import AdjustmentParameters, TransformState


def test_defaults_reproduce_the_source(random_bitmap):
    result = run_pipeline(random_bitmap, AdjustmentParameters(), TransformState())
    assert result == random_bitmap


def test_adjustments_run_before_transform(random_bitmap):
    adjustments = AdjustmentParameters(brightness=130, contrast=70, saturation=160, blur=1)
    transform = TransformState(rotation=270, flip_horizontal=True)

    result = run_pipeline(random_bitmap, adjustments, transform)
    expected = apply_transform(apply_adjustments(random_bitmap, adjustments), transform)
    assert result == expected


def test_pipeline_is_deterministic(random_bitmap):
    adjustments = AdjustmentParameters(brightness=80, saturation=20, blur=2)
    transform = TransformState(rotation=90, flip_vertical=True)
    first = run_pipeline(random_bitmap, adjustments, transform)
    second = run_pipeline(random_bitmap, adjustments, transform)
    assert first.tobytes() == second.tobytes()


def test_invalid_transform_is_rejected_before_pixel_work(monkeypatch, random_bitmap):
    called = MagicMock()
    monkeypatch.setattr("iEdit.core.pipeline.apply_adjustments", called)

    with pytest.raises(InvalidParameterError):
        run_pipeline(random_bitmap, AdjustmentParameters(blur=4), TransformState(rotation=30))
    called.assert_not_called()


def test_empty_source_is_rejected():
    empty = Bitmap(np.zeros((0, 2, 4), dtype=np.uint8))
    with pytest.raises(EmptyBitmapError):
        run_pipeline(empty, AdjustmentParameters(), TransformState())
    with pytest.raises(EmptyBitmapError):
        EditSession(empty)


def test_session_renders_from_pristine_source(random_bitmap):
    session = EditSession(random_bitmap)
    blurred = session.set_adjustment("blur", 5)
    session.set_adjustment("blur", 3)
    again = session.set_adjustment("blur", 5)

    assert again == blurred
    assert session.source == random_bitmap


def test_rejected_change_keeps_previous_state(random_bitmap):
    session = EditSession(random_bitmap)
    previous = session.set_adjustment("brightness", 150)

    with pytest.raises(InvalidParameterError):
        session.set_adjustment("brightness", 250)

    assert session.adjustments.brightness == 150
    assert session.output is previous


def test_unknown_adjustment_name_is_rejected(random_bitmap):
    session = EditSession(random_bitmap)
    with pytest.raises(InvalidParameterError):
        session.set_adjustment("vibrance", 10)
    assert session.adjustments == AdjustmentParameters()


def test_rotate_button_cycles_back_to_source(random_bitmap):
    session = EditSession(random_bitmap)
    sizes = [session.rotate().size for _ in range(4)]

    assert sizes == [(5, 7), (7, 5), (5, 7), (7, 5)]
    assert session.transform.rotation == 0
    assert session.output == random_bitmap


def test_flip_toggles_round_trip(random_bitmap):
    session = EditSession(random_bitmap)
    session.toggle_flip_horizontal()
    session.toggle_flip_vertical()
    session.toggle_flip_horizontal()
    result = session.toggle_flip_vertical()
    assert result == random_bitmap


def test_unchanged_parameters_reuse_last_output(monkeypatch, random_bitmap):
    calls = []

    def counting(*args, **kwargs):
        calls.append(args)
        return run_pipeline(*args, **kwargs)

    monkeypatch.setattr("iEdit.core.pipeline.run_pipeline", counting)
    session = EditSession(random_bitmap, adjustments=AdjustmentParameters(contrast=40))

    first = session.render()
    second = session.render()
    third = session.set_adjustments(AdjustmentParameters(contrast=40))

    assert first is second is third
    assert len(calls) == 1


def test_session_publishes_rendered_event(random_bitmap):
    bus = EventBus()
    received = []
    bus.subscribe(PreviewRenderedEvent, received.append)

    session = EditSession(random_bitmap, event_bus=bus)
    output = session.set_transform(TransformState(rotation=180))

    assert len(received) == 1
    assert received[0].bitmap is output
    assert received[0].transform == TransformState(rotation=180)
    bus.shutdown()


def test_session_reports_rejections_to_error_handler(random_bitmap):
    logger = MagicMock(spec=logging.Logger)
    handler = ErrorHandler(logger)
    session = EditSession(random_bitmap, error_handler=handler)

    with pytest.raises(InvalidParameterError):
        session.set_transform(TransformState(rotation=10))

    logger.warning.assert_called_once()
    args = logger.warning.call_args.args
    assert args[1] == "InvalidParameterError"


def test_session_uses_requested_backend(random_bitmap):
    numpy_session = EditSession(
        random_bitmap,
        adjustments=AdjustmentParameters(saturation=170),
        backend="numpy",
    )
    jit_session = EditSession(
        random_bitmap,
        adjustments=AdjustmentParameters(saturation=170),
        backend="jit",
    )
    assert numpy_session.render() == jit_session.render()


def test_unknown_backend_surfaces_on_render(random_bitmap):
    session = EditSession(random_bitmap, adjustments=AdjustmentParameters(brightness=90), backend="gpu")
    with pytest.raises(InvalidParameterError):
        session.render()
    assert session.output is None


def test_error_severity_is_warning_for_rejections(random_bitmap):
    handler = MagicMock(spec=ErrorHandler)
    session = EditSession(random_bitmap, error_handler=handler)

    with pytest.raises(InvalidParameterError):
        session.set_adjustment("contrast", -5)

    error, severity = handler.handle.call_args.args[:2]
    assert isinstance(error, InvalidParameterError)
    assert severity is ErrorSeverity.WARNING
