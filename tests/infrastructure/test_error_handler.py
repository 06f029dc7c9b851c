import logging
from unittest.mock import Mock

from iEdit.errors import InvalidParameterError
from iEdit.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from iEdit.events.bus import EventBus


def test_handle_error_logs_and_publishes():
    logger = Mock(spec=logging.Logger)
    event_bus = Mock(spec=EventBus)
    handler = ErrorHandler(logger, event_bus)

    error = InvalidParameterError("blur", 42)
    handler.handle(error, ErrorSeverity.ERROR, context={"stage": "adjust"})

    logger.error.assert_called()
    assert logger.error.call_args.kwargs["extra"] == {"context": {"stage": "adjust"}}

    event_bus.publish.assert_called()
    event = event_bus.publish.call_args[0][0]
    assert isinstance(event, ErrorOccurredEvent)
    assert event.error is error
    assert event.severity == ErrorSeverity.ERROR
    assert event.context == {"stage": "adjust"}


def test_severity_selects_log_method():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger)

    handler.handle(ValueError("soft"), ErrorSeverity.WARNING)

    logger.warning.assert_called_once()
    logger.error.assert_not_called()


def test_ui_callback():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger, Mock(spec=EventBus))

    callback = Mock()
    handler.register_ui_callback(callback)
    handler.handle(RuntimeError("render failed"), ErrorSeverity.CRITICAL)

    callback.assert_called_with("render failed", ErrorSeverity.CRITICAL)


def test_ignore_low_severity_in_ui():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger, Mock(spec=EventBus))

    callback = Mock()
    handler.register_ui_callback(callback)
    handler.handle(Exception("info"), ErrorSeverity.INFO)
    handler.handle(Exception("warn"), ErrorSeverity.WARNING)

    callback.assert_not_called()
