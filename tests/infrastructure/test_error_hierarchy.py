import pytest

from iEdit.errors import (
    ApplicationError,
    BitmapFormatError,
    DomainError,
    EmptyBitmapError,
    ExportError,
    IEditError,
    ImageLoadError,
    InfrastructureError,
    InvalidParameterError,
    PipelineError,
    SettingsError,
    SettingsLoadError,
    SettingsValidationError,
)


@pytest.mark.parametrize(
    "error_type, parent",
    [
        (InvalidParameterError, PipelineError),
        (EmptyBitmapError, PipelineError),
        (BitmapFormatError, PipelineError),
        (PipelineError, DomainError),
        (ImageLoadError, InfrastructureError),
        (ExportError, InfrastructureError),
        (SettingsLoadError, SettingsError),
        (SettingsValidationError, SettingsError),
        (SettingsError, ApplicationError),
        (ApplicationError, IEditError),
        (DomainError, IEditError),
    ],
)
def test_hierarchy(error_type, parent):
    assert issubclass(error_type, parent)


def test_invalid_parameter_carries_name_and_value():
    error = InvalidParameterError("saturation", 250)
    assert error.name == "saturation"
    assert error.value == 250
    assert "saturation" in str(error)
    assert "250" in str(error)


def test_invalid_parameter_custom_message():
    error = InvalidParameterError("rotation", 45, "Rotation must be a multiple of 90")
    assert str(error) == "Rotation must be a multiple of 90"
