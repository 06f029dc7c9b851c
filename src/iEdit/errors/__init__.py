"""Custom exception hierarchy for iEdit."""

from __future__ import annotations

from typing import Any


class IEditError(Exception):
    """Base class for all custom errors raised by iEdit."""


# --- 3-layer hierarchy ---

class DomainError(IEditError):
    """Base class for domain-level errors."""


class InfrastructureError(IEditError):
    """Base class for infrastructure-level errors."""


class ApplicationError(IEditError):
    """Base class for application-level errors."""


# --- Domain errors ---

class PipelineError(DomainError):
    """Raised when a pipeline run is rejected before producing output."""


class InvalidParameterError(PipelineError):
    """Raised when an adjustment or transform value is outside its domain."""

    def __init__(self, name: str, value: Any, message: str | None = None) -> None:
        self.name = name
        self.value = value
        super().__init__(message or f"Invalid value for {name}: {value!r}")


class EmptyBitmapError(PipelineError):
    """Raised when a bitmap has zero width or height."""


class BitmapFormatError(PipelineError):
    """Raised when a pixel buffer does not match its declared dimensions."""


# --- Infrastructure errors ---

class ImageLoadError(InfrastructureError):
    """Raised when a source image cannot be read or decoded."""


class ExportError(InfrastructureError):
    """Raised when an output bitmap cannot be encoded or written."""


# --- Application errors ---

class SettingsError(ApplicationError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
