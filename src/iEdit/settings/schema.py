"""Schema helpers for the application settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_EXPORT_FORMAT, DEFAULT_PIPELINE_BACKEND, EXPORT_FORMATS, PIPELINE_BACKENDS

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "iEdit/settings.schema.json",
    "type": "object",
    "required": ["schema", "export", "pipeline", "logging"],
    "properties": {
        "schema": {"const": "iEdit/settings@1"},
        "export": {
            "type": "object",
            "properties": {
                "directory": {"type": ["string", "null"]},
                "format": {"type": "string", "enum": list(EXPORT_FORMATS)},
            },
            "additionalProperties": True,
        },
        "pipeline": {
            "type": "object",
            "properties": {
                "backend": {"type": "string", "enum": list(PIPELINE_BACKENDS)},
            },
            "additionalProperties": True,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {
                    "type": "string",
                    "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                },
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "iEdit/settings@1",
    "export": {
        "directory": None,
        "format": DEFAULT_EXPORT_FORMAT,
    },
    "pipeline": {
        "backend": DEFAULT_PIPELINE_BACKEND,
    },
    "logging": {
        "level": "INFO",
    },
}

_SECTIONS = ("export", "pipeline", "logging")

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    directory = merged["export"].get("directory")
    if directory not in (None, ""):
        try:
            merged["export"]["directory"] = os.fspath(directory)
        except TypeError:
            pass
    elif directory == "":
        merged["export"]["directory"] = None
    validate_settings(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
