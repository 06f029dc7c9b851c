"""Logging helpers for iEdit."""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..config import APP_NAME

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Return the package-level logger configured for iEdit."""

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(APP_NAME)
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            handler.setFormatter(formatter)
            _LOGGER.addHandler(handler)
        _LOGGER.setLevel(logging.INFO)
    return _LOGGER


def set_level(level: Union[int, str]) -> logging.Logger:
    """Adjust the package logger's threshold, accepting names such as ``"DEBUG"``."""

    logger = get_logger()
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logger.setLevel(level)
    return logger
