"""Helpers for JSON input/output with atomic writes."""

from __future__ import annotations

import json
import os
import time
from pathlib import Path
from typing import Any

from ..errors import SettingsLoadError


def read_json(path: Path) -> dict[str, Any]:
    """Read JSON from *path* and return a dictionary."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise SettingsLoadError(f"JSON file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SettingsLoadError(f"Invalid JSON data in {path}") from exc
    if not isinstance(payload, dict):
        raise SettingsLoadError(f"Expected a JSON object in {path}")
    return payload


def atomic_write_text(path: Path, data: str) -> None:
    """Atomically write *data* into *path*."""

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)
    with tmp_path.open("w", encoding="utf-8") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())
    # ``Path.replace`` can fail transiently on Windows while another process
    # holds the destination open; retry with a short back-off.
    for attempt in range(5):
        try:
            tmp_path.replace(path)
            return
        except PermissionError:
            if attempt == 4:
                tmp_path.unlink(missing_ok=True)
                raise
            time.sleep(0.05 * (attempt + 1))


def write_json(path: Path, data: dict[str, Any]) -> None:
    """Write *data* into *path* atomically."""

    payload = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True)
    atomic_write_text(path, payload)
