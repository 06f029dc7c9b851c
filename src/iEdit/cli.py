"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from .config import DEFAULT_EXPORT_FORMAT, DEFAULT_EXPORT_NAME
from .core.export import export_bitmap
from .core.pipeline import EditSession
from .errors import IEditError, SettingsError
from .errors.handler import ErrorHandler
from .models.types import AdjustmentParameters, TransformState
from .settings.manager import SettingsManager
from .utils.image_loader import describe_image, load_bitmap
from .utils.logging import get_logger, set_level

app = typer.Typer(help="Adjust, rotate and flip an image, then export the result")

_STATE: dict[str, object] = {"settings_path": None}


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IEditError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _load_settings() -> SettingsManager:
    path = _STATE.get("settings_path")
    manager = SettingsManager(path=path if isinstance(path, Path) else None)
    manager.load()
    level = manager.get("logging.level")
    if level and not _STATE.get("verbose"):
        set_level(level)
    return manager


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    settings: Optional[Path] = typer.Option(
        None, "--settings", help="Path to an alternative settings.json", dir_okay=False
    ),
) -> None:
    """Image editor pipeline: brightness, contrast, saturation, blur, rotate and flip."""

    _STATE["settings_path"] = settings
    _STATE["verbose"] = verbose
    get_logger()
    if verbose:
        set_level("DEBUG")


@app.command()
@_handle_errors
def edit(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image to edit"),
    brightness: float = typer.Option(100, help="Brightness in percent (0-200)"),
    contrast: float = typer.Option(100, help="Contrast in percent (0-200)"),
    saturation: float = typer.Option(100, help="Saturation in percent (0-200)"),
    blur: float = typer.Option(0, help="Blur radius in pixels (0-20)"),
    rotate: int = typer.Option(0, min=0, help="Number of 90° clockwise rotation steps"),
    flip_h: bool = typer.Option(False, "--flip-h", help="Mirror horizontally after rotating"),
    flip_v: bool = typer.Option(False, "--flip-v", help="Mirror vertically after rotating"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Destination file"),
    backend: Optional[str] = typer.Option(None, help="Pipeline backend: auto, jit or numpy"),
    overwrite: bool = typer.Option(False, help="Replace the destination if it exists"),
) -> None:
    """Run one pipeline pass over SOURCE and export the result."""

    try:
        settings = _load_settings()
    except SettingsError as exc:
        raise typer.BadParameter(str(exc), param_hint="--settings") from exc

    adjustments = AdjustmentParameters(
        brightness=brightness,
        contrast=contrast,
        saturation=saturation,
        blur=blur,
    )
    transform = TransformState()
    for _ in range(rotate):
        transform = transform.rotated()
    if flip_h:
        transform = transform.toggled_horizontal()
    if flip_v:
        transform = transform.toggled_vertical()

    session = EditSession(
        load_bitmap(source),
        adjustments=adjustments,
        transform=transform,
        backend=backend or settings.get("pipeline.backend", "auto"),
        error_handler=ErrorHandler(get_logger()),
    )
    result = session.render()

    fmt = None
    if output is None:
        directory = settings.get("export.directory")
        fmt = settings.get("export.format", DEFAULT_EXPORT_FORMAT)
        output = (Path(directory) if directory else Path.cwd()) / DEFAULT_EXPORT_NAME
        output = output.with_suffix(f".{fmt.lower()}")
    written = export_bitmap(result, output, fmt=fmt, overwrite=overwrite)
    print(f"[green]Exported {result.width}x{result.height} image to {written}")


@app.command()
@_handle_errors
def info(source: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Print basic properties of SOURCE."""

    details = describe_image(source)
    table = Table(show_header=False)
    for key in ("path", "format", "mode", "width", "height", "bytes"):
        table.add_row(key, str(details[key]))
    print(table)


if __name__ == "__main__":  # pragma: no cover
    app()
