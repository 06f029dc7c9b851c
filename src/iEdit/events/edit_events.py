"""Events emitted by the edit pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.bitmap import Bitmap
from ..models.types import AdjustmentParameters, TransformState
from .bus import Event


@dataclass(kw_only=True)
class PreviewRenderedEvent(Event):
    """A pipeline run finished and its output is the current preview."""

    bitmap: Bitmap
    adjustments: AdjustmentParameters
    transform: TransformState
