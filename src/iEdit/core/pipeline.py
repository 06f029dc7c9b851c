"""Compose the Adjustment Stage and the Transform Stage into one render."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import DEFAULT_PIPELINE_BACKEND
from ..errors import PipelineError
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.bus import EventBus
from ..events.edit_events import PreviewRenderedEvent
from ..models.bitmap import Bitmap
from ..models.types import AdjustmentParameters, TransformState
from .filters import apply_adjustments
from .geometry import apply_transform

_LOGGER = logging.getLogger(__name__)


def run_pipeline(
    source: Bitmap,
    adjustments: AdjustmentParameters,
    transform: TransformState,
    *,
    backend: str = DEFAULT_PIPELINE_BACKEND,
) -> Bitmap:
    """Return the output bitmap for one pipeline run.

    Every input is validated before any pixel work starts, so a rejected run
    never produces a partial result.  The function holds no state: identical
    inputs always yield identical bytes.
    """

    source.ensure_not_empty()
    adjustments.validate()
    transform.validate()

    _LOGGER.debug(
        "Rendering %dx%d with %s, %s (backend=%s)",
        source.width,
        source.height,
        adjustments,
        transform,
        backend,
    )
    adjusted = apply_adjustments(source, adjustments, backend=backend)
    return apply_transform(adjusted, transform)


class EditSession:
    """Hold one pristine source image and the user's current edit parameters.

    Each parameter change re-runs the complete pipeline from the untouched
    source, never from a previous output, so repeated edits cannot drift.  A
    change that the pipeline rejects is rolled back: parameters and the last
    rendered output stay exactly as they were and the error is re-raised.
    """

    def __init__(
        self,
        source: Bitmap,
        *,
        adjustments: AdjustmentParameters | None = None,
        transform: TransformState | None = None,
        backend: str = DEFAULT_PIPELINE_BACKEND,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        source.ensure_not_empty()
        self._source = source
        self._adjustments = adjustments or AdjustmentParameters()
        self._transform = transform or TransformState()
        self._backend = backend
        self._events = event_bus
        self._errors = error_handler
        self._output: Bitmap | None = None
        self._rendered_key: tuple[AdjustmentParameters, TransformState] | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def source(self) -> Bitmap:
        return self._source

    @property
    def adjustments(self) -> AdjustmentParameters:
        return self._adjustments

    @property
    def transform(self) -> TransformState:
        return self._transform

    @property
    def output(self) -> Bitmap | None:
        """The last successfully rendered bitmap, or ``None`` before the first render."""
        return self._output

    # ------------------------------------------------------------------
    # Parameter changes
    # ------------------------------------------------------------------
    def set_adjustment(self, name: str, value: float) -> Bitmap:
        try:
            candidate = self._adjustments.with_value(name, value)
        except PipelineError as exc:
            self._report(exc)
            raise
        return self._apply(candidate, self._transform)

    def set_adjustments(self, adjustments: AdjustmentParameters) -> Bitmap:
        return self._apply(adjustments, self._transform)

    def set_transform(self, transform: TransformState) -> Bitmap:
        return self._apply(self._adjustments, transform)

    def rotate(self) -> Bitmap:
        return self._apply(self._adjustments, self._transform.rotated())

    def toggle_flip_horizontal(self) -> Bitmap:
        return self._apply(self._adjustments, self._transform.toggled_horizontal())

    def toggle_flip_vertical(self) -> Bitmap:
        return self._apply(self._adjustments, self._transform.toggled_vertical())

    def render(self) -> Bitmap:
        """Render the current parameters, reusing the cached output when unchanged."""
        return self._apply(self._adjustments, self._transform)

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _apply(self, adjustments: AdjustmentParameters, transform: TransformState) -> Bitmap:
        key = (adjustments, transform)
        if self._output is not None and key == self._rendered_key:
            self._adjustments, self._transform = key
            return self._output

        try:
            output = run_pipeline(self._source, adjustments, transform, backend=self._backend)
        except PipelineError as exc:
            self._report(exc, adjustments=adjustments, transform=transform)
            raise

        self._adjustments, self._transform = key
        self._output = output
        self._rendered_key = key
        if self._events is not None:
            self._events.publish(
                PreviewRenderedEvent(bitmap=output, adjustments=adjustments, transform=transform)
            )
        return output

    def _report(self, error: PipelineError, **context: object) -> None:
        if self._errors is not None:
            self._errors.handle(error, ErrorSeverity.WARNING, context={k: repr(v) for k, v in context.items()})
        else:
            _LOGGER.warning("Rejected pipeline run: %s", error)
