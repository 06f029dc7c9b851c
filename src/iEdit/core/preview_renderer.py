"""Background preview rendering with last-request-wins semantics."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from ..config import DEFAULT_PIPELINE_BACKEND
from ..errors import PipelineError
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.bus import EventBus
from ..events.edit_events import PreviewRenderedEvent
from ..models.bitmap import Bitmap
from ..models.types import AdjustmentParameters, TransformState
from .pipeline import run_pipeline

_LOGGER = logging.getLogger(__name__)


class PreviewRenderer:
    """Run pipeline passes off the caller's thread and keep only the newest.

    Every :meth:`request` bumps a generation counter.  When a run completes
    after a newer request was issued its output is dropped: the returned
    future resolves to ``None`` and no event is published.  A stale run that
    fails is dropped the same way and never reaches the error handler.  The
    pipeline
    itself stays stateless; the renderer only decides which result is shown.
    """

    def __init__(
        self,
        source: Bitmap,
        *,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
        backend: str = DEFAULT_PIPELINE_BACKEND,
        max_workers: int = 1,
    ) -> None:
        source.ensure_not_empty()
        self._source = source
        self._events = event_bus
        self._errors = error_handler
        self._backend = backend
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="iEdit-preview")
        self._lock = threading.Lock()
        self._generation = 0
        self._latest: Bitmap | None = None

    @property
    def latest(self) -> Bitmap | None:
        """Most recent output that was accepted as the current preview."""
        with self._lock:
            return self._latest

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def request(
        self,
        adjustments: AdjustmentParameters,
        transform: TransformState,
    ) -> Future:
        """Schedule a render and return a future for its (possibly discarded) output."""

        with self._lock:
            self._generation += 1
            generation = self._generation
        return self._executor.submit(self._render, generation, adjustments, transform)

    def _render(
        self,
        generation: int,
        adjustments: AdjustmentParameters,
        transform: TransformState,
    ) -> Bitmap | None:
        try:
            output = run_pipeline(self._source, adjustments, transform, backend=self._backend)
        except Exception as exc:
            if self._is_stale(generation):
                _LOGGER.debug("Ignoring failure of stale preview %d: %s", generation, exc)
                return None
            if self._errors is not None:
                severity = ErrorSeverity.WARNING if isinstance(exc, PipelineError) else ErrorSeverity.ERROR
                self._errors.handle(exc, severity, context={"generation": generation})
            raise

        with self._lock:
            if generation != self._generation:
                _LOGGER.debug("Discarding stale preview %d (latest is %d)", generation, self._generation)
                return None
            self._latest = output

        if self._events is not None:
            self._events.publish(
                PreviewRenderedEvent(bitmap=output, adjustments=adjustments, transform=transform)
            )
        return output

    def _is_stale(self, generation: int) -> bool:
        with self._lock:
            return generation != self._generation

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
