"""Image transform pipeline: adjustment stage, transform stage and orchestration."""

from .filters import apply_adjustments
from .geometry import apply_transform
from .pipeline import EditSession, run_pipeline

__all__ = ["EditSession", "apply_adjustments", "apply_transform", "run_pipeline"]
