"""Data models shared by the pipeline stages."""

from .bitmap import Bitmap
from .types import AdjustmentParameters, TransformState

__all__ = ["AdjustmentParameters", "Bitmap", "TransformState"]
