"""Photometric adjustment stage.

The package separates concerns the same way for every adjustment:
- algorithms: scalar per-pixel maths compiled by Numba
- executors: JIT kernel and NumPy vectorised implementations
- blur: the spatial pass, shared by both executors
- facade: validation, executor selection and ordering
"""

from __future__ import annotations

from .facade import apply_adjustments

__all__ = ["apply_adjustments"]
