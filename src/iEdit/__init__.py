"""iEdit: a deterministic image adjustment and transform pipeline."""

from __future__ import annotations

__version__ = "0.1.0"
