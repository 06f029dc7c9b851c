"""Shared helpers: image decoding, JSON persistence and logging."""
