"""Bridges between pipeline bitmaps and Qt display surfaces."""
