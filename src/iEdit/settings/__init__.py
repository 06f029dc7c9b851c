"""Validated user settings persisted as JSON."""
