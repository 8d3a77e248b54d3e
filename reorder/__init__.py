"""Spare parts reordering assistant."""

__version__ = "1.0.0"
