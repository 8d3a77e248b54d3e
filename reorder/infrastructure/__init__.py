"""Infrastructure layer implementations."""

from reorder.infrastructure import storage

__all__ = ["storage"]
