"""Core interfaces (ports) for dependency injection."""

from reorder.core.interfaces.part_store import IPartStore

__all__ = ["IPartStore"]
