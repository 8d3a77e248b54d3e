"""
Domain exceptions for the reordering assistant.

Ranking and search never raise; these cover the edges: request
validation, persistence and configuration. The API turns each into a
status code and a JSON body keyed by `code`.
"""

from typing import Any

# Longest offending value echoed back in ValidationError.details
MAX_ECHOED_VALUE = 100


class ReorderError(Exception):
    """Base exception; `code` defaults to the class name."""

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code or type(self).__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class StorageError(ReorderError):
    """The parts store could not complete an operation."""


class PartNotFoundError(StorageError):
    default_code = "PART_NOT_FOUND"

    def __init__(self, part_id: str):
        super().__init__(f"Part not found: {part_id}", details={"part_id": part_id})
        self.part_id = part_id


class DatabaseError(StorageError):
    """SQLite raised while running `operation`."""

    default_code = "DATABASE_ERROR"

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            details={"operation": operation, "error": error},
        )


class ValidationError(ReorderError):
    """A request value is out of range or not one of the accepted options."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str, value: Any = None):
        echoed = None if value is None else str(value)[:MAX_ECHOED_VALUE]
        super().__init__(
            f"Validation error for '{field}': {message}",
            details={"field": field, "message": message, "value": echoed},
        )


class ConfigurationError(ReorderError):
    pass
