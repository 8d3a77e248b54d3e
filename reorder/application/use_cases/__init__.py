"""Application use cases."""

from reorder.application.use_cases.create_part import CreatePartUseCase
from reorder.application.use_cases.update_part import UpdatePartUseCase
from reorder.application.use_cases.view_parts import PartsViewSession, ViewPartsUseCase

__all__ = [
    "CreatePartUseCase",
    "UpdatePartUseCase",
    "ViewPartsUseCase",
    "PartsViewSession",
]
