"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate the store and core services

Use cases are the only entry point for API handlers that change data.
"""

from reorder.application.dto.requests import CreatePartRequest, UpdatePartRequest
from reorder.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    PartResponse,
    PartStatisticsResponse,
    PartsViewResponse,
    ProviderHealthResponse,
)
from reorder.application.sample_data import generate_sample_parts
from reorder.application.use_cases import (
    CreatePartUseCase,
    PartsViewSession,
    UpdatePartUseCase,
    ViewPartsUseCase,
)

__all__ = [
    # Request DTOs
    "CreatePartRequest",
    "UpdatePartRequest",
    # Response DTOs
    "PartResponse",
    "PartsViewResponse",
    "PartStatisticsResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
    # Use Cases
    "CreatePartUseCase",
    "UpdatePartUseCase",
    "ViewPartsUseCase",
    "PartsViewSession",
    # Sample data
    "generate_sample_parts",
]
