"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from reorder.application.dto.requests import (
    CamelModel,
    CreatePartRequest,
    UpdatePartRequest,
)
from reorder.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    PartResponse,
    PartStatisticsResponse,
    PartsViewResponse,
    ProviderHealthResponse,
)

__all__ = [
    # Request DTOs
    "CamelModel",
    "CreatePartRequest",
    "UpdatePartRequest",
    # Response DTOs
    "PartResponse",
    "PartsViewResponse",
    "PartStatisticsResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
