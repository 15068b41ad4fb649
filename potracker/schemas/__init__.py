"""Pydantic request/response schemas for the HTTP API."""

from potracker.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from potracker.schemas.search import (
    PaginationInfo,
    RebuildIndexRequest,
    RebuildIndexResponse,
    RebuildIndexResult,
    SearchResponse,
    SearchResultItemResponse,
)

__all__ = [
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "PaginationInfo",
    "RebuildIndexRequest",
    "RebuildIndexResponse",
    "RebuildIndexResult",
    "SearchResponse",
    "SearchResultItemResponse",
]
