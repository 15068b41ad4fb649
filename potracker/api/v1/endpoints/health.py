"""Health check endpoints, used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from potracker.core.config import get_settings
from potracker.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "No document store", "model": ReadinessErrorResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the document store was initialized at startup, else 503."""
    backend = get_settings().database_backend
    if getattr(request.app.state, "document_store", None) is not None:
        return ReadinessResponse(backend=backend)
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            backend=backend,
            message="Document store is not configured",
        ).model_dump(),
    )
