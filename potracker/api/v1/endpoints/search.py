"""Search API: global search across POs, vendors, appointments, shipments,
transporters and returns, plus the admin index rebuild."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from potracker.api.v1.dependencies import get_search_service, require_admin_secret
from potracker.application.use_cases.search import SearchService
from potracker.core.config import get_settings
from potracker.domain.entity_registry import require_entity_types
from potracker.schemas.search import (
    PaginationInfo,
    RebuildIndexRequest,
    RebuildIndexResponse,
    RebuildIndexResult,
    SearchResponse,
    SearchResultItemResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_types(types: str | None) -> list[str] | None:
    """Comma-separated type filter; None when absent or blank."""
    if not types:
        return None
    names = [t.strip() for t in types.split(",") if t.strip()]
    return require_entity_types(names) if names else None


@router.get("", response_model=SearchResponse)
async def search(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str | None = Query(None, max_length=500, description="Search text (min 2 chars)"),
    types: str | None = Query(
        None, description="Comma-separated entity types, e.g. purchaseOrder,vendor"
    ),
    limit: int | None = Query(None, ge=1, description="Page size (capped at the max)"),
    offset: int = Query(0, ge=0),
):
    """Ranked search over the index; falls back to collection scans if the index is unavailable."""
    settings = get_settings()
    page_limit = min(limit or settings.search_default_limit, settings.search_max_limit)
    entity_types = _parse_types(types)
    page = await search_svc.search(
        q, entity_types=entity_types, limit=page_limit, offset=offset
    )
    return SearchResponse(
        data=[SearchResultItemResponse.model_validate(item) for item in page.results],
        total=page.total,
        has_more=page.has_more,
        pagination=PaginationInfo(limit=page_limit, offset=offset),
    )


@router.post(
    "/rebuild-index",
    response_model=RebuildIndexResponse,
    dependencies=[Depends(require_admin_secret)],
)
async def rebuild_index(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    body: RebuildIndexRequest | None = None,
):
    """Re-derive index entries from the source collections (all types by default).

    Requires the X-Admin-Secret header.
    """
    entity_types = body.entity_types if body else None
    if entity_types:
        require_entity_types(entity_types)
    stats = await search_svc.rebuild_index(entity_types or None)
    return RebuildIndexResponse(
        data=RebuildIndexResult(
            message="Search index rebuilt successfully",
            indexed=stats.indexed,
            errors=stats.errors,
        )
    )
