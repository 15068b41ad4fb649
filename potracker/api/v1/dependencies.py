"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store and search use cases.
The store is created once at startup (see potracker.core.lifespan) and held
on app.state; everything else is built per request from it. Tests replace
get_document_store through app.dependency_overrides.
"""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from potracker.application.interfaces.repositories import IDocumentStore
from potracker.application.use_cases.search import (
    FallbackSearchScanner,
    SearchIndexMaintenance,
    SearchIndexWriter,
    SearchQueryEngine,
    SearchService,
)
from potracker.core.config import get_settings
from potracker.domain.exceptions import DocumentStoreNotConfiguredException

ADMIN_SECRET_HEADER = "X-Admin-Secret"


def get_document_store(request: Request) -> IDocumentStore:
    """Document store created at startup; 503 when it could not be initialized."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise DocumentStoreNotConfiguredException(get_settings().database_backend)
    return store


def get_search_indexer(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> SearchIndexWriter:
    """Index writer for the configured index collection."""
    return SearchIndexWriter(store, get_settings().search_index_collection)


def get_search_service(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    indexer: Annotated[SearchIndexWriter, Depends(get_search_indexer)],
) -> SearchService:
    """Search use case: index query, fallback scan, and index rebuild."""
    settings = get_settings()
    return SearchService(
        engine=SearchQueryEngine(
            store,
            index_collection=settings.search_index_collection,
            candidate_limit=settings.search_candidate_limit,
        ),
        fallback=FallbackSearchScanner(
            store,
            scan_limit=settings.search_fallback_scan_limit,
            order_field=settings.search_fallback_order_field,
        ),
        maintenance=SearchIndexMaintenance(store, indexer),
        fallback_enabled=settings.search_fallback_enabled,
    )


def require_admin_secret(request: Request) -> None:
    """Guard for admin operations.

    Settings must define ADMIN_SECRET and requests must send it in the
    X-Admin-Secret header.
    """
    settings = get_settings()
    if not settings.admin_secret or not settings.admin_secret.get_secret_value():
        raise HTTPException(
            status_code=503,
            detail="Admin operations are not configured (ADMIN_SECRET is not set).",
        )
    header_secret = request.headers.get(ADMIN_SECRET_HEADER)
    expected = settings.admin_secret.get_secret_value()
    if not header_secret or not secrets.compare_digest(header_secret, expected):
        raise HTTPException(status_code=401, detail="Unauthorized admin request")
