"""Pytest configuration and fixtures for the PO Tracker search service.

Tests run against the in-memory document store. The env defaults below are
set before any potracker import so get_settings() (and potracker.main, which
builds the app at import) see the memory backend. HTTP tests inject the
store through app.dependency_overrides; ASGITransport does not run lifespan.
"""

import os

os.environ.setdefault("DATABASE_BACKEND", "memory")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

TEST_ADMIN_SECRET = "test-admin-secret"
os.environ.setdefault("ADMIN_SECRET", TEST_ADMIN_SECRET)

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from potracker.api.v1.dependencies import get_document_store  # noqa: E402
from potracker.application.use_cases.search import (  # noqa: E402
    SearchIndexWriter,
    SearchQueryEngine,
)
from potracker.core.config import get_settings  # noqa: E402
from potracker.infrastructure.memory import InMemoryDocumentStore  # noqa: E402
from potracker.main import create_app  # noqa: E402

get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Re-read settings around each test so monkeypatched env takes effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def indexer(store: InMemoryDocumentStore) -> SearchIndexWriter:
    """Index writer over the test store."""
    return SearchIndexWriter(store)


@pytest.fixture
def engine(store: InMemoryDocumentStore) -> SearchQueryEngine:
    """Index query engine over the test store."""
    return SearchQueryEngine(store)


@pytest.fixture
def app(store: InMemoryDocumentStore) -> FastAPI:
    """FastAPI app wired to the test store (as lifespan would do at startup)."""
    application = create_app()
    application.state.document_store = store
    application.dependency_overrides[get_document_store] = lambda: store
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def index_purchase_order(
    indexer: SearchIndexWriter,
    doc_id: str,
    po_number: str,
    vendor_name: str = "Test Vendor",
    status: str = "approved",
) -> None:
    """Index a purchase order with the usual display fields."""
    outcome = await indexer.index_document(
        "purchaseOrder",
        doc_id,
        {
            "poNumber": po_number,
            "vendorName": vendor_name,
            "status": status,
            "poId": doc_id,
        },
    )
    assert outcome.ok
