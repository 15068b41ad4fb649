"""HTTP tests for GET /api/v1/search and POST /api/v1/search/rebuild-index."""

from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from potracker.api.v1.dependencies import get_document_store
from potracker.application.use_cases.search import SearchIndexWriter
from potracker.application.use_cases.source_documents import SourceDocumentService
from potracker.core.config import get_settings
from potracker.core.constants import COLLECTION_SEARCH_INDEX, COLLECTION_VENDORS
from potracker.infrastructure.memory import InMemoryDocumentStore
from tests.conftest import TEST_ADMIN_SECRET


@pytest.fixture
async def seeded(store: InMemoryDocumentStore) -> SourceDocumentService:
    """Three purchase orders and a vendor, written through the index hook."""
    service = SourceDocumentService(store, SearchIndexWriter(store))
    for doc_id, po_number, vendor in (
        ("po1", "PO-TEST-001", "Test Vendor"),
        ("po2", "PO-TEST-002", "Test Vendor"),
        ("po3", "PO-OTHER-003", "Other Vendor"),
    ):
        await service.save(
            "purchaseOrder",
            doc_id,
            {"poNumber": po_number, "vendorName": vendor, "status": "approved", "poId": doc_id},
        )
    await service.save("vendor", "v1", {"vendorName": "Test Vendor", "vendorCode": "TV01"})
    return service


@pytest.fixture
def admin_headers(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    monkeypatch.setenv("ADMIN_SECRET", TEST_ADMIN_SECRET)
    get_settings.cache_clear()
    return {"X-Admin-Secret": TEST_ADMIN_SECRET}


async def test_search_returns_camel_case_page(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/search", params={"q": "po-test"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["total"] == 2
    assert body["hasMore"] is False
    assert body["pagination"] == {"limit": 20, "offset": 0}
    assert sorted(r["entityId"] for r in body["data"]) == ["po1", "po2"]
    item = body["data"][0]
    assert set(item) == {
        "type",
        "title",
        "subtitle",
        "link",
        "entityType",
        "entityId",
        "relevance",
    }
    assert item["type"] == "Purchase Order"
    assert item["link"] == f"/purchase-orders/{item['entityId']}"
    assert item["subtitle"] == "Test Vendor - approved"


async def test_search_type_filter(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/search", params={"q": "test", "types": "vendor"})
    assert response.status_code == 200
    body = response.json()
    assert [r["entityType"] for r in body["data"]] == ["vendor"]


async def test_search_pagination(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search", params={"q": "test", "limit": 2, "offset": 0}
    )
    body = response.json()
    assert body["total"] == 3
    assert len(body["data"]) == 2
    assert body["hasMore"] is True
    assert body["pagination"] == {"limit": 2, "offset": 0}


async def test_limit_is_capped(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/search", params={"q": "test", "limit": 500})
    assert response.status_code == 200
    assert response.json()["pagination"]["limit"] == 50


@pytest.mark.parametrize("params", [{"q": "a"}, {"q": "  a "}, {}])
async def test_short_or_missing_query_returns_400(client: AsyncClient, params) -> None:
    response = await client.get("/api/v1/search", params=params)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_QUERY"


async def test_unknown_type_returns_400(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/search", params={"q": "test", "types": "vendor,invoice"}
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "UNKNOWN_ENTITY_TYPE"
    assert error["details"] == {"entity_types": ["invoice"]}


@pytest.mark.parametrize("params", [{"q": "test", "limit": 0}, {"q": "test", "offset": -1}])
async def test_invalid_paging_returns_422(client: AsyncClient, params) -> None:
    response = await client.get("/api/v1/search", params=params)
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_falls_back_to_collection_scan_when_index_unavailable(
    client: AsyncClient, store: InMemoryDocumentStore, seeded
) -> None:
    store.failing_collections.add(COLLECTION_SEARCH_INDEX)
    response = await client.get("/api/v1/search", params={"q": "po-test"})
    assert response.status_code == 200
    body = response.json()
    assert sorted(r["entityId"] for r in body["data"]) == ["po1", "po2"]


async def test_fallback_pages_forward_with_offset(
    client: AsyncClient, store: InMemoryDocumentStore
) -> None:
    for n in range(1, 4):
        await store.set(
            COLLECTION_VENDORS,
            f"v{n}",
            {"vendorName": f"Acme {n}", "createdAt": datetime(2025, 1, n, tzinfo=UTC)},
        )
    store.failing_collections.add(COLLECTION_SEARCH_INDEX)

    first = (await client.get("/api/v1/search", params={"q": "acme", "limit": 2})).json()
    assert len(first["data"]) == 2
    assert first["total"] == 3
    assert first["hasMore"] is True

    second = (
        await client.get("/api/v1/search", params={"q": "acme", "limit": 2, "offset": 2})
    ).json()
    assert len(second["data"]) == 1
    assert second["hasMore"] is False
    assert second["pagination"] == {"limit": 2, "offset": 2}
    seen = [r["entityId"] for r in first["data"] + second["data"]]
    assert sorted(seen) == ["v1", "v2", "v3"]


async def test_fallback_collection_failure_is_isolated(
    client: AsyncClient, store: InMemoryDocumentStore, seeded
) -> None:
    store.failing_collections.update({COLLECTION_SEARCH_INDEX, COLLECTION_VENDORS})
    response = await client.get("/api/v1/search", params={"q": "test vendor"})
    assert response.status_code == 200
    assert {r["entityType"] for r in response.json()["data"]} == {"purchaseOrder"}


async def test_index_failure_without_fallback_returns_generic_500(
    client: AsyncClient,
    store: InMemoryDocumentStore,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SEARCH_FALLBACK_ENABLED", "false")
    get_settings.cache_clear()
    store.failing_collections.add(COLLECTION_SEARCH_INDEX)
    response = await client.get("/api/v1/search", params={"q": "acme"})
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "SEARCH_QUERY_FAILED"
    assert error["message"] == "Search failed"
    assert "searchIndex" not in response.text


async def test_missing_store_returns_503(app: FastAPI, client: AsyncClient) -> None:
    app.dependency_overrides.pop(get_document_store)
    app.state.document_store = None
    response = await client.get("/api/v1/search", params={"q": "acme"})
    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "STORE_NOT_CONFIGURED"
    assert error["message"].startswith("Document store is not configured")
    assert error["details"] == {"backend": "memory"}


async def test_rebuild_requires_admin_secret(client: AsyncClient, admin_headers) -> None:
    missing = await client.post("/api/v1/search/rebuild-index")
    assert missing.status_code == 401
    wrong = await client.post(
        "/api/v1/search/rebuild-index", headers={"X-Admin-Secret": "nope"}
    )
    assert wrong.status_code == 401
    assert wrong.json()["success"] is False


async def test_rebuild_unconfigured_returns_503(
    client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("ADMIN_SECRET", raising=False)
    get_settings.cache_clear()
    response = await client.post(
        "/api/v1/search/rebuild-index", headers={"X-Admin-Secret": "anything"}
    )
    assert response.status_code == 503


async def test_rebuild_all(
    client: AsyncClient, store: InMemoryDocumentStore, seeded, admin_headers
) -> None:
    # Drop the entries the hook wrote so the rebuild has to recreate them
    for doc in await store.scan_all(COLLECTION_SEARCH_INDEX):
        await store.delete(COLLECTION_SEARCH_INDEX, doc.id)
    response = await client.post("/api/v1/search/rebuild-index", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"message": "Search index rebuilt successfully", "indexed": 4, "errors": 0},
    }
    assert store.count(COLLECTION_SEARCH_INDEX) == 4


async def test_rebuild_selected_types(
    client: AsyncClient, seeded, admin_headers
) -> None:
    response = await client.post(
        "/api/v1/search/rebuild-index",
        headers=admin_headers,
        json={"entityTypes": ["vendor"]},
    )
    assert response.status_code == 200
    assert response.json()["data"]["indexed"] == 1


async def test_rebuild_unknown_type_returns_400(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        "/api/v1/search/rebuild-index",
        headers=admin_headers,
        json={"entityTypes": ["invoice"]},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "UNKNOWN_ENTITY_TYPE"
