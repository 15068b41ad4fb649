"""Tests for source document writes and the post-write index hook."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from potracker.application.dtos.search import IndexOutcome
from potracker.application.use_cases.search import SearchIndexWriter, SearchQueryEngine
from potracker.application.use_cases.source_documents import SourceDocumentService
from potracker.core.constants import (
    COLLECTION_PURCHASE_ORDERS,
    COLLECTION_SEARCH_INDEX,
)
from potracker.domain.enums import IndexStatus
from potracker.domain.exceptions import UnknownEntityTypeException
from potracker.infrastructure.memory import InMemoryDocumentStore


async def test_save_writes_source_and_index(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter, engine: SearchQueryEngine
) -> None:
    service = SourceDocumentService(store, indexer)
    saved = await service.save("purchaseOrder", "po1", {"poNumber": "PO-9", "status": "open"})
    assert isinstance(saved["createdAt"], datetime)
    assert saved["updatedAt"] == saved["createdAt"]
    assert await store.get(COLLECTION_PURCHASE_ORDERS, "po1") is not None
    page = await engine.search("po-9")
    assert [r.entity_id for r in page.results] == ["po1"]


async def test_save_keeps_existing_created_at(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter
) -> None:
    service = SourceDocumentService(store, indexer)
    first = await service.save("vendor", "v1", {"vendorName": "Acme"})
    second = await service.save(
        "vendor", "v1", {"vendorName": "Acme Ltd", "createdAt": first["createdAt"]}
    )
    assert second["createdAt"] == first["createdAt"]
    assert second["updatedAt"] >= first["updatedAt"]


async def test_delete_removes_source_and_index(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter, engine: SearchQueryEngine
) -> None:
    service = SourceDocumentService(store, indexer)
    await service.save("purchaseOrder", "po1", {"poNumber": "PO-9"})
    await service.delete("purchaseOrder", "po1")
    assert await service.get("purchaseOrder", "po1") is None
    assert store.count(COLLECTION_SEARCH_INDEX) == 0
    assert (await engine.search("po-9")).total == 0


async def test_index_failure_does_not_fail_the_write() -> None:
    store = InMemoryDocumentStore(failing_collections=[COLLECTION_SEARCH_INDEX])
    service = SourceDocumentService(store, SearchIndexWriter(store))
    await service.save("purchaseOrder", "po1", {"poNumber": "PO-9"})
    assert await store.get(COLLECTION_PURCHASE_ORDERS, "po1") is not None


async def test_hook_receives_written_fields(store: InMemoryDocumentStore) -> None:
    indexer = AsyncMock()
    indexer.index_document.return_value = IndexOutcome(IndexStatus.INDEXED, "vendor_v1")
    service = SourceDocumentService(store, indexer)
    saved = await service.save("vendor", "v1", {"vendorName": "Acme"})
    indexer.index_document.assert_awaited_once_with("vendor", "v1", saved)


async def test_unknown_entity_type_rejected(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter
) -> None:
    service = SourceDocumentService(store, indexer)
    with pytest.raises(UnknownEntityTypeException):
        await service.save("invoice", "i1", {"number": "1"})
