"""Tests for index entry derivation and the best-effort index writer."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

from potracker.application.dtos.search import index_key
from potracker.application.use_cases.search import (
    SearchIndexWriter,
    SearchQueryEngine,
    build_index_entry,
)
from potracker.core.constants import COLLECTION_SEARCH_INDEX
from potracker.domain.entity_registry import lookup
from potracker.domain.enums import IndexStatus
from potracker.infrastructure.memory import InMemoryDocumentStore

_PO_FIELDS = {
    "poNumber": "PO-2024-001",
    "vendorName": "Acme Industrial",
    "vendorCode": "ACME01",
    "status": "approved",
    "poId": "po1",
    "notes": "not searchable",
}


def test_index_key_escapes_slashes() -> None:
    assert index_key("purchaseOrder", "po1") == "purchaseOrder_po1"
    assert index_key("vendor", "a/b") == "vendor_a%2Fb"
    assert index_key("vendor", "a%2Fb") == "vendor_a%252Fb"
    assert index_key("vendor", "a/b") != index_key("vendor", "a_b")


def test_build_index_entry_fields() -> None:
    now = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)
    entry = build_index_entry(lookup("purchaseOrder"), "po1", _PO_FIELDS, now)
    assert entry.key == "purchaseOrder_po1"
    assert entry.collection == "purchaseOrders"
    assert entry.searchable_text == "po-2024-001 acme industrial acme01 approved"
    assert "po-2024-001" in entry.search_tokens
    assert "acm" in entry.search_tokens
    assert "not" not in entry.search_tokens
    assert entry.display_data["poNumber"] == "PO-2024-001"
    assert entry.display_data["poId"] == "po1"
    doc = entry.to_document()
    assert doc["entityType"] == "purchaseOrder"
    assert doc["entityId"] == "po1"
    assert doc["searchTokens"] == sorted(doc["searchTokens"])
    assert doc["updatedAt"] == now


def test_build_index_entry_skips_empty_fields() -> None:
    entry = build_index_entry(
        lookup("vendor"),
        "v1",
        {"vendorName": "Acme", "vendorCode": "", "contactPerson": None, "email": "a@x.io"},
        datetime(2025, 1, 1, tzinfo=UTC),
    )
    assert entry.searchable_text == "acme a@x.io"


def test_reindexing_same_fields_is_stable_except_timestamp() -> None:
    descriptor = lookup("purchaseOrder")
    first = build_index_entry(descriptor, "po1", _PO_FIELDS, datetime(2025, 1, 1, tzinfo=UTC))
    second = build_index_entry(descriptor, "po1", _PO_FIELDS, datetime(2025, 6, 1, tzinfo=UTC))
    a, b = first.to_document(), second.to_document()
    a.pop("updatedAt")
    b.pop("updatedAt")
    assert a == b


async def test_index_document_writes_entry(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter
) -> None:
    outcome = await indexer.index_document("purchaseOrder", "po1", _PO_FIELDS)
    assert outcome.status == IndexStatus.INDEXED
    assert outcome.ok
    stored = await store.get(COLLECTION_SEARCH_INDEX, "purchaseOrder_po1")
    assert stored is not None
    assert stored["entityId"] == "po1"


async def test_index_document_overwrites_previous_entry(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter
) -> None:
    await indexer.index_document("purchaseOrder", "po1", _PO_FIELDS)
    await indexer.index_document("purchaseOrder", "po1", {**_PO_FIELDS, "status": "closed"})
    assert store.count(COLLECTION_SEARCH_INDEX) == 1
    stored = await store.get(COLLECTION_SEARCH_INDEX, "purchaseOrder_po1")
    assert "closed" in stored["searchableText"]
    assert "approved" not in stored["searchableText"]


async def test_unknown_entity_type_is_skipped(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter
) -> None:
    outcome = await indexer.index_document("invoice", "inv1", {"number": "INV-1"})
    assert outcome.status == IndexStatus.SKIPPED
    assert store.count(COLLECTION_SEARCH_INDEX) == 0


async def test_store_failure_is_reported_not_raised() -> None:
    store = InMemoryDocumentStore(failing_collections=[COLLECTION_SEARCH_INDEX])
    outcome = await SearchIndexWriter(store).index_document("purchaseOrder", "po1", _PO_FIELDS)
    assert outcome.status == IndexStatus.FAILED
    assert not outcome.ok
    assert "searchIndex" in outcome.error


async def test_remove_from_index(
    store: InMemoryDocumentStore, indexer: SearchIndexWriter
) -> None:
    await indexer.index_document("purchaseOrder", "po1", _PO_FIELDS)
    outcome = await indexer.remove_from_index("purchaseOrder", "po1")
    assert outcome.status == IndexStatus.REMOVED
    assert await store.get(COLLECTION_SEARCH_INDEX, "purchaseOrder_po1") is None


async def test_remove_missing_entry_is_not_an_error(indexer: SearchIndexWriter) -> None:
    outcome = await indexer.remove_from_index("vendor", "never-indexed")
    assert outcome.ok


async def test_remove_failure_is_reported_not_raised() -> None:
    store = AsyncMock()
    store.delete.side_effect = ConnectionError("store down")
    outcome = await SearchIndexWriter(store).remove_from_index("vendor", "v1")
    assert outcome.status == IndexStatus.FAILED
    assert outcome.error == "store down"


async def test_custom_index_collection(store: InMemoryDocumentStore) -> None:
    writer = SearchIndexWriter(store, index_collection="searchIndexV2")
    await writer.index_document("vendor", "v1", {"vendorName": "Acme"})
    assert store.count("searchIndexV2") == 1
    assert store.count(COLLECTION_SEARCH_INDEX) == 0


async def test_ids_differing_only_by_slash_keep_separate_entries(
    store: InMemoryDocumentStore,
    indexer: SearchIndexWriter,
    engine: SearchQueryEngine,
) -> None:
    await indexer.index_document("vendor", "a/b", {"vendorName": "Alpha Corp"})
    await indexer.index_document("vendor", "a_b", {"vendorName": "Beta Corp"})
    assert store.count(COLLECTION_SEARCH_INDEX) == 2

    page = await engine.search("alpha")
    assert [r.entity_id for r in page.results] == ["a/b"]

    await indexer.remove_from_index("vendor", "a_b")
    page = await engine.search("alpha")
    assert [r.entity_id for r in page.results] == ["a/b"]
    assert (await engine.search("beta")).results == []
