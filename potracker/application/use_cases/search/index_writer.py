"""Search index writer: one index entry per source document.

Indexing is a best-effort side channel of the entity write. The source
collection is always the source of truth, so failures here are logged and
returned as an IndexOutcome instead of being raised into the caller's write.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from potracker.application.dtos.search import IndexEntry, IndexOutcome, index_key
from potracker.application.services.tokenizer import tokenize
from potracker.application.use_cases.search.matching import build_searchable_text
from potracker.core.constants import COLLECTION_SEARCH_INDEX
from potracker.domain.entity_registry import EntityTypeDescriptor, lookup
from potracker.domain.enums import IndexStatus
from potracker.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from potracker.application.interfaces.repositories import IDocumentStore

logger = logging.getLogger(__name__)


def build_index_entry(
    descriptor: EntityTypeDescriptor,
    doc_id: str,
    fields: Mapping[str, Any],
    now: datetime,
) -> IndexEntry:
    """Derive the index entry for a source document (pure)."""
    searchable_text = build_searchable_text(descriptor, fields)
    display = descriptor.display(doc_id, dict(fields))
    return IndexEntry(
        entity_type=descriptor.entity_type,
        entity_id=doc_id,
        collection=descriptor.collection_name,
        searchable_text=searchable_text,
        search_tokens=frozenset(tokenize(searchable_text)),
        display_data=display.to_document(),
        updated_at=now,
    )


class SearchIndexWriter:
    """Creates, overwrites and deletes search index entries (implements ISearchIndexer)."""

    def __init__(
        self,
        store: "IDocumentStore",
        index_collection: str = COLLECTION_SEARCH_INDEX,
    ) -> None:
        self._store = store
        self._index_collection = index_collection

    async def index_document(
        self, entity_type: str, doc_id: str, fields: Mapping[str, Any]
    ) -> IndexOutcome:
        """Create or overwrite the index entry for a source document.

        Unknown entity types are skipped with a warning. Storage errors are
        logged and reported as a FAILED outcome; nothing is raised.
        """
        key = index_key(entity_type, doc_id)
        descriptor = lookup(entity_type)
        if descriptor is None:
            logger.warning("Unknown entity type for indexing: %s", entity_type)
            return IndexOutcome(IndexStatus.SKIPPED, key)
        try:
            entry = build_index_entry(descriptor, doc_id, fields, utc_now())
            await self._store.set(self._index_collection, key, entry.to_document())
        except Exception as e:
            logger.exception("Failed to index %s/%s", entity_type, doc_id)
            return IndexOutcome(IndexStatus.FAILED, key, error=str(e))
        return IndexOutcome(IndexStatus.INDEXED, key)

    async def remove_from_index(self, entity_type: str, doc_id: str) -> IndexOutcome:
        """Delete the index entry for a source document. Never raises."""
        key = index_key(entity_type, doc_id)
        try:
            await self._store.delete(self._index_collection, key)
        except Exception as e:
            logger.exception(
                "Failed to remove %s/%s from index", entity_type, doc_id
            )
            return IndexOutcome(IndexStatus.FAILED, key, error=str(e))
        return IndexOutcome(IndexStatus.REMOVED, key)
