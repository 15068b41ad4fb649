"""Source document writes with the search index post-write hook.

Every create/update/delete of a searchable entity goes through here so the
index is refreshed at the write site. The hook's outcome is logged and
discarded: indexing is advisory and never fails the primary write.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from potracker.core.constants import FIELD_CREATED_AT, FIELD_UPDATED_AT
from potracker.domain.entity_registry import EntityTypeDescriptor, lookup
from potracker.domain.exceptions import UnknownEntityTypeException
from potracker.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from potracker.application.dtos.search import IndexOutcome
    from potracker.application.interfaces.repositories import (
        IDocumentStore,
        ISearchIndexer,
    )

logger = logging.getLogger(__name__)


def _descriptor(entity_type: str) -> EntityTypeDescriptor:
    descriptor = lookup(entity_type)
    if descriptor is None:
        raise UnknownEntityTypeException([entity_type])
    return descriptor


class SourceDocumentService:
    """Writes purchase orders, vendors, etc. to their home collections."""

    def __init__(self, store: "IDocumentStore", indexer: "ISearchIndexer") -> None:
        self._store = store
        self._indexer = indexer

    async def get(self, entity_type: str, doc_id: str) -> dict[str, Any] | None:
        """Return the source document's fields, or None if it does not exist."""
        descriptor = _descriptor(entity_type)
        return await self._store.get(descriptor.collection_name, doc_id)

    async def save(
        self, entity_type: str, doc_id: str, fields: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Create or overwrite a source document, then refresh its index entry.

        createdAt is kept from the caller's fields or stamped on first write;
        updatedAt is always stamped. Store errors on the source write propagate.

        Returns:
            The document as written.
        """
        descriptor = _descriptor(entity_type)
        now = utc_now()
        data = dict(fields)
        data.setdefault(FIELD_CREATED_AT, now)
        data[FIELD_UPDATED_AT] = now
        await self._store.set(descriptor.collection_name, doc_id, data)
        self._log_outcome(await self._indexer.index_document(entity_type, doc_id, data))
        return data

    async def delete(self, entity_type: str, doc_id: str) -> None:
        """Delete a source document, then drop its index entry."""
        descriptor = _descriptor(entity_type)
        await self._store.delete(descriptor.collection_name, doc_id)
        self._log_outcome(await self._indexer.remove_from_index(entity_type, doc_id))

    @staticmethod
    def _log_outcome(outcome: "IndexOutcome") -> None:
        if not outcome.ok:
            logger.warning(
                "Search index not updated for %s (%s): %s",
                outcome.key,
                outcome.status.value,
                outcome.error or "no detail",
            )
