"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from potracker.application.dtos.document_store import (
        FieldFilter,
        OrderBy,
        StoredDocument,
    )
    from potracker.application.dtos.search import IndexOutcome


class IDocumentStore(Protocol):
    """Protocol for the document store capability (Firestore or in-memory)."""

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return the document's fields, or None if it does not exist."""

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or fully overwrite the document."""

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete the document. No error if it is already missing."""

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        """Return documents matching all filters, ordered and limited server-side."""

    async def scan_all(self, collection: str) -> list[StoredDocument]:
        """Return every document in the collection."""

    async def aclose(self) -> None:
        """Release connections held by the store."""


class ISearchIndexer(Protocol):
    """Post-write hook the entity-write layer calls after each source write.

    Implementations never raise; failures come back as an IndexOutcome.
    """

    async def index_document(
        self, entity_type: str, doc_id: str, fields: Mapping[str, Any]
    ) -> IndexOutcome:
        """Create or overwrite the index entry for a source document."""

    async def remove_from_index(self, entity_type: str, doc_id: str) -> IndexOutcome:
        """Delete the index entry for a source document."""
