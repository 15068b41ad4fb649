"""Firestore-backed document store (implements IDocumentStore)."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from potracker.application.dtos.document_store import (
    FieldFilter,
    OrderBy,
    StoredDocument,
)
from potracker.infrastructure.firebase._rest_client import FirestoreRESTClient


class FirestoreDocumentStore:
    """Document store over the Firestore REST client.

    Filters, ordering and limits run server-side via runQuery. A query that
    needs a composite index Firestore does not have fails with an HTTP error,
    which the search layer treats as "index unavailable".
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        snapshot = await self._client.collection(collection).document(doc_id).get()
        return snapshot.to_dict() if snapshot else None

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        await self._client.collection(collection).document(doc_id).set(data)

    async def delete(self, collection: str, doc_id: str) -> None:
        await self._client.collection(collection).document(doc_id).delete()

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        q = self._client.collection(collection).query()
        for f in filters:
            q = q.where(f.field, f.op, f.value)
        if order_by is not None:
            q = q.order_by(
                order_by.field, "DESCENDING" if order_by.descending else "ASCENDING"
            )
        if limit is not None:
            q = q.limit(limit)
        return [StoredDocument(s.id, s.to_dict()) async for s in q.stream()]

    async def scan_all(self, collection: str) -> list[StoredDocument]:
        return [
            StoredDocument(s.id, s.to_dict())
            async for s in self._client.collection(collection).stream()
        ]

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()
