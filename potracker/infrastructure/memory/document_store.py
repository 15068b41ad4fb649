"""In-process document store (implements IDocumentStore).

Backs DATABASE_BACKEND=memory for local development and tests. Query
semantics follow Firestore where they matter to callers: results come back
in document-ID order unless ordered explicitly, and ordering on a field
excludes documents that do not have it. Data lives for the process lifetime.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from potracker.application.dtos.document_store import (
    FieldFilter,
    OrderBy,
    StoredDocument,
)
from potracker.shared.utils.datetime import ensure_utc


class StoreUnavailableError(RuntimeError):
    """Raised by InMemoryDocumentStore for collections configured to fail."""


def _matches(data: Mapping[str, Any], f: FieldFilter) -> bool:
    if f.field not in data:
        return False
    value = data[f.field]
    if f.op == "==":
        return value == f.value
    if f.op == "in":
        return value in f.value
    if f.op == "array-contains":
        return isinstance(value, (list, tuple, set, frozenset)) and f.value in value
    raise ValueError(f"Unsupported filter operator: {f.op!r}")


def _sort_key(value: Any) -> Any:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return value


class InMemoryDocumentStore:
    """Dict-of-dicts document store. Writes and reads are deep-copied.

    Operations on a collection listed in failing_collections raise
    StoreUnavailableError, to exercise the callers' degraded paths.
    """

    def __init__(self, failing_collections: Iterable[str] = ()) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.failing_collections: set[str] = set(failing_collections)

    def _check(self, collection: str) -> None:
        if collection in self.failing_collections:
            raise StoreUnavailableError(f"Collection unavailable: {collection}")

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        self._check(collection)
        data = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        self._check(collection)
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(dict(data))

    async def delete(self, collection: str, doc_id: str) -> None:
        self._check(collection)
        self._collections.get(collection, {}).pop(doc_id, None)

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        self._check(collection)
        docs = sorted(self._collections.get(collection, {}).items())
        hits = [(i, d) for i, d in docs if all(_matches(d, f) for f in filters)]
        if order_by is not None:
            hits = [(i, d) for i, d in hits if order_by.field in d]
            hits.sort(
                key=lambda item: _sort_key(item[1][order_by.field]),
                reverse=order_by.descending,
            )
        if limit is not None:
            hits = hits[:limit]
        return [StoredDocument(i, copy.deepcopy(d)) for i, d in hits]

    async def scan_all(self, collection: str) -> list[StoredDocument]:
        return await self.query(collection)

    async def aclose(self) -> None:
        """No resources to release; present for parity with the Firestore store."""

    def count(self, collection: str) -> int:
        """Number of documents currently in collection."""
        return len(self._collections.get(collection, {}))
