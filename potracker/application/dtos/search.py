"""DTOs for search indexing and querying (no dependency on the store or HTTP layer)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from potracker.domain.enums import IndexStatus


@dataclass(frozen=True)
class IndexEntry:
    """Denormalized search index document for one source document."""

    entity_type: str
    entity_id: str
    collection: str
    searchable_text: str
    search_tokens: frozenset[str]
    display_data: dict[str, Any]
    updated_at: datetime

    @property
    def key(self) -> str:
        return index_key(self.entity_type, self.entity_id)

    def to_document(self) -> dict[str, Any]:
        """Persisted form. Tokens are sorted so re-indexing is byte-stable."""
        return {
            "entityType": self.entity_type,
            "entityId": self.entity_id,
            "collection": self.collection,
            "searchableText": self.searchable_text,
            "searchTokens": sorted(self.search_tokens),
            "displayData": dict(self.display_data),
            "updatedAt": self.updated_at,
        }


def index_key(entity_type: str, entity_id: str) -> str:
    """Index document ID.

    Firestore IDs cannot contain '/', so the source ID is percent-escaped
    ('%' first, then '/'). Distinct IDs always map to distinct keys.
    """
    escaped = entity_id.replace("%", "%25").replace("/", "%2F")
    return f"{entity_type}_{escaped}"


@dataclass(frozen=True)
class IndexOutcome:
    """Result of a best-effort index write or delete. Never raised."""

    status: IndexStatus
    key: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in (IndexStatus.INDEXED, IndexStatus.REMOVED)


@dataclass(frozen=True)
class SearchResultItem:
    """Single search hit (read-model)."""

    type: str  # Human-readable entity label, e.g. "Purchase Order"
    title: str
    subtitle: str
    link: str
    entity_type: str
    entity_id: str
    relevance: int


@dataclass(frozen=True)
class SearchPage:
    """One page of ranked results plus the pre-pagination total."""

    results: list[SearchResultItem] = field(default_factory=list)
    total: int = 0
    has_more: bool = False

    @classmethod
    def empty(cls) -> SearchPage:
        return cls(results=[], total=0, has_more=False)


@dataclass
class RebuildStats:
    """Counters accumulated by a bulk index rebuild."""

    indexed: int = 0
    errors: int = 0
