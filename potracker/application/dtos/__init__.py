"""Application DTOs: plain dataclasses passed between layers."""

from potracker.application.dtos.document_store import (
    FieldFilter,
    OrderBy,
    StoredDocument,
)
from potracker.application.dtos.search import (
    IndexEntry,
    IndexOutcome,
    RebuildStats,
    SearchPage,
    SearchResultItem,
    index_key,
)

__all__ = [
    "FieldFilter",
    "IndexEntry",
    "IndexOutcome",
    "OrderBy",
    "RebuildStats",
    "SearchPage",
    "SearchResultItem",
    "StoredDocument",
    "index_key",
]
