"""Indexed search: token membership fetch, all-token post-filter, ranking, pagination."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from potracker.application.dtos.document_store import FieldFilter
from potracker.application.dtos.search import SearchPage, SearchResultItem
from potracker.application.use_cases.search.matching import (
    normalize_query,
    relevance,
    to_result_item,
)
from potracker.core.constants import COLLECTION_SEARCH_INDEX, MIN_TOKEN_LENGTH
from potracker.domain.entity_registry import (
    list_entity_types,
    lookup,
    resolve_entity_types,
)
from potracker.domain.exceptions import SearchQueryException
from potracker.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from potracker.application.interfaces.repositories import IDocumentStore


class SearchQueryEngine:
    """Queries the search index collection.

    Only the first query token drives the membership fetch, capped at
    candidate_limit entries; remaining tokens are checked in memory. A match
    whose entry falls outside that window is not returned.
    """

    def __init__(
        self,
        store: "IDocumentStore",
        index_collection: str = COLLECTION_SEARCH_INDEX,
        candidate_limit: int = 100,
    ) -> None:
        self._store = store
        self._index_collection = index_collection
        self._candidate_limit = candidate_limit

    @traced("search.index_query")
    async def search(
        self,
        query_text: str | None,
        entity_types: Sequence[str] | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> SearchPage:
        """Return one page of ranked hits for query_text.

        Raises:
            SearchQueryException: The index collection could not be queried.
        """
        query = normalize_query(query_text)
        if query is None:
            return SearchPage.empty()
        tokens = [t for t in query.split() if len(t) >= MIN_TOKEN_LENGTH]
        if not tokens:
            return SearchPage.empty()

        scope = resolve_entity_types(entity_types)
        if not scope:
            return SearchPage.empty()

        filters = [FieldFilter("searchTokens", "array-contains", tokens[0])]
        if len(scope) < len(list_entity_types()):
            filters.insert(0, FieldFilter("entityType", "in", list(scope)))

        try:
            candidates = await self._store.query(
                self._index_collection, filters=filters, limit=self._candidate_limit
            )
        except Exception as e:
            raise SearchQueryException(f"Search index query failed: {e}") from e

        hits: list[SearchResultItem] = []
        for doc in candidates:
            data = doc.data
            descriptor = lookup(data.get("entityType", ""))
            if descriptor is None:
                continue
            searchable_text = data.get("searchableText") or ""
            if not all(token in searchable_text for token in tokens):
                continue
            display = descriptor.display(
                data.get("entityId") or doc.id, data.get("displayData") or {}
            )
            hits.append(
                to_result_item(descriptor, display, relevance(searchable_text, query))
            )

        # list.sort is stable: equal tiers keep fetch order
        hits.sort(key=lambda hit: hit.relevance)
        total = len(hits)
        add_span_attributes(**{"search.candidates": len(candidates), "search.total": total})
        return SearchPage(
            results=hits[offset : offset + limit],
            total=total,
            has_more=offset + limit < total,
        )
