"""Fallback search: bounded direct scans of source collections.

Used when the index collection cannot be queried (not provisioned, or the
backfill has not run). Costs one bounded read per entity type per query,
so it is a degraded mode, not the steady-state path.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from potracker.application.dtos.document_store import OrderBy
from potracker.application.dtos.search import SearchPage, SearchResultItem
from potracker.application.use_cases.search.matching import (
    build_searchable_text,
    normalize_query,
    relevance,
    to_result_item,
)
from potracker.core.constants import FIELD_CREATED_AT
from potracker.domain.entity_registry import lookup, resolve_entity_types
from potracker.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from potracker.application.interfaces.repositories import IDocumentStore

logger = logging.getLogger(__name__)


class FallbackSearchScanner:
    """Substring search over the most recent documents of each source collection."""

    def __init__(
        self,
        store: "IDocumentStore",
        scan_limit: int = 50,
        order_field: str = FIELD_CREATED_AT,
    ) -> None:
        self._store = store
        self._scan_limit = scan_limit
        self._order_field = order_field

    @traced("search.fallback_scan")
    async def search(
        self,
        query_text: str | None,
        entity_types: Sequence[str] | None = None,
        limit: int = 20,
    ) -> SearchPage:
        """Scan each collection in scope concurrently and merge ranked matches.

        Matching is single-substring: the whole trimmed query must appear in
        the document's searchable text. A failing collection contributes no
        results instead of failing the search.
        """
        query = normalize_query(query_text)
        if query is None:
            return SearchPage.empty()

        scope = resolve_entity_types(entity_types)
        per_type = await asyncio.gather(
            *(self._scan_entity_type(entity_type, query) for entity_type in scope)
        )
        hits = [hit for matches in per_type for hit in matches]
        hits.sort(key=lambda hit: hit.relevance)
        total = len(hits)
        add_span_attributes(**{"search.total": total})
        return SearchPage(results=hits[:limit], total=total, has_more=total > limit)

    async def _scan_entity_type(
        self, entity_type: str, query: str
    ) -> list[SearchResultItem]:
        descriptor = lookup(entity_type)
        if descriptor is None:
            return []
        try:
            docs = await self._store.query(
                descriptor.collection_name,
                order_by=OrderBy(self._order_field, descending=True),
                limit=self._scan_limit,
            )
        except Exception:
            logger.exception("Fallback search failed for %s", entity_type)
            return []

        matches: list[SearchResultItem] = []
        for doc in docs:
            searchable_text = build_searchable_text(descriptor, doc.data)
            if query not in searchable_text:
                continue
            display = descriptor.display(doc.id, doc.data)
            matches.append(
                to_result_item(descriptor, display, relevance(searchable_text, query))
            )
        return matches
