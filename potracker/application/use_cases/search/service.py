"""Search use case: indexed query with fallback scan, and index rebuild."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from potracker.application.dtos.search import RebuildStats, SearchPage
from potracker.application.use_cases.search.matching import normalize_query
from potracker.core.constants import MIN_QUERY_LENGTH
from potracker.domain.exceptions import InvalidQueryException, SearchQueryException

if TYPE_CHECKING:
    from potracker.application.use_cases.search.fallback_scanner import (
        FallbackSearchScanner,
    )
    from potracker.application.use_cases.search.index_maintenance import (
        SearchIndexMaintenance,
    )
    from potracker.application.use_cases.search.query_engine import SearchQueryEngine

logger = logging.getLogger(__name__)


class SearchService:
    """Global search across purchase orders, vendors, appointments, shipments,
    transporters and returns.

    The index query is the primary path. When it fails (e.g. the index
    collection is not provisioned yet) the fallback scanner answers instead,
    unless fallback is disabled.
    """

    def __init__(
        self,
        engine: "SearchQueryEngine",
        fallback: "FallbackSearchScanner",
        maintenance: "SearchIndexMaintenance",
        fallback_enabled: bool = True,
    ) -> None:
        self.engine = engine
        self.fallback = fallback
        self.maintenance = maintenance
        self.fallback_enabled = fallback_enabled

    async def search(
        self,
        query_text: str | None,
        entity_types: Sequence[str] | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> SearchPage:
        """Search the index, falling back to collection scans on query failure.

        Raises:
            InvalidQueryException: Query shorter than the minimum length.
            SearchQueryException: Index query failed and fallback is disabled.
        """
        if normalize_query(query_text) is None:
            raise InvalidQueryException(MIN_QUERY_LENGTH)
        try:
            return await self.engine.search(
                query_text, entity_types=entity_types, limit=limit, offset=offset
            )
        except SearchQueryException:
            if not self.fallback_enabled:
                raise
            logger.warning(
                "Search index unavailable, using fallback scan", exc_info=True
            )
        # The scanner has no offset; fetch through the end of the page and slice.
        window = await self.fallback.search(
            query_text, entity_types=entity_types, limit=offset + limit
        )
        return SearchPage(
            results=window.results[offset : offset + limit],
            total=window.total,
            has_more=window.total > offset + limit,
        )

    async def rebuild_index(
        self, entity_types: Sequence[str] | None = None
    ) -> RebuildStats:
        """Rebuild index entries for the given entity types (all when None)."""
        logger.info("Starting search index rebuild: %s", entity_types or "all types")
        stats = await self.maintenance.rebuild_search_index(entity_types)
        logger.info(
            "Search index rebuild complete: indexed=%d errors=%d",
            stats.indexed,
            stats.errors,
        )
        return stats
