"""Bulk search index rebuild for backfill and recovery."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from potracker.application.dtos.search import RebuildStats
from potracker.domain.entity_registry import list_entity_types, lookup
from potracker.domain.enums import IndexStatus
from potracker.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from potracker.application.interfaces.repositories import (
        IDocumentStore,
        ISearchIndexer,
    )

logger = logging.getLogger(__name__)


class SearchIndexMaintenance:
    """Re-derives index entries from source collections.

    Safe to re-run and to run alongside live writes: every entry write is
    an independent full overwrite of its own key.
    """

    def __init__(self, store: "IDocumentStore", indexer: "ISearchIndexer") -> None:
        self._store = store
        self._indexer = indexer

    @traced("search.rebuild_index")
    async def rebuild_search_index(
        self, entity_types: Sequence[str] | None = None
    ) -> RebuildStats:
        """Index every document of each entity type, one type at a time.

        A document that fails to index is counted in errors and the job
        continues. An unknown type or an unreadable collection is logged
        and skipped.
        """
        stats = RebuildStats()
        for entity_type in entity_types or list_entity_types():
            descriptor = lookup(entity_type)
            if descriptor is None:
                logger.warning("Skipping unknown entity type in rebuild: %s", entity_type)
                continue
            try:
                docs = await self._store.scan_all(descriptor.collection_name)
            except Exception:
                logger.exception("Failed to fetch %s", descriptor.collection_name)
                continue

            for doc in docs:
                try:
                    outcome = await self._indexer.index_document(
                        entity_type, doc.id, doc.data
                    )
                except Exception:
                    logger.exception("Failed to index %s/%s", entity_type, doc.id)
                    stats.errors += 1
                    continue
                if outcome.status == IndexStatus.INDEXED:
                    stats.indexed += 1
                elif outcome.status == IndexStatus.FAILED:
                    stats.errors += 1
            logger.info(
                "Rebuilt %s (running totals: indexed=%d errors=%d)",
                entity_type,
                stats.indexed,
                stats.errors,
            )

        add_span_attributes(
            **{"rebuild.indexed": stats.indexed, "rebuild.errors": stats.errors}
        )
        return stats
