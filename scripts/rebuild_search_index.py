"""Rebuild the search index from the source collections.

Usage:
    python -m scripts.rebuild_search_index [entity_type ...]
If no entity types are given, every registered type is rebuilt.
Safe to re-run; each entry write is a full overwrite of its own key.
Requires DATABASE_BACKEND and Firestore credentials in the environment or .env.
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from potracker.application.use_cases.search import (
    SearchIndexMaintenance,
    SearchIndexWriter,
)
from potracker.core.config import get_settings
from potracker.domain.entity_registry import list_entity_types, require_entity_types
from potracker.domain.exceptions import UnknownEntityTypeException
from potracker.infrastructure.store_factory import DocumentStoreFactory
from potracker.shared.telemetry import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


async def main() -> None:
    """Re-index every document of the requested entity types and print the totals."""
    load_dotenv(_project_root() / ".env", override=True)
    setup_logging()
    settings = get_settings()

    try:
        entity_types = require_entity_types(sys.argv[1:]) or None
    except UnknownEntityTypeException as e:
        print(e.message, file=sys.stderr)
        print(f"Known types: {', '.join(list_entity_types())}", file=sys.stderr)
        sys.exit(2)

    store = DocumentStoreFactory.create_document_store(settings)
    if store is None:
        print(
            f"Document store not configured (backend: {settings.database_backend})",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        indexer = SearchIndexWriter(store, settings.search_index_collection)
        maintenance = SearchIndexMaintenance(store, indexer)
        stats = await maintenance.rebuild_search_index(entity_types)
    finally:
        await store.aclose()

    print(f"Done. Indexed: {stats.indexed}, errors: {stats.errors}")
    if stats.errors:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
