"""Seed dev data from docs/seed-data.json into the document store.

Every record is written through SourceDocumentService, so each one is
indexed for search as it is created.

Usage:
    python -m scripts.seed_dev_data [path/to/seed-data.json]

Default path: docs/seed-data.json (relative to project root). The file maps
entity types (purchaseOrder, vendor, ...) to lists of records; each record
needs an "id" and carries the document fields alongside it.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from potracker.application.use_cases.search import SearchIndexWriter
from potracker.application.use_cases.source_documents import SourceDocumentService
from potracker.core.config import get_settings
from potracker.domain.entity_registry import list_entity_types
from potracker.infrastructure.store_factory import DocumentStoreFactory
from potracker.shared.telemetry import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees the backend when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def run(path: Path) -> None:
    _load_env()
    setup_logging()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)

    settings = get_settings()
    store = DocumentStoreFactory.create_document_store(settings)
    if store is None:
        print(
            f"Document store not configured (backend: {settings.database_backend})",
            file=sys.stderr,
        )
        sys.exit(1)

    service = SourceDocumentService(
        store, SearchIndexWriter(store, settings.search_index_collection)
    )
    total = 0
    try:
        # Vendors and transporters first; the other records reference them
        for entity_type in sorted(list_entity_types(), key=_seed_order):
            for record in data.get(entity_type, []):
                fields = dict(record)
                doc_id = fields.pop("id")
                await service.save(entity_type, doc_id, fields)
                total += 1
            print(f"{entity_type}: {len(data.get(entity_type, []))} record(s)")
    finally:
        await store.aclose()

    unknown = sorted(set(data) - set(list_entity_types()))
    if unknown:
        print(f"Ignored unknown entity types: {', '.join(unknown)}", file=sys.stderr)
    print(f"Done. Seeded {total} record(s)")


def _seed_order(entity_type: str) -> int:
    return 0 if entity_type in ("vendor", "transporter") else 1


def main() -> None:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else _project_root() / "docs" / "seed-data.json"
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
