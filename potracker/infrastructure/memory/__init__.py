"""In-process document store for development and tests."""

from potracker.infrastructure.memory.document_store import (
    InMemoryDocumentStore,
    StoreUnavailableError,
)

__all__ = ["InMemoryDocumentStore", "StoreUnavailableError"]
