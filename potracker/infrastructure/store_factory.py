"""Document store factory: creates the Firestore or in-memory backend from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from potracker.application.interfaces.repositories import IDocumentStore
    from potracker.core.config import Settings

logger = logging.getLogger(__name__)


class DocumentStoreFactory:
    """Factory for document store instances based on configuration."""

    @staticmethod
    def create_document_store(settings: "Settings | None" = None) -> "IDocumentStore | None":
        """Create the document store for settings.database_backend.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            FirestoreDocumentStore or InMemoryDocumentStore; None when the
            Firestore credentials could not be loaded.

        Raises:
            ValueError: Unknown backend.
        """
        from potracker.core.config import get_settings

        s = settings or get_settings()
        backend = s.database_backend.lower()

        if backend == "memory":
            from potracker.infrastructure.memory import InMemoryDocumentStore

            logger.warning("Using in-memory document store; data is not persisted")
            return InMemoryDocumentStore()
        if backend == "firestore":
            from potracker.infrastructure.firebase import (
                FirestoreDocumentStore,
                create_firestore_client,
            )

            client = create_firestore_client(s)
            if client is None:
                return None
            return FirestoreDocumentStore(client)
        raise ValueError(f"Unknown database backend: {backend!r}")
