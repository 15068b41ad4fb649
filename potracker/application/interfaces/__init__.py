"""Application ports (Protocols) implemented by infrastructure."""

from potracker.application.interfaces.repositories import IDocumentStore, ISearchIndexer

__all__ = ["IDocumentStore", "ISearchIndexer"]
