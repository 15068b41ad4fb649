"""Firestore integration over the REST API."""

from potracker.infrastructure.firebase.client import create_firestore_client
from potracker.infrastructure.firebase.document_store import FirestoreDocumentStore

__all__ = [
    "FirestoreDocumentStore",
    "create_firestore_client",
]
