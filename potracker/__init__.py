"""PO Tracker search service: prefix-token search index over a document store."""

__version__ = "1.0.0"
