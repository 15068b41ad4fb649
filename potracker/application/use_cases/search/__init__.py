"""Search use cases: index writer, query engine, fallback scanner, maintenance."""

from potracker.application.use_cases.search.fallback_scanner import (
    FallbackSearchScanner,
)
from potracker.application.use_cases.search.index_maintenance import (
    SearchIndexMaintenance,
)
from potracker.application.use_cases.search.index_writer import (
    SearchIndexWriter,
    build_index_entry,
)
from potracker.application.use_cases.search.query_engine import SearchQueryEngine
from potracker.application.use_cases.search.service import SearchService

__all__ = [
    "FallbackSearchScanner",
    "SearchIndexMaintenance",
    "SearchIndexWriter",
    "SearchQueryEngine",
    "SearchService",
    "build_index_entry",
]
