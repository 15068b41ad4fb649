"""Text matching and ranking helpers shared by the indexed and fallback search paths."""

from collections.abc import Mapping
from typing import Any

from potracker.application.dtos.search import SearchResultItem
from potracker.core.constants import MIN_QUERY_LENGTH
from potracker.domain.entity_registry import EntityTypeDescriptor
from potracker.domain.enums import RelevanceTier
from potracker.domain.value_objects.display_data import DisplayData


def normalize_query(query_text: str | None) -> str | None:
    """Return the lowercased, trimmed query, or None when it is too short to run."""
    if not query_text:
        return None
    query = query_text.strip().lower()
    if len(query) < MIN_QUERY_LENGTH:
        return None
    return query


def build_searchable_text(
    descriptor: EntityTypeDescriptor, fields: Mapping[str, Any]
) -> str:
    """Join the truthy configured search-field values with single spaces, lowercased."""
    parts = [str(fields[name]) for name in descriptor.search_fields if fields.get(name)]
    return " ".join(parts).lower()


def relevance(searchable_text: str, query: str) -> RelevanceTier:
    """Rank a hit against the full lowercased query string."""
    if searchable_text.startswith(query):
        return RelevanceTier.STARTS_WITH
    if query in searchable_text:
        return RelevanceTier.CONTAINS
    return RelevanceTier.TOKEN_MATCH


def to_result_item(
    descriptor: EntityTypeDescriptor,
    display: DisplayData,
    tier: RelevanceTier,
) -> SearchResultItem:
    """Render a hit using the entity type's title/subtitle/link configuration."""
    return SearchResultItem(
        type=descriptor.label,
        title=descriptor.title(display),
        subtitle=descriptor.subtitle(display),
        link=descriptor.link(display),
        entity_type=descriptor.entity_type,
        entity_id=display.id,
        relevance=int(tier),
    )
