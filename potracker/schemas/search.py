"""Search API schemas.

Responses are serialized with camelCase keys; request bodies accept either case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class SearchResultItemResponse(_CamelModel):
    """Single search hit."""

    type: str = Field(..., description="Entity label, e.g. 'Purchase Order'")
    title: str
    subtitle: str
    link: str
    entity_type: str
    entity_id: str
    relevance: int = Field(..., description="0 starts-with, 1 contains, 2 token match")


class PaginationInfo(_CamelModel):
    limit: int
    offset: int


class SearchResponse(_CamelModel):
    """Ranked page of search hits with the pre-pagination total."""

    success: bool = True
    data: list[SearchResultItemResponse]
    total: int
    has_more: bool
    pagination: PaginationInfo


class RebuildIndexRequest(_CamelModel):
    """Body for POST /search/rebuild-index. Omit entity_types to rebuild all."""

    entity_types: list[str] | None = Field(
        default=None, description="Entity types to rebuild (default: all)"
    )


class RebuildIndexResult(_CamelModel):
    message: str
    indexed: int
    errors: int


class RebuildIndexResponse(_CamelModel):
    success: bool = True
    data: RebuildIndexResult
