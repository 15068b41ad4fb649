"""DTOs for the document store port (filters, ordering, stored documents)."""

from dataclasses import dataclass, field
from typing import Any, Literal

FilterOp = Literal["==", "in", "array-contains"]


@dataclass(frozen=True)
class FieldFilter:
    """Single field predicate; multiple filters on one query are ANDed."""

    field: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class OrderBy:
    """Sort key for a query."""

    field: str
    descending: bool = False


@dataclass(frozen=True)
class StoredDocument:
    """A document read from the store: its ID and field map."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)
