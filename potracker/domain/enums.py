"""Domain enumerations for the PO Tracker search service.

Enums represent fixed sets of domain values (entity kinds, ranking tiers).
"""

from enum import Enum, IntEnum


class EntityType(str, Enum):
    """Searchable domain object kinds.

    Values are the identifiers persisted in index entries and accepted
    by the search API filter.
    """

    PURCHASE_ORDER = "purchaseOrder"
    VENDOR = "vendor"
    APPOINTMENT = "appointment"
    SHIPMENT = "shipment"
    TRANSPORTER = "transporter"
    RETURN_ORDER = "returnOrder"

    @classmethod
    def values(cls) -> list[str]:
        """Return all entity type identifiers in declaration order."""
        return [entity_type.value for entity_type in cls]


class RelevanceTier(IntEnum):
    """Search result ranking tier. Lower is more relevant."""

    STARTS_WITH = 0
    CONTAINS = 1
    TOKEN_MATCH = 2


class IndexStatus(str, Enum):
    """Outcome of a best-effort index write or delete."""

    INDEXED = "indexed"
    REMOVED = "removed"
    SKIPPED = "skipped"
    FAILED = "failed"
