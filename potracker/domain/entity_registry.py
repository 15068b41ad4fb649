"""Entity registry: static search configuration per entity type.

Maps each searchable entity type to its source collection, the fields
that feed tokenization, and how a hit is rendered (title, subtitle, link).
Built once at import and immutable thereafter.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from potracker.core.constants import (
    COLLECTION_APPOINTMENTS,
    COLLECTION_PURCHASE_ORDERS,
    COLLECTION_RETURN_ORDERS,
    COLLECTION_SHIPMENTS,
    COLLECTION_TRANSPORTERS,
    COLLECTION_VENDORS,
)
from potracker.domain.enums import EntityType
from potracker.domain.exceptions import UnknownEntityTypeException
from potracker.domain.value_objects.display_data import (
    AppointmentDisplay,
    DisplayData,
    PurchaseOrderDisplay,
    ReturnOrderDisplay,
    ShipmentDisplay,
    TransporterDisplay,
    VendorDisplay,
)


@dataclass(frozen=True)
class EntityTypeDescriptor:
    """Search configuration for one entity type.

    subtitle_fn and link_fn receive the type's own DisplayData variant and
    must not raise; missing fields are already '' on the variant.
    """

    entity_type: str
    label: str
    collection_name: str
    search_fields: tuple[str, ...]
    title_field: str
    display_cls: type[DisplayData]
    subtitle_fn: Callable[[Any], str]
    link_fn: Callable[[Any], str]

    def __post_init__(self) -> None:
        if not self.search_fields:
            raise ValueError(f"{self.entity_type}: search_fields must not be empty")
        if self.display_cls.entity_type != self.entity_type:
            raise ValueError(
                f"{self.entity_type}: display_cls is for {self.display_cls.entity_type!r}"
            )

    def display(self, entity_id: str, data: dict[str, Any]) -> DisplayData:
        """Build this type's display snapshot from source fields."""
        return self.display_cls.from_fields(entity_id, data)

    def title(self, display: DisplayData) -> str:
        """Display title; falls back to the document id when the title field is empty."""
        return display.value_of(self.title_field) or display.id

    def subtitle(self, display: DisplayData) -> str:
        return self.subtitle_fn(display)

    def link(self, display: DisplayData) -> str:
        return self.link_fn(display)


def _po_subtitle(d: PurchaseOrderDisplay) -> str:
    return f"{d.vendor_name} - {d.status}"


def _po_line(d: AppointmentDisplay | ShipmentDisplay | ReturnOrderDisplay) -> str:
    return f"PO: {d.po_number} - {d.status}"


_DESCRIPTORS = (
    EntityTypeDescriptor(
        entity_type=EntityType.PURCHASE_ORDER.value,
        label="Purchase Order",
        collection_name=COLLECTION_PURCHASE_ORDERS,
        search_fields=("poNumber", "vendorName", "vendorCode", "status"),
        title_field="poNumber",
        display_cls=PurchaseOrderDisplay,
        subtitle_fn=_po_subtitle,
        link_fn=lambda d: f"/purchase-orders/{d.po_id or d.id}",
    ),
    EntityTypeDescriptor(
        entity_type=EntityType.VENDOR.value,
        label="Vendor",
        collection_name=COLLECTION_VENDORS,
        search_fields=("vendorName", "vendorCode", "contactPerson", "email"),
        title_field="vendorName",
        display_cls=VendorDisplay,
        subtitle_fn=lambda d: d.vendor_code or d.contact_person or "",
        link_fn=lambda d: f"/vendors/{d.vendor_id or d.id}",
    ),
    EntityTypeDescriptor(
        entity_type=EntityType.APPOINTMENT.value,
        label="Appointment",
        collection_name=COLLECTION_APPOINTMENTS,
        search_fields=("appointmentNumber", "poNumber", "vendorName", "lrDocketNumber"),
        title_field="appointmentNumber",
        display_cls=AppointmentDisplay,
        subtitle_fn=_po_line,
        link_fn=lambda d: f"/appointments/{d.appointment_id or d.id}",
    ),
    EntityTypeDescriptor(
        entity_type=EntityType.SHIPMENT.value,
        label="Shipment",
        collection_name=COLLECTION_SHIPMENTS,
        search_fields=(
            "shipmentId",
            "poNumber",
            "vendorName",
            "transporterName",
            "lrDocketNumber",
        ),
        title_field="shipmentId",
        display_cls=ShipmentDisplay,
        subtitle_fn=_po_line,
        link_fn=lambda d: f"/shipments/{d.shipment_id or d.id}",
    ),
    EntityTypeDescriptor(
        entity_type=EntityType.TRANSPORTER.value,
        label="Transporter",
        collection_name=COLLECTION_TRANSPORTERS,
        search_fields=("transporterName", "transporterCode", "contactPerson", "email"),
        title_field="transporterName",
        display_cls=TransporterDisplay,
        subtitle_fn=lambda d: d.transporter_code or d.contact_person or "",
        link_fn=lambda d: f"/transporters/{d.transporter_id or d.id}",
    ),
    EntityTypeDescriptor(
        entity_type=EntityType.RETURN_ORDER.value,
        label="Return",
        collection_name=COLLECTION_RETURN_ORDERS,
        search_fields=("returnNumber", "poNumber", "vendorName", "reason"),
        title_field="returnNumber",
        display_cls=ReturnOrderDisplay,
        subtitle_fn=_po_line,
        link_fn=lambda d: f"/returns/{d.return_id or d.id}",
    ),
)

ENTITY_REGISTRY = MappingProxyType({d.entity_type: d for d in _DESCRIPTORS})


def lookup(entity_type: str) -> EntityTypeDescriptor | None:
    """Return the descriptor for entity_type, or None if it is not registered."""
    return ENTITY_REGISTRY.get(entity_type)


def list_entity_types() -> tuple[str, ...]:
    """Return all registered entity types in declaration order."""
    return tuple(ENTITY_REGISTRY)


def resolve_entity_types(entity_types: Iterable[str] | None) -> tuple[str, ...]:
    """Narrow a caller filter to registered types, keeping registry order.

    None means no filter (all types). Unknown names are dropped.
    """
    if entity_types is None:
        return list_entity_types()
    wanted = set(entity_types)
    return tuple(t for t in ENTITY_REGISTRY if t in wanted)


def require_entity_types(entity_types: Iterable[str]) -> list[str]:
    """Return entity_types unchanged; raise if any name is not registered."""
    names = list(entity_types)
    unknown = [t for t in names if t not in ENTITY_REGISTRY]
    if unknown:
        raise UnknownEntityTypeException(unknown)
    return names
