"""Domain value objects: immutable display snapshots per entity type."""

from potracker.domain.value_objects.display_data import (
    AppointmentDisplay,
    DisplayData,
    PurchaseOrderDisplay,
    ReturnOrderDisplay,
    ShipmentDisplay,
    TransporterDisplay,
    VendorDisplay,
)

__all__ = [
    "AppointmentDisplay",
    "DisplayData",
    "PurchaseOrderDisplay",
    "ReturnOrderDisplay",
    "ShipmentDisplay",
    "TransporterDisplay",
    "VendorDisplay",
]
