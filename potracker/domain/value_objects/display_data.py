"""Display snapshots stored on search index entries, one variant per entity type.

Each variant lists exactly the source fields its title, subtitle and link
need, plus the cross-entity ID fields kept for linking. Attributes are
snake_case; the persisted map uses the camelCase keys of source documents
(carried in each field's metadata).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypeVar

D = TypeVar("D", bound="DisplayData")


def _text(key: str) -> Any:
    """Source text field; missing or falsy values become ''."""
    return field(default="", metadata={"key": key})


def _ref(key: str) -> Any:
    """Optional cross-entity ID; omitted from the persisted map when absent."""
    return field(default=None, metadata={"key": key})


def _source_key(f: Any) -> str:
    return f.metadata.get("key", f.name)


@dataclass(frozen=True)
class DisplayData:
    """Base display snapshot: document id and status are common to all variants."""

    entity_type: ClassVar[str] = ""

    id: str = ""
    status: str = _text("status")

    @classmethod
    def from_fields(cls: type[D], entity_id: str, data: Mapping[str, Any]) -> D:
        """Build the snapshot from a source document's fields.

        Never raises on missing fields: text fields default to '' and
        reference fields to None. Non-string values are stringified.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name == "id":
                values["id"] = entity_id
                continue
            raw = data.get(_source_key(f))
            if f.default is None:
                values[f.name] = str(raw) if raw else None
            else:
                values[f.name] = str(raw) if raw else ""
        return cls(**values)

    def to_document(self) -> dict[str, Any]:
        """Return the persisted map (camelCase keys, absent references dropped)."""
        doc: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            doc[_source_key(f)] = value
        return doc

    def value_of(self, key: str) -> str:
        """Return the value stored under a source key, or '' when not present."""
        for f in fields(self):
            if _source_key(f) == key:
                return getattr(self, f.name) or ""
        return ""


@dataclass(frozen=True)
class PurchaseOrderDisplay(DisplayData):
    entity_type: ClassVar[str] = "purchaseOrder"

    po_number: str = _text("poNumber")
    vendor_name: str = _text("vendorName")
    vendor_code: str = _text("vendorCode")
    po_id: str | None = _ref("poId")
    vendor_id: str | None = _ref("vendorId")


@dataclass(frozen=True)
class VendorDisplay(DisplayData):
    entity_type: ClassVar[str] = "vendor"

    vendor_name: str = _text("vendorName")
    vendor_code: str = _text("vendorCode")
    contact_person: str = _text("contactPerson")
    email: str = _text("email")
    vendor_id: str | None = _ref("vendorId")


@dataclass(frozen=True)
class AppointmentDisplay(DisplayData):
    entity_type: ClassVar[str] = "appointment"

    appointment_number: str = _text("appointmentNumber")
    po_number: str = _text("poNumber")
    vendor_name: str = _text("vendorName")
    lr_docket_number: str = _text("lrDocketNumber")
    appointment_id: str | None = _ref("appointmentId")
    po_id: str | None = _ref("poId")
    vendor_id: str | None = _ref("vendorId")
    shipment_ref: str | None = _ref("shipmentId")


@dataclass(frozen=True)
class ShipmentDisplay(DisplayData):
    """Shipments use their shipmentId both as a search field and as the link ID."""

    entity_type: ClassVar[str] = "shipment"

    shipment_id: str = _text("shipmentId")
    po_number: str = _text("poNumber")
    vendor_name: str = _text("vendorName")
    transporter_name: str = _text("transporterName")
    lr_docket_number: str = _text("lrDocketNumber")
    po_id: str | None = _ref("poId")
    vendor_id: str | None = _ref("vendorId")
    transporter_id: str | None = _ref("transporterId")
    appointment_id: str | None = _ref("appointmentId")


@dataclass(frozen=True)
class TransporterDisplay(DisplayData):
    entity_type: ClassVar[str] = "transporter"

    transporter_name: str = _text("transporterName")
    transporter_code: str = _text("transporterCode")
    contact_person: str = _text("contactPerson")
    email: str = _text("email")
    transporter_id: str | None = _ref("transporterId")


@dataclass(frozen=True)
class ReturnOrderDisplay(DisplayData):
    entity_type: ClassVar[str] = "returnOrder"

    return_number: str = _text("returnNumber")
    po_number: str = _text("poNumber")
    vendor_name: str = _text("vendorName")
    reason: str = _text("reason")
    return_id: str | None = _ref("returnId")
    po_id: str | None = _ref("poId")
    vendor_id: str | None = _ref("vendorId")
