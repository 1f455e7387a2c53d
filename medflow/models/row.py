from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

"""CanonicalRow model.

A CanonicalRow is the normalized, fully-typed form of one delivery record.
Every downstream computation (summary, graph, filters, quality) reads rows of
this shape only; the raw mapping it came from is discarded after
normalization.
"""

__all__ = [
    "CanonicalRow",
    "CANONICAL_FIELDS",
]

# Canonical (external) field name -> attribute name on CanonicalRow
CANONICAL_FIELDS: dict[str, str] = {
    "SupplierID": "supplier_id",
    "CustomerID": "customer_id",
    "Category": "category",
    "LicenseNo": "license_no",
    "Model": "model",
    "LotNumber": "lot_number",
    "SerialNumber": "serial_number",
    "UDID": "udid",
    "DeviceName": "device_name",
    "Quantity": "quantity",
    "DeliveryDateRaw": "delivery_date_raw",
}

_ATTRIBUTES = frozenset(CANONICAL_FIELDS.values())


@dataclass(frozen=True)
class CanonicalRow:
    """One normalized delivery transaction.

    All text fields default to "" and quantity to 0, so a row built from an
    empty mapping is still complete. ``parsed_date`` is the only optional
    field: it is present only when ``delivery_date_raw`` held exactly eight
    digits forming a real calendar date.
    """
    supplier_id: str = ""
    customer_id: str = ""
    category: str = ""
    license_no: str = ""
    model: str = ""
    lot_number: str = ""
    serial_number: str = ""
    udid: str = ""
    device_name: str = ""
    quantity: int = 0
    delivery_date_raw: str = ""
    parsed_date: date | None = None

    def get(self, field: str) -> Any:
        """Return a value by canonical name (``"SupplierID"``) or attribute name."""
        if field in ("ParsedDate", "parsed_date"):
            return self.parsed_date
        attr = CANONICAL_FIELDS.get(field, field)
        if attr not in _ATTRIBUTES:
            raise KeyError(field)
        return getattr(self, attr)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with canonical field names (JSON-safe)."""
        out: dict[str, Any] = {name: getattr(self, attr) for name, attr in CANONICAL_FIELDS.items()}
        out["ParsedDate"] = self.parsed_date.isoformat() if self.parsed_date else None
        return out
