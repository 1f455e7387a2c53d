from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from ..models.row import CANONICAL_FIELDS, CanonicalRow

"""Schema normalizer: raw record -> CanonicalRow.

Header resolution is two-phase over one ordered alias table:

1. exact lookup of the normalized header (lower-case, alphanumerics only)
2. the first alias, in table order, contained in the normalized header

and only then a pass-through for headers already spelled as a canonical field
name. Table order decides ambiguous headers: "License Expiry Date" contains
both "date" and "license", and "date" is listed first.

Normalization is total. Unknown headers are dropped, non-numeric quantities
become 0 and unparseable dates leave ``parsed_date`` unset.
"""

__all__ = [
    "HEADER_ALIASES",
    "normalize_header",
    "resolve_field",
    "coerce_quantity",
    "parse_delivery_date",
    "normalize_record",
    "normalize_records",
]

# normalized alias -> canonical field name (order matters for containment scan)
HEADER_ALIASES: dict[str, str] = {
    "supplier": "SupplierID",
    "vendor": "SupplierID",
    "sup": "SupplierID",
    "supplierid": "SupplierID",
    "customer": "CustomerID",
    "client": "CustomerID",
    "cust": "CustomerID",
    "customerid": "CustomerID",
    "date": "DeliveryDateRaw",
    "deliverydate": "DeliveryDateRaw",
    "deliverdate": "DeliveryDateRaw",
    "category": "Category",
    "type": "Category",
    "license": "LicenseNo",
    "licenseno": "LicenseNo",
    "model": "Model",
    "lot": "LotNumber",
    "lotno": "LotNumber",
    "serial": "SerialNumber",
    "serno": "SerialNumber",
    "sn": "SerialNumber",
    "qty": "Quantity",
    "quantity": "Quantity",
    "number": "Quantity",
    "count": "Quantity",
    "udid": "UDID",
    "devicename": "DeviceName",
    "device": "DeviceName",
}

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_DIGIT = re.compile(r"[^0-9]")
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def normalize_header(key: Any) -> str:
    return _NON_ALNUM.sub("", str(key).lower())


def resolve_field(key: Any) -> str | None:
    """Map an input header to a canonical field name, or None if unknown."""
    norm = normalize_header(key)
    if norm in HEADER_ALIASES:
        return HEADER_ALIASES[norm]
    for alias, canonical in HEADER_ALIASES.items():
        if alias in norm:
            return canonical
    if key in CANONICAL_FIELDS:
        return str(key)
    return None


def coerce_quantity(value: Any) -> int:
    """Parse the leading integer of ``value``; anything else is 0.

    ``"12"`` -> 12, ``"12.9"`` -> 12, ``" -3 pcs"`` -> -3, ``"abc"`` -> 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value)
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else 0


def parse_delivery_date(raw: Any) -> date | None:
    """Interpret the digits of ``raw`` as YYYYMMDD.

    Separators are ignored: ``"2024-01-15"`` parses, ``"2024/1/15"`` has only
    seven digits and does not. A triple that is not a real calendar date
    (``"20240231"``) also yields None.
    """
    if raw is None:
        return None
    digits = _NON_DIGIT.sub("", str(raw))
    if len(digits) != 8:
        return None
    try:
        return date(int(digits[0:4]), int(digits[4:6]), int(digits[6:8]))
    except ValueError:
        return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # JSON 12.0 -> "12", matching how the value was typed at the source
        return str(int(value))
    return str(value)


def normalize_record(raw: Mapping[str, Any]) -> CanonicalRow:
    """Build a CanonicalRow from one raw record. Never raises."""
    resolved: dict[str, Any] = {}
    for key, value in raw.items():
        canonical = resolve_field(key)
        if canonical is not None:
            # later headers mapping to the same field win
            resolved[canonical] = value

    values: dict[str, Any] = {}
    for canonical, attr in CANONICAL_FIELDS.items():
        if canonical == "Quantity":
            values[attr] = coerce_quantity(resolved.get(canonical))
        else:
            values[attr] = _as_text(resolved.get(canonical))
    values["parsed_date"] = parse_delivery_date(values["delivery_date_raw"])
    return CanonicalRow(**values)


def normalize_records(records: Iterable[Mapping[str, Any]]) -> list[CanonicalRow]:
    return [normalize_record(r) for r in records]
