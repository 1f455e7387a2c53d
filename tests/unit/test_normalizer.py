from __future__ import annotations

from datetime import date

import pytest

from medflow.ingest.normalizer import (
    HEADER_ALIASES,
    coerce_quantity,
    normalize_header,
    normalize_record,
    normalize_records,
    parse_delivery_date,
    resolve_field,
)
from medflow.models.row import CANONICAL_FIELDS, CanonicalRow


def test_normalize_header_keeps_lowercase_alphanumerics_only():
    assert normalize_header("Supplier ID") == "supplierid"
    assert normalize_header("  S/N ") == "sn"
    assert normalize_header("Lot_No.") == "lotno"
    assert normalize_header(123) == "123"


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Supplier", "SupplierID"),
        ("VENDOR", "SupplierID"),
        ("sup", "SupplierID"),
        ("Supplier ID", "SupplierID"),
        ("Client", "CustomerID"),
        ("cust", "CustomerID"),
        ("Customer-ID", "CustomerID"),
        ("Date", "DeliveryDateRaw"),
        ("Deliver Date", "DeliveryDateRaw"),
        ("Type", "Category"),
        ("License No", "LicenseNo"),
        ("Lot No", "LotNumber"),
        ("S/N", "SerialNumber"),
        ("Ser No", "SerialNumber"),
        ("Count", "Quantity"),
        ("number", "Quantity"),
        ("UDID", "UDID"),
        ("Device", "DeviceName"),
        ("Device Name", "DeviceName"),
    ],
)
def test_resolve_field_exact_aliases(header, expected):
    assert resolve_field(header) == expected


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Supplier Name", "SupplierID"),
        ("Client Name", "CustomerID"),
        ("Product Type", "Category"),
        ("Lot Number", "LotNumber"),
        ("Serial Number", "SerialNumber"),
        ("Order Qty", "Quantity"),
        ("Model Name", "Model"),
    ],
)
def test_resolve_field_containment(header, expected):
    assert resolve_field(header) == expected


def test_resolve_field_ambiguous_header_follows_table_order():
    # contains both "license" and "date"; "date" comes first in the table
    assert resolve_field("License Expiry Date") == "DeliveryDateRaw"
    aliases = list(HEADER_ALIASES)
    assert aliases.index("date") < aliases.index("license")


def test_resolve_field_canonical_names_resolve_to_themselves():
    for name in CANONICAL_FIELDS:
        assert resolve_field(name) == name


def test_resolve_field_unknown_header():
    assert resolve_field("Remarks") is None
    assert resolve_field("") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12", 12),
        ("12.9", 12),
        (" -3 pcs", -3),
        ("+4", 4),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (7, 7),
        (7.8, 7),
        (-2.5, -2),
        (float("nan"), 0),
        (float("inf"), 0),
        (True, 0),
        ("\uff11\uff12", 0),
        ("\u0661\u0662 boxes", 0),
    ],
)
def test_coerce_quantity(value, expected):
    assert coerce_quantity(value) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("20240115", date(2024, 1, 15)),
        ("2024-01-15", date(2024, 1, 15)),
        ("2024/01/15 ", date(2024, 1, 15)),
        (20240115, date(2024, 1, 15)),
        ("2024/1/15", None),
        ("2024-01-15T10:00", None),
        ("bad", None),
        ("", None),
        (None, None),
        ("20240231", None),
        ("20241301", None),
    ],
)
def test_parse_delivery_date(raw, expected):
    assert parse_delivery_date(raw) == expected


def test_normalize_record_full_row():
    row = normalize_record(
        {
            "Vendor": "X",
            "Client": "Y",
            "Type": "Gloves",
            "License": "L-1",
            "Model": "M1",
            "Lot No": "000123",
            "S/N": "SN9",
            "UDID": "U1",
            "Device Name": "Exam glove",
            "Qty": "10",
            "Delivery Date": "2024-01-15",
        }
    )
    assert row == CanonicalRow(
        supplier_id="X",
        customer_id="Y",
        category="Gloves",
        license_no="L-1",
        model="M1",
        lot_number="000123",
        serial_number="SN9",
        udid="U1",
        device_name="Exam glove",
        quantity=10,
        delivery_date_raw="2024-01-15",
        parsed_date=date(2024, 1, 15),
    )


def test_normalize_record_empty_mapping_gives_defaults():
    row = normalize_record({})
    assert row == CanonicalRow()
    assert row.quantity == 0
    assert row.parsed_date is None


def test_normalize_record_drops_unknown_headers():
    row = normalize_record({"Supplier": "X", "Remarks": "call first"})
    assert row.supplier_id == "X"
    assert "call first" not in row.to_dict().values()


def test_normalize_record_later_duplicate_header_wins():
    row = normalize_record({"Supplier": "first", "Vendor": "second"})
    assert row.supplier_id == "second"


def test_normalize_record_numeric_json_values_become_text():
    row = normalize_record({"Supplier": 42, "Lot": 12.0, "Date": 20240115.0, "Qty": 3.0})
    assert row.supplier_id == "42"
    assert row.lot_number == "12"
    assert row.delivery_date_raw == "20240115"
    assert row.parsed_date == date(2024, 1, 15)
    assert row.quantity == 3


def test_normalize_record_degraded_values():
    row = normalize_record({"Supplier": "W", "Qty": "abc", "Date": "bad"})
    assert row.quantity == 0
    assert row.delivery_date_raw == "bad"
    assert row.parsed_date is None


def test_normalize_records_preserves_order():
    rows = normalize_records([{"Supplier": "A"}, {"Supplier": "B"}, {"Supplier": "C"}])
    assert [r.supplier_id for r in rows] == ["A", "B", "C"]


@pytest.mark.parametrize(
    "raw",
    [
        {"Vendor": "X", "Client": "Y", "Type": "Gloves", "Qty": "10", "Delivery Date": "2024-01-15"},
        {"supplier id ": 42, "QTY (pcs)": "-3 pcs", "Date": "20240231", "Remarks": "x", "Vendor": ""},
        {},
    ],
)
def test_normalize_record_is_deterministic(raw):
    first = normalize_record(raw)
    second = normalize_record(dict(raw))
    assert first == second
    assert first.to_dict() == second.to_dict()
