from __future__ import annotations

from datetime import date

from medflow.models.row import CanonicalRow
from medflow.services.filters import RowFilter, apply_filter

ROWS = [
    CanonicalRow(supplier_id="X", customer_id="Y", category="Gloves", license_no="LIC-001",
                 model="AX-100", lot_number="L001", serial_number="SN1", quantity=10,
                 parsed_date=date(2024, 1, 1)),
    CanonicalRow(supplier_id="X", customer_id="Z", category="Masks", license_no="LIC-002",
                 model="BT-7", lot_number="L002", serial_number="SN2", quantity=5,
                 parsed_date=date(2024, 1, 5)),
    CanonicalRow(supplier_id="W", customer_id="Y", category="Gloves", license_no="",
                 model="ax-200", lot_number="L003", serial_number="SN3", quantity=1),
]


def test_empty_filter_passes_everything():
    f = RowFilter()
    assert f.is_empty
    assert apply_filter(ROWS, f) == ROWS
    assert apply_filter(ROWS, None) == ROWS


def test_build_normalizes_iterables():
    f = RowFilter.build(suppliers=["X", "X"], categories=("Gloves",))
    assert f.suppliers == frozenset({"X"})
    assert f.categories == frozenset({"Gloves"})
    assert f.customers == frozenset()
    assert not f.is_empty


def test_build_with_nothing_is_empty():
    assert RowFilter.build().is_empty
    assert RowFilter.build(suppliers=[], license_no="").is_empty


def test_membership_filters_are_exact():
    assert apply_filter(ROWS, RowFilter.build(suppliers=["X"])) == ROWS[:2]
    assert apply_filter(ROWS, RowFilter.build(customers=["Y"])) == [ROWS[0], ROWS[2]]
    assert apply_filter(ROWS, RowFilter.build(categories=["glove"])) == []


def test_text_filters_are_case_insensitive_substrings():
    assert apply_filter(ROWS, RowFilter(model="AX")) == [ROWS[0], ROWS[2]]
    assert apply_filter(ROWS, RowFilter(license_no="lic-00")) == ROWS[:2]
    assert apply_filter(ROWS, RowFilter(lot_no="003")) == [ROWS[2]]
    assert apply_filter(ROWS, RowFilter(serial_no="sn2")) == [ROWS[1]]


def test_date_bounds_are_inclusive_and_exclude_undated_rows():
    f = RowFilter(date_min=date(2024, 1, 1), date_max=date(2024, 1, 4))
    assert apply_filter(ROWS, f) == [ROWS[0]]
    assert apply_filter(ROWS, RowFilter(date_min=date(2024, 1, 5))) == [ROWS[1]]
    assert apply_filter(ROWS, RowFilter(date_max=date(2024, 1, 5))) == ROWS[:2]


def test_filters_combine_with_and():
    f = RowFilter.build(suppliers=["X"], categories=["Gloves"], model="ax")
    assert apply_filter(ROWS, f) == [ROWS[0]]


def test_apply_filter_returns_new_list():
    out = apply_filter(ROWS, RowFilter())
    assert out == ROWS
    assert out is not ROWS
