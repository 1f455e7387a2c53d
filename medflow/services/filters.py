from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..models.row import CanonicalRow

"""Row filters applied before aggregation and graph building.

Membership filters (supplier/customer/category) match exactly; text filters
(license/model/lot/serial) are case-insensitive substring matches. An empty
filter passes every row.
"""

__all__ = [
    "RowFilter",
    "apply_filter",
]


@dataclass(frozen=True)
class RowFilter:
    suppliers: frozenset[str] = field(default_factory=frozenset)
    customers: frozenset[str] = field(default_factory=frozenset)
    categories: frozenset[str] = field(default_factory=frozenset)
    license_no: str = ""
    model: str = ""
    lot_no: str = ""
    serial_no: str = ""
    date_min: date | None = None  # inclusive
    date_max: date | None = None  # inclusive

    @classmethod
    def build(
        cls,
        *,
        suppliers: Iterable[str] | None = None,
        customers: Iterable[str] | None = None,
        categories: Iterable[str] | None = None,
        **kwargs: Any,
    ) -> RowFilter:
        return cls(
            suppliers=frozenset(suppliers or ()),
            customers=frozenset(customers or ()),
            categories=frozenset(categories or ()),
            **kwargs,
        )

    @property
    def is_empty(self) -> bool:
        return self == RowFilter()

    def matches(self, row: CanonicalRow) -> bool:
        if self.suppliers and row.supplier_id not in self.suppliers:
            return False
        if self.customers and row.customer_id not in self.customers:
            return False
        if self.categories and row.category not in self.categories:
            return False
        for needle, value in (
            (self.license_no, row.license_no),
            (self.model, row.model),
            (self.lot_no, row.lot_number),
            (self.serial_no, row.serial_number),
        ):
            if needle and needle.lower() not in value.lower():
                return False
        if self.date_min is not None or self.date_max is not None:
            # an undated row cannot satisfy a date bound
            if row.parsed_date is None:
                return False
            if self.date_min is not None and row.parsed_date < self.date_min:
                return False
            if self.date_max is not None and row.parsed_date > self.date_max:
                return False
        return True


def apply_filter(rows: Sequence[CanonicalRow], row_filter: RowFilter | None) -> list[CanonicalRow]:
    """Return the rows passing ``row_filter``, in their original order."""
    if row_filter is None or row_filter.is_empty:
        return list(rows)
    return [r for r in rows if row_filter.matches(r)]
