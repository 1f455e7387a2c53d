from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from .row import CanonicalRow

"""Summary models produced by the aggregation engine.

A Summary has no identity of its own: it is recomputed from a row sequence
every time the rows or the active filter change. ``to_json`` is the form
handed to the text-generation collaborator as prompt context.
"""

__all__ = [
    "TopEntry",
    "DailyPoint",
    "ScatterPoint",
    "UniqueCounts",
    "DateRange",
    "Summary",
]


@dataclass(frozen=True)
class TopEntry:
    key: str
    units: int


@dataclass(frozen=True)
class DailyPoint:
    date: str  # ISO calendar date, no time component
    units: int
    orders: int


@dataclass(frozen=True)
class ScatterPoint:
    x: int  # epoch milliseconds (UTC midnight of the delivery date)
    y: int
    category: str


@dataclass(frozen=True)
class UniqueCounts:
    suppliers: int = 0
    customers: int = 0
    categories: int = 0


@dataclass(frozen=True)
class DateRange:
    min: str | None = None
    max: str | None = None


@dataclass(frozen=True)
class Summary:
    """Aggregate view of a row sequence for KPI tiles and charts."""
    rows: int
    total_units: int
    unique: UniqueCounts
    date_range: DateRange
    top_suppliers: list[TopEntry] = field(default_factory=list)
    top_customers: list[TopEntry] = field(default_factory=list)
    top_categories: list[TopEntry] = field(default_factory=list)
    top_models: list[TopEntry] = field(default_factory=list)
    top_licenses: list[TopEntry] = field(default_factory=list)
    daily_trend: list[DailyPoint] = field(default_factory=list)
    scatter_data: list[ScatterPoint] = field(default_factory=list)
    sample_rows: list[CanonicalRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        # asdict leaves date objects in place; rows use their own serializer
        data["sample_rows"] = [r.to_dict() for r in self.sample_rows]
        return data

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
