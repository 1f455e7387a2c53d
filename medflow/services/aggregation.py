from __future__ import annotations

import calendar
from collections.abc import Sequence
from datetime import date

from ..models.config_models import TopNLimits
from ..models.row import CanonicalRow
from ..models.summary import (
    DailyPoint,
    DateRange,
    ScatterPoint,
    Summary,
    TopEntry,
    UniqueCounts,
)

"""Aggregation engine: row sequence -> Summary.

Pure functions over an already-filtered row sequence. The result depends on
row order only where stated: top-N ties keep first-seen order, the scatter
projection takes the first N dated rows, and sample_rows are the first rows.
"""

__all__ = [
    "UNKNOWN_KEY",
    "summarize",
    "top_n",
    "daily_trend",
    "scatter_points",
    "unique_count",
    "date_range",
    "epoch_millis",
]

UNKNOWN_KEY = "Unknown"


def unique_count(rows: Sequence[CanonicalRow], field: str) -> int:
    """Count distinct non-empty values of a canonical text field."""
    return len({v for v in (r.get(field) for r in rows) if v})


def date_range(rows: Sequence[CanonicalRow]) -> DateRange:
    dates = [r.parsed_date for r in rows if r.parsed_date is not None]
    if not dates:
        return DateRange()
    return DateRange(min=min(dates).isoformat(), max=max(dates).isoformat())


def top_n(rows: Sequence[CanonicalRow], field: str, limit: int = 5) -> list[TopEntry]:
    """Sum quantity per distinct value of ``field`` and return the largest groups.

    Empty values are grouped under "Unknown". Groups with equal totals keep
    the order in which they were first seen.
    """
    totals: dict[str, int] = {}
    for r in rows:
        key = str(r.get(field) or UNKNOWN_KEY)
        totals[key] = totals.get(key, 0) + r.quantity
    # sorted() is stable; dict order is first-seen order
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [TopEntry(key=k, units=v) for k, v in ranked[: max(limit, 0)]]


def daily_trend(rows: Sequence[CanonicalRow]) -> list[DailyPoint]:
    buckets: dict[str, list[int]] = {}
    for r in rows:
        if r.parsed_date is None:
            continue
        entry = buckets.setdefault(r.parsed_date.isoformat(), [0, 0])
        entry[0] += r.quantity
        entry[1] += 1
    return [
        DailyPoint(date=d, units=units, orders=orders)
        for d, (units, orders) in sorted(buckets.items())
    ]


def epoch_millis(d: date) -> int:
    """Milliseconds since the epoch at UTC midnight of ``d``."""
    return calendar.timegm(d.timetuple()) * 1000


def scatter_points(rows: Sequence[CanonicalRow], limit: int = 100) -> list[ScatterPoint]:
    """Project dated rows to (date, quantity) points, first ``limit`` in row order."""
    points: list[ScatterPoint] = []
    for r in rows:
        if len(points) >= limit:
            break
        if r.parsed_date is None:
            continue
        points.append(ScatterPoint(x=epoch_millis(r.parsed_date), y=r.quantity, category=r.category))
    return points


def summarize(
    rows: Sequence[CanonicalRow],
    limits: TopNLimits | None = None,
    *,
    scatter_limit: int = 100,
    sample_size: int = 5,
) -> Summary:
    """Compute the full Summary for ``rows``.

    Args:
        rows: normalized rows, already filtered by the caller
        limits: per-table top-N limits (defaults: 5/5/5, models 7, licenses 5)
        scatter_limit: cap on scatter points
        sample_size: number of leading rows copied into ``sample_rows``

    Returns:
        Summary with totals, unique counts, date range, top-N tables, daily
        trend, scatter projection and sample rows
    """
    limits = limits or TopNLimits()
    return Summary(
        rows=len(rows),
        total_units=sum(r.quantity for r in rows),
        unique=UniqueCounts(
            suppliers=unique_count(rows, "SupplierID"),
            customers=unique_count(rows, "CustomerID"),
            categories=unique_count(rows, "Category"),
        ),
        date_range=date_range(rows),
        top_suppliers=top_n(rows, "SupplierID", limits.suppliers),
        top_customers=top_n(rows, "CustomerID", limits.customers),
        top_categories=top_n(rows, "Category", limits.categories),
        top_models=top_n(rows, "Model", limits.models),
        top_licenses=top_n(rows, "LicenseNo", limits.licenses),
        daily_trend=daily_trend(rows),
        scatter_data=scatter_points(rows, scatter_limit),
        sample_rows=list(rows[: max(sample_size, 0)]),
    )
