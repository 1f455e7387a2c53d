from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.quality_record import INVALID_DATE, NONPOSITIVE_QUANTITY, QualityIssue
from ..models.row import CanonicalRow

"""Data-quality reporting.

Absent dates and non-positive quantities are normal outcomes of lenient
normalization. They are counted here and optionally written to the quality
log for a human to review.
"""

__all__ = [
    "QualityReport",
    "assess_quality",
    "collect_issues",
]


@dataclass(frozen=True)
class QualityReport:
    rows: int
    invalid_dates: int
    nonpositive_quantities: int


def assess_quality(rows: Sequence[CanonicalRow]) -> QualityReport:
    return QualityReport(
        rows=len(rows),
        invalid_dates=sum(1 for r in rows if r.parsed_date is None),
        nonpositive_quantities=sum(1 for r in rows if r.quantity <= 0),
    )


def collect_issues(rows: Sequence[CanonicalRow], source: str, *, start_row: int = 1) -> list[QualityIssue]:
    """One QualityIssue per degraded field, rows numbered from ``start_row``."""
    issues: list[QualityIssue] = []
    for idx, r in enumerate(rows, start=start_row):
        if r.parsed_date is None:
            issues.append(QualityIssue.create(source, idx, INVALID_DATE, "DeliveryDateRaw", r.delivery_date_raw))
        if r.quantity <= 0:
            issues.append(QualityIssue.create(source, idx, NONPOSITIVE_QUANTITY, "Quantity", str(r.quantity)))
    return issues
