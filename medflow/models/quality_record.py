from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""QualityIssue model for the data-quality log.

One QualityIssue is written per row that degraded during normalization:
a delivery date that did not parse, or a quantity that is zero or negative.
These are expected outcomes, not failures; the log exists so a human can
review them.
"""

__all__ = [
    "QualityIssue",
    "INVALID_DATE",
    "NONPOSITIVE_QUANTITY",
]

INVALID_DATE = "INVALID_DATE"
NONPOSITIVE_QUANTITY = "NONPOSITIVE_QUANTITY"


@dataclass(frozen=True)
class QualityIssue:
    """Structured record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: input file name (or "<text>" for in-memory input)
        row: 1-based data row index within the source
        issue_type: UPPER_SNAKE classification
        field: canonical field name the issue concerns
        value: the offending value as text
    """
    timestamp: str
    source: str
    row: int
    issue_type: str
    field: str
    value: str

    @staticmethod
    def create(source: str, row: int, issue_type: str, field: str, value: str) -> QualityIssue:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return QualityIssue(
            timestamp=ts,
            source=source,
            row=row,
            issue_type=issue_type,
            field=field,
            value=value,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
