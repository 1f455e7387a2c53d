from __future__ import annotations

from ..models.processing_result import ImportResult
from ..models.summary import Summary
from .quality import QualityReport

"""SUMMARY line rendering.

Format:
SUMMARY files={ok}/{total} rows={rows} units={units} suppliers={n}
customers={n} categories={n} invalid_dates={n} nonpositive_qty={n}
elapsed_sec={elapsed}
"""

__all__ = [
    "render_summary_line",
    "format_seconds",
]


def format_seconds(value: float) -> str:
    """Render seconds without scientific notation; whole numbers lose the decimal."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ImportResult, summary: Summary, quality: QualityReport) -> str:
    """Render the one-line run summary printed at the end of a CLI run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from medflow.models.summary import DateRange, UniqueCounts
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ImportResult(rows=[], start_time=t, end_time=t, elapsed_seconds=0.0)
        >>> s = Summary(rows=0, total_units=0, unique=UniqueCounts(), date_range=DateRange())
        >>> render_summary_line(result, s, QualityReport(0, 0, 0))
        'SUMMARY files=0/0 rows=0 units=0 suppliers=0 customers=0 categories=0 invalid_dates=0 nonpositive_qty=0 elapsed_sec=0'
    """
    total_files = len(result.file_stats)
    return (
        f"SUMMARY files={result.success_files}/{total_files} "
        f"rows={summary.rows} "
        f"units={summary.total_units} "
        f"suppliers={summary.unique.suppliers} "
        f"customers={summary.unique.customers} "
        f"categories={summary.unique.categories} "
        f"invalid_dates={quality.invalid_dates} "
        f"nonpositive_qty={quality.nonpositive_quantities} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
