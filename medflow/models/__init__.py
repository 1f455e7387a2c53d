"""Domain models for the medflow analytics pipeline.

Canonical rows, summary and graph payloads, configuration, quality records
and import results.
"""

from .config_models import AnalyticsConfig, DisplayConfig, GraphConfig, TopNLimits
from .graph import GraphEdge, GraphNode, GraphPayload
from .processing_result import FileStat, ImportResult
from .quality_record import QualityIssue
from .row import CANONICAL_FIELDS, CanonicalRow
from .summary import DailyPoint, DateRange, ScatterPoint, Summary, TopEntry, UniqueCounts

__all__ = [
    # Configuration models
    "AnalyticsConfig",
    "DisplayConfig",
    "GraphConfig",
    "TopNLimits",
    # Row model
    "CANONICAL_FIELDS",
    "CanonicalRow",
    # Derived views
    "DailyPoint",
    "DateRange",
    "ScatterPoint",
    "Summary",
    "TopEntry",
    "UniqueCounts",
    "GraphEdge",
    "GraphNode",
    "GraphPayload",
    # Import bookkeeping
    "FileStat",
    "ImportResult",
    "QualityIssue",
]
