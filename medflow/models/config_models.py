from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the analytics pipeline.

These are the typed form of ``config/medflow.yml``; the loader in
``medflow.config.loader`` builds them after schema validation. Every field
has a default so an absent config file still yields a usable configuration.
"""

__all__ = [
    "TopNLimits",
    "DisplayConfig",
    "GraphConfig",
    "AnalyticsConfig",
]


@dataclass(frozen=True)
class TopNLimits:
    """Row limits for each top-N table in the Summary."""
    suppliers: int = 5
    customers: int = 5
    categories: int = 5
    models: int = 7
    licenses: int = 5


@dataclass(frozen=True)
class DisplayConfig:
    """Weight -> visual size mapping used when serializing a graph payload."""
    radius_min: float = 3.0
    radius_max: float = 20.0
    width_scale: float = 0.5


@dataclass(frozen=True)
class GraphConfig:
    max_nodes: int = 100  # node-count bound N
    display: DisplayConfig = field(default_factory=DisplayConfig)


@dataclass(frozen=True)
class AnalyticsConfig:
    """Root configuration object."""
    top_n: TopNLimits = field(default_factory=TopNLimits)
    scatter_limit: int = 100  # fixed cap on scatter points, taken in row order
    sample_size: int = 5
    graph: GraphConfig = field(default_factory=GraphConfig)
