from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .config_models import DisplayConfig

"""Graph payload models handed to the force-directed layout.

Node ids are ``{tag}:{value}`` strings (``S:`` supplier, ``C:`` category,
``U:`` customer) and are stable across rebuilds of the same rows, so a
layout simulation can use them as keys.
"""

__all__ = [
    "PARTITION_SUPPLIER",
    "PARTITION_CATEGORY",
    "PARTITION_CUSTOMER",
    "GraphNode",
    "GraphEdge",
    "GraphPayload",
    "node_radius",
    "edge_width",
]

PARTITION_SUPPLIER = 1
PARTITION_CATEGORY = 2
PARTITION_CUSTOMER = 3


@dataclass(frozen=True)
class GraphNode:
    id: str
    partition: int
    weight: int  # sum of Quantity over every row touching the node


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    weight: int  # Quantity of the single row that produced the edge


@dataclass(frozen=True)
class GraphPayload:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def to_dict(self, display: DisplayConfig | None = None) -> dict[str, Any]:
        """Serialize as ``{"nodes": [...], "links": [...]}``.

        With a DisplayConfig each node gains a ``radius`` and each link a
        ``width`` derived from the raw weight.
        """
        nodes: list[dict[str, Any]] = []
        for n in self.nodes:
            item: dict[str, Any] = {"id": n.id, "partition": n.partition, "weight": n.weight}
            if display is not None:
                item["radius"] = node_radius(n.weight, display)
            nodes.append(item)
        links: list[dict[str, Any]] = []
        for e in self.edges:
            item = {"source": e.source, "target": e.target, "weight": e.weight}
            if display is not None:
                item["width"] = edge_width(e.weight, display)
            links.append(item)
        return {"nodes": nodes, "links": links}


def node_radius(weight: int, display: DisplayConfig) -> float:
    r = math.sqrt(max(weight, 0))
    return min(display.radius_max, max(display.radius_min, r))


def edge_width(weight: int, display: DisplayConfig) -> float:
    return math.sqrt(max(weight, 0)) * display.width_scale
