from __future__ import annotations

import logging
from collections.abc import Sequence

import networkx as nx

from ..models.graph import (
    PARTITION_CATEGORY,
    PARTITION_CUSTOMER,
    PARTITION_SUPPLIER,
    GraphEdge,
    GraphNode,
    GraphPayload,
)
from ..models.row import CanonicalRow

"""Supplier -> category -> customer flow graph.

Every row touches three nodes and emits two edges. Node weights accumulate the
row quantity; edges are never merged, so N rows between the same pair of nodes
give N parallel edges (a MultiDiGraph). The graph is then cut down to the
heaviest ``max_nodes`` nodes, and any edge losing an endpoint is dropped.

The output carries raw weights only; radius/width are derived at
serialization time (see ``GraphPayload.to_dict``).
"""

__all__ = [
    "DEFAULT_MAX_NODES",
    "node_id",
    "build_flow_graph",
    "rank_nodes",
    "truncate_graph",
    "to_payload",
    "build_graph",
]

DEFAULT_MAX_NODES = 100

logger = logging.getLogger(__name__)

_TAGS = {
    PARTITION_SUPPLIER: "S",
    PARTITION_CATEGORY: "C",
    PARTITION_CUSTOMER: "U",
}


def node_id(partition: int, value: str) -> str:
    """Return the stable id ``{tag}:{value}`` for a node in ``partition``."""
    return f"{_TAGS[partition]}:{value}"


def _touch(graph: nx.MultiDiGraph, nid: str, partition: int, quantity: int) -> None:
    if nid not in graph:
        graph.add_node(nid, partition=partition, weight=0, order=graph.number_of_nodes())
    graph.nodes[nid]["weight"] += quantity


def build_flow_graph(rows: Sequence[CanonicalRow]) -> nx.MultiDiGraph:
    """Aggregate rows into the full (untruncated) tri-partite graph.

    Node attributes: ``partition``, ``weight``, ``order`` (creation index).
    Edge attributes: ``weight``, ``order`` (emission index).
    """
    graph = nx.MultiDiGraph()
    seq = 0
    for r in rows:
        sup = node_id(PARTITION_SUPPLIER, r.supplier_id)
        cat = node_id(PARTITION_CATEGORY, r.category)
        cust = node_id(PARTITION_CUSTOMER, r.customer_id)
        _touch(graph, sup, PARTITION_SUPPLIER, r.quantity)
        _touch(graph, cat, PARTITION_CATEGORY, r.quantity)
        _touch(graph, cust, PARTITION_CUSTOMER, r.quantity)
        graph.add_edge(sup, cat, weight=r.quantity, order=seq)
        graph.add_edge(cat, cust, weight=r.quantity, order=seq + 1)
        seq += 2
    return graph


def rank_nodes(graph: nx.MultiDiGraph) -> list[str]:
    """Node ids by descending weight; equal weights keep creation order."""
    return sorted(
        graph.nodes,
        key=lambda n: (-graph.nodes[n]["weight"], graph.nodes[n]["order"]),
    )


def truncate_graph(graph: nx.MultiDiGraph, max_nodes: int) -> nx.MultiDiGraph:
    """Keep the ``max_nodes`` heaviest nodes and the edges between them.

    Raises:
        ValueError: if ``max_nodes`` is negative
    """
    if max_nodes < 0:
        raise ValueError(f"max_nodes must be >= 0, got {max_nodes}")
    keep = rank_nodes(graph)[:max_nodes]
    # subgraph() drops every edge with an endpoint outside ``keep``
    return graph.subgraph(keep).copy()


def to_payload(graph: nx.MultiDiGraph) -> GraphPayload:
    """Flatten a (truncated) graph into ordered node and edge lists."""
    nodes = [
        GraphNode(id=n, partition=graph.nodes[n]["partition"], weight=graph.nodes[n]["weight"])
        for n in rank_nodes(graph)
    ]
    edge_data = sorted(graph.edges(data=True), key=lambda e: e[2]["order"])
    edges = [GraphEdge(source=u, target=v, weight=d["weight"]) for u, v, d in edge_data]
    return GraphPayload(nodes=nodes, edges=edges)


def build_graph(rows: Sequence[CanonicalRow], max_nodes: int = DEFAULT_MAX_NODES) -> GraphPayload:
    """Build the bounded graph payload for the layout simulation.

    Args:
        rows: normalized rows, already filtered by the caller
        max_nodes: node-count bound N

    Returns:
        GraphPayload with at most ``max_nodes`` nodes (heaviest first) and the
        edges whose endpoints both survived, in row order
    """
    full = build_flow_graph(rows)
    bounded = truncate_graph(full, max_nodes)
    logger.debug(
        "graph: %d/%d nodes kept, %d/%d edges kept (max_nodes=%d)",
        bounded.number_of_nodes(),
        full.number_of_nodes(),
        bounded.number_of_edges(),
        full.number_of_edges(),
        max_nodes,
    )
    return to_payload(bounded)
