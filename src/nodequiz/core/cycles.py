"""Cycle detection for candidate connections.

Workflows must stay acyclic. The check builds a scratch NetworkX graph per
call and discards it; nothing is cached between calls, so the caller's
workflow is never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable

import networkx as nx

from nodequiz.contracts.workflow import GraphEdge


def build_adjacency(
    node_ids: Iterable[str],
    edges: Iterable[GraphEdge],
    candidate: tuple[str, str],
) -> nx.DiGraph[str]:
    """Build a directed graph of the existing edges plus the candidate arc.

    Every node id becomes a vertex even when it has no edges. Endpoints that
    are not in ``node_ids`` are added implicitly, as NetworkX does.
    """
    graph: nx.DiGraph[str] = nx.DiGraph()
    graph.add_nodes_from(node_ids)
    graph.add_edges_from((edge.source, edge.target) for edge in edges)
    graph.add_edge(*candidate)
    return graph


def would_create_cycle(
    node_ids: Iterable[str],
    edges: Iterable[GraphEdge],
    source: str,
    target: str,
) -> bool:
    """Check whether adding ``source -> target`` leaves the graph cyclic.

    A self-loop (``source == target``) is always a cycle. Cycles already
    present in ``edges`` also count.

    Args:
        node_ids: All node ids of the workflow
        edges: Existing connection edges
        source: Candidate source node id
        target: Candidate target node id

    Returns:
        True if the resulting graph is not a DAG
    """
    graph = build_adjacency(node_ids, edges, (source, target))
    return not nx.is_directed_acyclic_graph(graph)
