"""
Minimum-order trimming.

Removes non-seed nodes that are pendant (degree <= 1) or lie on no shortest
path (betweenness 0). The filter is applied once using the centrality values
computed before trimming; nodes that only become pendant after the removal
are kept.
"""

from typing import Dict, Iterable, List
import logging

import networkx as nx

logger = logging.getLogger(__name__)


def peripheral_nodes(
    graph: nx.Graph,
    seeds: Iterable[str],
    degree: Dict[str, int],
    betweenness: Dict[str, float],
) -> List[str]:
    """Non-seed nodes with degree <= 1 or zero betweenness."""
    seed_set = set(seeds)
    return [
        node
        for node in graph.nodes
        if node not in seed_set and (degree[node] <= 1 or betweenness[node] == 0)
    ]


def trim_min_order(
    graph: nx.Graph,
    seeds: Iterable[str],
    degree: Dict[str, int],
    betweenness: Dict[str, float],
) -> nx.Graph:
    """
    Return a copy of the graph without its peripheral non-seed nodes.

    Args:
        graph: Network after the first centrality pass
        seeds: Seed gene identifiers, never removed
        degree: Degree of each node in `graph`
        betweenness: Betweenness of each node in `graph`

    Returns:
        New, trimmed graph
    """
    removed = peripheral_nodes(graph, seeds, degree, betweenness)

    trimmed = graph.copy()
    trimmed.remove_nodes_from(removed)

    logger.info(
        f"Minimum-order trim removed {len(removed)} of {graph.number_of_nodes()} nodes"
    )
    return trimmed
