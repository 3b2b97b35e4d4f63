"""
Connectivity Filtering

Reduces a raw interaction set to its largest connected component(s).
"""

from typing import List, Set
import logging

import networkx as nx
import pandas as pd

from ..data_loaders.interactome_loader import GENE_A, GENE_B

logger = logging.getLogger(__name__)


def edges_to_graph(edges: pd.DataFrame) -> nx.Graph:
    """
    Build a simple undirected graph from a gene_a/gene_b edge table.

    Self-interactions are dropped; nodes are added in edge-table order.
    """
    graph = nx.Graph()
    n_self = 0
    for gene_a, gene_b in zip(edges[GENE_A], edges[GENE_B]):
        if gene_a == gene_b:
            n_self += 1
            continue
        graph.add_edge(gene_a, gene_b)

    if n_self:
        logger.debug(f"Dropped {n_self} self-interactions")
    return graph


def largest_component_nodes(graph: nx.Graph) -> Set[str]:
    """
    Nodes belonging to the component(s) of maximum size.

    When several components share the maximum size all of them are kept.
    """
    components: List[Set[str]] = list(nx.connected_components(graph))
    if not components:
        return set()

    sizes = [len(c) for c in components]
    max_size = max(sizes)

    kept: Set[str] = set()
    n_kept = 0
    for component, size in zip(components, sizes):
        if size == max_size:
            kept.update(component)
            n_kept += 1

    if len(components) > n_kept:
        logger.info(
            f"Removed {len(components) - n_kept} smaller subnetwork(s); "
            f"kept {n_kept} component(s) of {max_size} nodes"
        )
    return kept


def largest_components(edges: pd.DataFrame) -> nx.Graph:
    """
    Build the graph implied by an edge table and keep its largest component(s).

    Args:
        edges: DataFrame with columns gene_a and gene_b

    Returns:
        New graph restricted to the largest connected component(s)
    """
    graph = edges_to_graph(edges)

    if graph.number_of_nodes() == 0:
        logger.warning("No interactions found for the seed genes; the network is empty")
        return graph

    kept = largest_component_nodes(graph)
    return graph.subgraph([n for n in graph.nodes if n in kept]).copy()
