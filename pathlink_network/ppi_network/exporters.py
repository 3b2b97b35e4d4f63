"""
PPI Network Exporters

Write built networks to tabular (CSV) or node-link JSON files for plotting
and downstream analysis, and read the JSON form back.
"""

from pathlib import Path
from typing import Any, Dict, Tuple
import json
import logging
import math

import networkx as nx

from .builder import InteractionNetwork
from .centrality import HubMeasure
from .edge_set import NetworkOrder

logger = logging.getLogger(__name__)


def to_csv(network: InteractionNetwork, output_dir: str, prefix: str = "") -> Tuple[Path, Path]:
    """
    Export a network as node and edge CSV files.

    Args:
        network: Network to export
        output_dir: Output directory, created if missing
        prefix: Optional file name prefix

    Returns:
        Paths of the node and edge files
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    nodes_path = output_dir / f"{prefix}nodes.csv"
    edges_path = output_dir / f"{prefix}edges.csv"

    network.node_table().to_csv(nodes_path, index=False)
    network.edge_table().to_csv(edges_path, index=False)

    logger.info(
        f"Exported {network.n_nodes} nodes and {network.n_edges} edges to {output_dir}"
    )
    return nodes_path, edges_path


def _clean_value(value: Any) -> Any:
    if hasattr(value, "item"):
        value = value.item()
    # NaN is not valid JSON
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def to_json(network: InteractionNetwork, path: str) -> Path:
    """
    Export a network as node-link JSON.

    The network order and hub measure are stored as graph attributes.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    graph = nx.Graph(order=network.order.value, hub_measure=network.hub_measure.value)
    graph.graph["seeds"] = sorted(network.seeds)
    for node, attrs in network.graph.nodes(data=True):
        graph.add_node(node, **{k: _clean_value(v) for k, v in attrs.items()})
    graph.add_edges_from(network.graph.edges())

    data = nx.node_link_data(graph, edges="edges")
    with open(path, "w") as f:
        json.dump(data, f, indent=2)

    logger.info(f"Saved network to {path}")
    return path


def load_json(path: str) -> InteractionNetwork:
    """Load a network written by `to_json`."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Network file not found: {path}")

    with open(path, "r") as f:
        data: Dict[str, Any] = json.load(f)

    graph = nx.node_link_graph(data, directed=False, multigraph=False, edges="edges")
    order = NetworkOrder(graph.graph.pop("order"))
    hub_measure = HubMeasure(graph.graph.pop("hub_measure"))
    seeds = frozenset(graph.graph.pop("seeds", []))

    logger.info(
        f"Loaded network from {path}: {graph.number_of_nodes()} nodes, "
        f"{graph.number_of_edges()} edges"
    )
    return InteractionNetwork(graph=graph, order=order, hub_measure=hub_measure, seeds=seeds)
