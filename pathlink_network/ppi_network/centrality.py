"""
Network Centrality

Per-node degree, betweenness and Kleinberg hub scores. Every function takes a
graph and returns a new mapping from node to value; nothing is written back
onto the graph.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union
import logging

import networkx as nx
import numpy as np
from scipy.sparse.linalg import eigsh

logger = logging.getLogger(__name__)

# Above this size hub scores are computed per connected component, with a
# sparse Lanczos solver for components larger than the limit
DENSE_EIGEN_LIMIT = 2000


class HubMeasure(Enum):
    """Measure used to highlight hub nodes."""

    BETWEENNESS = "betweenness"
    DEGREE = "degree"
    HUBSCORE = "hubscore"  # Kleinberg hub centrality

    @property
    def column(self) -> str:
        """Node attribute holding the hub score for this measure."""
        return {
            HubMeasure.BETWEENNESS: "hub_score_btw",
            HubMeasure.DEGREE: "hub_score_deg",
            HubMeasure.HUBSCORE: "hub_score_hub",
        }[self]


@dataclass(frozen=True)
class CentralityResult:
    """Degree and betweenness of every node in a graph."""

    degree: Dict[str, int]
    betweenness: Dict[str, float]


def compute_degree(graph: nx.Graph) -> Dict[str, int]:
    """Number of incident edges per node."""
    return {node: int(d) for node, d in graph.degree()}


def compute_betweenness(graph: nx.Graph) -> Dict[str, float]:
    """
    Unweighted shortest-path betweenness.

    Each unordered pair of endpoints is counted once and credit is split
    evenly between equally short paths, so the middle node of a three-node
    path scores 1.
    """
    if graph.number_of_nodes() == 0:
        return {}
    scores = nx.betweenness_centrality(graph, normalized=False)
    return {node: float(score) for node, score in scores.items()}


def compute_centrality(graph: nx.Graph) -> CentralityResult:
    """Degree and betweenness in one pass."""
    return CentralityResult(
        degree=compute_degree(graph),
        betweenness=compute_betweenness(graph),
    )


def _is_leading(value: float, top: float) -> bool:
    return value >= top - 1e-9 * max(1.0, abs(top))


def _dense_projection(adjacency: np.ndarray) -> np.ndarray:
    """Projection of the all-ones vector onto the leading eigenspace of A*A^T."""
    values, vectors = np.linalg.eigh(adjacency @ adjacency.T)
    leading = vectors[:, [_is_leading(v, values.max()) for v in values]]
    return leading @ (leading.T @ np.ones(len(adjacency)))


def _perron_vector(graph: nx.Graph, members: List[str]) -> Tuple[float, np.ndarray]:
    """Spectral radius and non-negative unit Perron vector of a connected graph."""
    adjacency = nx.to_scipy_sparse_array(graph, nodelist=members, dtype=float, format="csc")
    if len(members) <= DENSE_EIGEN_LIMIT:
        values, vectors = np.linalg.eigh(adjacency.toarray())
        radius, vector = values[-1], vectors[:, -1]
    else:
        # The spectral radius is at most max sqrt(d_i * d_j) over edges, so with
        # the shift just above that bound the Perron value is the nearest one
        degree = np.asarray(adjacency.sum(axis=1)).ravel()
        rows, cols = adjacency.nonzero()
        bound = np.sqrt(degree[rows] * degree[cols]).max()
        values, vectors = eigsh(
            adjacency, k=1, sigma=bound * (1 + 1e-6), which="LM", v0=np.ones(len(members))
        )
        radius, vector = values[0], vectors[:, 0]
    return float(radius), np.abs(vector)


def _component_projection(graph: nx.Graph, nodes: List[str]) -> np.ndarray:
    """
    Same projection as `_dense_projection`, assembled per connected component.

    For a connected graph the leading eigenspace of A*A^T = A^2 is spanned by
    the Perron vector v, plus the sign-flipped vector s*v when the component
    is bipartite (s = +1/-1 by side). Only components whose spectral radius
    equals the largest one contribute.
    """
    index = {node: i for i, node in enumerate(nodes)}
    parts = []
    for component in nx.connected_components(graph):
        members = sorted(component, key=index.__getitem__)
        if len(members) < 2:
            continue
        radius, perron = _perron_vector(graph, members)
        projection = perron * perron.sum()

        subgraph = graph.subgraph(members)
        if nx.is_bipartite(subgraph):
            sides = nx.bipartite.color(subgraph)
            flipped = perron * np.array([1.0 if sides[m] == 0 else -1.0 for m in members])
            projection = projection + flipped * flipped.sum()

        parts.append((radius, members, projection))

    top = max(radius for radius, _, _ in parts)
    scores = np.zeros(len(nodes))
    for radius, members, projection in parts:
        if _is_leading(radius, top):
            scores[[index[m] for m in members]] = projection
    return scores


def compute_hub_score(graph: nx.Graph) -> Dict[str, float]:
    """
    Kleinberg hub scores scaled so the largest is 1.

    The score is the principal eigenvector of A*A^T. When the leading
    eigenvalue is repeated (bipartite or tied components) the projection of
    the all-ones vector onto the leading eigenspace is used, which is the
    vector power iteration from a uniform start converges to.

    Args:
        graph: Undirected graph

    Returns:
        Mapping from node to hub score in [0, 1]
    """
    nodes = list(graph.nodes)
    if not nodes:
        return {}
    if graph.number_of_edges() == 0:
        return {node: 0.0 for node in nodes}

    if len(nodes) <= DENSE_EIGEN_LIMIT:
        adjacency = nx.to_numpy_array(graph, nodelist=nodes, dtype=float)
        scores = _dense_projection(adjacency)
    else:
        scores = _component_projection(graph, nodes)

    scores = np.abs(scores)
    scores /= scores.max()
    return {node: float(s) for node, s in zip(nodes, scores)}


def hub_scores(
    graph: nx.Graph,
    measure: Union[HubMeasure, str],
    centrality: Optional[CentralityResult] = None,
) -> Dict[str, float]:
    """
    Hub score of every node under the chosen measure.

    Betweenness and degree reuse the values in `centrality` when given;
    hubscore always computes the eigenvector score of the current graph.
    """
    measure = HubMeasure(measure)

    if measure is HubMeasure.HUBSCORE:
        return compute_hub_score(graph)

    centrality = centrality or compute_centrality(graph)
    if measure is HubMeasure.BETWEENNESS:
        return dict(centrality.betweenness)
    return {node: float(d) for node, d in centrality.degree.items()}
