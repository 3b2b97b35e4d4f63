"""
PPI Network Builder

Builds a protein-protein interaction network around a set of seed genes:

    DE table -> seeds -> interactome edges -> largest component(s)
    -> degree/betweenness -> (minSimple) trim + recompute -> hub score
    -> symbol and DE annotation
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Union
import logging

import networkx as nx
import pandas as pd

from ..data_loaders.interactome_loader import GeneMapping, Interactome
from .centrality import CentralityResult, HubMeasure, compute_centrality, hub_scores
from .connectivity import largest_components
from .edge_set import NetworkOrder, build_edge_set
from .seeds import SeedSelection, SeedSelectionConfig, select_seeds
from .trimming import trim_min_order

logger = logging.getLogger(__name__)

SYMBOL = "hgnc_symbol"

# Node attributes written by the builder; annotation columns never replace them
CORE_ATTRIBUTES = ("degree", "betweenness", "seed")

# Node table and node-link JSON use these keys for the gene identifier
IDENTIFIER_KEYS = ("name", "id")

# Suffix given to DE columns whose name is already taken
DE_SUFFIX = "_de"

RESERVED_ATTRIBUTES = frozenset(
    CORE_ATTRIBUTES + IDENTIFIER_KEYS + (SYMBOL,) + tuple(m.column for m in HubMeasure)
)


@dataclass
class NetworkConfig:
    """Configuration for PPI network construction."""

    order: Union[NetworkOrder, str] = NetworkOrder.ZERO
    hub_measure: Union[HubMeasure, str] = HubMeasure.BETWEENNESS

    # Networks larger than this are hard to read when plotted
    large_network_threshold: int = 2000

    def validate(self) -> "NetworkConfig":
        """Return a copy with the enumerated options resolved."""
        return NetworkConfig(
            order=NetworkOrder(self.order),
            hub_measure=HubMeasure(self.hub_measure),
            large_network_threshold=self.large_network_threshold,
        )


@dataclass(frozen=True, eq=False)
class InteractionNetwork:
    """
    A built PPI network.

    Attributes:
        graph: Undirected graph; node attributes hold degree, betweenness,
            seed, the hub score column and any annotations
        order: Network order the graph was built with
        hub_measure: Measure behind the hub score column
        seeds: Seed genes used to build the network
        metadata: Build statistics
    """

    graph: nx.Graph
    order: NetworkOrder
    hub_measure: HubMeasure
    seeds: FrozenSet[str] = frozenset()
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_nodes(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def n_edges(self) -> int:
        return self.graph.number_of_edges()

    @property
    def hub_column(self) -> str:
        return self.hub_measure.column

    def node_table(self) -> pd.DataFrame:
        """One row per node; the `name` column holds the gene identifier."""
        rows = [{"name": node, **attrs} for node, attrs in self.graph.nodes(data=True)]
        leading = ["name", "degree", "betweenness", "seed", self.hub_column]
        table = pd.DataFrame(rows, columns=None if rows else leading)
        rest = [c for c in table.columns if c not in leading]
        return table[[c for c in leading if c in table.columns] + rest]

    def edge_table(self) -> pd.DataFrame:
        """One row per interaction with `from` and `to` gene identifiers."""
        return pd.DataFrame(list(self.graph.edges()), columns=["from", "to"])


def with_node_attributes(
    graph: nx.Graph,
    attributes: Mapping[str, Mapping[str, Any]],
) -> nx.Graph:
    """
    Copy of `graph` with node attributes set.

    Args:
        graph: Source graph, left unchanged
        attributes: Mapping from attribute name to {node: value}
    """
    annotated = graph.copy()
    for name, values in attributes.items():
        nx.set_node_attributes(annotated, dict(values), name=name)
    return annotated


def annotate_network(
    graph: nx.Graph,
    de_table: Optional[pd.DataFrame] = None,
    mapping: Optional[GeneMapping] = None,
) -> nx.Graph:
    """
    Attach gene symbols and the original DE statistics to nodes.

    Nodes missing from the mapping or the DE table are left without those
    attributes. A DE column named like a node attribute or identifier key
    (`degree`, `name`, `id`, `hub_score_btw`, ...) is stored with a `_de`
    suffix, so `name` becomes `name_de`.
    """
    attributes: Dict[str, Dict[str, Any]] = {}

    if mapping is not None:
        attributes[SYMBOL] = {
            node: mapping.symbols[node] for node in graph.nodes if node in mapping.symbols
        }

    if de_table is not None and not de_table.empty:
        present = de_table[de_table.index.isin(list(graph.nodes))]
        columns = {str(c) for c in present.columns}
        for column, values in present.items():
            key = str(column)
            while key in RESERVED_ATTRIBUTES or (key != str(column) and key in columns):
                key += DE_SUFFIX
            if key != str(column):
                logger.debug(f"Renaming DE column '{column}' to '{key}'")
            attributes[key] = values.to_dict()

    return with_node_attributes(graph, attributes)


def _score_graph(
    graph: nx.Graph,
    seeds: FrozenSet[str],
    config: NetworkConfig,
    centrality: CentralityResult,
) -> nx.Graph:
    hub = hub_scores(graph, config.hub_measure, centrality)
    return with_node_attributes(
        graph,
        {
            "degree": centrality.degree,
            "betweenness": centrality.betweenness,
            "seed": {node: node in seeds for node in graph.nodes},
            config.hub_measure.column: hub,
        },
    )


def build_network_from_seeds(
    seeds: FrozenSet[str],
    interactome: Interactome,
    config: Optional[NetworkConfig] = None,
) -> InteractionNetwork:
    """
    Build and score a network from a seed set.

    Args:
        seeds: Seed gene identifiers
        interactome: Reference interactome
        config: Network configuration

    Returns:
        InteractionNetwork without annotations
    """
    config = (config or NetworkConfig()).validate()
    seeds = frozenset(seeds)

    edges = build_edge_set(seeds, interactome, config.order)
    graph = largest_components(edges)
    centrality = compute_centrality(graph)
    metadata: Dict[str, Any] = {
        "n_candidate_edges": len(edges),
        "n_nodes_before_trim": graph.number_of_nodes(),
    }

    if config.order is NetworkOrder.MIN_SIMPLE:
        graph = trim_min_order(graph, seeds, centrality.degree, centrality.betweenness)
        centrality = compute_centrality(graph)

    scored = _score_graph(graph, seeds, config, centrality)

    if scored.number_of_nodes() > config.large_network_threshold:
        logger.warning(
            f"Your network contains more than {config.large_network_threshold} nodes "
            f"({scored.number_of_nodes()}), and will likely be difficult to "
            f"interpret when plotted."
        )

    logger.info(
        f"Built {config.order.value}-order network: {scored.number_of_nodes()} nodes, "
        f"{scored.number_of_edges()} edges"
    )

    return InteractionNetwork(
        graph=scored,
        order=config.order,
        hub_measure=config.hub_measure,
        seeds=seeds,
        metadata=metadata,
    )


def build_ppi_network(
    de_table: pd.DataFrame,
    interactome: Interactome,
    seed_config: Optional[SeedSelectionConfig] = None,
    network_config: Optional[NetworkConfig] = None,
    mapping: Optional[GeneMapping] = None,
) -> InteractionNetwork:
    """
    Build an annotated PPI network from differential expression results.

    All options are validated before any selection or graph work starts.

    Args:
        de_table: DE results indexed by gene identifier
        interactome: Reference interactome
        seed_config: Seed selection options
        network_config: Order and hub measure
        mapping: Optional identifier to symbol mapping

    Returns:
        InteractionNetwork

    Example:
        >>> network = build_ppi_network(
        ...     de_table,
        ...     interactome,
        ...     SeedSelectionConfig(schema="deseq2"),
        ...     NetworkConfig(order="first", hub_measure="hubscore"),
        ... )
        >>> network.node_table().head()
    """
    seed_config = seed_config or SeedSelectionConfig()
    network_config = (network_config or NetworkConfig()).validate()
    seed_config.resolve_columns()

    selection: SeedSelection = select_seeds(de_table, seed_config)
    network = build_network_from_seeds(selection.seed_set, interactome, network_config)

    graph = annotate_network(network.graph, selection.table, mapping)

    return InteractionNetwork(
        graph=graph,
        order=network.order,
        hub_measure=network.hub_measure,
        seeds=network.seeds,
        metadata={**network.metadata, "n_duplicates": selection.n_duplicates},
    )


def network_summary(network: InteractionNetwork) -> List[str]:
    """Short human-readable description of a network."""
    n_seed_nodes = sum(1 for _, is_seed in network.graph.nodes(data="seed") if is_seed)
    return [
        f"Order: {network.order.value}",
        f"Hub measure: {network.hub_measure.value}",
        f"Nodes: {network.n_nodes} ({n_seed_nodes} seeds)",
        f"Edges: {network.n_edges}",
    ]
