"""
PPI Network

Builds protein-protein interaction networks seeded by genes of interest and
expanded against a reference interactome.

Components:
- select_seeds: Seed genes from a differential expression table
- build_edge_set: Interactions selected by network order
- largest_components: Largest connected component(s) of an edge set
- compute_centrality / hub_scores: Degree, betweenness and hub scores
- trim_min_order: Removal of peripheral non-seed nodes
- build_ppi_network: The whole pipeline

Example Usage:
    from pathlink_network.ppi_network import (
        NetworkConfig,
        SeedSelectionConfig,
        build_ppi_network,
    )

    network = build_ppi_network(
        de_table,
        interactome,
        SeedSelectionConfig(schema="deseq2", p_cutoff=0.05, fc_cutoff=1.5),
        NetworkConfig(order="minSimple", hub_measure="betweenness"),
        mapping=gene_mapping,
    )
    nodes = network.node_table()
"""

from .seeds import (
    SeedSelection,
    SeedSelectionConfig,
    check_accessions,
    select_seeds,
)
from .edge_set import NetworkOrder, build_edge_set
from .connectivity import edges_to_graph, largest_component_nodes, largest_components
from .centrality import (
    CentralityResult,
    HubMeasure,
    compute_betweenness,
    compute_centrality,
    compute_degree,
    compute_hub_score,
    hub_scores,
)
from .trimming import peripheral_nodes, trim_min_order
from .builder import (
    InteractionNetwork,
    NetworkConfig,
    annotate_network,
    build_network_from_seeds,
    build_ppi_network,
    network_summary,
)
from .exporters import load_json, to_csv, to_json

__all__ = [
    # Seeds
    "SeedSelection",
    "SeedSelectionConfig",
    "check_accessions",
    "select_seeds",
    # Edges and connectivity
    "NetworkOrder",
    "build_edge_set",
    "edges_to_graph",
    "largest_component_nodes",
    "largest_components",
    # Centrality
    "CentralityResult",
    "HubMeasure",
    "compute_betweenness",
    "compute_centrality",
    "compute_degree",
    "compute_hub_score",
    "hub_scores",
    # Trimming
    "peripheral_nodes",
    "trim_min_order",
    # Builder
    "InteractionNetwork",
    "NetworkConfig",
    "annotate_network",
    "build_network_from_seeds",
    "build_ppi_network",
    "network_summary",
    # Exporters
    "load_json",
    "to_csv",
    "to_json",
]
