"""
Pathway Network

Pathway distance matrices and the thresholded edge lists ("foundations")
that pathway similarity networks are built from.

Example Usage:
    from pathlink_network.data_loaders import PathwayLoader
    from pathlink_network.pathway_network import (
        get_pathway_distances,
        pathnet_foundation,
    )

    pathway_db = PathwayLoader().load_gmt("reactome.gmt")
    distances = get_pathway_distances(pathway_db, dist_method="jaccard")
    foundation = pathnet_foundation(distances, max_distance=0.8,
                                    pathway_names=pathway_db)
"""

from .distances import DistanceMethod, get_pathway_distances, membership_matrix
from .foundation import (
    FOUNDATION_COLUMNS,
    FoundationConfig,
    candidate_pairs,
    n_pairs_to_keep,
    pathnet_foundation,
    validate_distance_matrix,
)

__all__ = [
    # Distances
    "DistanceMethod",
    "get_pathway_distances",
    "membership_matrix",
    # Foundation
    "FOUNDATION_COLUMNS",
    "FoundationConfig",
    "candidate_pairs",
    "n_pairs_to_keep",
    "pathnet_foundation",
    "validate_distance_matrix",
]
