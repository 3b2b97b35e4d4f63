"""
Pathway Distances

Pairwise distances between pathways computed from their gene sets.
"""

from enum import Enum
from typing import List, Optional, Union
import logging

import numpy as np
import pandas as pd
from scipy.spatial.distance import pdist, squareform

from ..data_loaders.pathway_loader import PathwayDatabase
from ..exceptions import SchemaError

logger = logging.getLogger(__name__)


class DistanceMethod(Enum):
    """Distance between two pathway gene sets."""

    JACCARD = "jaccard"  # 1 - |A & B| / |A | B|
    DICE = "dice"  # 1 - 2|A & B| / (|A| + |B|)
    CORRELATION = "correlation"  # 1 - Pearson r of membership vectors


def membership_matrix(
    pathway_db: PathwayDatabase,
    pathway_ids: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    Boolean pathway x gene membership matrix.

    Args:
        pathway_db: Pathway gene sets
        pathway_ids: Pathways to include, in row order. Defaults to all,
            sorted by ID.
    """
    pathway_ids = pathway_ids or pathway_db.pathway_ids
    genes = sorted(set().union(*(pathway_db.get_pathway_genes(p) for p in pathway_ids)))
    gene_index = {g: i for i, g in enumerate(genes)}

    matrix = np.zeros((len(pathway_ids), len(genes)), dtype=bool)
    for row, pathway_id in enumerate(pathway_ids):
        for gene in pathway_db.get_pathway_genes(pathway_id):
            matrix[row, gene_index[gene]] = True

    return pd.DataFrame(matrix, index=pathway_ids, columns=genes)


def get_pathway_distances(
    pathway_db: PathwayDatabase,
    dist_method: Union[DistanceMethod, str] = DistanceMethod.JACCARD,
    pathway_ids: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    Symmetric pathway distance matrix.

    Args:
        pathway_db: Pathway gene sets
        dist_method: Distance measure
        pathway_ids: Optional subset of pathways

    Returns:
        Square DataFrame indexed by pathway ID on both axes, zero diagonal
    """
    dist_method = DistanceMethod(dist_method)
    members = membership_matrix(pathway_db, pathway_ids)

    if len(members) < 2:
        raise SchemaError("At least two pathways are needed to compute distances")

    distances = squareform(pdist(members.to_numpy(), metric=dist_method.value))
    # Correlation is undefined for pathways containing every gene
    distances = np.nan_to_num(distances, nan=1.0)
    np.fill_diagonal(distances, 0.0)

    logger.info(
        f"Computed {dist_method.value} distances between {len(members)} pathways "
        f"({members.shape[1]} genes)"
    )
    return pd.DataFrame(distances, index=members.index, columns=members.index)
