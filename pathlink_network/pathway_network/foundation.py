"""
Pathway Network Foundation

Turns a pathway distance matrix into the edge list a pathway similarity
network is assembled from. Pairs are kept either up to a distance cutoff or
as the most similar fraction of all pairs.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Union
import logging
import math

import numpy as np
import pandas as pd

from ..data_loaders.pathway_loader import PathwayDatabase
from ..exceptions import ConfigurationError, SchemaError
from .distances import DistanceMethod

logger = logging.getLogger(__name__)

FOUNDATION_COLUMNS = ["pathway1", "pathway2", "distance", "pathway_name1", "pathway_name2"]


@dataclass
class FoundationConfig:
    """Cutoffs for a pathway network foundation; set exactly one."""

    max_distance: Optional[float] = None  # Keep pairs with distance <= max_distance
    prop_to_keep: Optional[float] = None  # Keep this fraction of the closest pairs
    dist_method: Union[DistanceMethod, str] = DistanceMethod.JACCARD

    def validate(self) -> "FoundationConfig":
        if self.max_distance is None and self.prop_to_keep is None:
            raise ConfigurationError("You must provide one of 'max_distance' or 'prop_to_keep'")
        if self.max_distance is not None and self.prop_to_keep is not None:
            raise ConfigurationError("Provide only one of 'max_distance' or 'prop_to_keep'")
        if self.max_distance is not None and self.max_distance < 0:
            raise ConfigurationError(f"max_distance must be >= 0, got {self.max_distance}")
        if self.prop_to_keep is not None and not 0 < self.prop_to_keep <= 1:
            raise ConfigurationError(f"prop_to_keep must be in (0, 1], got {self.prop_to_keep}")

        return FoundationConfig(
            max_distance=self.max_distance,
            prop_to_keep=self.prop_to_keep,
            dist_method=DistanceMethod(self.dist_method),
        )


def validate_distance_matrix(distances: pd.DataFrame) -> pd.DataFrame:
    """
    Check a pathway distance matrix and align its columns to its index.

    Raises:
        SchemaError: If the matrix is not square, labelled consistently,
            symmetric and non-negative
    """
    if distances.shape[0] != distances.shape[1]:
        raise SchemaError(f"Distance matrix must be square, got shape {distances.shape}")
    if set(distances.index) != set(distances.columns):
        raise SchemaError("Distance matrix rows and columns must hold the same pathways")
    if distances.index.has_duplicates:
        raise SchemaError("Distance matrix has duplicate pathway IDs")

    aligned = distances.loc[:, list(distances.index)].astype(float)
    values = aligned.to_numpy()

    if np.isnan(values).any():
        raise SchemaError("Distance matrix contains missing values")
    if (values < 0).any():
        raise SchemaError("Distance matrix contains negative distances")
    if not np.allclose(values, values.T):
        raise SchemaError("Distance matrix is not symmetric")

    return aligned


def candidate_pairs(distances: pd.DataFrame) -> pd.DataFrame:
    """
    Unordered pathway pairs with a nonzero distance.

    Each pair appears once (upper triangle, row-major order).
    """
    aligned = validate_distance_matrix(distances)
    rows, cols = np.triu_indices(len(aligned), k=1)
    values = aligned.to_numpy()[rows, cols]
    nonzero = values != 0

    labels = np.asarray(aligned.index)
    return pd.DataFrame(
        {
            "pathway1": labels[rows[nonzero]],
            "pathway2": labels[cols[nonzero]],
            "distance": values[nonzero],
        }
    )


def n_pairs_to_keep(n_candidates: int, prop_to_keep: float) -> int:
    """floor(n * prop), but at least one pair when any exist."""
    if n_candidates == 0:
        return 0
    # Guard against 0.29 * 100 == 28.999999999999996
    n_keep = math.floor(n_candidates * prop_to_keep + 1e-9)
    return min(n_candidates, max(1, n_keep))


def _names_lookup(
    pathway_names: Optional[Union[Mapping[str, str], PathwayDatabase]],
) -> Dict[str, str]:
    if pathway_names is None:
        return {}
    if isinstance(pathway_names, PathwayDatabase):
        return dict(pathway_names.pathway_names)
    return dict(pathway_names)


def pathnet_foundation(
    distances: pd.DataFrame,
    max_distance: Optional[float] = None,
    prop_to_keep: Optional[float] = None,
    pathway_names: Optional[Union[Mapping[str, str], PathwayDatabase]] = None,
) -> pd.DataFrame:
    """
    Build the edge list of a pathway similarity network.

    Args:
        distances: Symmetric pathway distance matrix
        max_distance: Keep pairs with distance <= max_distance
        prop_to_keep: Keep this fraction of the closest pairs
        pathway_names: Optional pathway ID to name lookup

    Returns:
        DataFrame with columns pathway1, pathway2, distance, pathway_name1 and
        pathway_name2, sorted by increasing distance

    Example:
        >>> distances = get_pathway_distances(pathway_db, "jaccard")
        >>> foundation = pathnet_foundation(distances, max_distance=0.8,
        ...                                 pathway_names=pathway_db)
    """
    FoundationConfig(max_distance=max_distance, prop_to_keep=prop_to_keep).validate()

    pairs = candidate_pairs(distances)
    pairs = pairs.sort_values("distance", kind="mergesort").reset_index(drop=True)

    if max_distance is not None:
        kept = pairs[pairs["distance"] <= max_distance]
    else:
        kept = pairs.head(n_pairs_to_keep(len(pairs), prop_to_keep))

    kept = kept.reset_index(drop=True)
    names = _names_lookup(pathway_names)
    kept["pathway_name1"] = [names.get(p) for p in kept["pathway1"]]
    kept["pathway_name2"] = [names.get(p) for p in kept["pathway2"]]

    logger.info(
        f"Kept {len(kept)} of {len(pairs)} pathway pairs "
        + (
            f"with distance <= {max_distance}"
            if max_distance is not None
            else f"(closest {prop_to_keep:.1%})"
        )
    )
    return kept[FOUNDATION_COLUMNS]
