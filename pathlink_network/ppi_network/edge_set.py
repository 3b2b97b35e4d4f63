"""
Edge Set Selection

Picks the interactions of the reference interactome that make up a seeded
network, according to the network order.
"""

from enum import Enum
from typing import Iterable, Union
import logging

import pandas as pd

from ..data_loaders.interactome_loader import GENE_A, GENE_B, Interactome

logger = logging.getLogger(__name__)


class NetworkOrder(Enum):
    """How far a network expands beyond the seed genes."""

    ZERO = "zero"  # Seed-to-seed interactions only
    FIRST = "first"  # Seeds plus their direct interactors
    MIN_SIMPLE = "minSimple"  # First order, then trimmed of non-seed periphery

    @property
    def expands(self) -> bool:
        """Whether edges with a single seed endpoint are kept."""
        return self is not NetworkOrder.ZERO


def build_edge_set(
    seeds: Iterable[str],
    interactome: Interactome,
    order: Union[NetworkOrder, str] = NetworkOrder.ZERO,
) -> pd.DataFrame:
    """
    Select the interactions touching the seed genes.

    Zero order keeps interactions between two seeds; first and minSimple
    order keep every interaction with at least one seed endpoint.

    Args:
        seeds: Seed gene identifiers
        interactome: Reference interactome
        order: Network order

    Returns:
        DataFrame with columns gene_a and gene_b
    """
    order = NetworkOrder(order)
    seed_list = list(set(seeds))

    edges = interactome.edges
    a_is_seed = edges[GENE_A].isin(seed_list)
    b_is_seed = edges[GENE_B].isin(seed_list)

    if order.expands:
        keep = a_is_seed | b_is_seed
    else:
        keep = a_is_seed & b_is_seed

    selected = edges.loc[keep, [GENE_A, GENE_B]].reset_index(drop=True)

    logger.info(
        f"Selected {len(selected)} of {len(edges)} interactions "
        f"({order.value} order, {len(seed_list)} seeds)"
    )
    return selected
