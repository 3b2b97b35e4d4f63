"""
Data Loaders

Loading utilities for differential expression tables, the reference
interactome, identifier mappings and pathway gene sets.
"""

from .de_loader import (
    LOG_FOLD_CHANGE,
    P_ADJUSTED,
    DEColumns,
    DESchema,
    load_de_table,
)
from .interactome_loader import (
    GENE_A,
    GENE_B,
    GeneMapping,
    Interactome,
    load_gene_mapping,
    load_interactome,
)
from .pathway_loader import PathwayDatabase, PathwayLoader

__all__ = [
    # Differential expression
    "LOG_FOLD_CHANGE",
    "P_ADJUSTED",
    "DEColumns",
    "DESchema",
    "load_de_table",
    # Interactome
    "GENE_A",
    "GENE_B",
    "GeneMapping",
    "Interactome",
    "load_gene_mapping",
    "load_interactome",
    # Pathways
    "PathwayDatabase",
    "PathwayLoader",
]
