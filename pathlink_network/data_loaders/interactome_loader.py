"""
Interactome Loader

Loads the reference protein-protein interaction table and the identifier to
symbol mapping used to annotate network nodes. Both are static reference data:
load them once and pass the same objects to every network build.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional
import logging

import pandas as pd

from ..exceptions import SchemaError

logger = logging.getLogger(__name__)

GENE_A = "gene_a"
GENE_B = "gene_b"


@dataclass(frozen=True, eq=False)
class Interactome:
    """
    Undirected, unweighted reference interaction table.

    Each row is one interaction between gene_a and gene_b. The table is
    expected to be free of duplicates and reciprocal pairs (A-B and B-A).

    Attributes:
        edges: DataFrame with columns gene_a and gene_b
        source: Name of the database the interactions came from
        metadata: Additional metadata
    """

    edges: pd.DataFrame
    source: str = "InnateDB"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        missing = [c for c in (GENE_A, GENE_B) if c not in self.edges.columns]
        if missing:
            raise SchemaError(
                f"Interactome must have columns '{GENE_A}' and '{GENE_B}'; "
                f"missing {missing}"
            )

    def __len__(self) -> int:
        return len(self.edges)

    @property
    def genes(self) -> FrozenSet[str]:
        """All genes taking part in at least one interaction."""
        return frozenset(self.edges[GENE_A]).union(self.edges[GENE_B])

    @classmethod
    def from_pairs(cls, pairs, source: str = "custom") -> "Interactome":
        """Build an interactome from an iterable of (gene_a, gene_b) tuples."""
        edges = pd.DataFrame(list(pairs), columns=[GENE_A, GENE_B], dtype=str)
        return cls(edges=edges, source=source)


@dataclass(frozen=True)
class GeneMapping:
    """
    Identifier to gene symbol lookup.

    Attributes:
        symbols: Mapping from gene identifier to symbol
        source: Where the mapping came from
    """

    symbols: Dict[str, str]
    source: str = "unknown"

    def __len__(self) -> int:
        return len(self.symbols)

    def get_symbol(self, gene_id: str) -> Optional[str]:
        return self.symbols.get(gene_id)


def _read_table(path: Path, sep: Optional[str]) -> pd.DataFrame:
    if sep is None:
        sep = "\t" if path.suffix in (".tsv", ".txt") else ","
    return pd.read_csv(path, sep=sep, dtype=str)


def load_interactome(
    path: str,
    gene_a_col: str = "ensemblGeneA",
    gene_b_col: str = "ensemblGeneB",
    source: str = "InnateDB",
    sep: Optional[str] = None,
) -> Interactome:
    """
    Load a reference interactome from a CSV/TSV file.

    Args:
        path: Path to the interaction table
        gene_a_col: Column holding the first interactor
        gene_b_col: Column holding the second interactor
        source: Database name recorded on the result
        sep: Field separator, inferred from the extension when not given

    Returns:
        Interactome
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Interactome file not found: {path}")

    table = _read_table(path, sep)

    missing = [c for c in (gene_a_col, gene_b_col) if c not in table.columns]
    if missing:
        raise SchemaError(
            f"Interactome file must have columns '{gene_a_col}' and "
            f"'{gene_b_col}'. Available: {list(table.columns)}"
        )

    edges = (
        table[[gene_a_col, gene_b_col]]
        .rename(columns={gene_a_col: GENE_A, gene_b_col: GENE_B})
        .dropna()
        .reset_index(drop=True)
    )

    logger.info(f"Loaded {len(edges)} interactions from {path} (source: {source})")
    return Interactome(edges=edges, source=source, metadata={"file": str(path)})


def load_gene_mapping(
    path: str,
    id_col: str = "ensemblGeneId",
    symbol_col: str = "hgncSymbol",
    sep: Optional[str] = None,
) -> GeneMapping:
    """
    Load an identifier to symbol mapping table.

    Rows with an empty symbol are skipped; when an identifier appears more
    than once the first symbol wins.

    Args:
        path: Path to the mapping table
        id_col: Column holding gene identifiers
        symbol_col: Column holding gene symbols
        sep: Field separator, inferred from the extension when not given

    Returns:
        GeneMapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Mapping file not found: {path}")

    table = _read_table(path, sep)

    missing = [c for c in (id_col, symbol_col) if c not in table.columns]
    if missing:
        raise SchemaError(f"Required column(s) {missing} not found in {path}")

    table = table[[id_col, symbol_col]].dropna().drop_duplicates(subset=id_col)
    symbols = dict(zip(table[id_col], table[symbol_col]))

    logger.info(f"Loaded {len(symbols)} gene symbols from {path}")
    return GeneMapping(symbols=symbols, source=str(path))
