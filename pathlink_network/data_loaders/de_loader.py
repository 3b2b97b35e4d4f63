"""
Differential Expression Loader

Reads differential expression (DE) result tables and resolves which columns
hold the log fold change and adjusted p value. Supported layouts:
- DESeq2 results (log2FoldChange, padj)
- edgeR topTags results (logFC, FDR)
- Plain tables with user-supplied column names
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union
import logging

import pandas as pd

from ..exceptions import ConfigurationError, SchemaError

logger = logging.getLogger(__name__)

# Canonical column names after schema resolution
LOG_FOLD_CHANGE = "log_fold_change"
P_ADJUSTED = "p_adjusted"


class DESchema(Enum):
    """Layouts of differential expression results."""

    DESEQ2 = "deseq2"
    EDGER = "edger"
    TABLE = "table"  # Plain table, columns named by the caller


_NATIVE_COLUMNS = {
    DESchema.DESEQ2: ("log2FoldChange", "padj"),
    DESchema.EDGER: ("logFC", "FDR"),
}


@dataclass(frozen=True)
class DEColumns:
    """
    Resolved column layout of a DE table.

    Attributes:
        schema: Layout the table follows
        column_fc: Name of the fold change column, if known
        column_p: Name of the adjusted p value column, if known
    """

    schema: DESchema
    column_fc: Optional[str] = None
    column_p: Optional[str] = None

    @classmethod
    def resolve(
        cls,
        schema: Union[DESchema, str],
        column_fc: Optional[str] = None,
        column_p: Optional[str] = None,
        require_columns: bool = False,
    ) -> "DEColumns":
        """
        Resolve a schema and optional explicit column names.

        Args:
            schema: DESchema or its string value
            column_fc: Fold change column (plain tables only)
            column_p: Adjusted p value column (plain tables only)
            require_columns: Whether both columns must be known, e.g. because
                the table is going to be filtered

        Returns:
            DEColumns
        """
        schema = DESchema(schema)

        if schema in _NATIVE_COLUMNS:
            fc, p = _NATIVE_COLUMNS[schema]
            return cls(schema=schema, column_fc=fc, column_p=p)

        if require_columns and (column_fc is None or column_p is None):
            raise ConfigurationError(
                "A plain DE table that is going to be filtered needs both "
                "'column_fc' and 'column_p'"
            )
        return cls(schema=schema, column_fc=column_fc, column_p=column_p)

    @property
    def has_statistics(self) -> bool:
        return self.column_fc is not None and self.column_p is not None

    def canonicalize(self, table: pd.DataFrame) -> pd.DataFrame:
        """
        Rename the statistics columns to their canonical names.

        Args:
            table: DE table indexed by gene identifier

        Returns:
            New DataFrame; unchanged columns are passed through
        """
        if not self.has_statistics:
            return table.copy()

        missing = [c for c in (self.column_fc, self.column_p) if c not in table.columns]
        if missing:
            raise SchemaError(
                f"DE table is missing column(s) {missing}. "
                f"Available: {list(table.columns)}"
            )

        return table.rename(
            columns={self.column_fc: LOG_FOLD_CHANGE, self.column_p: P_ADJUSTED}
        )


def load_de_table(
    path: str,
    id_column: Optional[str] = None,
    sep: Optional[str] = None,
) -> pd.DataFrame:
    """
    Load a DE result table from CSV or TSV.

    Args:
        path: Path to the table
        id_column: Column holding gene identifiers. Defaults to the first column.
        sep: Field separator. Inferred from the extension when not given.

    Returns:
        DataFrame indexed by gene identifier
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"DE table not found: {path}")

    if sep is None:
        sep = "\t" if path.suffix in (".tsv", ".txt") or path.name.endswith(".tsv.gz") else ","

    table = pd.read_csv(path, sep=sep)
    if table.empty:
        raise SchemaError(f"DE table is empty: {path}")

    if id_column is None:
        id_column = table.columns[0]
    elif id_column not in table.columns:
        raise SchemaError(
            f"Identifier column '{id_column}' not found. Available: {list(table.columns)}"
        )

    table = table.set_index(id_column)
    table.index = table.index.astype(str)
    table.index.name = None

    logger.info(f"Loaded DE table with {len(table)} rows from {path}")
    return table
