"""
Seed Selection

Derives the seed genes of a PPI network from a differential expression table:
optional significance and fold change filtering followed by removal of
duplicate identifiers.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple, Union
import logging
import math
import re
import textwrap

import pandas as pd

from ..data_loaders.de_loader import (
    LOG_FOLD_CHANGE,
    P_ADJUSTED,
    DEColumns,
    DESchema,
)
from ..exceptions import ConfigurationError, SchemaError

logger = logging.getLogger(__name__)

# Number of dropped identifiers listed in the duplicate report
MAX_REPORTED_DUPLICATES = 10


@dataclass
class SeedSelectionConfig:
    """Configuration for seed selection."""

    schema: Union[DESchema, str] = DESchema.DESEQ2

    # Filtering
    filter_input: bool = True  # False when the table is already filtered
    p_cutoff: float = 0.05  # Keep rows with adjusted p < p_cutoff
    fc_cutoff: float = 1.5  # Keep rows with |log2 FC| > log2(fc_cutoff)

    # Column names, only used for plain tables
    column_fc: Optional[str] = None
    column_p: Optional[str] = None

    # Row identifiers must look like gene accessions
    accession_pattern: str = "ENSG"

    def resolve_columns(self) -> DEColumns:
        """Validate the configuration and resolve the table layout."""
        if not 0 < self.p_cutoff <= 1:
            raise ConfigurationError(f"p_cutoff must be in (0, 1], got {self.p_cutoff}")
        if self.fc_cutoff <= 0:
            raise ConfigurationError(f"fc_cutoff must be positive, got {self.fc_cutoff}")

        return DEColumns.resolve(
            self.schema,
            column_fc=self.column_fc,
            column_p=self.column_p,
            require_columns=self.filter_input,
        )

    @property
    def log_fc_threshold(self) -> float:
        return math.log2(self.fc_cutoff)


@dataclass(frozen=True, eq=False)
class SeedSelection:
    """
    Seed genes and the per-gene records they came from.

    Attributes:
        seeds: Unique gene identifiers in first-seen order
        table: Deduplicated DE table indexed by gene identifier
        duplicates: Identifiers of the rows dropped as duplicates, in order
    """

    seeds: Tuple[str, ...]
    table: pd.DataFrame
    duplicates: Tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.seeds)

    @property
    def seed_set(self) -> FrozenSet[str]:
        return frozenset(self.seeds)

    @property
    def n_duplicates(self) -> int:
        return len(self.duplicates)


def check_accessions(identifiers: pd.Index, pattern: str = "ENSG") -> None:
    """
    Check that row identifiers look like gene accessions.

    Only the first identifier is inspected.

    Raises:
        SchemaError: If the table is empty or the first identifier does not
            match the pattern
    """
    if len(identifiers) == 0:
        raise SchemaError("DE table has no rows")

    first = str(identifiers[0])
    if not re.search(pattern, first):
        raise SchemaError(
            f"Row identifiers must be gene accessions matching '{pattern}', "
            f"got '{first}'"
        )


def _report_duplicates(duplicates: Tuple[str, ...]) -> None:
    shown = ", ".join(duplicates[:MAX_REPORTED_DUPLICATES])
    if len(duplicates) > MAX_REPORTED_DUPLICATES:
        shown += "..."

    logger.info(
        f"Found {len(duplicates)} duplicate IDs in the input, which have been removed:\n"
        + textwrap.fill(shown, initial_indent="  ", subsequent_indent="  ")
    )


def select_seeds(
    de_table: pd.DataFrame,
    config: Optional[SeedSelectionConfig] = None,
) -> SeedSelection:
    """
    Select seed genes from a differential expression table.

    Args:
        de_table: DE results indexed by gene identifier
        config: Selection configuration

    Returns:
        SeedSelection with the unique seeds and the deduplicated table
    """
    config = config or SeedSelectionConfig()
    columns = config.resolve_columns()

    table = de_table.copy()
    table.index = table.index.astype(str)
    check_accessions(table.index, config.accession_pattern)

    table = columns.canonicalize(table)

    if config.filter_input:
        passed = (table[P_ADJUSTED] < config.p_cutoff) & (
            table[LOG_FOLD_CHANGE].abs() > config.log_fc_threshold
        )
        logger.debug(
            f"{int(passed.sum())} of {len(table)} genes pass p < {config.p_cutoff} "
            f"and |logFC| > {config.log_fc_threshold:.3f}"
        )
        table = table[passed]

    is_duplicate = table.index.duplicated(keep="first")
    duplicates = tuple(table.index[is_duplicate])
    table = table[~is_duplicate]

    if duplicates:
        _report_duplicates(duplicates)

    seeds = tuple(table.index)
    logger.info(f"Selected {len(seeds)} seed genes")

    return SeedSelection(seeds=seeds, table=table, duplicates=duplicates)
