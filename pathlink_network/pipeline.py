"""
Network Pipeline

Runs PPI network construction and/or a pathway network foundation from a
single YAML configuration, loading reference data once and writing results
to an output directory.

Example configuration:

    data:
      de_table: data/de_results.csv
      interactome: data/innatedb_ppi.csv
      gene_mapping: data/mapping.csv
      pathways_gmt: data/reactome.gmt
    seeds:
      schema: deseq2
      p_cutoff: 0.05
      fc_cutoff: 1.5
    network:
      order: minSimple
      hub_measure: betweenness
    foundation:
      max_distance: 0.8
    output_dir: outputs/demo
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from .data_loaders import (
    GeneMapping,
    Interactome,
    PathwayDatabase,
    PathwayLoader,
    load_de_table,
    load_gene_mapping,
    load_interactome,
)
from .exceptions import ConfigurationError
from .pathway_network import FoundationConfig, get_pathway_distances, pathnet_foundation
from .ppi_network import (
    InteractionNetwork,
    NetworkConfig,
    SeedSelectionConfig,
    build_ppi_network,
    network_summary,
    to_csv,
    to_json,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class DataConfig:
    """Input file locations."""

    de_table: Optional[str] = None
    de_id_column: Optional[str] = None
    interactome: Optional[str] = None
    interactome_columns: List[str] = field(
        default_factory=lambda: ["ensemblGeneA", "ensemblGeneB"]
    )
    gene_mapping: Optional[str] = None
    pathways_gmt: Optional[str] = None
    reactome_ids: bool = False  # Parse "Name%Reactome%R-HSA-..." GMT identifiers


@dataclass
class PipelineConfig:
    """Complete pipeline configuration."""

    data: DataConfig = field(default_factory=DataConfig)
    seeds: SeedSelectionConfig = field(default_factory=SeedSelectionConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    foundation: Optional[FoundationConfig] = None

    output_dir: str = "outputs"
    verbose: bool = True

    @property
    def runs_ppi(self) -> bool:
        return self.data.de_table is not None

    @property
    def runs_foundation(self) -> bool:
        return self.data.pathways_gmt is not None

    @staticmethod
    def _section(section_cls, values: Optional[Dict[str, Any]], name: str):
        values = values or {}
        known = {f.name for f in fields(section_cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown option(s) in '{name}': {sorted(unknown)}")
        return section_cls(**values)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "PipelineConfig":
        raw = dict(raw or {})
        foundation = raw.pop("foundation", None)
        config = cls(
            data=cls._section(DataConfig, raw.pop("data", None), "data"),
            seeds=cls._section(SeedSelectionConfig, raw.pop("seeds", None), "seeds"),
            network=cls._section(NetworkConfig, raw.pop("network", None), "network"),
            foundation=(
                cls._section(FoundationConfig, foundation, "foundation")
                if foundation is not None
                else None
            ),
            output_dir=raw.pop("output_dir", "outputs"),
            verbose=raw.pop("verbose", True),
        )
        if raw:
            raise ConfigurationError(f"Unknown top-level option(s): {sorted(raw)}")
        return config

    @classmethod
    def from_yaml(cls, path: str) -> "PipelineConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}
        return cls.from_dict(raw)

    def validate(self, interactome_given: bool = False) -> None:
        """Check the whole configuration before any data is loaded."""
        if not self.runs_ppi and not self.runs_foundation:
            raise ConfigurationError(
                "Nothing to do: set 'data.de_table' and/or 'data.pathways_gmt'"
            )

        if self.runs_ppi:
            if self.data.interactome is None and not interactome_given:
                raise ConfigurationError("'data.interactome' is required to build a PPI network")
            if len(self.data.interactome_columns) != 2:
                raise ConfigurationError("'data.interactome_columns' must name two columns")
            self.seeds.resolve_columns()
            self.network = self.network.validate()

        if self.runs_foundation:
            if self.foundation is None:
                raise ConfigurationError("A 'foundation' section is required with 'data.pathways_gmt'")
            self.foundation = self.foundation.validate()


# =============================================================================
# Pipeline Result
# =============================================================================

@dataclass
class PipelineResult:
    """Outputs of a pipeline run."""

    network: Optional[InteractionNetwork] = None
    foundation: Optional[pd.DataFrame] = None
    output_files: List[str] = field(default_factory=list)
    runtime_seconds: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def summary(self) -> str:
        lines = [
            "=" * 60,
            "PATHLINK NETWORK RESULTS",
            "=" * 60,
            f"Timestamp: {self.timestamp}",
            f"Runtime: {self.runtime_seconds:.1f} seconds",
        ]
        if self.network is not None:
            lines += ["", "PPI NETWORK:"] + [f"  {line}" for line in network_summary(self.network)]
        if self.foundation is not None:
            lines += ["", "PATHWAY FOUNDATION:", f"  Pathway pairs: {len(self.foundation)}"]
        if self.output_files:
            lines += ["", "FILES:"] + [f"  {p}" for p in self.output_files]
        return "\n".join(lines)


# =============================================================================
# Pipeline
# =============================================================================

class NetworkPipeline:
    """
    Builds the configured networks.

    Reference data can be passed in directly, e.g. to share one loaded
    interactome between several pipelines; otherwise it is loaded from the
    paths in the configuration.
    """

    def __init__(
        self,
        config: PipelineConfig,
        interactome: Optional[Interactome] = None,
        mapping: Optional[GeneMapping] = None,
    ):
        self.config = config
        self._interactome = interactome
        self._mapping = mapping

    def _load_interactome(self) -> Interactome:
        if self._interactome is None:
            col_a, col_b = self.config.data.interactome_columns
            self._interactome = load_interactome(
                self.config.data.interactome, gene_a_col=col_a, gene_b_col=col_b
            )
        return self._interactome

    def _load_mapping(self) -> Optional[GeneMapping]:
        if self._mapping is None and self.config.data.gene_mapping is not None:
            self._mapping = load_gene_mapping(self.config.data.gene_mapping)
        return self._mapping

    def _load_pathways(self) -> PathwayDatabase:
        loader = PathwayLoader()
        if self.config.data.reactome_ids:
            return loader.load_reactome(self.config.data.pathways_gmt)
        return loader.load_gmt(self.config.data.pathways_gmt)

    def build_network(self) -> InteractionNetwork:
        """Build the PPI network from the configured DE table."""
        de_table = load_de_table(self.config.data.de_table, id_column=self.config.data.de_id_column)
        return build_ppi_network(
            de_table,
            self._load_interactome(),
            seed_config=self.config.seeds,
            network_config=self.config.network,
            mapping=self._load_mapping(),
        )

    def build_foundation(self) -> pd.DataFrame:
        """Build the pathway network foundation from the configured GMT file."""
        foundation_config = self.config.foundation
        pathway_db = self._load_pathways()
        distances = get_pathway_distances(pathway_db, foundation_config.dist_method)
        return pathnet_foundation(
            distances,
            max_distance=foundation_config.max_distance,
            prop_to_keep=foundation_config.prop_to_keep,
            pathway_names=pathway_db,
        )

    def run(self) -> PipelineResult:
        """Validate the configuration, build the networks and write outputs."""
        start = time.time()
        self.config.validate(interactome_given=self._interactome is not None)

        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        result = PipelineResult()

        if self.config.runs_ppi:
            logger.info("Building PPI network")
            result.network = self.build_network()
            nodes_path, edges_path = to_csv(result.network, output_dir, prefix="ppi_")
            json_path = to_json(result.network, output_dir / "ppi_network.json")
            result.output_files += [str(nodes_path), str(edges_path), str(json_path)]

        if self.config.runs_foundation:
            logger.info("Building pathway network foundation")
            result.foundation = self.build_foundation()
            foundation_path = output_dir / "pathway_foundation.csv"
            result.foundation.to_csv(foundation_path, index=False)
            result.output_files.append(str(foundation_path))

        result.runtime_seconds = time.time() - start
        if self.config.verbose:
            logger.info("\n" + result.summary)
        return result
