"""
Pathway Loader

Loads pathway gene sets from GMT (Gene Matrix Transposed) files. The gene sets
feed the pathway distance calculation and the pathway names label the edges
of a pathway network foundation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


@dataclass
class PathwayDatabase:
    """
    Collection of pathways with their member genes.

    Attributes:
        pathways: Mapping from pathway ID to set of gene IDs
        pathway_names: Mapping from pathway ID to human-readable name
        source: Database source (Reactome, KEGG, ...)
        metadata: Additional metadata about the database
    """

    pathways: Dict[str, Set[str]]
    pathway_names: Dict[str, str]
    source: str = "unknown"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.pathways)

    @property
    def pathway_ids(self) -> List[str]:
        """Pathway IDs in sorted order."""
        return sorted(self.pathways)

    def get_pathway_genes(self, pathway_id: str) -> Set[str]:
        return self.pathways.get(pathway_id, set())


class PathwayLoader:
    """Loader for GMT pathway files."""

    def load_gmt(self, gmt_path: str, source: str = "GMT") -> PathwayDatabase:
        """
        Load pathways from GMT format.

        GMT format: pathway_id<TAB>name<TAB>gene1<TAB>gene2<TAB>...

        Args:
            gmt_path: Path to GMT file
            source: Source name for the database

        Returns:
            PathwayDatabase
        """
        path = Path(gmt_path)
        if not path.exists():
            raise FileNotFoundError(f"GMT file not found: {gmt_path}")

        pathways: Dict[str, Set[str]] = {}
        pathway_names: Dict[str, str] = {}

        with open(path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.rstrip("\n")
                if not line.strip():
                    continue

                fields = line.split("\t")
                if len(fields) < 3:
                    logger.warning(f"Skipping malformed line {line_num} in {gmt_path}")
                    continue

                pathway_id = fields[0].strip()
                genes = {g.strip() for g in fields[2:]} - {"", "na", "NA"}
                if not genes:
                    continue

                pathways[pathway_id] = genes
                pathway_names[pathway_id] = fields[1].strip() or pathway_id

        logger.info(
            f"Loaded {len(pathways)} pathways from {gmt_path} "
            f"({sum(len(g) for g in pathways.values())} gene-pathway associations)"
        )

        return PathwayDatabase(
            pathways=pathways,
            pathway_names=pathway_names,
            source=source,
            metadata={"file": str(path)},
        )

    def load_reactome(self, gmt_path: str) -> PathwayDatabase:
        """
        Load Reactome pathways from GMT format.

        MSigDB-style Reactome files put "Pathway Name%Reactome%R-HSA-123456" in
        the first field; those are split into a stable ID and a name.
        """
        db = self.load_gmt(gmt_path, source="Reactome")

        pathways: Dict[str, Set[str]] = {}
        names: Dict[str, str] = {}
        for raw_id, genes in db.pathways.items():
            if "%" in raw_id:
                parts = raw_id.split("%")
                pathway_id, name = parts[-1], parts[0]
            else:
                pathway_id, name = raw_id, db.pathway_names[raw_id]
            pathways[pathway_id] = genes
            names[pathway_id] = name

        return PathwayDatabase(
            pathways=pathways,
            pathway_names=names,
            source="Reactome",
            metadata=db.metadata,
        )
