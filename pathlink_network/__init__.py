"""
PathLink Network

Protein-protein interaction networks seeded by differentially expressed genes,
and pathway similarity network foundations built from pathway distances.
"""

__version__ = "0.1.0"

from .exceptions import ConfigurationError, PathLinkError, SchemaError
from .pipeline import NetworkPipeline, PipelineConfig, PipelineResult

__all__ = [
    "ConfigurationError",
    "NetworkPipeline",
    "PathLinkError",
    "PipelineConfig",
    "PipelineResult",
    "SchemaError",
    "__version__",
]
