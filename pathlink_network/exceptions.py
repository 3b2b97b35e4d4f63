"""
Exceptions raised by the network builders.

Both concrete errors subclass ValueError so callers that already catch
bad-argument errors keep working.
"""


class PathLinkError(Exception):
    """Base class for all package errors."""


class ConfigurationError(PathLinkError, ValueError):
    """Missing, conflicting or out-of-range parameters."""


class SchemaError(PathLinkError, ValueError):
    """Input tables or matrices that do not have the expected shape or identifiers."""
