"""Core infrastructure for scope-grep: errors, logging, configuration, caching."""

from scope_grep.core.exceptions import (
    ConfigurationError,
    InvalidQueryError,
    LeafDecodeError,
    ScopeGrepError,
    SourceParseError,
    TreeStructureError,
)
from scope_grep.core.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    # Exceptions
    "ScopeGrepError",
    "LeafDecodeError",
    "SourceParseError",
    "TreeStructureError",
    "InvalidQueryError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
]
