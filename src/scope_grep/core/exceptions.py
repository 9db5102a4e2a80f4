"""Exception hierarchy for scope-grep."""
from typing import Optional, Tuple


class ScopeGrepError(Exception):
    """Base class for all scope-grep errors."""


class LeafDecodeError(ScopeGrepError):
    """Raised when a leaf node's byte span is not valid UTF-8."""

    def __init__(self, span: Tuple[int, int], reason: str) -> None:
        self.span = span
        self.reason = reason
        super().__init__(f"Leaf at bytes {span[0]}..{span[1]} is not valid UTF-8: {reason}")


class SourceParseError(ScopeGrepError):
    """Raised when a syntax tree cannot be produced for a source file."""

    def __init__(self, message: str, file_path: Optional[str] = None) -> None:
        self.file_path = file_path
        prefix = f"{file_path}: " if file_path else ""
        super().__init__(f"{prefix}{message}")


class TreeStructureError(ScopeGrepError):
    """Raised when a node would break the parent/child span invariants."""


class InvalidQueryError(ScopeGrepError):
    """Raised when a search query cannot be used."""


class ConfigurationError(ScopeGrepError):
    """Raised when a configuration file is invalid."""

    def __init__(self, config_path: str, message: str) -> None:
        self.config_path = config_path
        self.message = message
        super().__init__(f"Invalid configuration at {config_path}: {message}")
