"""Configuration models for scope-grep."""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scope_grep.constants import (
    DEFAULT_SCOPE_KINDS,
    LANGUAGE_EXTENSIONS,
    FilePatterns,
    ReportDefaults,
)
from scope_grep.models.tree import Node, ScopeKind


class GrammarProfile(BaseModel):
    """Grammar-specific knowledge the search needs about a tree.

    Maps grammar node kinds onto ``ScopeKind`` and names the field role that
    holds a scope's declared name.
    """

    model_config = ConfigDict(extra="forbid")

    language: str = "python"
    scope_kinds: Dict[str, ScopeKind] = Field(
        default_factory=lambda: {kind: ScopeKind(value) for kind, value in DEFAULT_SCOPE_KINDS.items()}
    )
    name_field: str = ReportDefaults.NAME_FIELD

    def scope_kind_of(self, node: Node) -> Optional[ScopeKind]:
        """Return the scope category of a node, or None for non-scope kinds."""
        return self.scope_kinds.get(node.kind)


class ScopeGrepConfig(BaseModel):
    """Validated contents of a scope-grep.yaml file."""

    model_config = ConfigDict(extra="forbid")

    extensions: List[str] = Field(default_factory=lambda: list(LANGUAGE_EXTENSIONS["python"]))
    exclude_patterns: List[str] = Field(default_factory=lambda: list(FilePatterns.DEFAULT_EXCLUDE))
    max_file_size_mb: int = Field(default=0, ge=0)
    scope_separator: str = ReportDefaults.SCOPE_SEPARATOR
    line_join_marker: str = ReportDefaults.LINE_JOIN_MARKER
    grammar: GrammarProfile = Field(default_factory=GrammarProfile)

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one extension is required")
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    @field_validator("line_join_marker")
    @classmethod
    def _marker_is_single_line(cls, value: str) -> str:
        if not value or "\n" in value:
            raise ValueError("line_join_marker must be a non-empty string without newlines")
        return value
