"""Data models for scope-grep."""

from scope_grep.models.config import GrammarProfile, ScopeGrepConfig
from scope_grep.models.search import ScopeMatch, SearchSummary
from scope_grep.models.tree import Node, ScopeKind, SyntaxTree

__all__ = [
    # Tree
    "Node",
    "ScopeKind",
    "SyntaxTree",
    # Config
    "GrammarProfile",
    "ScopeGrepConfig",
    # Search
    "ScopeMatch",
    "SearchSummary",
]
