"""Structural substring search reported with enclosing scopes."""

from scope_grep.features.search.block import block_anchor, extract_block
from scope_grep.features.search.file_finder import SourceFileFinder
from scope_grep.features.search.hierarchy import hierarchy_of, join_scope_names, named_projection
from scope_grep.features.search.matcher import find_leaf_matches
from scope_grep.features.search.parsing import parse_source
from scope_grep.features.search.service import (
    scope_search_impl,
    search_files,
    search_source,
    search_tree,
)

__all__ = [
    "block_anchor",
    "extract_block",
    "find_leaf_matches",
    "hierarchy_of",
    "join_scope_names",
    "named_projection",
    "parse_source",
    "scope_search_impl",
    "search_files",
    "search_source",
    "search_tree",
    "SourceFileFinder",
]
