"""Tree-sitter front end: parse source bytes into a ``SyntaxTree``."""
from typing import Any, Callable, Dict, List, Optional

import tree_sitter_python
from tree_sitter import Language, Parser

from scope_grep.core.exceptions import SourceParseError
from scope_grep.core.logging import get_logger
from scope_grep.models.config import GrammarProfile
from scope_grep.models.tree import Node, SyntaxTree

_GRAMMARS: Dict[str, Callable[[], Any]] = {
    "python": tree_sitter_python.language,
}

_LANGUAGES: Dict[str, Language] = {}


def get_supported_languages() -> List[str]:
    return sorted(_GRAMMARS)


def get_language(name: str) -> Language:
    """Load (once) the tree-sitter language for a grammar name.

    Raises:
        SourceParseError: If no grammar is bundled for ``name``
    """
    if name not in _LANGUAGES:
        grammar = _GRAMMARS.get(name)
        if grammar is None:
            raise SourceParseError(
                f"Unsupported grammar language '{name}'. Supported: {', '.join(get_supported_languages())}"
            )
        _LANGUAGES[name] = Language(grammar())
    return _LANGUAGES[name]


def convert_tree(ts_tree: Any, source: bytes) -> SyntaxTree:
    """Copy a tree-sitter tree into an arena ``SyntaxTree``.

    Walks with a tree cursor so deep trees do not hit the recursion limit.
    Each node keeps the field role it has under its parent.
    """
    tree = SyntaxTree(source)
    cursor = ts_tree.walk()
    node = cursor.node
    current = tree.add_node(node.type, node.start_byte, node.end_byte)
    ancestors: List[Node] = []

    while True:
        if cursor.goto_first_child():
            ancestors.append(current)
        else:
            while not cursor.goto_next_sibling():
                if not cursor.goto_parent():
                    return tree
                ancestors.pop()
        node = cursor.node
        current = tree.add_node(
            node.type,
            node.start_byte,
            node.end_byte,
            parent=ancestors[-1],
            field_name=cursor.field_name,
        )


def parse_source(source: bytes, profile: Optional[GrammarProfile] = None, file_path: Optional[str] = None) -> SyntaxTree:
    """Parse source bytes with the profile's grammar.

    Args:
        source: Raw file contents
        profile: Grammar profile (Python grammar by default)
        file_path: Used for error messages only

    Returns:
        Arena tree over ``source``

    Raises:
        SourceParseError: If the grammar is unknown or no tree is produced
    """
    profile = profile or GrammarProfile()
    parser = Parser(get_language(profile.language))
    ts_tree = parser.parse(source)
    if ts_tree is None:
        raise SourceParseError("Parser produced no tree", file_path)

    tree = convert_tree(ts_tree, source)
    if ts_tree.root_node.has_error:
        get_logger("search.parsing").debug("source_has_syntax_errors", file=file_path, nodes=len(tree))
    return tree
