"""Leaf matching: find every token whose text contains the query."""
from typing import List

from scope_grep.core.exceptions import LeafDecodeError
from scope_grep.models.tree import Node


def leaf_text(node: Node) -> str:
    """Decode a node's span as UTF-8.

    Raises:
        LeafDecodeError: If the span is not valid UTF-8
    """
    try:
        return node.text.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LeafDecodeError(node.span, e.reason) from e


def find_leaf_matches(root: Node, query: str) -> List[Node]:
    """Collect leaves under ``root`` whose text contains ``query``.

    Visits the tree depth-first in pre-order, children left to right, so the
    result is in source order. Only childless nodes are tested; containers
    never match themselves. Every leaf is decoded, and a leaf that is not
    valid UTF-8 aborts the search with ``LeafDecodeError``.
    """
    matches: List[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            if query in leaf_text(node):
                matches.append(node)
        else:
            stack.extend(reversed(node.children))
    return matches
