"""Selection of the reportable source block around a match."""
from typing import Optional

from scope_grep.models.tree import Node


def block_anchor(match_node: Node, innermost_scope: Optional[Node]) -> Node:
    """Pick the node whose text is reported for a match.

    The anchor is the match's ancestor-or-self whose grandparent is the
    innermost named scope. For a Python function that is the statement inside
    the function body (``function_definition > block > statement``), not the
    whole body and not the bare token.

    Climbing also stops when the candidate has no parent or no grandparent,
    so with ``innermost_scope`` None (no enclosing named scope) the anchor is
    the top-level node directly under the root that contains the match.
    """
    candidate = match_node
    while True:
        parent = candidate.parent
        if parent is None:
            break
        grandparent = parent.parent
        if grandparent is None or grandparent == innermost_scope:
            break
        candidate = parent
    return candidate


def extract_block(match_node: Node, innermost_scope: Optional[Node]) -> str:
    """Source text of the block anchor for a match, decoded as UTF-8.

    Invalid bytes in the block are replaced; the matched leaf itself has
    already been decoded strictly by the leaf matcher.
    """
    return block_anchor(match_node, innermost_scope).text.decode("utf-8", errors="replace")
