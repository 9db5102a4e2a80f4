"""Scope hierarchy and scope naming for a matched node."""
from typing import List, Optional, Tuple

from scope_grep.constants import ReportDefaults
from scope_grep.models.config import GrammarProfile
from scope_grep.models.tree import Node


def hierarchy_of(node: Node) -> List[Node]:
    """Return the chain of nodes from the root down to ``node`` inclusive."""
    chain: List[Node] = []
    current: Optional[Node] = node
    while current is not None:
        chain.append(current)
        current = current.parent
    chain.reverse()
    return chain


def scope_name(node: Node, profile: GrammarProfile) -> Optional[str]:
    """Declared name of a named-scope node, or None.

    None is returned for nodes whose kind is not a scope kind, for scopes
    without a name child, and for names that are not valid UTF-8.
    """
    if profile.scope_kind_of(node) is None:
        return None
    name_node = node.child_by_field_name(profile.name_field)
    if name_node is None:
        return None
    try:
        return name_node.text.decode("utf-8")
    except UnicodeDecodeError:
        return None


def named_projection(hierarchy: List[Node], profile: GrammarProfile) -> List[Tuple[Node, str]]:
    """Keep the named scopes of a hierarchy, root-first, paired with their names."""
    projection: List[Tuple[Node, str]] = []
    for node in hierarchy:
        name = scope_name(node, profile)
        if name is not None:
            projection.append((node, name))
    return projection


def join_scope_names(projection: List[Tuple[Node, str]], separator: str = ReportDefaults.SCOPE_SEPARATOR) -> str:
    """Display string for a projection; empty when there are no named scopes."""
    return separator.join(name for _, name in projection)


def innermost_scope(projection: List[Tuple[Node, str]]) -> Optional[Node]:
    return projection[-1][0] if projection else None
