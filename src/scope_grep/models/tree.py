"""Arena-backed syntax tree used by the structural search.

Nodes are stored as parallel records inside a ``SyntaxTree`` and addressed by
stable integer indices. ``Node`` is only a handle onto one of those records, so
parent and child links are indices rather than live object references.
"""
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from scope_grep.core.exceptions import TreeStructureError


class ScopeKind(str, Enum):
    """Closed set of named-scope categories recognised by the search."""

    CLASS = "class"
    FUNCTION = "function"


class SyntaxTree:
    """Owns the source buffer and every node built over it."""

    def __init__(self, source: bytes) -> None:
        self.source = source
        self._kinds: List[str] = []
        self._spans: List[Tuple[int, int]] = []
        self._parents: List[Optional[int]] = []
        self._children: List[List[int]] = []
        self._fields: List[Optional[str]] = []

    def __len__(self) -> int:
        return len(self._kinds)

    @property
    def root(self) -> "Node":
        if not self._kinds:
            raise TreeStructureError("Tree has no root node")
        return Node(self, 0)

    def add_node(
        self,
        kind: str,
        start_byte: int,
        end_byte: int,
        parent: Optional["Node"] = None,
        field_name: Optional[str] = None,
    ) -> "Node":
        """Append a node as the last child of ``parent`` (or as the root).

        Args:
            kind: Grammar node kind
            start_byte: Inclusive start offset into the source
            end_byte: Exclusive end offset into the source
            parent: Parent node, None for the root
            field_name: Role of the node under its parent (e.g. ``name``)

        Returns:
            Handle to the new node

        Raises:
            TreeStructureError: If the node breaks the span invariants
        """
        if start_byte < 0 or end_byte < start_byte or end_byte > len(self.source):
            raise TreeStructureError(f"Invalid span {start_byte}..{end_byte} for {kind!r}")

        if parent is None:
            if self._kinds:
                raise TreeStructureError("Tree already has a root node")
            parent_index = None
        else:
            if parent.tree is not self:
                raise TreeStructureError("Parent node belongs to a different tree")
            parent_index = parent.index
            parent_start, parent_end = self._spans[parent_index]
            if start_byte < parent_start or end_byte > parent_end:
                raise TreeStructureError(
                    f"Span {start_byte}..{end_byte} of {kind!r} is outside parent span {parent_start}..{parent_end}"
                )
            siblings = self._children[parent_index]
            if siblings and start_byte < self._spans[siblings[-1]][1]:
                raise TreeStructureError(f"Span of {kind!r} overlaps or precedes its previous sibling")

        index = len(self._kinds)
        self._kinds.append(kind)
        self._spans.append((start_byte, end_byte))
        self._parents.append(parent_index)
        self._children.append([])
        self._fields.append(field_name)
        if parent_index is not None:
            self._children[parent_index].append(index)
        return Node(self, index)


class Node:
    """Handle onto one node of a ``SyntaxTree``.

    Equality is identity within the tree: two handles are equal when they
    point at the same index of the same tree object.
    """

    __slots__ = ("tree", "index")

    def __init__(self, tree: SyntaxTree, index: int) -> None:
        self.tree = tree
        self.index = index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.tree is other.tree and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.tree), self.index))

    def __repr__(self) -> str:
        return f"Node({self.kind!r}, {self.start_byte}..{self.end_byte})"

    @property
    def kind(self) -> str:
        return self.tree._kinds[self.index]

    @property
    def span(self) -> Tuple[int, int]:
        return self.tree._spans[self.index]

    @property
    def start_byte(self) -> int:
        return self.span[0]

    @property
    def end_byte(self) -> int:
        return self.span[1]

    @property
    def field_name(self) -> Optional[str]:
        return self.tree._fields[self.index]

    @property
    def parent(self) -> Optional["Node"]:
        parent_index = self.tree._parents[self.index]
        return None if parent_index is None else Node(self.tree, parent_index)

    @property
    def children(self) -> List["Node"]:
        return [Node(self.tree, i) for i in self.tree._children[self.index]]

    @property
    def child_count(self) -> int:
        return len(self.tree._children[self.index])

    @property
    def is_leaf(self) -> bool:
        return self.child_count == 0

    @property
    def text(self) -> bytes:
        start, end = self.span
        return self.tree.source[start:end]

    @property
    def start_point(self) -> Tuple[int, int]:
        """0-based (line, column) of the node start, column in bytes."""
        source = self.tree.source
        start = self.start_byte
        line = source.count(b"\n", 0, start)
        column = start - (source.rfind(b"\n", 0, start) + 1)
        return (line, column)

    def child_by_field_name(self, field_name: str) -> Optional["Node"]:
        for child in self.iter_children():
            if child.field_name == field_name:
                return child
        return None

    def iter_children(self) -> Iterator["Node"]:
        for i in self.tree._children[self.index]:
            yield Node(self.tree, i)
