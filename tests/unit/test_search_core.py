"""Unit tests for leaf matching, hierarchy, scope naming and block selection.

These use hand-built trees so that shapes the Python grammar never
produces (unnamed scopes, invalid UTF-8 leaves) can be exercised.
"""

import pytest

from scope_grep.core.exceptions import LeafDecodeError
from scope_grep.features.search.block import block_anchor, extract_block
from scope_grep.features.search.hierarchy import (
    hierarchy_of,
    innermost_scope,
    join_scope_names,
    named_projection,
)
from scope_grep.features.search.matcher import find_leaf_matches
from scope_grep.models.config import GrammarProfile
from scope_grep.models.tree import Node, SyntaxTree

SOURCE = b"class C: def m(): call(target)"


def _method_tree(name_method: bool = True) -> SyntaxTree:
    """class C > block > def m > block > call(target), one line of source."""
    tree = SyntaxTree(SOURCE)
    module = tree.add_node("module", 0, 30)
    cls = tree.add_node("class_definition", 0, 30, parent=module)
    tree.add_node("class", 0, 5, parent=cls)
    tree.add_node("identifier", 6, 7, parent=cls, field_name="name")
    cls_body = tree.add_node("block", 9, 30, parent=cls, field_name="body")
    fn = tree.add_node("function_definition", 9, 30, parent=cls_body)
    tree.add_node("def", 9, 12, parent=fn)
    tree.add_node("identifier", 13, 14, parent=fn, field_name="name" if name_method else None)
    params = tree.add_node("parameters", 14, 16, parent=fn, field_name="parameters")
    tree.add_node("(", 14, 15, parent=params)
    tree.add_node(")", 15, 16, parent=params)
    fn_body = tree.add_node("block", 18, 30, parent=fn, field_name="body")
    stmt = tree.add_node("expression_statement", 18, 30, parent=fn_body)
    call = tree.add_node("call", 18, 30, parent=stmt)
    tree.add_node("identifier", 18, 22, parent=call, field_name="function")
    args = tree.add_node("argument_list", 22, 30, parent=call, field_name="arguments")
    tree.add_node("(", 22, 23, parent=args)
    tree.add_node("identifier", 23, 29, parent=args)
    tree.add_node(")", 29, 30, parent=args)
    return tree


def _depth(node: Node) -> int:
    depth = 0
    while node.parent is not None:
        node = node.parent
        depth += 1
    return depth


class TestFindLeafMatches:
    """Tests for find_leaf_matches."""

    def test_matches_only_leaves(self):
        """Containers whose text contains the query are not reported."""
        tree = _method_tree()
        matches = find_leaf_matches(tree.root, "target")
        assert [m.text for m in matches] == [b"target"]
        assert all(m.is_leaf for m in matches)

    def test_matches_in_source_order(self):
        tree = _method_tree()
        matches = find_leaf_matches(tree.root, "a")
        assert [m.text for m in matches] == [b"class", b"call", b"target"]

    def test_match_iff_leaf_contains_query(self):
        """Every leaf is reported exactly when its text contains the query."""
        tree = _method_tree()
        matches = set(find_leaf_matches(tree.root, "l"))
        stack = [tree.root]
        while stack:
            node = stack.pop()
            stack.extend(node.children)
            expected = node.is_leaf and b"l" in node.text
            assert (node in matches) == expected

    def test_case_sensitive(self):
        tree = _method_tree()
        assert find_leaf_matches(tree.root, "TARGET") == []

    def test_no_match(self):
        tree = _method_tree()
        assert find_leaf_matches(tree.root, "missing") == []

    def test_invalid_utf8_leaf_raises(self):
        """A leaf that is not UTF-8 aborts the pass even if it is not the match."""
        source = b"x = '\xff'"
        tree = SyntaxTree(source)
        root = tree.add_node("module", 0, 7)
        tree.add_node("identifier", 0, 1, parent=root)
        tree.add_node("=", 2, 3, parent=root)
        tree.add_node("string", 4, 7, parent=root)
        with pytest.raises(LeafDecodeError) as exc_info:
            find_leaf_matches(tree.root, "x")
        assert exc_info.value.span == (4, 7)

    def test_single_node_tree(self):
        """A childless root is itself a leaf."""
        tree = SyntaxTree(b"needle")
        tree.add_node("module", 0, 6)
        assert find_leaf_matches(tree.root, "eed") == [tree.root]


class TestHierarchy:
    """Tests for hierarchy_of."""

    def test_starts_at_root_and_ends_at_node(self):
        tree = _method_tree()
        leaf = find_leaf_matches(tree.root, "target")[0]
        chain = hierarchy_of(leaf)
        assert chain[0] == tree.root
        assert chain[-1] == leaf
        assert len(chain) == _depth(leaf) + 1

    def test_each_entry_is_parent_of_next(self):
        tree = _method_tree()
        leaf = find_leaf_matches(tree.root, "target")[0]
        chain = hierarchy_of(leaf)
        for parent, child in zip(chain, chain[1:]):
            assert child.parent == parent

    def test_root_hierarchy(self):
        tree = _method_tree()
        assert hierarchy_of(tree.root) == [tree.root]


class TestNamedProjection:
    """Tests for named_projection and scope chain display."""

    def test_class_and_method_names(self):
        tree = _method_tree()
        leaf = find_leaf_matches(tree.root, "target")[0]
        projection = named_projection(hierarchy_of(leaf), GrammarProfile())
        assert [name for _, name in projection] == ["C", "m"]
        assert join_scope_names(projection) == "C->m"
        assert innermost_scope(projection).kind == "function_definition"

    def test_scope_without_name_is_dropped(self):
        """A function-kind node without a name child never appears."""
        tree = _method_tree(name_method=False)
        leaf = find_leaf_matches(tree.root, "target")[0]
        projection = named_projection(hierarchy_of(leaf), GrammarProfile())
        assert [name for _, name in projection] == ["C"]
        assert all(node.child_by_field_name("name") is not None for node, _ in projection)

    def test_profile_limits_scope_kinds(self):
        tree = _method_tree()
        leaf = find_leaf_matches(tree.root, "target")[0]
        profile = GrammarProfile(scope_kinds={"function_definition": "function"})
        projection = named_projection(hierarchy_of(leaf), profile)
        assert [name for _, name in projection] == ["m"]

    def test_empty_projection(self):
        source = b"x"
        tree = SyntaxTree(source)
        root = tree.add_node("module", 0, 1)
        leaf = tree.add_node("identifier", 0, 1, parent=root)
        projection = named_projection(hierarchy_of(leaf), GrammarProfile())
        assert projection == []
        assert join_scope_names(projection) == ""
        assert innermost_scope(projection) is None

    def test_custom_separator(self):
        tree = _method_tree()
        leaf = find_leaf_matches(tree.root, "target")[0]
        projection = named_projection(hierarchy_of(leaf), GrammarProfile())
        assert join_scope_names(projection, " / ") == "C / m"


class TestBlockExtraction:
    """Tests for block_anchor and extract_block."""

    def test_statement_inside_method(self):
        """Match four levels below the method reports the whole statement."""
        tree = _method_tree()
        leaf = find_leaf_matches(tree.root, "target")[0]
        scope = innermost_scope(named_projection(hierarchy_of(leaf), GrammarProfile()))
        anchor = block_anchor(leaf, scope)
        assert anchor.kind == "expression_statement"
        assert anchor.parent.parent == scope
        assert extract_block(leaf, scope) == "call(target)"

    def test_anchor_selection_is_stable(self):
        tree = _method_tree()
        leaf = find_leaf_matches(tree.root, "target")[0]
        scope = innermost_scope(named_projection(hierarchy_of(leaf), GrammarProfile()))
        assert block_anchor(leaf, scope) == block_anchor(leaf, scope)

    def test_unnamed_method_reports_whole_method(self):
        """With only the class named, the method definition is the class-level block."""
        tree = _method_tree(name_method=False)
        leaf = find_leaf_matches(tree.root, "target")[0]
        scope = innermost_scope(named_projection(hierarchy_of(leaf), GrammarProfile()))
        assert scope.kind == "class_definition"
        assert extract_block(leaf, scope) == "def m(): call(target)"

    def test_no_named_scope_climbs_to_top_level(self):
        """Without a named scope the anchor is the root's child holding the match."""
        source = b"a = b + c"
        tree = SyntaxTree(source)
        root = tree.add_node("module", 0, 9)
        stmt = tree.add_node("expression_statement", 0, 9, parent=root)
        assign = tree.add_node("assignment", 0, 9, parent=stmt)
        tree.add_node("identifier", 0, 1, parent=assign)
        binop = tree.add_node("binary_operator", 4, 9, parent=assign)
        tree.add_node("identifier", 4, 5, parent=binop)
        leaf = tree.add_node("identifier", 8, 9, parent=binop)
        assert block_anchor(leaf, None) == stmt
        assert extract_block(leaf, None) == "a = b + c"

    def test_leaf_directly_under_root(self):
        tree = SyntaxTree(b"x")
        root = tree.add_node("module", 0, 1)
        leaf = tree.add_node("identifier", 0, 1, parent=root)
        assert block_anchor(leaf, None) == leaf

    def test_root_only(self):
        tree = SyntaxTree(b"x")
        tree.add_node("module", 0, 1)
        assert block_anchor(tree.root, None) == tree.root
